"""Logging setup shared by the examples and the test suite."""

import logging
from typing import Optional, TextIO, Union

from lockmint.utils.console import CLEAR_LINE

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ConsoleHandler(logging.StreamHandler):
    """Stream handler that rewrites the current line for records marked ``overwrite``.

    Status updates from the bridge network arrive repeatedly; logging them with
    ``extra={"overwrite": True}`` keeps only the latest one on screen.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__(stream)
        self._line_open = False

    def emit(self, record: logging.LogRecord) -> None:
        if not getattr(record, "overwrite", False):
            if self._line_open:
                self.stream.write("\n")
                self._line_open = False
            super().emit(record)
            return
        try:
            self.stream.write(f"{CLEAR_LINE}{self.format(record)}")
            self.flush()
            self._line_open = True
        except Exception:
            self.handleError(record)


def setup_logging(level: Union[int, str] = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """Attach a ConsoleHandler to the ``lockmint`` logger.

    Calling it again replaces the previously installed handler instead of
    adding a second one.
    """
    logger = logging.getLogger("lockmint")
    for handler in list(logger.handlers):
        if isinstance(handler, ConsoleHandler):
            logger.removeHandler(handler)

    handler = ConsoleHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
