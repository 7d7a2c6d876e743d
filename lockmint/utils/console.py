import asyncio
import sys
from typing import Optional, TextIO

CLEAR_LINE = "\u001b[0K\r"


async def sleep_with_countdown(seconds: int, stream: Optional[TextIO] = None) -> None:
    """Sleep for ``seconds``, printing a count-down on a single console line."""
    stream = stream or sys.stdout
    while seconds > 0:
        stream.write(f"{CLEAR_LINE}{seconds}\r")
        stream.flush()
        await asyncio.sleep(1)
        seconds -= 1
    stream.write(CLEAR_LINE)
    stream.flush()
