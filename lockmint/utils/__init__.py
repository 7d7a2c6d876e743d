from lockmint.utils.console import sleep_with_countdown
from lockmint.utils.encoding import b64_to_bytes, b64_to_hex, bytes_to_b64, hex_to_bytes
from lockmint.utils.logs import ConsoleHandler, setup_logging
from lockmint.utils.units import from_smallest, to_smallest

__all__ = [
    "ConsoleHandler",
    "b64_to_bytes",
    "b64_to_hex",
    "bytes_to_b64",
    "from_smallest",
    "hex_to_bytes",
    "setup_logging",
    "sleep_with_countdown",
    "to_smallest",
]
