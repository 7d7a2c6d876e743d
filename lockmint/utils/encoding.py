"""Transcoding of transaction identifiers for display."""

import base64
import binascii

from hexbytes import HexBytes


def b64_to_bytes(value: str) -> bytes:
    """Decode a base64 transaction identifier, rejecting malformed input."""
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 transaction identifier: {value!r}") from e


def bytes_to_b64(value: bytes) -> str:
    """Encode raw transaction identifier bytes as base64 text."""
    return base64.b64encode(value).decode("ascii")


def b64_to_hex(value: str) -> str:
    """Re-encode a base64 transaction identifier as lowercase hex without prefix.

    >>> b64_to_hex("AAE=")
    '0001'
    """
    return b64_to_bytes(value).hex()


def hex_to_bytes(value: str) -> bytes:
    """Decode a hex string, with or without the 0x prefix."""
    return bytes(HexBytes(value))
