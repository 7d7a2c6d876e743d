"""Test helpers for the lock-and-mint suite."""

from .fake_bridge import FakeBridgeClient, build_fake_bridge, tx_hash_b64
from .waiters import wait_for_condition

__all__ = [
    "FakeBridgeClient",
    "build_fake_bridge",
    "tx_hash_b64",
    "wait_for_condition",
]
