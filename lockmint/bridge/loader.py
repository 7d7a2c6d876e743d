"""Resolve the bridge client named in the configuration."""

from typing import TYPE_CHECKING, Optional

import importlib
import logging

from lockmint.bridge.base import BridgeClient
from lockmint.exceptions import ConfigurationError

if TYPE_CHECKING:
    from lockmint.config import LockMintConfig

logger = logging.getLogger("lockmint.bridge")


def load_bridge_client(reference: Optional[str], config: "LockMintConfig") -> BridgeClient:
    """
    Build a bridge client from a ``"package.module:factory"`` reference.

    Args:
        reference: Import path of a callable taking the configuration and returning a BridgeClient.
        config: Configuration handed to the factory.

    Returns:
        BridgeClient: The client returned by the factory.

    Raises:
        ConfigurationError: If the reference is malformed, cannot be imported or
            does not produce a BridgeClient.
    """
    if not reference:
        raise ConfigurationError("BRIDGE_CLIENT_FACTORY is not set")

    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(f"Bridge client factory must look like 'module:factory', got {reference!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import bridge client module {module_name!r}: {e}") from e

    factory = getattr(module, attr, None)
    if factory is None or not callable(factory):
        raise ConfigurationError(f"{module_name!r} has no callable {attr!r}")

    client = factory(config)
    if not isinstance(client, BridgeClient):
        raise ConfigurationError(f"{reference} returned {type(client).__name__}, expected a BridgeClient")

    logger.info(f"Loaded bridge client {type(client).__name__} ({client.network})")
    return client
