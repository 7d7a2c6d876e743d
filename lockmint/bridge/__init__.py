from lockmint.bridge.base import BridgeClient
from lockmint.bridge.loader import load_bridge_client

__all__ = ["BridgeClient", "load_bridge_client"]
