"""
Configuration settings for the lock-and-mint integration suite.
"""

from typing import Optional

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from dotenv import load_dotenv

from lockmint.exceptions import ConfigurationError

KOVAN_NETWORK_ID = 42
INFURA_URL_TEMPLATE = "https://kovan.infura.io/v3/{project_id}"
DEFAULT_ADAPTER_ADDRESS = "0x9C3Ef5ecE74D7D33D0f68dFb550D2474Dc8e9732"
DEFAULT_BITCOIND_RPC_URL = "http://127.0.0.1:18332"
DEFAULT_MINT_AMOUNT_BTC = Decimal("0.0011")
DEFAULT_GAS_LIMIT = 1_000_000
DEFAULT_WORKFLOW_TIMEOUT_SECONDS = 60 * 60


@dataclass(frozen=True)
class LockMintConfig:
    """Configuration for a lock-and-mint run, loaded once at startup."""

    infura_project_id: Optional[str] = None
    funding_private_key: Optional[str] = None
    destination_rpc_url: Optional[str] = None
    destination_network_id: int = KOVAN_NETWORK_ID
    adapter_address: str = DEFAULT_ADAPTER_ADDRESS
    bridge_client_factory: Optional[str] = None
    bridge_network: str = "testnet"

    # Funding wallet
    bitcoind_rpc_url: str = DEFAULT_BITCOIND_RPC_URL
    bitcoind_rpc_user: str = ""
    bitcoind_rpc_password: str = ""

    # Workflow parameters
    mint_amount_btc: Decimal = DEFAULT_MINT_AMOUNT_BTC
    required_confirmations: int = 0
    gas_limit: int = DEFAULT_GAS_LIMIT
    settle_seconds: int = 5
    workflow_timeout: float = DEFAULT_WORKFLOW_TIMEOUT_SECONDS

    log_level: str = "INFO"

    @property
    def rpc_url(self) -> Optional[str]:
        """RPC endpoint of the destination chain"""
        if self.destination_rpc_url:
            return self.destination_rpc_url
        if self.infura_project_id:
            return INFURA_URL_TEMPLATE.format(project_id=self.infura_project_id)
        return None

    def is_live_ready(self) -> bool:
        """Check if everything needed for a live testnet run is present."""
        return bool(self.rpc_url and self.funding_private_key and self.bridge_client_factory)

    def missing_live_settings(self) -> list[str]:
        missing = []
        if not self.rpc_url:
            missing.append("WEB3_INFURA_PROJECT_ID or DESTINATION_RPC_URL")
        if not self.funding_private_key:
            missing.append("TESTNET_PRIVATE_KEY")
        if not self.bridge_client_factory:
            missing.append("BRIDGE_CLIENT_FACTORY")
        return missing

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "LockMintConfig":
        """
        Load configuration from environment variables.

        Args:
            env_file: Optional path to .env file. If not provided,
                     will look for .env in the current directory.

        Returns:
            LockMintConfig instance populated from environment.

        Raises:
            ConfigurationError: If a numeric setting cannot be parsed.
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        def get_int(key: str, default: int) -> int:
            value = os.getenv(key)
            if value is None or value == "":
                return default
            try:
                return int(value)
            except ValueError:
                raise ConfigurationError(f"{key} must be an integer, got {value!r}")

        def get_decimal(key: str, default: Decimal) -> Decimal:
            value = os.getenv(key)
            if value is None or value == "":
                return default
            try:
                return Decimal(value)
            except InvalidOperation:
                raise ConfigurationError(f"{key} must be a decimal number, got {value!r}")

        required_confirmations = get_int("REQUIRED_CONFIRMATIONS", 0)
        if required_confirmations < 0:
            raise ConfigurationError("REQUIRED_CONFIRMATIONS must not be negative")

        return cls(
            infura_project_id=os.getenv("WEB3_INFURA_PROJECT_ID") or None,
            funding_private_key=os.getenv("TESTNET_PRIVATE_KEY") or None,
            destination_rpc_url=os.getenv("DESTINATION_RPC_URL") or None,
            destination_network_id=get_int("DESTINATION_NETWORK_ID", KOVAN_NETWORK_ID),
            adapter_address=os.getenv("ADAPTER_CONTRACT_ADDRESS", DEFAULT_ADAPTER_ADDRESS),
            bridge_client_factory=os.getenv("BRIDGE_CLIENT_FACTORY") or None,
            bridge_network=os.getenv("BRIDGE_NETWORK", "testnet"),
            bitcoind_rpc_url=os.getenv("BITCOIND_RPC_URL", DEFAULT_BITCOIND_RPC_URL),
            bitcoind_rpc_user=os.getenv("BITCOIND_RPC_USER", ""),
            bitcoind_rpc_password=os.getenv("BITCOIND_RPC_PASSWORD", ""),
            mint_amount_btc=get_decimal("MINT_AMOUNT_BTC", DEFAULT_MINT_AMOUNT_BTC),
            required_confirmations=required_confirmations,
            gas_limit=get_int("DESTINATION_GAS_LIMIT", DEFAULT_GAS_LIMIT),
            settle_seconds=get_int("SETTLE_SECONDS", 5),
            workflow_timeout=get_int("WORKFLOW_TIMEOUT_SECONDS", DEFAULT_WORKFLOW_TIMEOUT_SECONDS),
            log_level=os.getenv("LOCKMINT_LOG_LEVEL", "INFO"),
        )


def get_config(env_file: Optional[str] = None) -> LockMintConfig:
    """Get configuration from environment."""
    return LockMintConfig.from_env(env_file)
