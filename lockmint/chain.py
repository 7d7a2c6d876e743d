"""Destination chain access through web3."""

from typing import Any, Optional

import logging

from eth_account.signers.local import LocalAccount
from web3 import Web3

from lockmint.config import LockMintConfig
from lockmint.exceptions import ConfigurationError, NetworkIdentityMismatch

logger = logging.getLogger("lockmint.chain")


class ChainClient:
    """Thin wrapper around a Web3 instance for the destination chain."""

    def __init__(self, w3: Web3):
        self.w3 = w3

    @classmethod
    def from_config(cls, config: LockMintConfig) -> "ChainClient":
        """Connect to the RPC endpoint named by the configuration."""
        if not config.rpc_url:
            raise ConfigurationError("Set WEB3_INFURA_PROJECT_ID or DESTINATION_RPC_URL to reach the destination chain")
        return cls(Web3(Web3.HTTPProvider(config.rpc_url)))

    @property
    def provider(self) -> Any:
        """Provider handle passed through to the bridge client."""
        return self.w3.provider

    def network_id(self) -> int:
        return int(self.w3.net.version)

    def ensure_network(self, expected: int) -> int:
        """
        Check that the endpoint serves the expected network.

        Args:
            expected: Network id the test environment is deployed on.

        Returns:
            int: The verified network id.

        Raises:
            NetworkIdentityMismatch: If the endpoint reports another network.
        """
        actual = self.network_id()
        if actual != expected:
            logger.error(f"Invalid network id {actual}, must use network {expected}")
            raise NetworkIdentityMismatch(expected=expected, actual=actual)
        logger.info(f"Connected to network {actual}")
        return actual

    def create_account(self, set_default: bool = True) -> LocalAccount:
        """Create a throwaway account to receive the minted tokens."""
        account = self.w3.eth.account.create()
        if set_default:
            self.w3.eth.default_account = account.address
        logger.info(f"Created test account {account.address}")
        return account

    def balance_of(self, address: str, block_identifier: Optional[str] = None) -> int:
        """Native balance of ``address`` in wei."""
        checksum = Web3.to_checksum_address(address)
        if block_identifier is None:
            return self.w3.eth.get_balance(checksum)
        return self.w3.eth.get_balance(checksum, block_identifier)
