"""
Funding wallet used to seed the test deposit.

The wallet is not part of the mint workflow: it only sends the source asset
to the gateway address of a session.
"""

from typing import Any, Optional

import itertools
import logging
from abc import ABC, abstractmethod
from decimal import Decimal

import httpx
from pydantic import BaseModel, Field

from lockmint._version import LOCKMINT_VERSION
from lockmint.config import LockMintConfig
from lockmint.exceptions import WalletRpcError
from lockmint.utils.units import from_smallest

SUPPORTED_ASSETS = ("btc",)


class RpcErrorPayload(BaseModel):
    code: int
    message: str


class RpcResponse(BaseModel):
    result: Any = None
    error: Optional[RpcErrorPayload] = None
    id: Optional[int | str] = Field(default=None)


def _check_asset(asset: str) -> None:
    if asset.lower() not in SUPPORTED_ASSETS:
        raise ValueError(f"Unsupported asset: {asset}")


class FundingWallet(ABC):
    """Base class for wallets that can fund a gateway address."""

    @abstractmethod
    async def address(self, asset: str = "btc") -> str:
        """Receiving address of the wallet."""

    @abstractmethod
    async def balance_of(self, asset: str = "btc") -> Decimal:
        """Spendable balance in whole units of ``asset``."""

    @abstractmethod
    async def send_sats(self, to: str, amount: int, asset: str = "btc") -> str:
        """Send ``amount`` in the smallest unit of ``asset``, returning the transaction id."""

    async def close(self) -> None:
        """Release network resources held by the wallet."""


class BitcoindWallet(FundingWallet):
    """FundingWallet backed by a bitcoind node over JSON-RPC."""

    def __init__(
        self,
        rpc_url: str,
        rpc_user: str = "",
        rpc_password: str = "",
        wallet_name: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the wallet.

        Args:
            rpc_url: bitcoind RPC endpoint
            rpc_user: RPC user name
            rpc_password: RPC password
            wallet_name: Optional wallet to address (``/wallet/<name>`` endpoint)
            client: Optional pre-built httpx client, mainly for tests
        """
        base_url = rpc_url.rstrip("/")
        if wallet_name:
            base_url = f"{base_url}/wallet/{wallet_name}"
        self.rpc_url = base_url
        self.headers = {"User-Agent": f"lockmint/{LOCKMINT_VERSION}"}
        auth = (rpc_user, rpc_password) if rpc_user else None
        self._client = client or httpx.AsyncClient(auth=auth, headers=self.headers, timeout=30.0)
        self._ids = itertools.count(1)
        self._address: Optional[str] = None
        self.logger = logging.getLogger(f"lockmint.wallet.{self.__class__.__name__}")

    @classmethod
    def from_config(cls, config: LockMintConfig, **kwargs) -> "BitcoindWallet":
        return cls(
            rpc_url=config.bitcoind_rpc_url,
            rpc_user=config.bitcoind_rpc_user,
            rpc_password=config.bitcoind_rpc_password,
            **kwargs,
        )

    async def _call(self, method: str, *params: Any) -> Any:
        request_id = next(self._ids)
        payload = {"jsonrpc": "1.0", "id": request_id, "method": method, "params": list(params)}
        self.logger.debug(f"RPC {method} with params: {list(params)}")

        response = await self._client.post(self.rpc_url, json=payload)
        try:
            data = RpcResponse.model_validate(response.json())
        except ValueError:
            self.logger.error(f"Failed to parse RPC response: {response.text}")
            response.raise_for_status()
            raise WalletRpcError(method, response.status_code, "Invalid JSON response")

        if data.error is not None:
            raise WalletRpcError(method, data.error.code, data.error.message)
        response.raise_for_status()
        return data.result

    async def import_private_key(self, wif: str, label: str = "lockmint", rescan_from: int = 0) -> str:
        """
        Import a WIF private key as a wpkh descriptor so its coins become spendable.

        Args:
            wif: Private key of the funding account
            label: Wallet label for the imported descriptor
            rescan_from: Block time to rescan from, 0 to find every coin the key already holds

        Returns:
            str: Address of the imported key, used by ``address`` and ``balance_of``
        """
        info = await self._call("getdescriptorinfo", f"wpkh({wif})")
        descriptor = f"wpkh({wif})#{info['checksum']}"
        results = await self._call("importdescriptors", [{"desc": descriptor, "timestamp": rescan_from, "label": label}])
        for result in results:
            if not result.get("success"):
                error = result.get("error", {})
                raise WalletRpcError("importdescriptors", error.get("code", -1), error.get("message", "import failed"))

        addresses = await self._call("deriveaddresses", descriptor)
        self._address = addresses[0]
        self.logger.info(f"Imported funding key {self._address} into wallet")
        return self._address

    async def address(self, asset: str = "btc") -> str:
        """Address of the imported funding key, or a fresh wallet address when none was imported."""
        _check_asset(asset)
        if self._address is None:
            self._address = await self._call("getnewaddress", "lockmint", "bech32")
        return self._address

    async def balance_of(self, asset: str = "btc") -> Decimal:
        """Balance held by ``address``, counting unconfirmed coins."""
        _check_asset(asset)
        address = await self.address(asset)
        unspent = await self._call("listunspent", 0, 9999999, [address])
        return sum((Decimal(str(utxo["amount"])) for utxo in unspent), Decimal(0))

    async def send_sats(self, to: str, amount: int, asset: str = "btc") -> str:
        _check_asset(asset)
        if amount <= 0:
            raise ValueError("amount must be positive")
        value = from_smallest(amount, "BTC")
        txid = await self._call("sendtoaddress", to, str(value))
        self.logger.info(f"Sent {value} BTC to {to}: {txid}")
        return txid

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "BitcoindWallet":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
