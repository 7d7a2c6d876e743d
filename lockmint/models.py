"""Data model of a lock-and-mint attempt."""

from typing import Any, Mapping, Optional

from dataclasses import dataclass, field
from enum import Enum

from eth_abi import is_encodable, is_encodable_type
from web3 import Web3

from lockmint.utils.encoding import b64_to_bytes, bytes_to_b64


class Asset(Enum):
    """Assets that can be locked on their origin chain."""

    BTC = "BTC"


class Chain(Enum):
    """Chains taking part in a lock-and-mint."""

    BITCOIN = "Bitcoin"
    ETHEREUM = "Ethereum"


@dataclass(frozen=True)
class ContractParam:
    """Typed argument of the destination contract call."""

    name: str
    type: str  # ABI type, e.g. "address"
    value: Any

    def __post_init__(self):
        if not is_encodable_type(self.type):
            raise ValueError(f"Unsupported ABI type for {self.name}: {self.type}")
        value = self.value
        if self.type == "address" and isinstance(value, str):
            value = Web3.to_checksum_address(value)
            object.__setattr__(self, "value", value)
        if not is_encodable(self.type, value):
            raise ValueError(f"Value {value!r} is not encodable as {self.type} for {self.name}")

    def as_dict(self) -> dict:
        return {"name": self.name, "type": self.type, "value": self.value}


@dataclass(frozen=True)
class LockAndMintParams:
    """Data class to store what a lock-and-mint should do on the destination chain."""

    send_to: str  # Destination contract address
    contract_fn: str  # Destination function called with the minted amount
    contract_params: tuple[ContractParam, ...] = ()
    asset: Asset = Asset.BTC
    from_chain: Chain = Chain.BITCOIN
    to_chain: Chain = Chain.ETHEREUM

    def __post_init__(self):
        object.__setattr__(self, "send_to", Web3.to_checksum_address(self.send_to))
        object.__setattr__(self, "contract_params", tuple(self.contract_params))
        if not self.contract_fn:
            raise ValueError("contract_fn must not be empty")


@dataclass(frozen=True)
class MintSession:
    """
    One lock-and-mint attempt.

    The gateway address is derived by the bridge client and is where the
    source asset has to be sent. ``handle`` is whatever the bridge client needs
    to follow up on the session; it is never inspected here.
    """

    params: LockAndMintParams
    gateway_address: str
    handle: Any = field(default=None, compare=False, repr=False)

    @property
    def send_to(self) -> str:
        return self.params.send_to

    @property
    def contract_fn(self) -> str:
        return self.params.contract_fn

    @property
    def contract_params(self) -> tuple[ContractParam, ...]:
        return self.params.contract_params

    @property
    def asset(self) -> Asset:
        return self.params.asset


@dataclass(frozen=True)
class Deposit:
    """Funds observed arriving at a session's gateway address."""

    descriptor: Mapping[str, Any]
    confirmations: int = 0
    handle: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class BridgeSignature:
    """Attestation produced by the bridge network authorising the mint."""

    tx_hash: bytes
    signature: Optional[bytes] = None
    handle: Any = field(default=None, compare=False, repr=False)

    @classmethod
    def from_b64(cls, tx_hash: str, **kwargs) -> "BridgeSignature":
        """Build a signature from the base64 transaction identifier reported by the bridge network."""
        return cls(tx_hash=b64_to_bytes(tx_hash), **kwargs)

    @property
    def tx_hash_b64(self) -> str:
        return bytes_to_b64(self.tx_hash)

    @property
    def tx_hash_hex(self) -> str:
        return "0x" + self.tx_hash.hex()


@dataclass(frozen=True)
class SubmissionReceipt:
    """Confirmation that the mint transaction was accepted by the destination chain."""

    tx_hash: str  # 0x-prefixed hex
    receipt: Mapping[str, Any] = field(default_factory=dict, compare=False)
