"""Contract between the workflow and a cross-chain bridge client."""

from typing import Any

from abc import ABC, abstractmethod

from lockmint.events import PendingOperation
from lockmint.models import BridgeSignature, Deposit, LockAndMintParams, MintSession, SubmissionReceipt


class BridgeClient(ABC):
    """Base class for bridge clients driving a lock-and-mint.

    Implementations own every interaction with the bridge network: gateway
    derivation, deposit detection, attestation and the destination contract
    call. Progress is reported on the EventStream of each returned
    PendingOperation:

    - ``wait_for_deposit`` publishes ``ProgressKind.DEPOSIT`` with a Deposit
      for every deposit seen at the gateway address.
    - ``submit_deposit`` publishes ``ProgressKind.TX_HASH`` (base64) and
      ``ProgressKind.STATUS`` (opaque status token).
    - ``submit_to_destination`` publishes ``ProgressKind.DESTINATION_TX_HASH``
      (base64).
    """

    network: str = "testnet"

    @abstractmethod
    async def create_mint_session(self, params: LockAndMintParams) -> MintSession:
        """Open a lock-and-mint session and derive its gateway address."""

    @abstractmethod
    def wait_for_deposit(self, session: MintSession, confirmations: int) -> PendingOperation[Deposit]:
        """Watch the gateway address until a deposit has ``confirmations`` confirmations."""

    @abstractmethod
    def submit_deposit(self, deposit: Deposit) -> PendingOperation[BridgeSignature]:
        """Submit a deposit to the bridge network for attestation."""

    @abstractmethod
    def submit_to_destination(
        self,
        signature: BridgeSignature,
        provider: Any,
        *,
        gas: int,
    ) -> PendingOperation[SubmissionReceipt]:
        """Submit the attestation to the destination contract through ``provider``."""

    async def close(self) -> None:
        """Release network resources held by the client."""

    async def __aenter__(self) -> "BridgeClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

