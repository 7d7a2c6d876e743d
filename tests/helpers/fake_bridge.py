"""In-memory bridge client scripting the notifications of a lock-and-mint."""

from typing import Any, Optional

import asyncio
import base64
import logging
from dataclasses import dataclass, field

from lockmint.bridge.base import BridgeClient
from lockmint.events import EventStream, PendingOperation, ProgressKind
from lockmint.models import BridgeSignature, Deposit, LockAndMintParams, MintSession, SubmissionReceipt

logger = logging.getLogger("lockmint.test.fake_bridge")

GATEWAY_ADDRESS = "tb1qgatewayaddressfortests0000000000000000"


def tx_hash_b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode()


@dataclass
class BridgeScript:
    """What the fake bridge network does at each stage."""

    deposits: list[Deposit] = field(default_factory=list)
    deposit_error: Optional[Exception] = None
    close_without_deposit: bool = False
    # None blocks forever once the scripted deposits are published
    deposit_result: Optional[Deposit] = None

    tx_hash: bytes = b"\x00\x01"
    # sent as is instead of the base64 of tx_hash
    tx_hash_payload: Optional[str] = None
    statuses: list[str] = field(default_factory=lambda: ["pending", "executing", "done"])
    attestation_error: Optional[Exception] = None
    attestation_delay: float = 0.0

    destination_tx_hash: bytes = b"\xab\xcd\xef"
    destination_tx_hash_payload: Optional[str] = None
    destination_error: Optional[Exception] = None
    destination_delay: float = 0.0


class FakeBridgeClient(BridgeClient):
    """BridgeClient whose network behaviour is driven by a BridgeScript.

    ``calls`` records the order in which stages start and finish, so tests can
    assert that no stage overlaps another.
    """

    network = "fakenet"

    def __init__(self, script: Optional[BridgeScript] = None):
        self.script = script or BridgeScript()
        self.calls: list[str] = []
        self.closed = False
        self.submitted_gas: Optional[int] = None
        self.submitted_provider: Any = None
        self.deposit_release = asyncio.Event()
        self.operations: dict[str, PendingOperation] = {}

    async def create_mint_session(self, params: LockAndMintParams) -> MintSession:
        self.calls.append("create_mint_session")
        return MintSession(params=params, gateway_address=GATEWAY_ADDRESS, handle={"nonce": 1})

    def wait_for_deposit(self, session: MintSession, confirmations: int) -> PendingOperation[Deposit]:
        self.calls.append("wait_for_deposit:start")
        script = self.script

        async def produce(events: EventStream) -> Deposit:
            try:
                for deposit in script.deposits:
                    events.publish(ProgressKind.DEPOSIT, deposit)
                    await asyncio.sleep(0)
                if script.deposit_error is not None:
                    raise script.deposit_error
                if script.close_without_deposit:
                    return None
                if script.deposit_result is not None:
                    return script.deposit_result
                await self.deposit_release.wait()
                return script.deposits[-1]
            finally:
                self.calls.append("wait_for_deposit:end")

        operation = PendingOperation(produce, name="wait_for_deposit")
        self.operations["wait_for_deposit"] = operation
        return operation

    def submit_deposit(self, deposit: Deposit) -> PendingOperation[BridgeSignature]:
        self.calls.append("submit_deposit:start")
        script = self.script

        async def produce(events: EventStream) -> BridgeSignature:
            try:
                events.publish(ProgressKind.TX_HASH, script.tx_hash_payload or tx_hash_b64(script.tx_hash))
                for status in script.statuses:
                    events.publish(ProgressKind.STATUS, status)
                    await asyncio.sleep(0)
                if script.attestation_delay:
                    await asyncio.sleep(script.attestation_delay)
                if script.attestation_error is not None:
                    raise script.attestation_error
                return BridgeSignature(tx_hash=script.tx_hash, signature=b"sig", handle=deposit)
            finally:
                self.calls.append("submit_deposit:end")

        operation = PendingOperation(produce, name="submit_deposit")
        self.operations["submit_deposit"] = operation
        return operation

    def submit_to_destination(
        self,
        signature: BridgeSignature,
        provider: Any,
        *,
        gas: int,
    ) -> PendingOperation[SubmissionReceipt]:
        self.calls.append("submit_to_destination:start")
        self.submitted_gas = gas
        self.submitted_provider = provider
        script = self.script

        async def produce(events: EventStream) -> SubmissionReceipt:
            try:
                events.publish(
                    ProgressKind.DESTINATION_TX_HASH,
                    script.destination_tx_hash_payload or tx_hash_b64(script.destination_tx_hash),
                )
                if script.destination_delay:
                    await asyncio.sleep(script.destination_delay)
                if script.destination_error is not None:
                    raise script.destination_error
                return SubmissionReceipt(
                    tx_hash="0x" + script.destination_tx_hash.hex(),
                    receipt={"status": 1, "gasUsed": gas // 2},
                )
            finally:
                self.calls.append("submit_to_destination:end")

        operation = PendingOperation(produce, name="submit_to_destination")
        self.operations["submit_to_destination"] = operation
        return operation

    async def close(self) -> None:
        self.closed = True


def build_fake_bridge(config) -> FakeBridgeClient:
    """Factory in the ``module:factory`` form accepted by load_bridge_client."""
    logger.info(f"Building fake bridge client for {config.bridge_network}")
    return FakeBridgeClient()
