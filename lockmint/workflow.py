"""
Deposit submission workflow.

Drives one lock-and-mint session through its three stages, strictly in order:

1. wait for a deposit at the gateway address,
2. submit the deposit to the bridge network for attestation,
3. submit the attestation to the destination contract.

Each stage consumes the artifact of the previous one (Deposit, then
BridgeSignature, then SubmissionReceipt). Progress notifications are logged as
they arrive; failures are logged and re-raised, never retried.
"""

from typing import Any, Optional, TypeVar

import asyncio
import json
import logging

from lockmint.bridge.base import BridgeClient
from lockmint.events import PendingOperation, ProgressEvent, ProgressKind
from lockmint.exceptions import AttestationError, DepositWaitError, DestinationSubmissionError, LockMintError
from lockmint.models import BridgeSignature, Deposit, MintSession, SubmissionReceipt
from lockmint.utils.console import sleep_with_countdown
from lockmint.utils.encoding import b64_to_hex

logger = logging.getLogger("lockmint.workflow")

T = TypeVar("T")


def _describe_deposit(deposit: Any) -> str:
    if isinstance(deposit, Deposit):
        return json.dumps(dict(deposit.descriptor), default=str, sort_keys=True)
    return json.dumps(deposit, default=str, sort_keys=True)


def _display_tx_hash(payload: Any) -> str:
    """0x-prefixed hex of a base64 transaction hash, or the payload as received."""
    try:
        return "0x" + b64_to_hex(payload)
    except (TypeError, ValueError):
        logger.warning(f"Transaction hash {payload!r} is not base64, logging it as received")
        return str(payload)


def _cancelled_by_bridge(operation: PendingOperation) -> bool:
    """True when the bridge client cancelled the operation and our own task is still running."""
    task = asyncio.current_task()
    return operation.cancelled() and not (task is not None and task.cancelling())


class DepositSubmissionWorkflow:
    """
    Sequences deposit detection, attestation and destination submission.

    Args:
        bridge: Bridge client performing the network calls.
        chain_provider: Destination chain provider handed to the bridge client.
        settle_seconds: Count-down between the deposit and its submission, 0 to skip.
        deposit_timeout: Optional limit in seconds for the deposit wait.
        attestation_timeout: Optional limit in seconds for the attestation.
        destination_timeout: Optional limit in seconds for the destination submission.
    """

    def __init__(
        self,
        bridge: BridgeClient,
        chain_provider: Any,
        *,
        settle_seconds: int = 0,
        deposit_timeout: Optional[float] = None,
        attestation_timeout: Optional[float] = None,
        destination_timeout: Optional[float] = None,
    ):
        self.bridge = bridge
        self.chain_provider = chain_provider
        self.settle_seconds = settle_seconds
        self.deposit_timeout = deposit_timeout
        self.attestation_timeout = attestation_timeout
        self.destination_timeout = destination_timeout

    async def await_deposit(self, session: MintSession, required_confirmations: int) -> Deposit:
        """
        Wait for the first deposit at the gateway address with enough confirmations.

        Every deposit notification is logged as it arrives. A threshold of 0
        accepts the first deposit seen, confirmed or not.

        Raises:
            DepositWaitError: If the subscription fails, is torn down without a
                qualifying deposit or times out.
        """
        if required_confirmations < 0:
            logger.error(f"Error waiting for deposit: invalid confirmation threshold {required_confirmations}")
            raise DepositWaitError(f"required_confirmations must be >= 0, got {required_confirmations}")

        logger.info(f"Waiting for {required_confirmations} confirmations...")
        operation = self.bridge.wait_for_deposit(session, required_confirmations)

        async def first_qualifying_deposit() -> Optional[Deposit]:
            async for event in operation.events:
                if event.kind is not ProgressKind.DEPOSIT:
                    continue
                deposit = event.payload
                logger.info(f"Received a new deposit: {_describe_deposit(deposit)}")
                if isinstance(deposit, Deposit) and deposit.confirmations >= required_confirmations:
                    return deposit
            # stream closed; the operation may still hold a qualifying result
            result = await operation
            if isinstance(result, Deposit) and result.confirmations >= required_confirmations:
                return result
            return None

        try:
            deposit = await asyncio.wait_for(first_qualifying_deposit(), self.deposit_timeout)
        except asyncio.CancelledError:
            if not _cancelled_by_bridge(operation):
                raise
            logger.error("Error waiting for deposit: subscription was cancelled by the bridge client")
            raise DepositWaitError(f"Session for {session.gateway_address} was cancelled before a deposit arrived")
        except asyncio.TimeoutError as e:
            if self.deposit_timeout is None:
                logger.error(f"Error waiting for deposit: {e!r}")
                raise DepositWaitError(f"Deposit subscription failed: {e!r}") from e
            logger.error(f"Error waiting for deposit: no deposit after {self.deposit_timeout}s")
            raise DepositWaitError(f"No deposit after {self.deposit_timeout}s") from e
        except LockMintError as e:
            logger.error(f"Error waiting for deposit: {e}")
            raise
        except Exception as e:
            logger.error(f"Error waiting for deposit: {e}")
            raise DepositWaitError(f"Deposit subscription failed: {e}") from e
        finally:
            operation.cancel()

        if deposit is None:
            logger.error("Error waiting for deposit: session closed before a deposit arrived")
            raise DepositWaitError(f"Session for {session.gateway_address} ended before a deposit arrived")
        return deposit

    async def submit_deposit_for_attestation(self, deposit: Deposit) -> BridgeSignature:
        """
        Submit a deposit to the bridge network and wait for its signature.

        Transaction hash notifications are logged once, re-encoded as hex.
        Each status change is logged on its own record marked ``overwrite`` so
        console output keeps only the latest status visible.

        Raises:
            AttestationError: If the bridge network fails, cancels the
                submission or times out.
        """
        logger.info("Submitting deposit to bridge network...")
        operation = self.bridge.submit_deposit(deposit)

        def on_event(event: ProgressEvent) -> None:
            if event.kind is ProgressKind.TX_HASH:
                logger.info(f"Received txHash({self.bridge.network}.bridge): {_display_tx_hash(event.payload)}")
            elif event.kind is ProgressKind.STATUS:
                logger.info(f"Received status: {event.payload}", extra={"overwrite": True})

        try:
            return await self._drain(operation, on_event, self.attestation_timeout)
        except asyncio.CancelledError:
            if not _cancelled_by_bridge(operation):
                raise
            logger.error("Error submitting deposit: submission was cancelled by the bridge client")
            raise AttestationError("Bridge client cancelled the deposit submission")
        except asyncio.TimeoutError as e:
            if self.attestation_timeout is None:
                logger.error(f"Error submitting deposit: {e!r}")
                raise AttestationError(f"Bridge network rejected the deposit: {e!r}") from e
            logger.error(f"Error submitting deposit: no signature after {self.attestation_timeout}s")
            raise AttestationError(f"No signature after {self.attestation_timeout}s") from e
        except LockMintError as e:
            logger.error(f"Error submitting deposit: {e}")
            raise
        except Exception as e:
            logger.error(f"Error submitting deposit: {e}")
            raise AttestationError(f"Bridge network rejected the deposit: {e}") from e

    async def submit_signature_to_destination(self, signature: BridgeSignature, gas_limit: int) -> SubmissionReceipt:
        """
        Submit the signature to the destination contract.

        Raises:
            DestinationSubmissionError: If the destination chain rejects or
                reverts the transaction, the bridge client cancels the
                submission, or the submission times out.
        """
        logger.info("Submitting signature to destination chain...")
        operation = self.bridge.submit_to_destination(signature, self.chain_provider, gas=gas_limit)

        def on_event(event: ProgressEvent) -> None:
            if event.kind is ProgressKind.DESTINATION_TX_HASH:
                logger.info(f"Received txHash(destination): {_display_tx_hash(event.payload)}")

        try:
            receipt = await self._drain(operation, on_event, self.destination_timeout)
        except asyncio.CancelledError:
            if not _cancelled_by_bridge(operation):
                raise
            logger.error("Error submitting to destination: submission was cancelled by the bridge client")
            raise DestinationSubmissionError("Bridge client cancelled the destination submission")
        except asyncio.TimeoutError as e:
            if self.destination_timeout is None:
                logger.error(f"Error submitting to destination: {e!r}")
                raise DestinationSubmissionError(f"Destination chain rejected the mint: {e!r}") from e
            logger.error(f"Error submitting to destination: no receipt after {self.destination_timeout}s")
            raise DestinationSubmissionError(f"No receipt after {self.destination_timeout}s") from e
        except LockMintError as e:
            logger.error(f"Error submitting to destination: {e}")
            raise
        except Exception as e:
            logger.error(f"Error submitting to destination: {e}")
            raise DestinationSubmissionError(f"Destination chain rejected the mint: {e}") from e

        logger.info("Done waiting for destination TX.")
        return receipt

    async def run(self, session: MintSession, required_confirmations: int = 0, gas_limit: int = 1_000_000) -> SubmissionReceipt:
        """Run all three stages for ``session`` and return the destination receipt."""
        deposit = await self.await_deposit(session, required_confirmations)
        if self.settle_seconds > 0:
            await sleep_with_countdown(self.settle_seconds)
        signature = await self.submit_deposit_for_attestation(deposit)
        return await self.submit_signature_to_destination(signature, gas_limit)

    @staticmethod
    async def _drain(operation: PendingOperation[T], on_event, timeout: Optional[float]) -> T:
        async def consume() -> T:
            async for event in operation.events:
                on_event(event)
            return await operation

        try:
            return await asyncio.wait_for(consume(), timeout)
        finally:
            operation.cancel()


async def run_workflow(
    bridge: BridgeClient,
    chain_provider: Any,
    session: MintSession,
    required_confirmations: int = 0,
    gas_limit: int = 1_000_000,
    **kwargs,
) -> SubmissionReceipt:
    """Convenience function to run a lock-and-mint session to completion."""
    workflow = DepositSubmissionWorkflow(bridge, chain_provider, **kwargs)
    return await workflow.run(session, required_confirmations, gas_limit)
