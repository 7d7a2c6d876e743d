"""
Progress notifications for long-running bridge operations.

A bridge client starts each stage of a lock-and-mint as a PendingOperation:
the stage's result is awaited like a future, while progress (deposits seen,
transaction hashes, status changes) is published on the operation's
EventStream. The stream is closed once the stage finishes, so a consumer that
drains ``events`` before awaiting the result sees every notification first.
"""

from typing import Any, Awaitable, Callable, Generator, Generic, Optional, TypeVar

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger("lockmint.events")

T = TypeVar("T")

_CLOSED = object()


class ProgressKind(Enum):
    DEPOSIT = "deposit"
    TX_HASH = "txHash"
    STATUS = "status"
    DESTINATION_TX_HASH = "destination_transactionHash"


@dataclass(frozen=True)
class ProgressEvent:
    kind: ProgressKind
    payload: Any


class EventStream:
    """Single-consumer async stream of ProgressEvents.

    ``publish`` never blocks, so producers can call it from any point of a
    coroutine. Iteration ends after ``close`` once every event published
    before it has been delivered.
    """

    def __init__(self, name: str = "stream"):
        self.name = name
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, kind: ProgressKind, payload: Any = None) -> None:
        if self._closed:
            raise RuntimeError(f"Cannot publish {kind.value} on closed stream {self.name}")
        self._queue.put_nowait(ProgressEvent(kind, payload))

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> "EventStream":
        return self

    async def __anext__(self) -> ProgressEvent:
        item = await self._queue.get()
        if item is _CLOSED:
            # keep the sentinel so further iteration also stops
            self._queue.put_nowait(_CLOSED)
            raise StopAsyncIteration
        return item


class PendingOperation(Generic[T]):
    """Awaitable result of a bridge stage plus the stream of its progress events.

    Args:
        producer: Coroutine function receiving the EventStream and returning the stage result.
        name: Name used in logs and on the stream.
    """

    def __init__(self, producer: Callable[[EventStream], Awaitable[T]], name: str = "operation"):
        self.name = name
        self.events = EventStream(name)
        self._task: asyncio.Task = asyncio.get_running_loop().create_task(self._run(producer), name=name)
        # a task cancelled before it starts never enters _run
        self._task.add_done_callback(lambda _: self.events.close())

    async def _run(self, producer: Callable[[EventStream], Awaitable[T]]) -> T:
        try:
            return await producer(self.events)
        finally:
            self.events.close()

    def done(self) -> bool:
        return self._task.done()

    def cancelled(self) -> bool:
        return self._task.cancelled()

    def cancel(self) -> bool:
        if self._task.done():
            return False
        logger.debug(f"Cancelling {self.name}")
        return self._task.cancel()

    async def result(self, timeout: Optional[float] = None) -> T:
        if timeout is None:
            return await self._task
        return await asyncio.wait_for(asyncio.shield(self._task), timeout)

    def __await__(self) -> Generator[Any, None, T]:
        return self._task.__await__()
