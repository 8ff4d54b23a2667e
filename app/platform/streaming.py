"""
SSE (Server-Sent Events) broadcast adapter.

Turns store notifications into a one-way stream of tagged JSON messages for a
single remote viewer. Every frame carries one JSON object with a `type` of
`connected`, `state` or `ping`.

Lifecycle of a connection:
1. `connected` is sent first, with an SSE retry hint so browsers reconnect
   after a fixed delay
2. queued notifications are forwarded as `state` in arrival order
3. timer tasks (keepalive, and polling for the phone stream) push into the
   same outbox
4. on disconnect, cancellation or a failed write, `close()` stops the timers,
   drops the subscription and releases the connection, exactly once
"""

import asyncio
import json
import uuid
from collections import deque
from typing import Any, AsyncGenerator, Callable, Deque, Dict, List, Optional

from pydantic import BaseModel
from sse_starlette.sse import EventSourceResponse

from app.platform.logger import get_logger

logger = get_logger(__name__)

STREAM_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # Disable nginx buffering
}


def stream_message(message_type: str, data: Optional[Any] = None) -> Dict[str, Any]:
    message: Dict[str, Any] = {"type": message_type}
    if data is not None:
        message["data"] = data
    return message


class StreamConnection:
    """
    One viewer's outbound stream.

    The outbox is bounded: when a slow viewer falls `max_pending` messages
    behind, the oldest pending message is dropped so the newest state wins.
    Messages that are kept are never reordered.
    """

    def __init__(
        self,
        name: str,
        keepalive_interval: float,
        retry_ms: int = 3000,
        max_pending: int = 64,
    ):
        self.name = name
        self.connection_id = uuid.uuid4().hex[:8]
        self.keepalive_interval = keepalive_interval
        self.retry_ms = retry_ms
        self.max_pending = max_pending
        self.dropped = 0

        self._outbox: Deque[Dict[str, Any]] = deque()
        self._wakeup = asyncio.Event()
        self._timers: List[asyncio.Task] = []
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._closed = False

    def open(self) -> None:
        """Start per-connection timers; runs when the response starts streaming."""
        self.start_keepalive()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        return len(self._outbox)

    @property
    def timers(self) -> List[asyncio.Task]:
        return list(self._timers)

    def push(self, message: Dict[str, Any]) -> None:
        if self._closed:
            return
        if len(self._outbox) >= self.max_pending:
            self._outbox.popleft()
            self.dropped += 1
        self._outbox.append(message)
        self._wakeup.set()

    def publish_state(self, state: BaseModel) -> None:
        """Listener entry point: serialize now so later store changes can't leak in."""
        self.push(stream_message("state", state.model_dump(mode="json", by_alias=True)))

    def bind_subscription(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe = unsubscribe

    def start_timer(self, interval: float, callback: Callable[[], None]) -> asyncio.Task:
        task = asyncio.create_task(self._run_timer(interval, callback))
        self._timers.append(task)
        return task

    def start_keepalive(self) -> asyncio.Task:
        return self.start_timer(self.keepalive_interval, lambda: self.push(stream_message("ping")))

    async def _run_timer(self, interval: float, callback: Callable[[], None]) -> None:
        while not self._closed:
            await asyncio.sleep(interval)
            try:
                callback()
            except Exception as e:
                logger.error(f"SSE[{self.name}/{self.connection_id}]: timer callback failed: {e}", exc_info=True)
                self.close()
                return

    def close(self) -> None:
        """Tear down timers, subscription and connection. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True

        for task in self._timers:
            task.cancel()
        self._timers.clear()

        if self._unsubscribe is not None:
            unsubscribe, self._unsubscribe = self._unsubscribe, None
            unsubscribe()

        self._outbox.clear()
        self._wakeup.set()
        logger.info(f"SSE[{self.name}/{self.connection_id}]: closed (dropped {self.dropped} stale messages)")

    async def frames(self) -> AsyncGenerator[Dict[str, Any], None]:
        """
        Yield SSE frames for `EventSourceResponse`.

        Cleanup runs in `finally`, which covers the viewer disconnecting (the
        response cancels this generator), a failed write and a normal close.
        """
        try:
            self.open()
            yield {
                "data": json.dumps(stream_message("connected", {"connectionId": self.connection_id})),
                "retry": self.retry_ms,
            }
            while not self._closed:
                if not self._outbox:
                    self._wakeup.clear()
                    await self._wakeup.wait()
                    continue
                yield {"data": json.dumps(self._outbox.popleft())}
        finally:
            self.close()


class SubscriptionStream(StreamConnection):
    """Forwards every change notification of a store's subscription registry."""

    def __init__(self, name: str, subscribe: Callable[[Callable[[Any], None]], Callable[[], None]], **kwargs):
        super().__init__(name, **kwargs)
        self._subscribe = subscribe

    def open(self) -> None:
        super().open()
        # the registry delivers the current state synchronously here
        self.bind_subscription(self._subscribe(self.publish_state))


class PollingStream(StreamConnection):
    """
    Pushes a fresh snapshot on a fixed cadence instead of per change.

    Used where per-record updates arrive faster than a viewer redraws, so
    broadcasting each one would only add load.
    """

    def __init__(self, name: str, read: Callable[[], BaseModel], poll_interval: float, **kwargs):
        super().__init__(name, **kwargs)
        self._read = read
        self.poll_interval = poll_interval

    def poll(self) -> None:
        self.publish_state(self._read())

    def open(self) -> None:
        super().open()
        self.poll()
        self.start_timer(self.poll_interval, self.poll)


def event_source_response(connection: StreamConnection) -> EventSourceResponse:
    logger.info(f"SSE[{connection.name}/{connection.connection_id}]: client connected")
    return EventSourceResponse(
        connection.frames(),
        media_type="text/event-stream",
        headers=STREAM_HEADERS,
    )
