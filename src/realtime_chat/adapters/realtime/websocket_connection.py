"""Connection handle backed by a Starlette WebSocket."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import uuid
from typing import TYPE_CHECKING, Any

from starlette.websockets import WebSocketDisconnect, WebSocketState

from realtime_chat.domain.contracts.connection_handle import ConnectionHandle

if TYPE_CHECKING:
    from starlette.websockets import WebSocket

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 100


class WebSocketConnection(ConnectionHandle):
    """Live channel to one client over a WebSocket.

    Outgoing events are queued and written by a dedicated task, so a slow
    client never blocks the sender. The queue is bounded; when it is full the
    oldest queued event is dropped.
    """

    def __init__(
        self,
        websocket: WebSocket,
        queue_size: int = DEFAULT_QUEUE_SIZE,
        connection_id: str | None = None,
    ) -> None:
        """Initialize the connection.

        Args:
            websocket: An accepted WebSocket.
            queue_size: Maximum number of events waiting to be written.
            connection_id: Identifier for logs; generated if omitted.
        """
        if queue_size < 1:
            raise ValueError("queue_size must be at least 1")
        self.websocket = websocket
        self._connection_id = connection_id or uuid.uuid4().hex[:12]
        self._queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=queue_size)
        self._writer: asyncio.Task[None] | None = None
        self._closed = False
        self.dropped_events = 0

    @property
    def connection_id(self) -> str:
        return self._connection_id

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        """Start the writer task."""
        if self._writer is None and not self._closed:
            self._writer = asyncio.create_task(
                self._drain(), name=f"ws-writer-{self._connection_id}"
            )

    async def send_event(self, event: str, payload: Any) -> None:
        """Queue an event for the client; never waits on the network."""
        if self._closed:
            logger.debug(f"Dropping '{event}' for closed connection {self._connection_id}")
            return

        frame = {"event": event, "data": payload}
        try:
            self._queue.put_nowait(frame)
        except asyncio.QueueFull:
            dropped = self._queue.get_nowait()
            self.dropped_events += 1
            logger.warning(
                f"Outbound queue full on connection {self._connection_id}, "
                f"dropped oldest '{dropped['event']}' event"
            )
            self._queue.put_nowait(frame)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        """Stop the writer and close the socket."""
        if self._closed:
            return
        self._closed = True

        if self._writer is not None:
            self._writer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._writer
            self._writer = None

        if (
            self.websocket.application_state == WebSocketState.CONNECTED
            and self.websocket.client_state == WebSocketState.CONNECTED
        ):
            try:
                await self.websocket.close(code=code, reason=reason)
            except (RuntimeError, WebSocketDisconnect, OSError) as e:
                logger.debug(f"Connection {self._connection_id} already gone on close: {e}")

        logger.info(f"Closed connection {self._connection_id} (code {code})")

    async def _drain(self) -> None:
        """Write queued events until the transport fails or the task is cancelled."""
        while True:
            frame = await self._queue.get()
            try:
                await self.websocket.send_json(frame)
            except Exception as e:
                # The transport close/error signal drives cleanup; just stop writing.
                logger.warning(
                    f"Write to connection {self._connection_id} failed, "
                    f"stopping writer: {e}"
                )
                return
