"""Connection handle contract (protocol)."""

from typing import Any, Protocol


class ConnectionHandle(Protocol):
    """One live bidirectional channel to exactly one client process."""

    @property
    def connection_id(self) -> str:
        """Stable identifier of this transport, used in logs."""
        ...

    async def send_event(self, event: str, payload: Any) -> None:
        """Push an event to the client.

        Args:
            event: The event name, e.g. ``getOnlineUsers``.
            payload: JSON-serializable event data.
        """
        ...

    async def close(self, code: int = 1000, reason: str = "") -> None:
        """Close the underlying transport. Calling it twice is a no-op."""
        ...
