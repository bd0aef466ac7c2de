"""Protocol for broadcasting roster updates."""

from collections.abc import Callable, Iterable
from typing import Protocol

from realtime_chat.domain.contracts.connection_handle import ConnectionHandle
from realtime_chat.domain.models.roster_update import RosterUpdate


class RosterBroadcasterProtocol(Protocol):
    """Protocol for pushing the online roster to every live connection."""

    async def broadcast(
        self,
        update: RosterUpdate,
        connections: Iterable[ConnectionHandle],
        current_version: Callable[[], int],
    ) -> int:
        """Send a roster update to each connection.

        Delivery is fire-and-forget; a failing connection never aborts delivery
        to the others.

        Args:
            update: The roster snapshot to send.
            connections: Every live connection, registered or anonymous.
            current_version: Returns the latest registry version; sending stops
                once it moves past ``update.version``.

        Returns:
            Number of connections the update was handed to.
        """
        ...
