"""Broadcaster for online roster updates."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from realtime_chat.domain.contracts.roster_broadcaster import RosterBroadcasterProtocol

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from realtime_chat.domain.contracts.connection_handle import ConnectionHandle
    from realtime_chat.domain.models.roster_update import RosterUpdate

logger = logging.getLogger(__name__)

ONLINE_USERS_EVENT = "getOnlineUsers"


class RosterBroadcaster(RosterBroadcasterProtocol):
    """Pushes the `getOnlineUsers` event to every live connection."""

    async def _send_to_connection(self, connection: ConnectionHandle, update: RosterUpdate) -> bool:
        """Send the roster to one connection, swallowing transport errors."""
        try:
            await connection.send_event(ONLINE_USERS_EVENT, update.to_payload())
        except Exception as e:
            logger.warning(
                f"Failed to send roster v{update.version} to connection "
                f"{connection.connection_id}: {e}",
                exc_info=True,
            )
            return False
        return True

    async def broadcast(
        self,
        update: RosterUpdate,
        connections: Iterable[ConnectionHandle],
        current_version: Callable[[], int],
    ) -> int:
        """Send a roster update to each connection.

        Stops early once a newer roster version exists: the newer broadcast
        reaches every connection anyway, and finishing this one could leave a
        stale roster as the last one a client sees.
        """
        sent = 0
        for connection in list(connections):
            latest = current_version()
            if latest != update.version:
                logger.debug(
                    f"Roster v{update.version} superseded by v{latest}, "
                    f"stopping after {sent} connection(s)"
                )
                break
            if await self._send_to_connection(connection, update):
                sent += 1

        logger.info(
            f"Broadcasted roster v{update.version} ({update.online_count} online) "
            f"to {sent} connection(s)"
        )
        return sent
