"""Realtime gateway: connection lifecycle, roster broadcast and message delivery."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from realtime_chat.domain.contracts.message_deliverer import MessageDelivererProtocol
from realtime_chat.domain.models.roster_update import RosterUpdate

from .broadcasters import RosterBroadcaster
from .presence_registry import PresenceRegistry

if TYPE_CHECKING:
    from realtime_chat.domain.contracts.connection_handle import ConnectionHandle
    from realtime_chat.domain.contracts.presence_registry import PresenceRegistryProtocol
    from realtime_chat.domain.contracts.roster_broadcaster import RosterBroadcasterProtocol
    from realtime_chat.domain.models.message import Message

logger = logging.getLogger(__name__)

NEW_MESSAGE_EVENT = "newMessage"
SUPERSEDED_CLOSE_CODE = 4000


class RealtimeGateway(MessageDelivererProtocol):
    """Binds live connections to identities and pushes events to them.

    Every live transport is tracked, registered or not: anonymous connections
    still receive roster broadcasts but are never looked up for delivery.
    """

    def __init__(
        self,
        registry: PresenceRegistryProtocol | None = None,
        broadcaster: RosterBroadcasterProtocol | None = None,
        close_superseded_connections: bool = True,
    ) -> None:
        """Initialize the gateway.

        Args:
            registry: Presence registry; a fresh one is created if omitted.
            broadcaster: Roster broadcaster; a fresh one is created if omitted.
            close_superseded_connections: Close the older connection when the
                same identity connects again.
        """
        self.registry = registry if registry is not None else PresenceRegistry()
        self.broadcaster = broadcaster if broadcaster is not None else RosterBroadcaster()
        self.close_superseded_connections = close_superseded_connections
        self._connections: set[ConnectionHandle] = set()

    @property
    def connection_count(self) -> int:
        """Number of live transports, registered or anonymous."""
        return len(self._connections)

    def online_users(self) -> list[str]:
        """Sorted list of online identities."""
        return sorted(self.registry.snapshot())

    async def on_connect(
        self, handle: ConnectionHandle, claimed_identity: str | None
    ) -> RosterUpdate:
        """Handle a completed handshake.

        Args:
            handle: The new connection.
            claimed_identity: Identity supplied at handshake, or None for an
                anonymous connection.

        Returns:
            The roster that was broadcast.
        """
        self._connections.add(handle)
        if claimed_identity:
            superseded = self.registry.register(claimed_identity, handle)
            if superseded is not None:
                await self._retire(claimed_identity, superseded)
        else:
            logger.info(f"Anonymous connection {handle.connection_id} (no userId supplied)")
        return await self.broadcast_roster()

    async def on_disconnect(
        self, identity: str | None, handle: ConnectionHandle | None = None
    ) -> RosterUpdate:
        """Handle a closed or failed transport.

        Safe to call for identities that were never registered and to call
        more than once.

        Args:
            identity: Identity the connection claimed at handshake, if any.
            handle: The closing connection. When given, the registry entry is
                only removed if it still belongs to this connection.

        Returns:
            The roster that was broadcast.
        """
        if handle is not None:
            self._connections.discard(handle)
        if identity:
            self.registry.deregister(identity, handle)
        return await self.broadcast_roster()

    async def broadcast_roster(self) -> RosterUpdate:
        """Push the current roster to every live connection."""
        update = RosterUpdate(
            version=self.registry.version,
            online_users=tuple(sorted(self.registry.snapshot())),
        )
        await self.broadcaster.broadcast(
            update, self._connections, lambda: self.registry.version
        )
        return update

    async def deliver(self, sender_id: str, receiver_id: str, message: Message) -> bool:
        """Push `newMessage` to the receiver's connection if they are online."""
        handle = self.registry.lookup(receiver_id)
        if handle is None:
            logger.info(
                f"User {receiver_id} offline, message {message.id} from {sender_id} "
                f"left for history fetch"
            )
            return False

        try:
            await handle.send_event(NEW_MESSAGE_EVENT, message.to_payload())
        except Exception as e:
            logger.warning(
                f"Failed to deliver message {message.id} to user {receiver_id} "
                f"on connection {handle.connection_id}: {e}",
                exc_info=True,
            )
            return False

        logger.info(f"Delivered message {message.id} from {sender_id} to {receiver_id}")
        return True

    async def _retire(self, identity: str, superseded: ConnectionHandle) -> None:
        """Deal with the connection replaced by a reconnect of the same identity."""
        if not self.close_superseded_connections:
            logger.info(
                f"Leaving superseded connection {superseded.connection_id} "
                f"of user {identity} open"
            )
            return
        self._connections.discard(superseded)
        try:
            await superseded.close(SUPERSEDED_CLOSE_CODE, "superseded by a newer connection")
        except Exception as e:
            logger.warning(
                f"Failed to close superseded connection {superseded.connection_id}: {e}",
                exc_info=True,
            )
