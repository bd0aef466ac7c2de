"""Presence registry for connected chat users."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from realtime_chat.domain.contracts.presence_registry import PresenceRegistryProtocol
from realtime_chat.domain.errors import PresenceRegistryCorruptedError

if TYPE_CHECKING:
    from realtime_chat.domain.contracts.connection_handle import ConnectionHandle

logger = logging.getLogger(__name__)


class PresenceRegistry(PresenceRegistryProtocol):
    """Maps each online identity to its single live connection.

    A new connection for an identity that is already online replaces the old
    entry (last connection wins). The registry never closes the superseded
    handle itself; it is returned from :meth:`register` so the caller decides.

    Mutations run on the event loop thread and never suspend, so they are
    atomic with respect to each other without a lock.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._entries: dict[str, ConnectionHandle] = {}
        # Reverse index, kept in lockstep with _entries
        self._owners: dict[ConnectionHandle, str] = {}
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def register(self, identity: str, handle: ConnectionHandle) -> ConnectionHandle | None:
        """Bind an identity to a connection, replacing any previous binding.

        Args:
            identity: The user identity.
            handle: The live connection.

        Returns:
            The superseded handle, or None if the identity was not online.
        """
        previous_owner = self._owners.get(handle)
        if previous_owner is not None and previous_owner != identity:
            # A transport re-announcing itself under a new identity drops the old one
            del self._entries[previous_owner]
            del self._owners[handle]

        superseded = self._entries.get(identity)
        if superseded is handle:
            superseded = None
        elif superseded is not None:
            del self._owners[superseded]

        self._entries[identity] = handle
        self._owners[handle] = identity
        self._version += 1
        self._check_invariants()

        logger.info(
            f"Presence register: user {identity} on connection {handle.connection_id}"
            + (f" (replaced {superseded.connection_id})" if superseded is not None else "")
            + f". Online users: {len(self._entries)}"
        )
        return superseded

    def deregister(self, identity: str, handle: ConnectionHandle | None = None) -> bool:
        """Remove the entry for an identity.

        Calling this for an identity that is not registered is a no-op, which
        makes duplicate disconnect events harmless.

        Args:
            identity: The user identity.
            handle: When given, only remove the entry if it still points at this
                connection, so a superseded connection closing late cannot evict
                its replacement.

        Returns:
            True if an entry was removed.
        """
        current = self._entries.get(identity)
        if current is None:
            return False
        if handle is not None and current is not handle:
            logger.debug(
                f"Presence deregister skipped for user {identity}: "
                f"connection {handle.connection_id} was already superseded"
            )
            return False

        del self._entries[identity]
        del self._owners[current]
        self._version += 1
        self._check_invariants()

        logger.info(
            f"Presence deregister: user {identity} from connection {current.connection_id}. "
            f"Online users: {len(self._entries)}"
        )
        return True

    def lookup(self, identity: str) -> ConnectionHandle | None:
        return self._entries.get(identity)

    def identity_of(self, handle: ConnectionHandle) -> str | None:
        return self._owners.get(handle)

    def snapshot(self) -> frozenset[str]:
        """Return the identities currently online."""
        return frozenset(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries

    def _check_invariants(self) -> None:
        """Verify the forward and reverse maps agree.

        Raises:
            PresenceRegistryCorruptedError: If they diverge.
        """
        if len(self._entries) != len(self._owners):
            raise PresenceRegistryCorruptedError(
                f"presence registry holds {len(self._entries)} identities "
                f"but {len(self._owners)} connections"
            )
        for identity, handle in self._entries.items():
            if self._owners.get(handle) != identity:
                raise PresenceRegistryCorruptedError(
                    f"connection {handle.connection_id} is not bound to user {identity}"
                )
