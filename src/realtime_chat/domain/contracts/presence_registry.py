"""Presence registry contract (protocol)."""

from typing import Protocol

from realtime_chat.domain.contracts.connection_handle import ConnectionHandle


class PresenceRegistryProtocol(Protocol):
    """Authoritative in-memory mapping of online identities to their connection."""

    @property
    def version(self) -> int:
        """Monotonic counter bumped on every mutation."""
        ...

    def register(self, identity: str, handle: ConnectionHandle) -> ConnectionHandle | None:
        """Insert or replace the entry for an identity.

        Args:
            identity: The user identity.
            handle: The live connection for that identity.

        Returns:
            The handle that was superseded, or None if the identity was offline.
        """
        ...

    def deregister(self, identity: str, handle: ConnectionHandle | None = None) -> bool:
        """Remove the entry for an identity if present.

        Args:
            identity: The user identity.
            handle: When given, only remove the entry if it is still bound to it.

        Returns:
            True if an entry was removed.
        """
        ...

    def lookup(self, identity: str) -> ConnectionHandle | None:
        """Return the live connection for an identity, if any."""
        ...

    def identity_of(self, handle: ConnectionHandle) -> str | None:
        """Return the identity a connection is registered under, if any."""
        ...

    def snapshot(self) -> frozenset[str]:
        """Return the set of identities currently online."""
        ...
