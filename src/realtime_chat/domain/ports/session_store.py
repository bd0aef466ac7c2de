"""Session store port."""

from typing import Protocol


class SessionStore(Protocol):
    """Port for issuing and validating signed session tokens."""

    @property
    def ttl_seconds(self) -> int:
        """Lifetime of an issued token in seconds."""
        ...

    def issue(self, user_id: str) -> str:
        """Issue a signed token for a user."""
        ...

    def verify(self, token: str) -> str:
        """Return the user id carried by a token.

        Raises:
            AuthenticationError: If the token is invalid or expired.
        """
        ...
