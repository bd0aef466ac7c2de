"""Auth service port."""

from typing import Protocol

from realtime_chat.domain.models.user import UserProfile


class AuthService(Protocol):
    """Port for account and session use cases."""

    @property
    def session_ttl_seconds(self) -> int:
        """Lifetime of issued session tokens in seconds."""
        ...

    async def signup(self, full_name: str, email: str, password: str) -> UserProfile:
        """Create an account."""
        ...

    async def login(self, email: str, password: str) -> UserProfile:
        """Check credentials and return the matching profile."""
        ...

    async def authenticate(self, token: str | None) -> UserProfile:
        """Resolve a session token to a profile."""
        ...

    def identity_from_token(self, token: str | None) -> str | None:
        """Return the user id carried by a token, or None if it is unusable."""
        ...

    def issue_token(self, user_id: str) -> str:
        """Issue a session token for a user."""
        ...

    async def update_profile_picture(self, user_id: str, image: str | None) -> UserProfile:
        """Upload a new profile picture for a user."""
        ...
