"""User repository port."""

from typing import Protocol

from realtime_chat.domain.models.user import UserRecord


class UserRepository(Protocol):
    """Port for storing and retrieving user accounts."""

    async def create(self, email: str, full_name: str, password_hash: str) -> UserRecord:
        """Create a user and return the stored record."""
        ...

    async def get_by_id(self, user_id: str) -> UserRecord | None:
        """Get a user by id."""
        ...

    async def get_by_email(self, email: str) -> UserRecord | None:
        """Get a user by email."""
        ...

    async def list_except(self, user_id: str) -> list[UserRecord]:
        """List every user other than the given one."""
        ...

    async def update_profile_pic(self, user_id: str, profile_pic: str) -> UserRecord | None:
        """Set the profile picture URL and return the updated record."""
        ...
