"""Account and session use cases."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import TYPE_CHECKING

from realtime_chat.domain.errors import (
    AuthenticationError,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    SignupValidationError,
    UserNotFoundError,
)
from realtime_chat.domain.ports.auth_service import AuthService as AuthServicePort

if TYPE_CHECKING:
    from realtime_chat.domain.models.user import UserProfile
    from realtime_chat.domain.ports.image_store import ImageStore
    from realtime_chat.domain.ports.password_hasher import PasswordHasher
    from realtime_chat.domain.ports.session_store import SessionStore
    from realtime_chat.domain.ports.user_repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AuthService(AuthServicePort):
    """Service backing signup, login and profile updates."""

    def __init__(
        self,
        users: UserRepository,
        sessions: SessionStore,
        hasher: PasswordHasher,
        image_store: ImageStore,
    ) -> None:
        self.users = users
        self.sessions = sessions
        self.hasher = hasher
        self.image_store = image_store

    @property
    def session_ttl_seconds(self) -> int:
        return self.sessions.ttl_seconds

    async def signup(self, full_name: str, email: str, password: str) -> UserProfile:
        """Create an account.

        Raises:
            SignupValidationError: If a field is missing or the password is too short.
            EmailAlreadyExistsError: If the email is taken.
        """
        full_name = (full_name or "").strip()
        email = (email or "").strip().lower()
        if not full_name or not email or not password:
            raise SignupValidationError("All fields are required")
        if not _EMAIL_PATTERN.match(email):
            raise SignupValidationError("Invalid email format")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise SignupValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if await self.users.get_by_email(email) is not None:
            raise EmailAlreadyExistsError("Email already exists")

        # bcrypt is CPU-bound, keep it off the event loop
        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        record = await self.users.create(
            email=email, full_name=full_name, password_hash=password_hash
        )
        logger.info(f"Signed up user {record.id}")
        return record.to_profile()

    async def login(self, email: str, password: str) -> UserProfile:
        """Check credentials.

        Raises:
            InvalidCredentialsError: On unknown email or wrong password.
        """
        email = (email or "").strip().lower()
        record = await self.users.get_by_email(email) if email else None
        if record is None or not password:
            raise InvalidCredentialsError("Invalid credentials")
        if not await asyncio.to_thread(self.hasher.verify, password, record.password_hash):
            raise InvalidCredentialsError("Invalid credentials")
        logger.info(f"User {record.id} logged in")
        return record.to_profile()

    async def authenticate(self, token: str | None) -> UserProfile:
        """Resolve a session token to a profile.

        Raises:
            AuthenticationError: If the token is missing or invalid.
            UserNotFoundError: If the token names a user that no longer exists.
        """
        if not token:
            raise AuthenticationError("Unauthorized - No Token Provided")
        user_id = self.sessions.verify(token)
        record = await self.users.get_by_id(user_id)
        if record is None:
            raise UserNotFoundError(user_id)
        return record.to_profile()

    def identity_from_token(self, token: str | None) -> str | None:
        if not token:
            return None
        try:
            return self.sessions.verify(token)
        except AuthenticationError:
            return None

    def issue_token(self, user_id: str) -> str:
        return self.sessions.issue(user_id)

    async def update_profile_picture(self, user_id: str, image: str | None) -> UserProfile:
        """Upload and store a new profile picture.

        Raises:
            SignupValidationError: If no image was supplied.
            UserNotFoundError: If the user does not exist.
        """
        if not image:
            raise SignupValidationError("Profile pic is required")
        url = await self.image_store.upload(image)
        record = await self.users.update_profile_pic(user_id, url)
        if record is None:
            raise UserNotFoundError(user_id)
        logger.info(f"Updated profile picture for user {user_id}")
        return record.to_profile()
