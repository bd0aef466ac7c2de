"""Session store issuing signed JWTs."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

import jwt

from realtime_chat.domain.errors import AuthenticationError
from realtime_chat.domain.ports.session_store import SessionStore

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class JwtSessionStore(SessionStore):
    """Stateless sessions: the token itself carries the user id."""

    def __init__(self, secret: str, ttl_seconds: int) -> None:
        """Initialize the store.

        Args:
            secret: HMAC secret used to sign tokens.
            ttl_seconds: Token lifetime.
        """
        if not secret:
            raise ValueError("secret must not be empty")
        self._secret = secret
        self._ttl_seconds = ttl_seconds

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def issue(self, user_id: str) -> str:
        now = datetime.now(UTC)
        payload = {
            "userId": user_id,
            "iat": now,
            "exp": now + timedelta(seconds=self._ttl_seconds),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> str:
        """Return the user id carried by a token.

        Raises:
            AuthenticationError: If the token is expired, tampered with or malformed.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Unauthorized - Token Expired") from e
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected session token: {e}")
            raise AuthenticationError("Unauthorized - Invalid Token") from e

        user_id = payload.get("userId")
        if not isinstance(user_id, str) or not user_id:
            raise AuthenticationError("Unauthorized - Invalid Token")
        return user_id
