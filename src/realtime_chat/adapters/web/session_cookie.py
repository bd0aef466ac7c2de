"""Session cookie helpers shared by HTTP routes and the WebSocket endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection
    from starlette.responses import Response

    from realtime_chat.adapters.config import AppConfig
    from realtime_chat.domain.models.user import UserProfile
    from realtime_chat.domain.ports import AuthService


def session_token(connection: HTTPConnection, cookie_name: str) -> str | None:
    """Read the session token from a request or WebSocket cookie."""
    return connection.cookies.get(cookie_name) or None


async def authenticate_request(
    connection: HTTPConnection, auth_service: AuthService, cookie_name: str
) -> UserProfile:
    """Resolve the caller of a protected route.

    Raises:
        AuthenticationError: If the cookie is missing or invalid.
        UserNotFoundError: If the token names a user that no longer exists.
    """
    return await auth_service.authenticate(session_token(connection, cookie_name))


def set_session_cookie(response: Response, token: str, config: AppConfig) -> None:
    """Attach the session cookie: HttpOnly, SameSite=strict, Secure outside development."""
    response.set_cookie(
        config.cookie_name,
        token,
        max_age=config.session_ttl_seconds,
        httponly=True,
        samesite="strict",
        secure=not config.development,
    )


def clear_session_cookie(response: Response, config: AppConfig) -> None:
    """Expire the session cookie immediately."""
    response.set_cookie(
        config.cookie_name,
        "",
        max_age=0,
        httponly=True,
        samesite="strict",
        secure=not config.development,
    )
