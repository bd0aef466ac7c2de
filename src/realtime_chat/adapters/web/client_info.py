"""Utilities for extracting client information from ASGI scopes.

Used to label WebSocket connections in logs; never raises on odd input.
"""

from __future__ import annotations

from typing import Any

from realtime_chat.domain.models.client_info import ClientInfo

MAX_USER_AGENT_LENGTH = 200


def _decode_header_value(value: Any) -> str:
    """Decode a header value into a readable string."""
    if isinstance(value, bytes):
        return value.decode("latin-1", errors="replace")
    return str(value)


def get_client_info_from_scope(scope: dict[str, Any] | None) -> ClientInfo:
    """Extract client IP and user agent from an ASGI scope-like mapping.

    The first address of ``X-Forwarded-For`` wins over the direct peer
    address. Missing values fall back to ``"unknown"``.
    """
    if not isinstance(scope, dict):
        return ClientInfo(ip="unknown", user_agent="unknown")

    user_agent = "unknown"
    forwarded_for: str | None = None

    for name, value in scope.get("headers") or []:
        decoded_name = _decode_header_value(name).lower()
        if decoded_name == "user-agent":
            user_agent = _decode_header_value(value)
            if len(user_agent) > MAX_USER_AGENT_LENGTH:
                user_agent = f"{user_agent[: MAX_USER_AGENT_LENGTH - 3]}..."
        elif decoded_name == "x-forwarded-for":
            forwarded_for = _decode_header_value(value)

    ip = "unknown"
    if forwarded_for and forwarded_for.split(",")[0].strip():
        ip = forwarded_for.split(",")[0].strip()
    else:
        client = scope.get("client")
        if isinstance(client, (list, tuple)) and client and isinstance(client[0], (str, bytes)):
            ip = _decode_header_value(client[0])

    return ClientInfo(ip=ip, user_agent=user_agent)
