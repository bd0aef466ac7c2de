"""Tests for client info extraction helpers."""

from realtime_chat.adapters.web.client_info import get_client_info_from_scope


def test_get_client_info_from_scope_with_full_data() -> None:
    """Given a scope with client and user agent, then extract both values."""
    scope = {
        "client": ("203.0.113.10", 54321),
        "headers": [
            (b"host", b"example.test"),
            (b"user-agent", b"TestBrowser/1.0 (TestOS)"),
        ],
    }

    client_info = get_client_info_from_scope(scope)

    assert client_info.ip == "203.0.113.10"
    assert client_info.user_agent == "TestBrowser/1.0 (TestOS)"


def test_get_client_info_prefers_forwarded_for() -> None:
    """Given X-Forwarded-For, then its first address wins over the peer address."""
    scope = {
        "client": ("10.0.0.1", 80),
        "headers": [(b"x-forwarded-for", b"198.51.100.7, 10.0.0.1")],
    }

    assert get_client_info_from_scope(scope).ip == "198.51.100.7"


def test_get_client_info_from_scope_without_headers() -> None:
    """Given a scope without headers, then user agent falls back to unknown."""
    scope = {
        "client": ("198.51.100.42", 12345),
    }

    client_info = get_client_info_from_scope(scope)

    assert client_info.ip == "198.51.100.42"
    assert client_info.user_agent == "unknown"


def test_get_client_info_truncates_long_user_agent() -> None:
    """Given a very long user agent, then it is shortened with an ellipsis."""
    scope = {"headers": [(b"user-agent", b"x" * 500)]}

    user_agent = get_client_info_from_scope(scope).user_agent

    assert len(user_agent) == 200
    assert user_agent.endswith("...")


def test_get_client_info_from_scope_with_invalid_scope() -> None:
    """Given an invalid scope, then both values are unknown."""
    client_info = get_client_info_from_scope(None)

    assert client_info.ip == "unknown"
    assert client_info.user_agent == "unknown"
