"""Tests for the /socket handler's lifecycle and failure handling."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.websockets import WebSocketState

from realtime_chat.adapters.config import AppConfig
from realtime_chat.adapters.web.socket_endpoint import create_socket_endpoint
from realtime_chat.domain.errors import PresenceRegistryCorruptedError


def _websocket(messages: list[dict] | None = None) -> MagicMock:
    websocket = MagicMock()
    websocket.query_params = {"userId": "alice"}
    websocket.scope = {"type": "websocket", "headers": [], "client": ("127.0.0.1", 5000)}
    websocket.accept = AsyncMock()
    websocket.send_json = AsyncMock()
    websocket.close = AsyncMock()
    websocket.receive = AsyncMock(side_effect=messages or [{"type": "websocket.disconnect"}])
    websocket.application_state = WebSocketState.CONNECTED
    websocket.client_state = WebSocketState.CONNECTED
    return websocket


def _gateway() -> MagicMock:
    gateway = MagicMock()
    gateway.on_connect = AsyncMock()
    gateway.on_disconnect = AsyncMock()
    return gateway


@pytest.mark.asyncio
async def test_disconnect_deregisters_and_closes_connection() -> None:
    """Given a client that disconnects, then the gateway is told and the socket is closed."""
    gateway = _gateway()
    websocket = _websocket()
    endpoint = create_socket_endpoint(
        gateway, MagicMock(), AppConfig.for_testing(socket_requires_session=False)
    )

    await endpoint(websocket)

    gateway.on_connect.assert_awaited_once()
    assert gateway.on_connect.await_args.args[1] == "alice"
    gateway.on_disconnect.assert_awaited_once()
    assert gateway.on_disconnect.await_args.args[0] == "alice"
    websocket.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_corrupted_registry_shuts_server_down() -> None:
    """Given the registry reports corruption, then shutdown is requested and the error propagates."""
    gateway = _gateway()
    gateway.on_connect = AsyncMock(side_effect=PresenceRegistryCorruptedError("maps disagree"))
    shutdown = AsyncMock()
    websocket = _websocket()
    endpoint = create_socket_endpoint(
        gateway,
        MagicMock(),
        AppConfig.for_testing(socket_requires_session=False),
        on_registry_corrupted=shutdown,
    )

    with pytest.raises(PresenceRegistryCorruptedError):
        await endpoint(websocket)

    shutdown.assert_awaited_once()
    websocket.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_corruption_detected_on_disconnect_still_closes_socket() -> None:
    """Given corruption surfaces while deregistering, then the socket is closed before shutdown."""
    gateway = _gateway()
    gateway.on_disconnect = AsyncMock(side_effect=PresenceRegistryCorruptedError("maps disagree"))
    shutdown = AsyncMock()
    websocket = _websocket()
    endpoint = create_socket_endpoint(
        gateway,
        MagicMock(),
        AppConfig.for_testing(socket_requires_session=False),
        on_registry_corrupted=shutdown,
    )

    with pytest.raises(PresenceRegistryCorruptedError):
        await endpoint(websocket)

    websocket.close.assert_awaited_once()
    shutdown.assert_awaited_once()
