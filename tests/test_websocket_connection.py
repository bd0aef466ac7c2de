"""Tests for WebSocketConnection outbound queueing and closing."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.websockets import WebSocketState

from realtime_chat.adapters.realtime import WebSocketConnection


def _websocket() -> MagicMock:
    websocket = MagicMock()
    websocket.send_json = AsyncMock()
    websocket.close = AsyncMock()
    websocket.application_state = WebSocketState.CONNECTED
    websocket.client_state = WebSocketState.CONNECTED
    return websocket


async def _settle() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_events_are_written_as_event_data_frames() -> None:
    """Given a started connection, when sending an event, then a JSON frame is written."""
    websocket = _websocket()
    connection = WebSocketConnection(websocket, connection_id="c1")
    connection.start()

    await connection.send_event("getOnlineUsers", ["alice"])
    await _settle()

    websocket.send_json.assert_awaited_once_with({"event": "getOnlineUsers", "data": ["alice"]})
    await connection.close()


@pytest.mark.asyncio
async def test_full_queue_drops_oldest_event() -> None:
    """Given a full queue, when sending another event, then the oldest queued one is dropped."""
    websocket = _websocket()
    connection = WebSocketConnection(websocket, queue_size=2)

    await connection.send_event("e", 1)
    await connection.send_event("e", 2)
    await connection.send_event("e", 3)
    connection.start()
    await _settle()

    written = [call.args[0]["data"] for call in websocket.send_json.await_args_list]
    assert written == [2, 3]
    assert connection.dropped_events == 1
    await connection.close()


@pytest.mark.asyncio
async def test_send_after_close_is_ignored() -> None:
    """Given a closed connection, when sending, then nothing is queued or written."""
    websocket = _websocket()
    connection = WebSocketConnection(websocket)
    connection.start()
    await connection.close()

    await connection.send_event("newMessage", {"_id": "m1"})
    await _settle()

    websocket.send_json.assert_not_awaited()
    assert connection.closed is True


@pytest.mark.asyncio
async def test_close_is_idempotent() -> None:
    """Given an open connection, when closing twice, then the socket is closed once."""
    websocket = _websocket()
    connection = WebSocketConnection(websocket)
    connection.start()

    await connection.close(4000, "superseded")
    await connection.close()

    websocket.close.assert_awaited_once_with(code=4000, reason="superseded")


@pytest.mark.asyncio
async def test_close_skips_socket_the_client_already_closed() -> None:
    """Given a client that already disconnected, when closing, then no close frame is sent."""
    websocket = _websocket()
    websocket.client_state = WebSocketState.DISCONNECTED
    connection = WebSocketConnection(websocket)

    await connection.close()

    websocket.close.assert_not_awaited()


@pytest.mark.asyncio
async def test_writer_stops_after_transport_failure() -> None:
    """Given a failing socket, when writing, then the writer stops without raising."""
    websocket = _websocket()
    websocket.send_json = AsyncMock(side_effect=RuntimeError("socket closed"))
    connection = WebSocketConnection(websocket)
    connection.start()

    await connection.send_event("e", 1)
    await connection.send_event("e", 2)
    await _settle()

    assert websocket.send_json.await_count == 1
    await connection.close()


def test_queue_size_must_be_positive() -> None:
    """Given a zero queue size, when constructing, then ValueError is raised."""
    with pytest.raises(ValueError):
        WebSocketConnection(_websocket(), queue_size=0)
