"""WebSocket endpoint binding browser connections to the realtime gateway."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.websockets import WebSocketDisconnect

from realtime_chat.adapters.realtime import WebSocketConnection
from realtime_chat.domain.errors import PresenceRegistryCorruptedError

from .client_info import get_client_info_from_scope
from .session_cookie import session_token

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from starlette.websockets import WebSocket

    from realtime_chat.adapters.config import AppConfig
    from realtime_chat.adapters.realtime import RealtimeGateway
    from realtime_chat.domain.ports import AuthService

logger = logging.getLogger(__name__)

USER_ID_QUERY_PARAM = "userId"


def resolve_identity(
    websocket: WebSocket, auth_service: AuthService, config: AppConfig
) -> str | None:
    """Work out which identity a new socket may register under.

    The client claims an identity with the ``userId`` query parameter. When
    sessions are required, the claim only counts if it matches the user in
    the session cookie; otherwise the socket stays anonymous.
    """
    claimed = websocket.query_params.get(USER_ID_QUERY_PARAM) or None
    if claimed is None or not config.socket_requires_session:
        return claimed

    session_identity = auth_service.identity_from_token(
        session_token(websocket, config.cookie_name)
    )
    if session_identity != claimed:
        logger.warning(
            f"Socket claimed userId {claimed} without a matching session, "
            "connecting anonymously"
        )
        return None
    return claimed


def create_socket_endpoint(
    gateway: RealtimeGateway,
    auth_service: AuthService,
    config: AppConfig,
    on_registry_corrupted: Callable[[], Awaitable[None]] | None = None,
) -> Callable[[WebSocket], Awaitable[None]]:
    """Create the handler for the ``/socket`` route.

    A corrupted presence registry cannot be repaired in place, so
    ``on_registry_corrupted`` is awaited to shut the server down before the
    error propagates.
    """

    async def serve(websocket: WebSocket) -> None:
        identity = resolve_identity(websocket, auth_service, config)
        client_info = get_client_info_from_scope(websocket.scope)

        await websocket.accept()
        connection = WebSocketConnection(websocket, queue_size=config.outbound_queue_size)
        connection.start()
        logger.info(
            f"Socket {connection.connection_id} connected "
            f"(user={identity or 'anonymous'}, ip={client_info.ip})"
        )

        try:
            await gateway.on_connect(connection, identity)
            while True:
                # Clients never send application messages; read only to observe the close.
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
        except WebSocketDisconnect:
            pass
        except RuntimeError as e:
            logger.debug(f"Socket {connection.connection_id} receive ended: {e}")
        finally:
            try:
                await gateway.on_disconnect(identity, connection)
            finally:
                await connection.close()
                logger.info(
                    f"Socket {connection.connection_id} disconnected "
                    f"(user={identity or 'anonymous'})"
                )

    async def socket_endpoint(websocket: WebSocket) -> None:
        try:
            await serve(websocket)
        except PresenceRegistryCorruptedError as e:
            logger.critical(f"Presence registry corrupted, shutting down: {e}")
            if on_registry_corrupted is not None:
                await on_registry_corrupted()
            raise

    return socket_endpoint
