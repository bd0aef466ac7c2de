"""Realtime adapters: presence registry, gateway and WebSocket connections."""

from realtime_chat.adapters.realtime.gateway import NEW_MESSAGE_EVENT, RealtimeGateway
from realtime_chat.adapters.realtime.presence_registry import PresenceRegistry
from realtime_chat.adapters.realtime.websocket_connection import WebSocketConnection

__all__ = ["NEW_MESSAGE_EVENT", "PresenceRegistry", "RealtimeGateway", "WebSocketConnection"]
