"""Application services."""

from realtime_chat.application.services.auth_service import AuthService
from realtime_chat.application.services.chat_service import ChatService
from realtime_chat.application.services.delivery_dispatcher import DeliveryDispatcher

__all__ = ["AuthService", "ChatService", "DeliveryDispatcher"]
