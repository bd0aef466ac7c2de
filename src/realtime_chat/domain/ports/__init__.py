"""Ports (interfaces) for the ports-and-adapters architecture."""

from realtime_chat.domain.ports.auth_service import AuthService
from realtime_chat.domain.ports.chat_service import ChatService
from realtime_chat.domain.ports.image_store import ImageStore
from realtime_chat.domain.ports.message_log import MessageLog
from realtime_chat.domain.ports.password_hasher import PasswordHasher
from realtime_chat.domain.ports.session_store import SessionStore
from realtime_chat.domain.ports.user_repository import UserRepository

__all__ = [
    "AuthService",
    "ChatService",
    "ImageStore",
    "MessageLog",
    "PasswordHasher",
    "SessionStore",
    "UserRepository",
]
