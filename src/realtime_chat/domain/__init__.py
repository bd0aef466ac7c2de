"""Domain layer - core business logic and models."""

from realtime_chat.domain.models import Message, MessageDraft, RosterUpdate, UserProfile
from realtime_chat.domain.ports import ChatService, MessageLog, SessionStore

__all__ = [
    "ChatService",
    "Message",
    "MessageDraft",
    "MessageLog",
    "RosterUpdate",
    "SessionStore",
    "UserProfile",
]
