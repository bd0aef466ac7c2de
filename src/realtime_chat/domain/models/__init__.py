"""Domain models for the realtime chat."""

from realtime_chat.domain.models.client_info import ClientInfo
from realtime_chat.domain.models.message import Message, MessageDraft
from realtime_chat.domain.models.roster_update import RosterUpdate
from realtime_chat.domain.models.user import UserProfile, UserRecord

__all__ = [
    "ClientInfo",
    "Message",
    "MessageDraft",
    "RosterUpdate",
    "UserProfile",
    "UserRecord",
]
