"""Message log port."""

from typing import Protocol

from realtime_chat.domain.models.message import Message, MessageDraft


class MessageLog(Protocol):
    """Port for the durable, append-only store of messages."""

    async def append(self, draft: MessageDraft) -> Message:
        """Persist a message and return it with its id and timestamp assigned."""
        ...

    async def conversation(self, user_id: str, peer_id: str) -> list[Message]:
        """Return all messages exchanged between two users, oldest first."""
        ...
