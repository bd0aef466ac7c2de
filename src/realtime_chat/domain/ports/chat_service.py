"""Chat service port."""

from typing import Protocol

from realtime_chat.domain.models.message import Message
from realtime_chat.domain.models.user import UserProfile


class ChatService(Protocol):
    """Port for the chat use cases behind the HTTP surface."""

    async def list_contacts(self, caller_id: str) -> list[UserProfile]:
        """List candidate chat partners, excluding the caller."""
        ...

    async def get_history(self, caller_id: str, peer_id: str) -> list[Message]:
        """Get the ordered conversation between the caller and a peer."""
        ...

    async def send_message(
        self,
        sender_id: str,
        receiver_id: str,
        text: str | None = None,
        image: str | None = None,
    ) -> Message:
        """Validate, persist and deliver a new message.

        Raises:
            MessageValidationError: If neither text nor image is present.
            UserNotFoundError: If the receiver does not exist.
            MessagePersistenceError: If the durable write fails.
        """
        ...
