"""Chat use cases: contacts, history and sending."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pydantic

from realtime_chat.domain.errors import MessageValidationError, UserNotFoundError
from realtime_chat.domain.models.message import MessageDraft
from realtime_chat.domain.ports.chat_service import ChatService as ChatServicePort

if TYPE_CHECKING:
    from realtime_chat.application.services.delivery_dispatcher import DeliveryDispatcher
    from realtime_chat.domain.models.message import Message
    from realtime_chat.domain.models.user import UserProfile
    from realtime_chat.domain.ports.image_store import ImageStore
    from realtime_chat.domain.ports.message_log import MessageLog
    from realtime_chat.domain.ports.user_repository import UserRepository

logger = logging.getLogger(__name__)


class ChatService(ChatServicePort):
    """Service backing the messages API."""

    def __init__(
        self,
        users: UserRepository,
        message_log: MessageLog,
        image_store: ImageStore,
        dispatcher: DeliveryDispatcher,
    ) -> None:
        """Initialize the chat service.

        Args:
            users: Repository of user accounts.
            message_log: Durable message store, read for history.
            image_store: Object storage for message images.
            dispatcher: Write-then-deliver routine for new messages.
        """
        self.users = users
        self.message_log = message_log
        self.image_store = image_store
        self.dispatcher = dispatcher

    async def list_contacts(self, caller_id: str) -> list[UserProfile]:
        """List every user except the caller."""
        records = await self.users.list_except(caller_id)
        return [record.to_profile() for record in records]

    async def get_history(self, caller_id: str, peer_id: str) -> list[Message]:
        """Get the messages between caller and peer, oldest first."""
        return await self.message_log.conversation(caller_id, peer_id)

    async def send_message(
        self,
        sender_id: str,
        receiver_id: str,
        text: str | None = None,
        image: str | None = None,
    ) -> Message:
        """Validate, persist and deliver a new message."""
        if isinstance(text, str) and not text.strip():
            text = None
        if not text and not image:
            raise MessageValidationError("Message must contain text or an image")

        if await self.users.get_by_id(receiver_id) is None:
            raise UserNotFoundError(receiver_id)

        image_url = await self.image_store.upload(image) if image else None

        try:
            draft = MessageDraft(
                sender_id=sender_id,
                receiver_id=receiver_id,
                text=text,
                image=image_url,
            )
        except pydantic.ValidationError as e:
            raise MessageValidationError(str(e)) from e

        message = await self.dispatcher.dispatch(draft)
        logger.info(f"Message {message.id} sent from {sender_id} to {receiver_id}")
        return message
