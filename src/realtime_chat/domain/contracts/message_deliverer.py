"""Protocol for real-time message delivery."""

from typing import Protocol

from realtime_chat.domain.models.message import Message


class MessageDelivererProtocol(Protocol):
    """Pushes a persisted message to its recipient if they are online."""

    async def deliver(self, sender_id: str, receiver_id: str, message: Message) -> bool:
        """Deliver a message to a connected recipient.

        An offline recipient is not an error; the message is already durable
        and will show up on the next history fetch.

        Args:
            sender_id: Identity of the sender.
            receiver_id: Identity of the recipient.
            message: The persisted message.

        Returns:
            True if the message was handed to the recipient's connection.
        """
        ...
