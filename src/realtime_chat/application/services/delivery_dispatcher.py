"""Write-then-deliver dispatch of new messages."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from realtime_chat.domain.errors import MessagePersistenceError

if TYPE_CHECKING:
    from realtime_chat.domain.contracts.message_deliverer import MessageDelivererProtocol
    from realtime_chat.domain.models.message import Message, MessageDraft
    from realtime_chat.domain.ports.message_log import MessageLog

logger = logging.getLogger(__name__)


class DeliveryDispatcher:
    """Persists a message, then hands it to the realtime deliverer exactly once.

    If the durable write fails the deliverer is never called, so a message can
    never appear on a live socket without also being in the history.
    """

    def __init__(self, message_log: MessageLog, deliverer: MessageDelivererProtocol) -> None:
        """Initialize the dispatcher.

        Args:
            message_log: Durable store the message is appended to.
            deliverer: Realtime gateway pushing to connected recipients.
        """
        self.message_log = message_log
        self.deliverer = deliverer

    async def dispatch(self, draft: MessageDraft) -> Message:
        """Persist the draft and deliver it to the receiver if online.

        Args:
            draft: Validated message content.

        Returns:
            The persisted message.

        Raises:
            MessagePersistenceError: If the durable write failed.
        """
        try:
            message = await self.message_log.append(draft)
        except MessagePersistenceError:
            raise
        except Exception as e:
            logger.error(
                f"Failed to persist message from {draft.sender_id} to {draft.receiver_id}: {e}",
                exc_info=True,
            )
            raise MessagePersistenceError(str(e)) from e

        try:
            delivered = await self.deliverer.deliver(
                message.sender_id, message.receiver_id, message
            )
        except Exception as e:
            # The message is durable; the receiver picks it up on the next history fetch.
            logger.warning(f"Realtime delivery of message {message.id} failed: {e}", exc_info=True)
            delivered = False

        logger.debug(f"Dispatched message {message.id} (delivered live: {delivered})")
        return message
