"""SQLite-backed message log."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import aiosqlite

from realtime_chat.domain.errors import MessagePersistenceError
from realtime_chat.domain.models.message import Message, MessageDraft
from realtime_chat.domain.ports.message_log import MessageLog

if TYPE_CHECKING:
    from .database import Database

logger = logging.getLogger(__name__)


def _row_to_message(row: aiosqlite.Row) -> Message:
    return Message(
        id=row["id"],
        sender_id=row["sender_id"],
        receiver_id=row["receiver_id"],
        text=row["text"],
        image=row["image"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class SqliteMessageLog(MessageLog):
    """Append-only message store in SQLite.

    Insertion order is kept in an autoincrement column, so history reads
    return messages in the order they were written.
    """

    def __init__(self, database: Database) -> None:
        self.database = database

    async def append(self, draft: MessageDraft) -> Message:
        """Persist a message and return it with its id and timestamp assigned.

        Raises:
            MessagePersistenceError: If the write fails.
        """
        message = Message(
            id=uuid.uuid4().hex,
            sender_id=draft.sender_id,
            receiver_id=draft.receiver_id,
            text=draft.text,
            image=draft.image,
            created_at=datetime.now(UTC),
        )
        connection = self.database.connection
        try:
            await connection.execute(
                "INSERT INTO messages (id, sender_id, receiver_id, text, image, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    message.id,
                    message.sender_id,
                    message.receiver_id,
                    message.text,
                    message.image,
                    message.created_at.isoformat(),
                ),
            )
            await connection.commit()
        except aiosqlite.Error as e:
            logger.error(f"Failed to append message {message.id}: {e}", exc_info=True)
            raise MessagePersistenceError(f"Failed to store message: {e}") from e
        return message

    async def conversation(self, user_id: str, peer_id: str) -> list[Message]:
        """Return all messages exchanged between two users, oldest first."""
        async with self.database.connection.execute(
            "SELECT id, sender_id, receiver_id, text, image, created_at FROM messages "
            "WHERE (sender_id = ? AND receiver_id = ?) OR (sender_id = ? AND receiver_id = ?) "
            "ORDER BY seq ASC",
            (user_id, peer_id, peer_id, user_id),
        ) as cursor:
            rows = await cursor.fetchall()
        return [_row_to_message(row) for row in rows]
