"""SQLite-backed user repository."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import aiosqlite

from realtime_chat.domain.errors import EmailAlreadyExistsError
from realtime_chat.domain.models.user import UserRecord
from realtime_chat.domain.ports.user_repository import UserRepository

if TYPE_CHECKING:
    from .database import Database

_COLUMNS = "id, email, full_name, password_hash, profile_pic, created_at"


def _row_to_user(row: aiosqlite.Row) -> UserRecord:
    return UserRecord(
        id=row["id"],
        email=row["email"],
        full_name=row["full_name"],
        password_hash=row["password_hash"],
        profile_pic=row["profile_pic"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class SqliteUserRepository(UserRepository):
    """User accounts stored in SQLite."""

    def __init__(self, database: Database) -> None:
        self.database = database

    async def create(self, email: str, full_name: str, password_hash: str) -> UserRecord:
        record = UserRecord(
            id=uuid.uuid4().hex,
            email=email,
            full_name=full_name,
            password_hash=password_hash,
            created_at=datetime.now(UTC),
        )
        connection = self.database.connection
        try:
            await connection.execute(
                f"INSERT INTO users ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                (
                    record.id,
                    record.email,
                    record.full_name,
                    record.password_hash,
                    record.profile_pic,
                    record.created_at.isoformat(),
                ),
            )
            await connection.commit()
        except aiosqlite.IntegrityError as e:
            raise EmailAlreadyExistsError("Email already exists") from e
        return record

    async def _fetch_one(self, query: str, params: tuple[str, ...]) -> UserRecord | None:
        async with self.database.connection.execute(query, params) as cursor:
            row = await cursor.fetchone()
        return _row_to_user(row) if row is not None else None

    async def get_by_id(self, user_id: str) -> UserRecord | None:
        return await self._fetch_one(f"SELECT {_COLUMNS} FROM users WHERE id = ?", (user_id,))

    async def get_by_email(self, email: str) -> UserRecord | None:
        return await self._fetch_one(f"SELECT {_COLUMNS} FROM users WHERE email = ?", (email,))

    async def list_except(self, user_id: str) -> list[UserRecord]:
        async with self.database.connection.execute(
            f"SELECT {_COLUMNS} FROM users WHERE id != ? ORDER BY full_name COLLATE NOCASE",
            (user_id,),
        ) as cursor:
            rows = await cursor.fetchall()
        return [_row_to_user(row) for row in rows]

    async def update_profile_pic(self, user_id: str, profile_pic: str) -> UserRecord | None:
        connection = self.database.connection
        await connection.execute(
            "UPDATE users SET profile_pic = ? WHERE id = ?", (profile_pic, user_id)
        )
        await connection.commit()
        return await self.get_by_id(user_id)
