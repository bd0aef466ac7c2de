"""Persistence adapters backed by SQLite."""

from realtime_chat.adapters.persistence.database import Database
from realtime_chat.adapters.persistence.sqlite_message_log import SqliteMessageLog
from realtime_chat.adapters.persistence.sqlite_user_repository import SqliteUserRepository

__all__ = ["Database", "SqliteMessageLog", "SqliteUserRepository"]
