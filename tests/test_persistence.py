"""Tests for the SQLite message log and user repository."""

from unittest.mock import AsyncMock, MagicMock

import aiosqlite
import pytest

from realtime_chat.adapters.persistence import Database, SqliteMessageLog, SqliteUserRepository
from realtime_chat.domain.errors import EmailAlreadyExistsError, MessagePersistenceError
from realtime_chat.domain.models import MessageDraft


@pytest.mark.asyncio
async def test_append_assigns_id_and_timestamp(database: Database) -> None:
    """Given a draft, when appending, then the stored message has an id and a UTC timestamp."""
    log = SqliteMessageLog(database)

    message = await log.append(MessageDraft(sender_id="a", receiver_id="b", text="hi"))

    assert message.id
    assert message.created_at.tzinfo is not None
    assert message.text == "hi"


@pytest.mark.asyncio
async def test_conversation_returns_both_directions_in_order(database: Database) -> None:
    """Given messages both ways and with a third user, then only the pair's messages come back in order."""
    log = SqliteMessageLog(database)
    first = await log.append(MessageDraft(sender_id="a", receiver_id="b", text="one"))
    await log.append(MessageDraft(sender_id="a", receiver_id="c", text="elsewhere"))
    second = await log.append(MessageDraft(sender_id="b", receiver_id="a", image="https://x/y.png"))
    third = await log.append(MessageDraft(sender_id="a", receiver_id="b", text="three"))

    history = await log.conversation("b", "a")

    assert [m.id for m in history] == [first.id, second.id, third.id]
    assert history[1].image == "https://x/y.png"
    assert history[1].text is None


@pytest.mark.asyncio
async def test_append_wraps_database_errors() -> None:
    """Given a failing connection, when appending, then MessagePersistenceError is raised."""
    database = MagicMock()
    database.connection.execute = AsyncMock(side_effect=aiosqlite.OperationalError("locked"))
    log = SqliteMessageLog(database)

    with pytest.raises(MessagePersistenceError, match="locked"):
        await log.append(MessageDraft(sender_id="a", receiver_id="b", text="hi"))


def test_connection_before_connect_raises() -> None:
    """Given an unopened database, when using its connection, then RuntimeError is raised."""
    with pytest.raises(RuntimeError, match="not connected"):
        _ = Database(":memory:").connection


@pytest.mark.asyncio
async def test_user_repository_roundtrip(database: Database) -> None:
    """Given a created user, then it can be fetched by id and email."""
    users = SqliteUserRepository(database)

    created = await users.create("alice@example.com", "Alice", "hash")

    assert (await users.get_by_id(created.id)) == created
    assert (await users.get_by_email("alice@example.com")) == created
    assert await users.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_user_repository_rejects_duplicate_email(database: Database) -> None:
    """Given a registered email, when creating another user with it, then it is rejected."""
    users = SqliteUserRepository(database)
    await users.create("alice@example.com", "Alice", "hash")

    with pytest.raises(EmailAlreadyExistsError):
        await users.create("alice@example.com", "Other Alice", "hash")


@pytest.mark.asyncio
async def test_list_except_excludes_caller_and_sorts_by_name(database: Database) -> None:
    """Given several users, when listing contacts, then the caller is excluded and names are sorted."""
    users = SqliteUserRepository(database)
    caller = await users.create("me@example.com", "Me", "hash")
    await users.create("zed@example.com", "zed", "hash")
    await users.create("amy@example.com", "Amy", "hash")

    contacts = await users.list_except(caller.id)

    assert [c.full_name for c in contacts] == ["Amy", "zed"]


@pytest.mark.asyncio
async def test_update_profile_pic(database: Database) -> None:
    """Given a user, when updating the profile picture, then the new URL is returned."""
    users = SqliteUserRepository(database)
    user = await users.create("alice@example.com", "Alice", "hash")

    updated = await users.update_profile_pic(user.id, "https://img/1.png")

    assert updated is not None
    assert updated.profile_pic == "https://img/1.png"
    assert await users.update_profile_pic("missing", "https://img/2.png") is None
