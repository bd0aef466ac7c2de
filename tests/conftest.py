"""Shared fixtures for chat tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import pytest
import pytest_asyncio

from realtime_chat.adapters.persistence import Database


class FakeConnection:
    """In-memory connection handle recording the events pushed to it."""

    def __init__(self, connection_id: str, fail_sends: bool = False) -> None:
        self._connection_id = connection_id
        self.fail_sends = fail_sends
        self.events: list[tuple[str, Any]] = []
        self.closed_with: tuple[int, str] | None = None

    @property
    def connection_id(self) -> str:
        return self._connection_id

    async def send_event(self, event: str, payload: Any) -> None:
        if self.fail_sends:
            raise ConnectionResetError(f"connection {self._connection_id} reset")
        self.events.append((event, payload))

    async def close(self, code: int = 1000, reason: str = "") -> None:
        if self.closed_with is None:
            self.closed_with = (code, reason)

    def events_named(self, event: str) -> list[Any]:
        return [payload for name, payload in self.events if name == event]

    def __repr__(self) -> str:
        return f"FakeConnection({self._connection_id!r})"


@pytest.fixture
def make_connection():
    """Factory for fake connections with unique ids."""
    counter = 0

    def _make(fail_sends: bool = False) -> FakeConnection:
        nonlocal counter
        counter += 1
        return FakeConnection(f"conn-{counter}", fail_sends=fail_sends)

    return _make


@pytest_asyncio.fixture
async def database() -> AsyncIterator[Database]:
    """Connected in-memory database."""
    db = Database(":memory:")
    await db.connect()
    try:
        yield db
    finally:
        await db.close()
