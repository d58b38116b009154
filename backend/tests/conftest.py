"""
Pytest fixtures for the concert store.

The Firebase reference factory is replaced by an in-memory tree so the
helpers run end to end without network access. Setting `fail_with` on the
fake database makes every subsequent call raise that error.
"""

import copy
from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from firebase_admin import exceptions
from httpx import AsyncClient, ASGITransport

from concert_db.main import app
from concert_db.services import concert_service


class FakeDatabase:
    def __init__(self):
        self.data: dict = {}
        self.fail_with: Optional[exceptions.FirebaseError] = None
        self.push_count = 0

    def check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def next_push_key(self) -> str:
        # Real push ids are timestamp-prefixed and sort in creation order
        self.push_count += 1
        return f"-Push{self.push_count:08d}"


class FakeReference:
    def __init__(self, database: FakeDatabase, path: str):
        self._database = database
        self._parts = [part for part in path.strip("/").split("/") if part]
        self.path = "/".join(self._parts)
        self.key = self._parts[-1] if self._parts else None

    def get(self):
        self._database.check()
        node = self._database.data
        for part in self._parts:
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return copy.deepcopy(node)

    def set(self, value):
        self._database.check()
        node = self._database.data
        for part in self._parts[:-1]:
            node = node.setdefault(part, {})
        if value is None:
            node.pop(self._parts[-1], None)
        else:
            node[self._parts[-1]] = copy.deepcopy(value)

    def push(self, value=""):
        self._database.check()
        child = FakeReference(self._database, f"{self.path}/{self._database.next_push_key()}")
        child.set(value)
        return child

    def transaction(self, transaction_update):
        self._database.check()
        new_value = transaction_update(self.get())
        self.set(new_value)
        return new_value


@pytest.fixture
def fake_db(monkeypatch) -> FakeDatabase:
    database = FakeDatabase()
    monkeypatch.setattr(
        concert_service, "get_reference", lambda path: FakeReference(database, path)
    )
    return database


@pytest.fixture
def unavailable_error() -> exceptions.FirebaseError:
    return exceptions.UnavailableError("connection refused")


@pytest_asyncio.fixture(scope="function")
async def client(fake_db: FakeDatabase) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client over the ASGI app, backed by the fake database."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def stored_concerts(fake_db: FakeDatabase) -> FakeDatabase:
    """Three links pushed, count 3, revid 42."""
    fake_db.data = {
        "concerts": {
            "links": {
                "-Push00000001": "https://www.youtube.com/watch?v=first",
                "-Push00000002": "https://www.youtube.com/watch?v=second",
                "-Push00000003": "https://www.youtube.com/watch?v=third",
            },
            "concerts_count": 3,
            "revid": 42,
        }
    }
    fake_db.push_count = 3
    return fake_db
