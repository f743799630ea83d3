"""
UserCRUD - Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the whole suite.
How:   Route tests run the real FastAPI app against an in-memory
       FakeRecordStore injected through create_app(record_store=...), so no
       MongoDB server is needed. MongoRecordStore itself is tested against a
       mocked collection in test_record_store.py.

Fixtures:
    ├── fake_store: empty in-memory store
    ├── mock_collection: MagicMock standing in for an AsyncCollection
    └── test_client: HTTPX AsyncClient wired to the app through ASGITransport
"""

import os
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

# Keep test output quiet and independent of the developer's shell
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("PORT", None)

from usercrud.exceptions import StoreError, ValidationError  # noqa: E402
from usercrud.schemas.record import RECORD_FIELDS, Record  # noqa: E402


class FakeRecordStore:
    """
    In-memory RecordStore with MongoDB-like semantics.

    Documents keep insertion order, ids are real ObjectIds, and deletes remove
    the first match only. Set `fail = True` to make every operation raise
    StoreError, as a dropped connection would.
    """

    def __init__(self):
        self.documents: List[Dict[str, Any]] = []
        self.fail = False
        self.reachable = True

    def _check(self) -> None:
        if self.fail:
            raise StoreError(message="Simulated connection loss.")

    async def list_all(self) -> List[Record]:
        self._check()
        return [Record.from_document(document) for document in self.documents]

    async def insert(self, fields: Dict[str, Any]) -> str:
        self._check()
        document = {"_id": ObjectId(), **fields}
        self.documents.append(document)
        return str(document["_id"])

    async def update_by_id(self, record_id: str, fields: Dict[str, Any]) -> int:
        if not ObjectId.is_valid(record_id):
            raise ValidationError(message=f"Invalid record id: '{record_id}'.", fields=["id"])
        self._check()
        for document in self.documents:
            if document["_id"] == ObjectId(record_id):
                document.update({key: fields[key] for key in RECORD_FIELDS if key in fields})
                return 1
        return 0

    async def delete_by_field(self, field_name: str, value: Any) -> int:
        self._check()
        for index, document in enumerate(self.documents):
            if document.get(field_name) == value:
                del self.documents[index]
                return 1
        return 0

    async def ping(self) -> bool:
        return self.reachable and not self.fail


@pytest.fixture
def fake_store():
    """A fresh, empty in-memory store for each test."""
    return FakeRecordStore()


@pytest.fixture
def mock_collection():
    """
    A MagicMock shaped like pymongo's AsyncCollection.

    Usage:
        mock_collection.update_one.return_value.matched_count = 1
    """
    collection = MagicMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    collection.insert_one = AsyncMock()
    collection.update_one = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.database.client.admin.command = AsyncMock(return_value={"ok": 1.0})
    return collection


@pytest_asyncio.fixture
async def test_client(fake_store):
    """
    HTTPX AsyncClient talking to an app backed by `fake_store`.

    Redirects are not followed so tests can assert on the 303 itself.
    """
    from usercrud.main import create_app

    app = create_app(record_store=fake_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
