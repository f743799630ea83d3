"""
UserCRUD - Record Store Unit Tests
===================================

What:  Tests MongoRecordStore against a mocked AsyncCollection.

What we test:
    ✅ Documents are converted to Records (missing fields become "")
    ✅ Insert returns the generated id as a string
    ✅ Update filters on ObjectId and only $sets name/email/phone
    ✅ Malformed ids are rejected before reaching MongoDB
    ✅ Driver errors become StoreError
    ✅ Ping reports reachability without raising
"""

import pytest
from unittest.mock import MagicMock

from bson import ObjectId
from pymongo.errors import AutoReconnect, ServerSelectionTimeoutError

from usercrud.exceptions import StoreError, ValidationError
from usercrud.services.record_store import MongoRecordStore


class TestListAll:

    @pytest.mark.asyncio
    async def test_documents_become_records(self, mock_collection):
        oid = ObjectId()
        mock_collection.find.return_value.to_list.return_value = [
            {"_id": oid, "name": "Alice", "email": "a@x.com", "phone": "555"},
        ]
        store = MongoRecordStore(mock_collection)

        records = await store.list_all()

        assert len(records) == 1
        assert records[0].id == str(oid)
        assert records[0].name == "Alice"

    @pytest.mark.asyncio
    async def test_missing_fields_default_to_empty(self, mock_collection):
        mock_collection.find.return_value.to_list.return_value = [{"_id": ObjectId(), "name": "Bo"}]
        store = MongoRecordStore(mock_collection)

        records = await store.list_all()

        assert records[0].email == ""
        assert records[0].phone == ""

    @pytest.mark.asyncio
    async def test_connection_loss_raises_store_error(self, mock_collection):
        mock_collection.find.return_value.to_list.side_effect = ServerSelectionTimeoutError("down")
        store = MongoRecordStore(mock_collection)

        with pytest.raises(StoreError):
            await store.list_all()


class TestInsert:

    @pytest.mark.asyncio
    async def test_returns_generated_id(self, mock_collection):
        oid = ObjectId()
        mock_collection.insert_one.return_value = MagicMock(inserted_id=oid)
        store = MongoRecordStore(mock_collection)

        record_id = await store.insert({"name": "Alice", "email": "a@x.com", "phone": "555"})

        assert record_id == str(oid)
        mock_collection.insert_one.assert_awaited_once_with(
            {"name": "Alice", "email": "a@x.com", "phone": "555"}
        )

    @pytest.mark.asyncio
    async def test_caller_dict_is_not_mutated(self, mock_collection):
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())
        store = MongoRecordStore(mock_collection)
        fields = {"name": "Alice", "email": "a@x.com", "phone": "555"}

        await store.insert(fields)

        assert "_id" not in fields

    @pytest.mark.asyncio
    async def test_driver_error_raises_store_error(self, mock_collection):
        mock_collection.insert_one.side_effect = AutoReconnect("lost")
        store = MongoRecordStore(mock_collection)

        with pytest.raises(StoreError):
            await store.insert({"name": "Alice", "email": "a@x.com", "phone": "555"})


class TestUpdateById:

    @pytest.mark.asyncio
    async def test_sets_only_record_fields(self, mock_collection):
        oid = ObjectId()
        mock_collection.update_one.return_value = MagicMock(matched_count=1)
        store = MongoRecordStore(mock_collection)

        matched = await store.update_by_id(
            str(oid), {"name": "Alice B", "email": "a@x.com", "phone": "555", "_id": "evil"}
        )

        assert matched == 1
        mock_collection.update_one.assert_awaited_once_with(
            {"_id": oid},
            {"$set": {"name": "Alice B", "email": "a@x.com", "phone": "555"}},
        )

    @pytest.mark.asyncio
    async def test_no_match_returns_zero(self, mock_collection):
        mock_collection.update_one.return_value = MagicMock(matched_count=0)
        store = MongoRecordStore(mock_collection)

        matched = await store.update_by_id(str(ObjectId()), {"name": "X"})

        assert matched == 0

    @pytest.mark.asyncio
    async def test_malformed_id_rejected(self, mock_collection):
        store = MongoRecordStore(mock_collection)

        with pytest.raises(ValidationError, match="Invalid record id"):
            await store.update_by_id("12345", {"name": "X"})

        mock_collection.update_one.assert_not_awaited()


class TestDeleteByField:

    @pytest.mark.asyncio
    async def test_deletes_one_by_field(self, mock_collection):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=1)
        store = MongoRecordStore(mock_collection)

        deleted = await store.delete_by_field("name", "Alice")

        assert deleted == 1
        mock_collection.delete_one.assert_awaited_once_with({"name": "Alice"})

    @pytest.mark.asyncio
    async def test_driver_error_raises_store_error(self, mock_collection):
        mock_collection.delete_one.side_effect = AutoReconnect("lost")
        store = MongoRecordStore(mock_collection)

        with pytest.raises(StoreError):
            await store.delete_by_field("name", "Alice")


class TestPing:

    @pytest.mark.asyncio
    async def test_reachable(self, mock_collection):
        assert await MongoRecordStore(mock_collection).ping() is True

    @pytest.mark.asyncio
    async def test_unreachable(self, mock_collection):
        mock_collection.database.client.admin.command.side_effect = ServerSelectionTimeoutError("x")

        assert await MongoRecordStore(mock_collection).ping() is False
