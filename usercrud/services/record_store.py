"""
UserCRUD - Record Store Adapter
================================

What:  Wraps the single `users` collection behind four operations:
       list_all, insert, update_by_id and delete_by_field.
How:   MongoRecordStore calls the async PyMongo collection API and translates
       driver failures into StoreError. Routes depend on the RecordStore
       protocol, so tests can hand the app an in-memory implementation.
Who:   Built once by the lifespan in main.py; injected into route handlers
       through `usercrud.database.get_record_store`.

Counts, not exceptions:
    update_by_id and delete_by_field return the matched/deleted count (0 or 1).
    Deciding that 0 means "404" is the route's job.
"""

import logging
from typing import Any, Dict, List, Protocol

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from usercrud.exceptions import StoreError, ValidationError
from usercrud.schemas.record import RECORD_FIELDS, Record

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    """The operations route handlers need from a record store."""

    async def list_all(self) -> List[Record]: ...

    async def insert(self, fields: Dict[str, Any]) -> str: ...

    async def update_by_id(self, record_id: str, fields: Dict[str, Any]) -> int: ...

    async def delete_by_field(self, field_name: str, value: Any) -> int: ...

    async def ping(self) -> bool: ...


class MongoRecordStore:
    """
    RecordStore backed by a MongoDB collection.

    The collection handle comes from a client opened once at startup; the
    driver pools and serializes operations itself, so this class keeps no
    state beyond the handle.
    """

    def __init__(self, collection: AsyncCollection):
        self.collection = collection

    async def list_all(self) -> List[Record]:
        """
        Return every document in the collection, in natural order.

        Raises:
            StoreError: The query failed (e.g. connection lost).
        """
        try:
            documents = await self.collection.find().to_list()
        except PyMongoError as e:
            logger.error("Failed to list records: %s", str(e))
            raise StoreError(
                message="Could not retrieve records.",
                context={"error_type": type(e).__name__, "error": str(e)},
            ) from e
        return [Record.from_document(document) for document in documents]

    async def insert(self, fields: Dict[str, Any]) -> str:
        """
        Insert a new document and return the identifier MongoDB assigned.

        The fields are written as given; validation happens before this call.
        """
        document = dict(fields)
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            logger.error("Failed to insert record: %s", str(e))
            raise StoreError(
                message="Could not create the record.",
                context={"error_type": type(e).__name__, "error": str(e)},
            ) from e
        return str(result.inserted_id)

    async def update_by_id(self, record_id: str, fields: Dict[str, Any]) -> int:
        """
        Set name, email and phone on the document with the given id.

        Args:
            record_id: 24-character hex string form of the ObjectId
            fields:    New values; keys other than name/email/phone are dropped

        Returns:
            The matched count, 0 or 1.

        Raises:
            ValidationError: record_id is not a valid ObjectId.
            StoreError: The update failed.
        """
        object_id = _to_object_id(record_id)
        updated = {key: fields[key] for key in RECORD_FIELDS if key in fields}
        try:
            result = await self.collection.update_one(
                {"_id": object_id},
                {"$set": updated},
            )
        except PyMongoError as e:
            logger.error("Failed to update record %s: %s", record_id, str(e))
            raise StoreError(
                message="Could not update the record.",
                context={"record_id": record_id, "error_type": type(e).__name__},
            ) from e
        return result.matched_count

    async def delete_by_field(self, field_name: str, value: Any) -> int:
        """
        Delete the first document whose `field_name` equals `value`.

        Returns:
            The deleted count, 0 or 1. Duplicates beyond the first survive.
        """
        try:
            result = await self.collection.delete_one({field_name: value})
        except PyMongoError as e:
            logger.error("Failed to delete record where %s=%r: %s", field_name, value, str(e))
            raise StoreError(
                message="Could not delete the record.",
                context={"field": field_name, "error_type": type(e).__name__},
            ) from e
        return result.deleted_count

    async def ping(self) -> bool:
        """Check that the MongoDB server answers; never raises."""
        try:
            await self.collection.database.client.admin.command("ping")
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False
        return True


def _to_object_id(record_id: str) -> ObjectId:
    """Converts a submitted id to an ObjectId, or raises a 400-mapped error."""
    try:
        return ObjectId(record_id)
    except (InvalidId, TypeError) as e:
        raise ValidationError(
            message=f"Invalid record id: '{record_id}'.",
            fields=["id"],
        ) from e
