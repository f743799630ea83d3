"""
UserCRUD - Database Connection Management
==========================================

What:  Opens the MongoDB client, exposes the record store as a FastAPI
       dependency, and closes the client on shutdown.
How:   The lifespan in main.py calls `connect()` once and stores the result
       on `app.state`. Handlers reach the store through `get_record_store`,
       which reads it back from the running application.
Who:   main.py (lifecycle) and every route handler that touches records.

Connection model:
    One AsyncMongoClient per process, created at startup and reused by every
    request. The driver maintains its own connection pool; the application
    adds no locking, timeouts or retries.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from usercrud.config import MONGO_COLLECTION, MONGO_DB_NAME, MONGO_PORT, MONGO_URL, settings
from usercrud.exceptions import StoreError
from usercrud.services.record_store import MongoRecordStore, RecordStore

logger = logging.getLogger(__name__)


@dataclass
class MongoConnection:
    """An open client together with the store built on top of it."""

    client: AsyncMongoClient
    store: MongoRecordStore


async def connect(uri: Optional[str] = None) -> MongoConnection:
    """
    Create the MongoDB client and the record store for the `users` collection.

    The first ping verifies the server is reachable. A failed ping is logged
    and the connection is still returned: the client reconnects lazily, and
    requests made while the server is down fail with StoreError.
    """
    uri = uri or settings.mongo_uri
    client = AsyncMongoClient(uri)
    collection = client[MONGO_DB_NAME][MONGO_COLLECTION]
    store = MongoRecordStore(collection)

    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        logger.error("MongoDB connection failed: %s", str(e))
    else:
        logger.info("MongoDB successfully connected:")
        logger.info("\tMongo URL: %s", MONGO_URL)
        logger.info("\tMongo port: %s", MONGO_PORT)
        logger.info("\tMongo database name: %s", MONGO_DB_NAME)

    return MongoConnection(client=client, store=store)


async def disconnect(connection: MongoConnection) -> None:
    """Close all pooled connections held by the client."""
    await connection.client.close()
    logger.info("MongoDB connection closed.")


def get_record_store(request: Request) -> RecordStore:
    """
    FastAPI dependency returning the application's record store.

    Raises:
        StoreError: No store is attached (startup did not run or failed).
    """
    store = getattr(request.app.state, "record_store", None)
    if store is None:
        raise StoreError(message="Database is not connected.")
    return store
