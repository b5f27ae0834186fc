"""
# Database Management Module

This module owns the **MongoDB connection** for the Communication Tracker. It implements a
`DatabaseManager` class built on the **Motor** async driver and a module-level `db_manager`
singleton shared by every manager and route.

## Connection Lifecycle

```
 instantiate ──▶ connect() ──▶ get_collection() ... ──▶ disconnect()
   (no I/O)     (retry loop)        (runtime)            (shutdown)
```

1.  **Instantiation** (module load): `client` and `database` are `None`.
2.  **Connection** (startup): `connect()` pings the server and keeps retrying on a
    **fixed delay** (`MONGODB_RETRY_DELAY_SECONDS`) until the ping succeeds. There is no
    retry limit and no backoff growth.
3.  **Operations** (runtime): `get_collection()` returns Motor collections.
4.  **Disconnection** (shutdown): `disconnect()` closes the client.

## Not-Yet-Connected State

`main.py` runs `connect()` as a background task, so the API starts serving before MongoDB
is reachable. While the manager is not connected, `get_collection()` raises
`StoreUnavailableError` immediately; requests made in that window fail fast with a 500
instead of waiting for the connection.

## Collections

| Name | Constant |
|---|---|
| `companies` | `COMPANIES_COLLECTION` |
| `communications` | `COMMUNICATIONS_COLLECTION` |
| `next_communications` | `NEXT_COMMUNICATIONS_COLLECTION` |

## Module Attributes

Attributes:
    db_logger (Logger): Logger for connection lifecycle events (`[DATABASE]`).
    perf_logger (Logger): Logger for timing metrics (`[DB_PERFORMANCE]`).
    health_logger (Logger): Logger for health checks (`[DB_HEALTH]`).
    db_manager (DatabaseManager): Global singleton instance.
"""

import asyncio
import time
from contextlib import contextmanager
from typing import Awaitable, Callable, Iterator, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from communication_tracker.config import settings
from communication_tracker.errors import StoreError, StoreUnavailableError
from communication_tracker.managers.logging_manager import get_logger

db_logger = get_logger(prefix="[DATABASE]")
perf_logger = get_logger(prefix="[DB_PERFORMANCE]")
health_logger = get_logger(prefix="[DB_HEALTH]")

COMPANIES_COLLECTION = "companies"
COMMUNICATIONS_COLLECTION = "communications"
NEXT_COMMUNICATIONS_COLLECTION = "next_communications"


@contextmanager
def store_operation(description: str) -> Iterator[None]:
    """
    Translate driver failures raised inside the block into `StoreError`.

    `StoreUnavailableError` from `get_collection()` is already a `StoreError` and passes through.
    """
    try:
        yield
    except PyMongoError as e:
        db_logger.error("%s failed: %s", description, e)
        raise StoreError(f"{description} failed: {e}") from e


class DatabaseManager:
    """
    Manages the MongoDB client, database handle and collection access.

    Attributes:
        client (`Optional[AsyncIOMotorClient]`): The Motor client. `None` until `connect()`
            has verified connectivity.
        database (`Optional[AsyncIOMotorDatabase]`): The selected database. `None` until connected.
        retry_delay (`float`): Seconds to wait between connection attempts.
        connection_attempts (`int`): Number of attempts made by the last `connect()` call.

    Args:
        retry_delay (`Optional[float]`): Overrides `MONGODB_RETRY_DELAY_SECONDS`.
        sleep: Coroutine function awaited between attempts. Defaults to `asyncio.sleep`.
    """

    def __init__(
        self,
        retry_delay: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None
        self.retry_delay = retry_delay if retry_delay is not None else settings.MONGODB_RETRY_DELAY_SECONDS
        self.connection_attempts = 0
        self._sleep = sleep

    @property
    def is_connected(self) -> bool:
        return self.database is not None

    def _create_client(self) -> AsyncIOMotorClient:
        return AsyncIOMotorClient(
            settings.MONGODB_URL,
            serverSelectionTimeoutMS=settings.MONGODB_SERVER_SELECTION_TIMEOUT,
            connectTimeoutMS=settings.MONGODB_CONNECTION_TIMEOUT,
        )

    async def connect(self):
        """
        Connect to MongoDB, retrying on a fixed delay until the server answers a ping.

        Each attempt builds a fresh client, pings the `admin` database and, on success,
        publishes the client and database handle. A failed attempt closes its client, logs
        a warning and sleeps `retry_delay` seconds. The loop only ends on success or when
        the surrounding task is cancelled. Cancellation during an attempt closes that
        attempt's client before re-raising.

        Note:
            Calling `connect()` on an already connected manager is a no-op.
        """
        if self.is_connected:
            db_logger.debug("connect() called on an already connected manager")
            return

        start_time = time.time()
        self.connection_attempts = 0
        db_logger.info("Starting MongoDB connection process")

        while True:
            self.connection_attempts += 1
            attempt_start = time.time()
            client = None
            try:
                db_logger.info("Connection attempt %d to MongoDB", self.connection_attempts)
                client = self._create_client()

                ping_start = time.time()
                await client.admin.command("ping")
                ping_duration = time.time() - ping_start

                self.client = client
                self.database = client[settings.MONGODB_DATABASE]

                total_duration = time.time() - start_time
                perf_logger.info(
                    "MongoDB connection established in %.3fs (ping: %.3fs, attempts: %d)",
                    total_duration,
                    ping_duration,
                    self.connection_attempts,
                )
                db_logger.info("Connected to MongoDB database: %s", settings.MONGODB_DATABASE)
                return

            except asyncio.CancelledError:
                # The attempt's client is not published yet
                if client is not None:
                    client.close()
                db_logger.info("Connection attempt %d cancelled", self.connection_attempts)
                raise

            except (PyMongoError, OSError) as e:
                if client is not None:
                    client.close()
                attempt_duration = time.time() - attempt_start
                perf_logger.warning(
                    "Connection attempt %d failed after %.3fs", self.connection_attempts, attempt_duration
                )
                db_logger.error("Could not connect to MongoDB: %s", e)
                db_logger.info("Retrying in %.1fs", self.retry_delay)
                await self._sleep(self.retry_delay)

    async def disconnect(self):
        """Close the MongoDB client and return to the not-connected state."""
        if self.client is None:
            db_logger.warning("Disconnect called but no active MongoDB connection found")
            return

        start_time = time.time()
        self.client.close()
        self.client = None
        self.database = None
        perf_logger.info("MongoDB disconnection completed in %.3fs", time.time() - start_time)
        db_logger.info("Disconnected from MongoDB")

    async def health_check(self) -> bool:
        """
        Ping MongoDB and report whether it answered.

        Returns:
            bool: `True` if connected and the ping succeeded, `False` otherwise. Never raises.
        """
        if self.client is None:
            health_logger.warning("Health check failed: not connected to MongoDB")
            return False

        start_time = time.time()
        try:
            await self.client.admin.command("ping")
            perf_logger.debug("Database health check completed in %.3fs", time.time() - start_time)
            return True
        except (PyMongoError, OSError) as e:
            health_logger.error("Database health check failed: %s", e)
            return False

    def get_collection(self, collection_name: str) -> AsyncIOMotorCollection:
        """
        Retrieve a collection from the connected database.

        Raises:
            StoreUnavailableError: If `connect()` has not completed yet.
        """
        if self.database is None:
            raise StoreUnavailableError("Database not connected. Call connect() first.")
        return self.database[collection_name]

    async def create_indexes(self):
        """Create the lookup indexes used by the list endpoints."""
        start_time = time.time()
        await self.get_collection(COMMUNICATIONS_COLLECTION).create_index(
            [("companyId", ASCENDING)], name="communications_company_id"
        )
        await self.get_collection(NEXT_COMMUNICATIONS_COLLECTION).create_index(
            [("companyId", ASCENDING), ("isCompleted", ASCENDING)], name="next_communications_company_active"
        )
        perf_logger.info("Database indexes verified in %.3fs", time.time() - start_time)


# Global database manager instance
db_manager = DatabaseManager()
