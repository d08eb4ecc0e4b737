# =============================================================================
# lib/database.py - MongoDB Connection Sequencer
# =============================================================================
# Brings up the document store before the server accepts traffic:
#
#   INIT -> CONNECTING_PRIMARY -> CONNECTED
#                              -> CONNECTING_FALLBACK -> CONNECTED
#                                                     -> ABORTED
#
# The primary instance lives at MONGO_URI. When it can't be reached, an
# ephemeral mongod is started in-process (pymongo_inmemory) and used instead.
# connect() never raises; it returns Connected or Failed and the caller
# decides whether to exit.
#
# Usage:
#   result = await DatabaseConnector(settings.MONGO_URI).connect()
#   if isinstance(result, Failed):
#       sys.exit(1)
#   db = result.database
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from pymongo import ASCENDING, DESCENDING, AsyncMongoClient
from pymongo_inmemory import Mongod

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    """States of the startup connection sequence."""
    INIT = "init"
    CONNECTING_PRIMARY = "connecting_primary"
    CONNECTING_FALLBACK = "connecting_fallback"
    CONNECTED = "connected"
    ABORTED = "aborted"


class DatabaseSource(str, Enum):
    """Which instance the live connection points at."""
    PRIMARY = "primary"
    IN_MEMORY = "in-memory"


@dataclass(frozen=True)
class Connected:
    """A verified connection, ready to hand to request handlers."""
    client: Any
    database: Any
    source: DatabaseSource
    memory_server: Any = None


@dataclass(frozen=True)
class Failed:
    """Neither the primary nor the fallback instance could be used."""
    reason: str


ConnectionResult = Connected | Failed


class DatabaseConnector:
    """
    Two-stage MongoDB connector.

    Client and in-memory server factories are injectable so the sequence
    can be exercised without a real mongod.

    Attributes:
        uri: Primary connection string
        default_db_name: Database used when the URI doesn't name one
        state: Current ConnectionState
    """

    def __init__(
        self,
        uri: str,
        default_db_name: str = "adaptive_fitness",
        client_factory: Callable[..., Any] = AsyncMongoClient,
        memory_server_factory: Callable[[], Any] = Mongod,
    ):
        self.uri = uri
        self.default_db_name = default_db_name
        self.client_factory = client_factory
        self.memory_server_factory = memory_server_factory
        self.state = ConnectionState.INIT

    async def connect(self) -> ConnectionResult:
        """Run the full sequence and return its terminal result."""
        self.state = ConnectionState.CONNECTING_PRIMARY
        try:
            client, database = await self._open(self.uri)
        except Exception as e:
            logger.warning(
                f"MongoDB connection to {self.uri} failed ({e}), "
                "attempting to start in-memory database..."
            )
        else:
            self.state = ConnectionState.CONNECTED
            logger.info("MongoDB connected successfully")
            return Connected(client=client, database=database, source=DatabaseSource.PRIMARY)

        self.state = ConnectionState.CONNECTING_FALLBACK
        memory_server = None
        try:
            memory_server = self.memory_server_factory()
            await asyncio.to_thread(memory_server.start)
            client, database = await self._open(memory_server.connection_string)
        except Exception as e:
            self.state = ConnectionState.ABORTED
            if memory_server is not None:
                await _stop_memory_server(memory_server)
            return Failed(reason=str(e) or e.__class__.__name__)

        self.state = ConnectionState.CONNECTED
        logger.info("In-memory MongoDB started and connected")
        return Connected(
            client=client,
            database=database,
            source=DatabaseSource.IN_MEMORY,
            memory_server=memory_server,
        )

    async def _open(self, uri: str) -> tuple[Any, Any]:
        """Create a client and prove the server answers before returning it."""
        client = self.client_factory(uri, tz_aware=True)
        try:
            await client.admin.command("ping")
        except Exception:
            await client.close()
            raise
        return client, client.get_default_database(default=self.default_db_name)


async def close_connection(connection: Connected) -> None:
    """Close the client and stop the ephemeral server, if one was started."""
    await connection.client.close()
    if connection.memory_server is not None:
        await _stop_memory_server(connection.memory_server)
    logger.info("MongoDB connection closed")


async def _stop_memory_server(memory_server: Any) -> None:
    try:
        await asyncio.to_thread(memory_server.stop)
    except Exception as e:
        logger.warning(f"Failed to stop in-memory MongoDB: {e}")


async def ensure_indexes(database: Any) -> None:
    """Create the indexes the route collaborators query by."""
    await database.users.create_index([("email", ASCENDING)], unique=True)
    await database.workout_sessions.create_index(
        [("user_id", ASCENDING), ("planned_at", DESCENDING)]
    )
    await database.workout_sessions.create_index(
        [("user_id", ASCENDING), ("status", ASCENDING), ("completed_at", DESCENDING)]
    )
    await database.progress_entries.create_index(
        [("user_id", ASCENDING), ("recorded_at", DESCENDING)]
    )
    await database.meals.create_index([("user_id", ASCENDING), ("day", ASCENDING)])
