"""
Database connection management
"""

import os
import threading

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from ..config import settings
from ..logging import get_logger

logger = get_logger(__name__)

CONTACTS = "contacts"
DELETED_CONTACTS = "deleted_contacts"
COUNTERS = "counters"

# Global shared client (one connection pool per process)
_client: AsyncMongoClient | None = None
_database: AsyncDatabase | None = None
_initialized = False
_init_lock = threading.Lock()


def get_database_url() -> str:
    """Get database URL, checking environment variables first for test compatibility."""
    return os.getenv("ROLODEX_MONGODB_URL") or settings.mongodb_url


def get_database_name() -> str:
    return os.getenv("ROLODEX_MONGODB_DATABASE") or settings.mongodb_database


def reset_database() -> None:
    """Drop references to the shared client (for tests)."""
    global _client, _database, _initialized
    _client = None
    _database = None
    _initialized = False


def init_database(
    database_url: str | None = None,
    database_name: str | None = None,
    force_reinit: bool = False,
) -> None:
    """Initialize the shared MongoDB client.

    The client connects lazily on first operation, so this never blocks.
    """
    global _client, _database, _initialized

    if _initialized and not force_reinit and database_url is None:
        return

    with _init_lock:
        if _initialized and not force_reinit and database_url is None:
            return

        db_url = database_url or get_database_url()
        db_name = database_name or get_database_name()

        _client = AsyncMongoClient(
            db_url,
            tz_aware=True,
            serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        )
        _database = _client[db_name]

        _initialized = True
        logger.info("Database initialized", database=db_name)


def get_client() -> AsyncMongoClient:
    """Get the shared MongoDB client."""
    if _client is None:
        init_database()
    if _client is None:
        raise RuntimeError("Database not initialized")
    return _client


def get_database() -> AsyncDatabase:
    """Get the shared application database handle."""
    if _database is None:
        init_database()
    if _database is None:
        raise RuntimeError("Database not initialized")
    return _database


async def close_database() -> None:
    """Close the shared client and forget it."""
    if _client is not None:
        await _client.close()
        logger.info("Database connection closed")
    reset_database()


async def test_database_connection() -> tuple[bool, str | None]:
    """
    Ping the database and return a helpful error message on failure.

    Returns:
        tuple: (success: bool, error_message: str | None)
    """
    if _client is None:
        return False, "Database client not initialized"

    try:
        await _client.admin.command("ping")
        return True, None
    except PyMongoError as e:
        error_str = str(e)
        error_type = type(e).__name__

        if "Authentication failed" in error_str:
            return False, (
                f"Database authentication failed: {error_str}\n"
                f"Please check the credentials in ROLODEX_MONGODB_URL."
            )
        elif isinstance(e, ServerSelectionTimeoutError) or "Connection refused" in error_str:
            return False, (
                f"Cannot connect to database server: {error_str}\n"
                f"The MongoDB server appears to be down or unreachable.\n"
                f"Please check that MongoDB is running at {get_database_url()}."
            )
        return False, f"Database connection error ({error_type}): {error_str}"
