"""Named integer sequences backed by the ``counters`` collection."""

from __future__ import annotations

from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from .connection import COUNTERS, get_database

CONTACTS_SEQUENCE = "contacts"


async def get_next_sequence(name: str, db: AsyncDatabase | None = None) -> int:
    """Atomically increment the counter ``name`` and return the new value.

    A missing counter is created on first use, so the first value is 1.
    """
    db = db if db is not None else get_database()
    counter = await db[COUNTERS].find_one_and_update(
        {"_id": name},
        {"$inc": {"current": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return int(counter["current"])


async def set_sequence_floor(name: str, value: int, db: AsyncDatabase | None = None) -> None:
    """Make sure the next value handed out for ``name`` is above ``value``."""
    db = db if db is not None else get_database()
    await db[COUNTERS].update_one({"_id": name}, {"$max": {"current": value}}, upsert=True)
