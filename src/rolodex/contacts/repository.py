"""Repository helpers for contact documents."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from pymongo import ASCENDING
from pymongo.asynchronous.database import AsyncDatabase

from ..database.connection import CONTACTS, DELETED_CONTACTS
from ..logging import get_logger

logger = get_logger(__name__)


def build_contact_filter(
    *,
    active_status: bool | None = None,
    contact_frequency: str | None = None,
    priority: str | None = None,
    familiarity: str | None = None,
    search: str | None = None,
) -> dict[str, Any]:
    query: dict[str, Any] = {}
    if active_status is not None:
        query["activeStatus"] = active_status
    if contact_frequency is not None:
        query["contactFrequency"] = contact_frequency
    if priority is not None:
        query["priority"] = priority
    if familiarity is not None:
        query["familiarity"] = familiarity
    if search:
        query["$text"] = {"$search": search}
    return query


def page_count(total: int, page_size: int) -> int:
    return math.ceil(total / page_size)


async def find_contact(db: AsyncDatabase, contact_id: int) -> dict[str, Any] | None:
    return await db[CONTACTS].find_one({"id": contact_id})


async def list_contacts(
    db: AsyncDatabase, query: dict[str, Any], *, page: int, page_size: int
) -> tuple[list[dict[str, Any]], int]:
    """Return one page of contacts sorted by name, plus the total match count."""
    cursor = (
        db[CONTACTS]
        .find(query)
        .sort("name", ASCENDING)
        .skip(page_size * (page - 1))
        .limit(page_size)
    )
    total = await db[CONTACTS].count_documents(query)
    contacts = await cursor.to_list(length=None)
    return contacts, total


async def insert_contact(db: AsyncDatabase, document: dict[str, Any]) -> dict[str, Any] | None:
    result = await db[CONTACTS].insert_one(document)
    return await db[CONTACTS].find_one({"_id": result.inserted_id})


async def update_contact_fields(
    db: AsyncDatabase, contact_id: int, changes: dict[str, Any]
) -> dict[str, Any] | None:
    if changes:
        await db[CONTACTS].update_one({"id": contact_id}, {"$set": changes})
    return await db[CONTACTS].find_one({"id": contact_id})


async def _move_contact(
    db: AsyncDatabase,
    contact_id: int,
    *,
    source: str,
    target: str,
    deleted_at: datetime | None,
) -> bool:
    """Copy a contact into ``target`` and then remove it from ``source``.

    The two writes are not atomic. If the delete does not go through, the
    document is left in both collections and False is returned.
    """
    document = await db[source].find_one({"id": contact_id})
    if not document:
        return False

    if deleted_at is not None:
        document["deleted"] = deleted_at
    else:
        document.pop("deleted", None)

    inserted = await db[target].insert_one(document)
    if not inserted.inserted_id:
        return False

    removed = await db[source].delete_one({"id": contact_id})
    if removed.deleted_count != 1:
        logger.warning(
            "Contact copied but not removed; it now exists in both collections",
            contact_id=contact_id,
            source=source,
            target=target,
        )
        return False
    return True


async def soft_delete_contact(db: AsyncDatabase, contact_id: int, *, deleted_at: datetime) -> bool:
    return await _move_contact(
        db, contact_id, source=CONTACTS, target=DELETED_CONTACTS, deleted_at=deleted_at
    )


async def restore_contact(db: AsyncDatabase, contact_id: int) -> bool:
    return await _move_contact(
        db, contact_id, source=DELETED_CONTACTS, target=CONTACTS, deleted_at=None
    )


async def count_contacts_by_owner(
    db: AsyncDatabase, query: dict[str, Any]
) -> list[dict[str, Any]]:
    """Group matching contacts by owner and active status.

    Returns one ``{"owner", "active", "inactive"}`` row per owner.
    """
    pipeline = [
        {"$match": query},
        {
            "$group": {
                "_id": {"owner": "$owner", "activeStatus": "$activeStatus"},
                "count": {"$sum": 1},
            }
        },
    ]
    cursor = await db[CONTACTS].aggregate(pipeline)
    results = await cursor.to_list(length=None)

    stats: dict[str | None, dict[str, Any]] = {}
    for result in results:
        owner = result["_id"].get("owner")
        row = stats.setdefault(owner, {"owner": owner, "active": 0, "inactive": 0})
        key = "active" if result["_id"].get("activeStatus") else "inactive"
        row[key] += result["count"]

    return sorted(stats.values(), key=lambda row: (row["owner"] is not None, row["owner"] or ""))
