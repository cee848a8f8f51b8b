"""
Reusable seed data functions for database initialization.

Creates the indexes the contact resolvers rely on and loads a handful of
sample contacts for local development.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from pymongo import ASCENDING, TEXT
from pymongo.asynchronous.database import AsyncDatabase

from ..contacts.scheduling import set_next_contact_date
from ..dbmodels import ContactDocument
from ..logging import get_logger
from .connection import CONTACTS, DELETED_CONTACTS
from .sequences import CONTACTS_SEQUENCE, get_next_sequence, set_sequence_floor

logger = get_logger(__name__)

TEXT_INDEX_FIELDS = ("name", "company", "title", "email", "notes", "contextSpace")

# Relative day offsets in SAMPLE_CONTACTS, turned into dates at seed time
SAMPLE_OFFSET_KEYS = ("last_contact_days_ago", "next_contact_days_ahead")

SAMPLE_CONTACTS: list[dict[str, Any]] = [
    {
        "name": "Agnesse Caigg",
        "email": "acaigg0@example.com",
        "company": "Skinix",
        "title": "Research Associate",
        "owner": "dev-user",
        "activeStatus": True,
        "contactFrequency": "Monthly",
        "priority": "High",
        "familiarity": "Close",
        "last_contact_days_ago": 12,
    },
    {
        "name": "Pedro Almeida",
        "phone": "555-201-7734",
        "LinkedIn": "https://www.linkedin.com/in/pedro-almeida",
        "owner": "dev-user",
        "activeStatus": True,
        "contactFrequency": "Quarterly",
        "priority": "Medium",
        "familiarity": "Acquaintance",
        "last_contact_days_ago": 120,
    },
    {
        "name": "Maren Holt",
        "email": "maren.holt@example.org",
        "owner": "dev-user",
        "activeStatus": False,
        "contactFrequency": "Yearly",
        "priority": "Low",
        "familiarity": "Stranger",
        "last_contact_days_ago": None,
    },
    {
        "name": "Jun Takeda",
        "email": "jun@example.net",
        "title": "Engineering Manager",
        "owner": "recruiting",
        "activeStatus": True,
        "contactFrequency": "Custom",
        "priority": "High",
        "familiarity": "Close",
        "last_contact_days_ago": 3,
        "next_contact_days_ahead": 45,
    },
]


async def ensure_indexes(db: AsyncDatabase) -> None:
    """Create the unique id indexes and the text index used by contact search."""
    await db[CONTACTS].create_index([("id", ASCENDING)], unique=True)
    await db[DELETED_CONTACTS].create_index([("id", ASCENDING)], unique=True)
    await db[CONTACTS].create_index(
        [(field, TEXT) for field in TEXT_INDEX_FIELDS], name="contacts_text"
    )
    logger.info("Contact indexes ensured", text_fields=list(TEXT_INDEX_FIELDS))


def build_sample_document(sample: dict[str, Any], now: datetime) -> dict[str, Any]:
    document = {k: v for k, v in sample.items() if k not in SAMPLE_OFFSET_KEYS}
    document.setdefault("email", None)
    document.setdefault("phone", None)
    document.setdefault("LinkedIn", None)

    last_days = sample.get("last_contact_days_ago")
    last_contact = now - timedelta(days=last_days) if last_days is not None else None
    document["lastContactDate"] = last_contact

    if "next_contact_days_ahead" in sample:
        document["nextContactDate"] = now + timedelta(days=sample["next_contact_days_ahead"])
    else:
        next_date, _ = set_next_contact_date(
            ContactDocument.model_validate(document),
            turned_active=False,
            manual_date_change=False,
            new_active_status=document["activeStatus"],
            clock=lambda: now,
        )
        document["nextContactDate"] = next_date

    return document


async def seed_sample_contacts(db: AsyncDatabase, now: datetime | None = None) -> list[int]:
    """Insert the sample contacts that are not present yet (matched by name)."""
    now = now or datetime.now(UTC)

    # Keep the counter ahead of any ids already stored
    highest = await db[CONTACTS].find_one(sort=[("id", -1)], projection={"id": 1})
    if highest and highest.get("id") is not None:
        await set_sequence_floor(CONTACTS_SEQUENCE, int(highest["id"]), db)

    inserted: list[int] = []
    for sample in SAMPLE_CONTACTS:
        if await db[CONTACTS].find_one({"name": sample["name"]}):
            logger.debug("Sample contact already exists", name=sample["name"])
            continue

        document = build_sample_document(sample, now)
        document["id"] = await get_next_sequence(CONTACTS_SEQUENCE, db)
        await db[CONTACTS].insert_one(document)
        inserted.append(document["id"])

    logger.info("Sample contacts seeded", inserted=len(inserted))
    return inserted
