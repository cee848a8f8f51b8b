from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

import strawberry

from ...contacts import repository
from ...contacts.scheduling import Clock, set_next_contact_date, utc_now
from ...contacts.validation import ensure_valid_contact
from ...config import settings
from ...database.connection import get_database
from ...database.sequences import CONTACTS_SEQUENCE, get_next_sequence
from ...dbmodels import FIELD_KEYS, ContactDocument, ContactFrequency, as_utc
from ...logging import get_logger
from ..access_control import must_be_signed_in
from ..types.contact import Contact, ContactCounts, ContactListWithPages

if TYPE_CHECKING:
    from ..mutations.root import ContactInput, ContactUpdateInput

logger = get_logger(__name__)

# Stored keys that cannot be cleared through an update
NON_NULL_KEYS = frozenset({"name", "activeStatus"})

# Changing any of these re-runs scheduling and validation on update
TRACKED_FIELDS = (
    "name",
    "email",
    "phone",
    "linkedin",
    "company",
    "title",
    "active_status",
    "contact_frequency",
    "priority",
    "familiarity",
    "notes",
    "context_space",
)


def get_clock(info: strawberry.Info) -> Clock:
    return info.context.get("clock") or utc_now


def _stored_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return as_utc(value)
    return value


def input_to_document(data: ContactInput | ContactUpdateInput) -> dict[str, Any]:
    """Map GraphQL input fields to stored keys, dropping fields left UNSET."""
    document: dict[str, Any] = {}
    for attr, key in FIELD_KEYS.items():
        if not hasattr(data, attr):
            continue
        value = getattr(data, attr)
        if value is strawberry.UNSET or (value is None and key in NON_NULL_KEYS):
            continue
        document[key] = _stored_value(value)
    return document


def _frequency_value(frequency: ContactFrequency | None) -> str | None:
    return frequency.value if frequency is not None else None


# Query resolvers
async def resolve_contact_by_id(info: strawberry.Info, id: int) -> Contact | None:
    document = await repository.find_contact(get_database(), id)
    if not document:
        logger.info("Contact not found", contact_id=id)
        return None
    return Contact.from_document(document)


async def resolve_contact_list(
    info: strawberry.Info,
    *,
    active_status: bool | None = None,
    contact_frequency: ContactFrequency | None = None,
    priority: str | None = None,
    familiarity: str | None = None,
    search: str | None = None,
    page: int = 1,
) -> ContactListWithPages:
    """
    Resolve one page of contacts sorted by name.

    Pages are 1-based; anything below 1 is read as the first page.
    """
    query = repository.build_contact_filter(
        active_status=active_status,
        contact_frequency=_frequency_value(contact_frequency),
        priority=priority,
        familiarity=familiarity,
        search=search,
    )
    page_size = settings.contacts_page_size

    documents, total = await repository.list_contacts(
        get_database(), query, page=max(page, 1), page_size=page_size
    )
    return ContactListWithPages(
        contacts=[Contact.from_document(doc) for doc in documents],
        pages=repository.page_count(total, page_size),
    )


async def resolve_contact_counts(
    info: strawberry.Info,
    *,
    active_status: bool | None = None,
    contact_frequency: ContactFrequency | None = None,
    priority: str | None = None,
    familiarity: str | None = None,
) -> list[ContactCounts]:
    query = repository.build_contact_filter(
        active_status=active_status,
        contact_frequency=_frequency_value(contact_frequency),
        priority=priority,
        familiarity=familiarity,
    )
    rows = await repository.count_contacts_by_owner(get_database(), query)
    return [ContactCounts(**row) for row in rows]


# Mutation resolvers
@must_be_signed_in
async def add_contact(info: strawberry.Info, contact: ContactInput) -> Contact:
    """Validate and store a new contact under the next id of the contacts sequence."""
    document = input_to_document(contact)
    ensure_valid_contact(ContactDocument.model_validate(document))

    db = get_database()
    document["id"] = await get_next_sequence(CONTACTS_SEQUENCE, db)
    saved = await repository.insert_contact(db, document)
    if saved is None:
        raise RuntimeError("Contact was inserted but could not be read back")

    logger.info("Contact added", contact_id=document["id"])
    return Contact.from_document(saved)


@must_be_signed_in
async def update_contact(
    info: strawberry.Info, id: int, changes: ContactUpdateInput
) -> Contact | None:
    """
    Apply changes to a contact.

    When a tracked field changes, the merged contact is rescheduled and
    validated before anything is written. Only the supplied fields, the
    computed next contact date and the active status are stored.
    """
    update = input_to_document(changes)
    db = get_database()

    if any(FIELD_KEYS[field] in update for field in TRACKED_FIELDS):
        current_document = await repository.find_contact(db, id)
        if not current_document:
            logger.info("Contact not found for update", contact_id=id)
            return None
        current = ContactDocument.model_validate(current_document)

        incoming_active = update.get("activeStatus")
        turned_active = not current.active_status and incoming_active is True

        manual_date_change = (
            "nextContactDate" in update and update["nextContactDate"] != current.next_contact_date
        )
        custom = ContactFrequency.CUSTOM.value
        new_frequency = update.get("contactFrequency", current.contact_frequency)
        if current.contact_frequency == custom and new_frequency == custom:
            manual_date_change = True

        merged = ContactDocument.model_validate({**current_document, **update})
        next_date, new_active_status = set_next_contact_date(
            merged,
            turned_active,
            manual_date_change,
            incoming_active,
            clock=get_clock(info),
        )
        update["nextContactDate"] = next_date
        if new_active_status is not None:
            update["activeStatus"] = new_active_status

        merged.next_contact_date = next_date
        ensure_valid_contact(merged)

        logger.info(
            "Rescheduled contact",
            contact_id=id,
            turned_active=turned_active,
            manual_date_change=manual_date_change,
        )

    saved = await repository.update_contact_fields(db, id, update)
    if saved is None:
        logger.info("Contact not found for update", contact_id=id)
        return None
    return Contact.from_document(saved)


@must_be_signed_in
async def remove_contact(info: strawberry.Info, id: int) -> bool:
    """Soft-delete: move the contact to the deleted store with a timestamp."""
    deleted_at = as_utc(get_clock(info)())
    moved = await repository.soft_delete_contact(get_database(), id, deleted_at=deleted_at)
    logger.info("Contact delete", contact_id=id, success=moved)
    return moved


@must_be_signed_in
async def restore_contact(info: strawberry.Info, id: int) -> bool:
    moved = await repository.restore_contact(get_database(), id)
    logger.info("Contact restore", contact_id=id, success=moved)
    return moved
