"""
Contact GraphQL type definitions
"""

from datetime import datetime
from typing import Any

import strawberry

from ...dbmodels import ContactDocument
from ...dbmodels import ContactFrequency as ContactFrequencyValue

ContactFrequency = strawberry.enum(
    ContactFrequencyValue, description="How often a contact should be reached."
)


def frequency_from_stored(value: str | None) -> ContactFrequencyValue | None:
    if value is None:
        return None
    try:
        return ContactFrequencyValue(value)
    except ValueError:
        return None


@strawberry.type
class Contact:
    """Contact type for GraphQL API."""

    id: int
    name: str
    email: str | None
    phone: str | None
    linkedin: str | None = strawberry.field(name="LinkedIn")
    company: str | None
    title: str | None
    owner: str | None
    active_status: bool
    contact_frequency: ContactFrequency | None
    priority: str | None
    familiarity: str | None
    last_contact_date: datetime | None
    next_contact_date: datetime | None
    notes: str | None
    context_space: str | None

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Contact":
        record = ContactDocument.model_validate(document)
        return cls(
            id=record.id,
            name=record.name or "",
            email=record.email,
            phone=record.phone,
            linkedin=record.linkedin,
            company=record.company,
            title=record.title,
            owner=record.owner,
            active_status=bool(record.active_status),
            contact_frequency=frequency_from_stored(record.contact_frequency),
            priority=record.priority,
            familiarity=record.familiarity,
            last_contact_date=record.last_contact_date,
            next_contact_date=record.next_contact_date,
            notes=record.notes,
            context_space=record.context_space,
        )


@strawberry.type
class ContactListWithPages:
    """One page of contacts and the number of pages available."""

    contacts: list[Contact]
    pages: int


@strawberry.type
class ContactCounts:
    """Per-owner tally of active and inactive contacts."""

    owner: str | None
    active: int
    inactive: int
