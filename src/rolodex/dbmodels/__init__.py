"""
Document models for the Rolodex MongoDB collections.

Stored documents use camelCase keys (``activeStatus``, ``nextContactDate``,
``LinkedIn``); the models expose snake_case attributes and round-trip
through ``model_validate`` / ``to_document``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContactFrequency(str, Enum):
    WEEKLY = "Weekly"
    BIWEEKLY = "Biweekly"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    BIANNUAL = "Biannual"
    YEARLY = "Yearly"
    CUSTOM = "Custom"
    NONE = "None"


def as_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class ContactDocument(BaseModel):
    """A document in the ``contacts`` (or ``deleted_contacts``) collection."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = Field(default=None, alias="LinkedIn")
    company: str | None = None
    title: str | None = None
    owner: str | None = None
    active_status: bool | None = Field(default=False, alias="activeStatus")
    contact_frequency: str | None = Field(default=None, alias="contactFrequency")
    priority: str | None = None
    familiarity: str | None = None
    last_contact_date: datetime | None = Field(default=None, alias="lastContactDate")
    next_contact_date: datetime | None = Field(default=None, alias="nextContactDate")
    notes: str | None = None
    context_space: str | None = Field(default=None, alias="contextSpace")
    deleted: datetime | None = None

    @field_validator("last_contact_date", "next_contact_date", "deleted")
    @classmethod
    def _normalize_timestamp(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)

    def to_document(self) -> dict[str, Any]:
        """Serialize using stored key names."""
        doc = self.model_dump(by_alias=True, exclude={"deleted"})
        if self.deleted is not None:
            doc["deleted"] = self.deleted
        return doc


# Attribute name -> stored key, for translating GraphQL inputs
FIELD_KEYS: dict[str, str] = {
    name: (field.alias or name) for name, field in ContactDocument.model_fields.items()
}
