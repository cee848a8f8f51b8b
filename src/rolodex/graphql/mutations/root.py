"""
Root GraphQL mutation definitions
"""

from datetime import datetime

import strawberry

from ..types.contact import Contact, ContactFrequency


# Input types for mutations
@strawberry.input
class ContactInput:
    """Input for creating a new contact."""

    name: str
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = strawberry.field(default=None, name="LinkedIn")
    company: str | None = None
    title: str | None = None
    owner: str | None = None
    active_status: bool = False
    contact_frequency: ContactFrequency | None = None
    priority: str | None = None
    familiarity: str | None = None
    last_contact_date: datetime | None = None
    next_contact_date: datetime | None = None
    notes: str | None = None
    context_space: str | None = None


@strawberry.input
class ContactUpdateInput:
    """Changes to apply to a contact. Omitted fields are left untouched."""

    name: str | None = strawberry.UNSET
    email: str | None = strawberry.UNSET
    phone: str | None = strawberry.UNSET
    linkedin: str | None = strawberry.field(default=strawberry.UNSET, name="LinkedIn")
    company: str | None = strawberry.UNSET
    title: str | None = strawberry.UNSET
    owner: str | None = strawberry.UNSET
    active_status: bool | None = strawberry.UNSET
    contact_frequency: ContactFrequency | None = strawberry.UNSET
    priority: str | None = strawberry.UNSET
    familiarity: str | None = strawberry.UNSET
    last_contact_date: datetime | None = strawberry.UNSET
    next_contact_date: datetime | None = strawberry.UNSET
    notes: str | None = strawberry.UNSET
    context_space: str | None = strawberry.UNSET


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="contactAdd")
    async def contact_add(self, info: strawberry.Info, contact: ContactInput) -> Contact:
        """Create a new contact."""
        from ..resolvers.contact import add_contact

        return await add_contact(info, contact)

    @strawberry.mutation(name="contactUpdate")
    async def contact_update(
        self, info: strawberry.Info, id: int, changes: ContactUpdateInput
    ) -> Contact | None:
        """Update an existing contact and reschedule its next contact date."""
        from ..resolvers.contact import update_contact

        return await update_contact(info, id, changes)

    @strawberry.mutation(name="contactDelete")
    async def contact_delete(self, info: strawberry.Info, id: int) -> bool:
        """Move a contact to the deleted contacts store."""
        from ..resolvers.contact import remove_contact

        return await remove_contact(info, id)

    @strawberry.mutation(name="contactRestore")
    async def contact_restore(self, info: strawberry.Info, id: int) -> bool:
        """Move a deleted contact back to the contacts store."""
        from ..resolvers.contact import restore_contact

        return await restore_contact(info, id)
