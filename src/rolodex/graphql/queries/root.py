"""
Root GraphQL query definitions
"""

import strawberry

from ..types.contact import Contact, ContactCounts, ContactFrequency, ContactListWithPages


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def contact(self, info: strawberry.Info, id: int) -> Contact | None:
        """Get a contact by ID."""
        from ..resolvers.contact import resolve_contact_by_id

        return await resolve_contact_by_id(info, id)

    @strawberry.field
    async def contact_list(
        self,
        info: strawberry.Info,
        active_status: bool | None = None,
        contact_frequency: ContactFrequency | None = None,
        priority: str | None = None,
        familiarity: str | None = None,
        search: str | None = None,
        page: int | None = 1,
    ) -> ContactListWithPages:
        """List contacts by name, one page at a time, with optional filters."""
        from ..resolvers.contact import resolve_contact_list

        return await resolve_contact_list(
            info,
            active_status=active_status,
            contact_frequency=contact_frequency,
            priority=priority,
            familiarity=familiarity,
            search=search,
            page=page or 1,
        )

    @strawberry.field
    async def contact_counts(
        self,
        info: strawberry.Info,
        active_status: bool | None = None,
        contact_frequency: ContactFrequency | None = None,
        priority: str | None = None,
        familiarity: str | None = None,
    ) -> list[ContactCounts]:
        """Count active and inactive contacts per owner."""
        from ..resolvers.contact import resolve_contact_counts

        return await resolve_contact_counts(
            info,
            active_status=active_status,
            contact_frequency=contact_frequency,
            priority=priority,
            familiarity=familiarity,
        )
