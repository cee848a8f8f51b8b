"""
Next-contact-date scheduling.

The next date of an active contact is derived from its contact frequency:
already-active contacts count from the last contact date, contacts that were
just switched on count from today. A date the user typed in by hand always
wins over the computed one.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from ..dbmodels import ContactDocument, ContactFrequency, as_utc
from ..logging import get_logger

logger = get_logger(__name__)

Clock = Callable[[], datetime]

FREQUENCY_INTERVALS: dict[str, timedelta] = {
    ContactFrequency.WEEKLY.value: timedelta(days=7),
    ContactFrequency.BIWEEKLY.value: timedelta(days=14),
    ContactFrequency.MONTHLY.value: timedelta(days=30),
    ContactFrequency.QUARTERLY.value: timedelta(days=91),
    ContactFrequency.BIANNUAL.value: timedelta(days=182),
    ContactFrequency.YEARLY.value: timedelta(days=365),
}


def utc_now() -> datetime:
    return datetime.now(UTC)


def frequency_interval(frequency: str | ContactFrequency | None) -> timedelta | None:
    """Calendar offset for a frequency; None for Custom, None and unknown values."""
    if isinstance(frequency, ContactFrequency):
        frequency = frequency.value
    if frequency is None:
        return None
    return FREQUENCY_INTERVALS.get(frequency)


def generate_date(
    frequency: str | ContactFrequency | None, base_date: datetime
) -> datetime | None:
    """Return ``base_date`` shifted by the frequency interval, if it has one."""
    interval = frequency_interval(frequency)
    if interval is None:
        return None
    return as_utc(base_date) + interval


def set_next_contact_date(
    contact: ContactDocument,
    turned_active: bool,
    manual_date_change: bool,
    new_active_status: bool | None,
    clock: Clock = utc_now,
) -> tuple[datetime | None, bool | None]:
    """Decide the next contact date for a contact that is being saved.

    Args:
        contact: Contact state with the incoming changes already applied
        turned_active: The update switches activeStatus from false to true
        manual_date_change: The caller supplied nextContactDate explicitly
        new_active_status: Incoming activeStatus, passed through unchanged
        clock: Source of "now"

    Returns:
        ``(next_date, new_active_status)``. ``next_date`` is None for inactive
        contacts and for frequencies without a fixed interval.
    """
    if manual_date_change:
        next_date = contact.next_contact_date
        logger.debug("Keeping manually set next contact date", contact_id=contact.id)
        return next_date, new_active_status

    now = as_utc(clock())
    next_date: datetime | None = None

    if contact.active_status and not turned_active:
        base_date = contact.last_contact_date or now
        next_date = generate_date(contact.contact_frequency, base_date)
        # Counting from an old last-contact date can land in the past
        if next_date is not None and next_date < now:
            next_date = generate_date(contact.contact_frequency, now)
    elif turned_active:
        next_date = generate_date(contact.contact_frequency, now)

    logger.debug(
        "Computed next contact date",
        contact_id=contact.id,
        turned_active=turned_active,
        frequency=contact.contact_frequency,
        next_contact_date=next_date.isoformat() if next_date else None,
    )
    return next_date, new_active_status
