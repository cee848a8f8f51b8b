"""
Tests for next-contact-date scheduling
"""

from datetime import datetime, timedelta

import pytest

from rolodex.contacts.scheduling import generate_date, set_next_contact_date
from rolodex.dbmodels import ContactDocument, ContactFrequency


def _contact(**fields) -> ContactDocument:
    return ContactDocument.model_validate({"id": 1, "name": "Agnesse Caigg", **fields})


class TestGenerateDate:
    """Tests for generate_date."""

    @pytest.mark.parametrize(
        "frequency,days",
        [
            ("Weekly", 7),
            ("Biweekly", 14),
            ("Monthly", 30),
            ("Quarterly", 91),
            ("Biannual", 182),
            ("Yearly", 365),
        ],
    )
    def test_fixed_intervals(self, fixed_now, frequency, days):
        assert generate_date(frequency, fixed_now) == fixed_now + timedelta(days=days)

    def test_accepts_enum_members(self, fixed_now):
        assert generate_date(ContactFrequency.WEEKLY, fixed_now) == fixed_now + timedelta(days=7)

    @pytest.mark.parametrize("frequency", ["Custom", "None", None, "Fortnightly"])
    def test_no_interval_gives_no_date(self, fixed_now, frequency):
        assert generate_date(frequency, fixed_now) is None

    def test_naive_base_date_is_read_as_utc(self, fixed_now):
        naive = fixed_now.replace(tzinfo=None)
        assert generate_date("Weekly", naive) == fixed_now + timedelta(days=7)


class TestSetNextContactDate:
    """Tests for set_next_contact_date."""

    def test_manual_date_is_kept(self, fixed_now):
        manual = datetime(2030, 1, 1, tzinfo=fixed_now.tzinfo)
        contact = _contact(
            activeStatus=True,
            contactFrequency="Weekly",
            lastContactDate=fixed_now,
            nextContactDate=manual,
        )

        next_date, status = set_next_contact_date(
            contact, False, True, True, clock=lambda: fixed_now
        )

        assert next_date == manual
        assert status is True

    def test_active_counts_from_last_contact(self, fixed_now):
        last = fixed_now - timedelta(days=10)
        contact = _contact(activeStatus=True, contactFrequency="Monthly", lastContactDate=last)

        next_date, _ = set_next_contact_date(contact, False, False, None, clock=lambda: fixed_now)

        assert next_date == last + timedelta(days=30)

    def test_active_without_last_contact_counts_from_now(self, fixed_now):
        contact = _contact(activeStatus=True, contactFrequency="Weekly")

        next_date, _ = set_next_contact_date(contact, False, False, None, clock=lambda: fixed_now)

        assert next_date == fixed_now + timedelta(days=7)

    def test_date_in_the_past_is_recomputed_from_now(self, fixed_now):
        last = fixed_now - timedelta(days=120)
        contact = _contact(activeStatus=True, contactFrequency="Quarterly", lastContactDate=last)

        next_date, _ = set_next_contact_date(contact, False, False, None, clock=lambda: fixed_now)

        assert next_date == fixed_now + timedelta(days=91)
        assert next_date >= fixed_now

    def test_turned_active_counts_from_now(self, fixed_now):
        last = fixed_now - timedelta(days=2)
        contact = _contact(activeStatus=True, contactFrequency="Weekly", lastContactDate=last)

        next_date, status = set_next_contact_date(
            contact, True, False, True, clock=lambda: fixed_now
        )

        assert next_date == fixed_now + timedelta(days=7)
        assert status is True

    def test_inactive_contact_has_no_next_date(self, fixed_now):
        contact = _contact(
            activeStatus=False,
            contactFrequency="Weekly",
            nextContactDate=fixed_now + timedelta(days=3),
        )

        next_date, status = set_next_contact_date(
            contact, False, False, False, clock=lambda: fixed_now
        )

        assert next_date is None
        assert status is False

    def test_custom_frequency_has_no_computed_date(self, fixed_now):
        contact = _contact(activeStatus=True, contactFrequency="Custom")

        next_date, _ = set_next_contact_date(contact, False, False, None, clock=lambda: fixed_now)

        assert next_date is None

    def test_none_frequency_does_not_deactivate(self, fixed_now):
        contact = _contact(activeStatus=True, contactFrequency="None")

        next_date, status = set_next_contact_date(
            contact, False, False, True, clock=lambda: fixed_now
        )

        assert next_date is None
        assert status is True

    def test_same_inputs_give_same_result(self, fixed_now):
        contact = _contact(
            activeStatus=True,
            contactFrequency="Biweekly",
            lastContactDate=fixed_now - timedelta(days=1),
        )

        first = set_next_contact_date(contact, False, False, None, clock=lambda: fixed_now)
        second = set_next_contact_date(contact, False, False, None, clock=lambda: fixed_now)

        assert first == second
