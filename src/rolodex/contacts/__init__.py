"""Contact scheduling, validation and persistence."""

from .scheduling import generate_date, set_next_contact_date
from .validation import ensure_valid_contact, validate_contact

__all__ = [
    "generate_date",
    "set_next_contact_date",
    "ensure_valid_contact",
    "validate_contact",
]
