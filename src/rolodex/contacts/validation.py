"""Business-rule validation for contact records."""

from __future__ import annotations

import re

from ..config import settings
from ..dbmodels import ContactDocument
from ..graphql.errors import UserInputError
from ..logging import get_logger

logger = get_logger(__name__)

MIN_NAME_LENGTH = 3

EMAIL_PATTERN = re.compile(
    r"[A-Za-z0-9_]+(?:[.-][A-Za-z0-9_]+)*@[A-Za-z0-9_]+(?:[.-][A-Za-z0-9_]+)*"
    r"(?:\.[A-Za-z0-9_]{2,3})+"
)
PHONE_SEPARATORS = re.compile(r"[\s\-.()]")

NAME_TOO_SHORT = f'Field "name" must be at least {MIN_NAME_LENGTH} characters long.'
NO_CONTACT_METHOD = "At least one contact mean should be provided."
INVALID_EMAIL = "You have entered an invalid email address!"
INVALID_LINKEDIN = "You have entered an invalid linkedin adress!"
INVALID_PHONE = "Phone number should be 10 digits!"


def validate_contact(contact: ContactDocument) -> list[str]:
    """Return every rule the contact breaks; an empty list means it is valid."""
    errors: list[str] = []

    name = contact.name or ""
    email = contact.email or ""
    phone = contact.phone or ""
    linkedin = contact.linkedin or ""

    if len(name) < MIN_NAME_LENGTH:
        errors.append(NAME_TOO_SHORT)

    if not email and not phone and not linkedin:
        errors.append(NO_CONTACT_METHOD)

    if email and not EMAIL_PATTERN.fullmatch(email):
        errors.append(INVALID_EMAIL)

    if phone and settings.validate_phone_format:
        digits = PHONE_SEPARATORS.sub("", phone)
        if not (len(digits) == 10 and digits.isdigit()):
            errors.append(INVALID_PHONE)

    if linkedin and settings.linkedin_domain not in linkedin:
        errors.append(INVALID_LINKEDIN)

    return errors


def ensure_valid_contact(contact: ContactDocument) -> None:
    """Raise ``UserInputError`` listing all violations, if there are any."""
    errors = validate_contact(contact)
    if errors:
        logger.info("Contact failed validation", contact_id=contact.id, errors=errors)
        raise UserInputError("Invalid input(s)", errors)
