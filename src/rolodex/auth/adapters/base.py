"""Types shared by the authentication adapters."""

from __future__ import annotations

from typing import ClassVar, Literal, NotRequired, Protocol, TypedDict

ProviderName = Literal["jwt", "none"]


class Principal(TypedDict):
    """Verified identity behind a bearer token."""

    provider: ProviderName
    subject: str
    email: NotRequired[str]
    display_name: NotRequired[str]
    claims: NotRequired[dict]


class AuthenticationError(Exception):
    """A bearer token was missing, malformed or rejected."""


class AuthAdapter(Protocol):
    """What the request layer needs from an auth provider."""

    name: ClassVar[ProviderName]
    # Callers without an Authorization header are signed in as a fixed user
    signs_in_anonymous: ClassVar[bool]

    async def verify_token(self, token: str) -> Principal:
        """Return the principal for ``token`` or raise ``AuthenticationError``."""
        ...
