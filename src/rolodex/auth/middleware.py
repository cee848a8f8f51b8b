"""Turn an ``Authorization`` header into an ``AuthContext``."""

from __future__ import annotations

from ..logging import get_logger
from .adapters.base import AuthenticationError
from .context import ANONYMOUS, AuthContext
from .factory import get_auth_adapter

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "

# Stand-in token for header-less requests in no-auth mode
ANONYMOUS_DEV_TOKEN = "dev-token"


def parse_bearer_token(authorization: str) -> str:
    """Return the token of a ``Bearer <token>`` header value."""
    if not authorization.startswith(BEARER_PREFIX):
        logger.warning("Invalid authorization format received")
        raise AuthenticationError("Invalid authorization format. Expected: Bearer <token>")

    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise AuthenticationError("Empty token")
    return token


async def get_auth_context(authorization: str | None) -> AuthContext:
    """
    Verify the caller behind ``authorization``.

    Without a header the caller is anonymous, unless the adapter signs
    anonymous callers in (no-auth mode).

    Raises:
        AuthenticationError: The header is malformed or the token is rejected
    """
    adapter = get_auth_adapter()

    if authorization:
        token = parse_bearer_token(authorization)
    elif adapter.signs_in_anonymous:
        token = ANONYMOUS_DEV_TOKEN
    else:
        return ANONYMOUS

    principal = await adapter.verify_token(token)
    return AuthContext.from_principal(principal, token)


async def get_auth_context_optional(authorization: str | None) -> AuthContext:
    """``get_auth_context`` that treats rejected credentials as anonymous."""
    try:
        return await get_auth_context(authorization)
    except AuthenticationError as e:
        logger.info("Treating request as anonymous", reason=str(e))
        return ANONYMOUS
