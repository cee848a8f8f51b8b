"""Development adapter: every caller is the same local user."""

from __future__ import annotations

import os
from typing import ClassVar

from ...config import settings
from ...logging import get_logger
from .base import AuthenticationError, Principal, ProviderName

logger = get_logger(__name__)

PRODUCTION_ENVIRONMENTS = ("production", "prod")
DEV_TOKEN_PREFIX = "dev-token"


def _current_environment() -> str:
    return (os.getenv("ROLODEX_ENVIRONMENT") or settings.environment).lower()


class NoAuthAdapter:
    """
    Accepts any non-empty token and maps it to ``default_user_id``.

    Refuses to start when the environment is production.
    """

    name: ClassVar[ProviderName] = "none"
    signs_in_anonymous: ClassVar[bool] = True

    def __init__(self, default_user_id: str = "dev-user"):
        environment = _current_environment()
        if environment in PRODUCTION_ENVIRONMENTS:
            logger.error("No-auth mode requested in production", environment=environment)
            raise RuntimeError(
                "NoAuthAdapter cannot be used in production environments. "
                "Set ROLODEX_AUTH_PROVIDER=jwt."
            )

        self.default_user_id = default_user_id
        logger.debug("No-auth mode active", user_id=default_user_id)

    async def verify_token(self, token: str) -> Principal:
        if not token:
            raise AuthenticationError("Token required (even in no-auth mode)")

        shown = token if len(token) <= 20 else f"{token[:20]}..."
        return Principal(
            provider=self.name,
            subject=self.default_user_id,
            email="dev@example.com",
            display_name="Development User",
            claims={"mode": "development", "token": shown},
        )

    async def issue_token(self, subject: str | None = None, claims: dict | None = None) -> str:
        """Build a readable fake token; its contents are never checked."""
        parts = [DEV_TOKEN_PREFIX, subject or self.default_user_id, "no-auth-mode"]
        parts += [f"{key}={value}" for key, value in (claims or {}).items()]
        return "|".join(parts)
