"""HS256 bearer tokens issued and verified by Rolodex itself."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, ClassVar

import jwt
from jwt.exceptions import InvalidTokenError

from ...logging import get_logger
from .base import AuthenticationError, Principal, ProviderName

logger = get_logger(__name__)

DEFAULT_ISSUER = "rolodex"
DEFAULT_AUDIENCE = "rolodex-api"

# Claims every accepted token must carry
REQUIRED_CLAIMS = ["exp", "iat", "sub"]

# Token claim -> Principal key
PROFILE_CLAIMS = {"email": "email", "name": "display_name"}


class JWTAuthAdapter:
    name: ClassVar[ProviderName] = "jwt"
    signs_in_anonymous: ClassVar[bool] = False

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = DEFAULT_ISSUER,
        audience: str = DEFAULT_AUDIENCE,
        token_ttl: timedelta = timedelta(hours=24),
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.token_ttl = token_ttl

    def _decode(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={"require": REQUIRED_CLAIMS},
            )
        except InvalidTokenError as e:
            logger.warning("Rejected bearer token", reason=str(e))
            raise AuthenticationError("Invalid token") from e

    async def verify_token(self, token: str) -> Principal:
        payload = self._decode(token)

        principal = Principal(provider=self.name, subject=str(payload["sub"]), claims=payload)
        for claim, key in PROFILE_CLAIMS.items():
            if payload.get(claim):
                principal[key] = payload[claim]  # type: ignore[literal-required]
        return principal

    async def issue_token(self, subject: str | None = None, claims: dict | None = None) -> str:
        """Sign a token for ``subject`` valid for ``token_ttl``."""
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "nbf": now,
            "exp": now + self.token_ttl,
            **(claims or {}),
        }
        if subject:
            payload["sub"] = subject
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
