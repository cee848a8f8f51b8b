"""Build the auth adapter selected by ``ROLODEX_AUTH_PROVIDER``."""

from __future__ import annotations

from ..config import settings
from .adapters.base import AuthAdapter
from .adapters.jwt import DEFAULT_AUDIENCE, DEFAULT_ISSUER, JWTAuthAdapter
from .adapters.none import NoAuthAdapter


def _jwt_adapter(config: dict) -> JWTAuthAdapter:
    secret_key = config.get("secret_key") or settings.jwt_secret
    if not secret_key:
        raise ValueError(
            "JWT secret key is required. Set ROLODEX_JWT_SECRET or provide in config."
        )

    return JWTAuthAdapter(
        secret_key=secret_key,
        algorithm=config.get("algorithm", settings.jwt_algorithm),
        issuer=config.get("issuer", DEFAULT_ISSUER),
        audience=config.get("audience", DEFAULT_AUDIENCE),
    )


def get_auth_adapter() -> AuthAdapter:
    """Create the configured adapter; extra options come from ``ROLODEX_AUTH_CONFIG``."""
    provider = settings.auth_provider
    config = settings.auth_config

    if provider == "none":
        return NoAuthAdapter(default_user_id=config.get("default_user_id", "dev-user"))
    if provider == "jwt":
        return _jwt_adapter(config)
    raise ValueError(f"Unsupported auth provider: {provider}")
