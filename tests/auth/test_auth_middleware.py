"""Tests for building the auth context from the Authorization header."""

from unittest.mock import patch

import pytest

from rolodex.auth.adapters.base import AuthenticationError
from rolodex.auth.adapters.jwt import JWTAuthAdapter
from rolodex.auth.middleware import get_auth_context, get_auth_context_optional
from rolodex.config import settings


@pytest.fixture
def jwt_adapter():
    return JWTAuthAdapter(secret_key="test-secret")


class TestGetAuthContext:
    """Tests for get_auth_context."""

    @pytest.mark.asyncio
    async def test_no_auth_mode_signs_in_dev_user(self):
        context = await get_auth_context(None)

        assert context.is_authenticated is True
        assert context.user_id == "dev-user"
        assert context.provider == "none"

    @pytest.mark.asyncio
    async def test_missing_header_is_anonymous_with_jwt(self, jwt_adapter):
        with patch("rolodex.auth.middleware.get_auth_adapter", return_value=jwt_adapter):
            context = await get_auth_context(None)

        assert context.is_authenticated is False

    @pytest.mark.asyncio
    async def test_valid_bearer_token(self, jwt_adapter):
        token = await jwt_adapter.issue_token(subject="user-42")

        with patch("rolodex.auth.middleware.get_auth_adapter", return_value=jwt_adapter):
            context = await get_auth_context(f"Bearer {token}")

        assert context.user_id == "user-42"
        assert context.provider == "jwt"
        assert context.token == token

    @pytest.mark.asyncio
    async def test_malformed_header(self):
        with pytest.raises(AuthenticationError, match="Invalid authorization format"):
            await get_auth_context("Token abc")

    @pytest.mark.asyncio
    async def test_optional_falls_back_to_anonymous(self):
        with patch(
            "rolodex.auth.middleware.get_auth_context",
            side_effect=AuthenticationError("bad"),
        ):
            context = await get_auth_context_optional("Bearer broken")

        assert context.is_authenticated is False
        assert context.user_id is None

    @pytest.mark.asyncio
    async def test_optional_rejects_bad_jwt(self, jwt_adapter):
        with patch.object(settings, "auth_provider", "jwt"), patch.object(
            settings, "jwt_secret", "test-secret"
        ):
            context = await get_auth_context_optional("Bearer not-a-jwt")

        assert context.is_authenticated is False
