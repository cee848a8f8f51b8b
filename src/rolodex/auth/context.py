"""Per-request authentication state."""

from __future__ import annotations

from dataclasses import dataclass

from .adapters.base import Principal


@dataclass(frozen=True)
class AuthContext:
    """Who is calling, as far as the bearer token tells."""

    user_id: str | None
    principal: Principal | None
    token: str | None

    @classmethod
    def from_principal(cls, principal: Principal, token: str) -> AuthContext:
        return cls(user_id=principal["subject"], principal=principal, token=token)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None and self.principal is not None

    @property
    def provider(self) -> str | None:
        return self.principal["provider"] if self.principal else None


ANONYMOUS = AuthContext(user_id=None, principal=None, token=None)
