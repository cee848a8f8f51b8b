"""
Shared access control logic for GraphQL resolvers
"""

import functools
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

import strawberry

from ..auth.context import ANONYMOUS, AuthContext
from ..auth.middleware import get_auth_context_optional
from ..config import settings
from ..logging import get_logger
from .errors import AuthenticationRequiredError

logger = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


async def get_auth_context_from_info(info: strawberry.Info) -> AuthContext:
    """
    Extract auth context from GraphQL info object.

    Returns an anonymous context if the request is missing or auth fails.
    """
    request = info.context.get("request")
    if not request:
        logger.error("Request not found in GraphQL context")
        return ANONYMOUS

    return await get_auth_context_optional(request.headers.get("authorization"))


def must_be_signed_in(
    resolver: Callable[P, Awaitable[R]],
) -> Callable[P, Awaitable[R]]:
    """Reject anonymous callers when ``settings.require_signed_in`` is on.

    The wrapped resolver must take ``info`` as its first argument.
    """

    @functools.wraps(resolver)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        if settings.require_signed_in:
            info = args[0] if args else kwargs["info"]
            auth_context = await get_auth_context_from_info(info)  # type: ignore[arg-type]
            if not auth_context.is_authenticated:
                logger.info("Rejected anonymous call", resolver=resolver.__name__)
                raise AuthenticationRequiredError()
        return await resolver(*args, **kwargs)

    return wrapper
