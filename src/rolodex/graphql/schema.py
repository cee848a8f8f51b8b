"""
Strawberry schema and the FastAPI router that serves it
"""

from typing import Any

import strawberry
from fastapi import Request
from graphql import get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter

from ..contacts.scheduling import utc_now
from ..logging import get_logger
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)

schema = strawberry.Schema(query=Query, mutation=Mutation)


def _fail(stage: str, errors: list[Any]) -> None:
    messages = [str(e) for e in errors]
    logger.error(f"GraphQL {stage} failed", errors=messages)
    raise RuntimeError(f"GraphQL {stage} failed: {'; '.join(messages)}")


def validate_schema() -> None:
    """Check the schema and run an introspection query against it.

    Raises:
        RuntimeError: The schema is invalid or cannot be introspected
    """
    graphql_schema = schema._schema

    if errors := gql_validate_schema(graphql_schema):
        _fail("schema validation", errors)

    result = graphql_sync(graphql_schema, get_introspection_query())
    if result.errors:
        _fail("introspection", result.errors)

    logger.info("GraphQL schema validation successful")


async def get_context(request: Request) -> dict[str, Any]:
    """Per-request resolver context: the HTTP request and the scheduling clock."""
    return {"request": request, "clock": utc_now}


def create_graphql_router() -> GraphQLRouter[dict[str, Any], None]:
    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql",
        context_getter=get_context,
    )
