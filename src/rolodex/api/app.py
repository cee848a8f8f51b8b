"""
FastAPI application serving the Rolodex GraphQL API
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..database.connection import close_database, init_database
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..validation import (
    ValidationError,
    get_startup_recommendations,
    validate_startup_configuration,
)

configure_logging(debug=settings.debug, level=settings.log_level)
logger = get_logger(__name__)


def is_production() -> bool:
    return settings.environment.lower() in ("production", "prod")


async def run_startup_checks() -> None:
    """Log configuration problems; refuse to start in production if there are any."""
    results = await validate_startup_configuration()

    if not results["overall_valid"]:
        logger.error(
            "Startup checks failed - contact queries may not work",
            database_errors=results["database"]["errors"],
            auth_errors=results["auth"]["errors"],
        )
        if is_production():
            raise ValidationError("Startup checks failed in production")

    recommendations = get_startup_recommendations(results)
    if recommendations:
        logger.info("Configuration recommendations", recommendations=recommendations)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Rolodex API", version=__version__, environment=settings.environment)
    init_database()
    await run_startup_checks()

    yield

    logger.info("Shutting down Rolodex API")
    await close_database()


def create_app() -> FastAPI:
    """Build the application: middleware, health check and GraphQL endpoint."""
    app = FastAPI(
        title="Rolodex API",
        description="Contact scheduling and management",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        return {"status": "healthy", "version": __version__}

    # Tests that only need plain routes can skip schema construction
    if not os.getenv("ROLODEX_DISABLE_GRAPHQL"):
        from ..graphql.schema import create_graphql_router, validate_schema

        validate_schema()
        app.include_router(create_graphql_router())
        logger.info("GraphQL endpoint ready", endpoint="/graphql")

    return app


app = create_app()
