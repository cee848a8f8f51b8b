"""
Startup checks for the Rolodex API.

Each check returns a result dict with ``valid``, ``warnings`` and ``errors``;
``validate_startup_configuration`` runs them all once when the app starts.
"""

from __future__ import annotations

from typing import Any

from .config import settings
from .database.connection import CONTACTS, get_database, test_database_connection
from .logging import get_logger

logger = get_logger(__name__)

DEVELOPMENT_ENVIRONMENTS = ("development", "dev")
PRODUCTION_ENVIRONMENTS = ("production", "prod")


class ValidationError(Exception):
    """Startup checks failed where failure is not tolerated."""


def _new_result(**extra: Any) -> dict[str, Any]:
    return {"valid": True, "warnings": [], "errors": [], **extra}


def _warn(results: dict[str, Any], message: str) -> None:
    results["warnings"].append(message)
    logger.warning(message)


def _fail(results: dict[str, Any], message: str) -> None:
    results["valid"] = False
    results["errors"].append(message)
    logger.error(message)


async def validate_database_connection() -> dict[str, Any]:
    """Ping MongoDB."""
    results = _new_result(connection_info=None)

    success, error_message = await test_database_connection()
    if success:
        results["connection_info"] = {"status": "connected", "database": settings.mongodb_database}
        logger.info("Database connection validation successful")
    else:
        _fail(results, error_message or "Database connection failed")

    return results


async def validate_contact_indexes() -> dict[str, Any]:
    """Warn when the text index behind contact search is missing."""
    results = _new_result()

    indexes = await get_database()[CONTACTS].index_information()
    has_text_index = any(
        kind == "text" for index in indexes.values() for _, kind in index["key"]
    )
    if not has_text_index:
        _warn(
            results,
            "No text index on contacts - search queries will fail. Run `rolodex indexes`.",
        )

    return results


async def validate_auth_configuration() -> dict[str, Any]:
    """Check that the configured auth provider can actually verify callers."""
    results = _new_result(
        auth_info={
            "provider": settings.auth_provider,
            "require_signed_in": settings.require_signed_in,
        }
    )
    provider = settings.auth_provider
    environment = settings.environment.lower()

    if provider == "none":
        if environment in PRODUCTION_ENVIRONMENTS:
            _warn(
                results,
                "No-auth mode detected in production environment - this is a security risk!",
            )
        if settings.require_signed_in:
            _warn(
                results,
                "Sign-in is required but no-auth mode signs every caller in as the dev user",
            )
    elif provider == "jwt":
        if not (settings.jwt_secret or settings.auth_config.get("secret_key")):
            _fail(results, "JWT authentication enabled but ROLODEX_JWT_SECRET not configured")
    else:
        _fail(results, f"Unsupported auth provider: {provider}")

    return results


async def validate_startup_configuration() -> dict[str, Any]:
    """Run every startup check and combine the results."""
    logger.info("Starting application configuration validation")

    db_results = await validate_database_connection()
    if db_results["valid"]:
        index_results = await validate_contact_indexes()
    else:
        index_results = _new_result(
            valid=False, errors=["Skipped due to database connection failure"]
        )
    auth_results = await validate_auth_configuration()

    checks = (db_results, index_results, auth_results)
    overall_valid = all(check["valid"] for check in checks)

    if overall_valid:
        logger.info("Application configuration validation completed successfully")
    else:
        logger.error(
            "Application configuration validation failed",
            errors=[e for check in checks for e in check["errors"]],
        )

    return {
        "overall_valid": overall_valid,
        "database": db_results,
        "indexes": index_results,
        "auth": auth_results,
        "environment": {
            "auth_provider": settings.auth_provider,
            "environment": settings.environment,
            "debug": settings.debug,
        },
    }


def get_startup_recommendations(validation_results: dict[str, Any]) -> list[str]:
    """Human-readable next steps for the problems found at startup."""
    if not validation_results.get("database", {}).get("valid", False):
        return ["Database connection failed - check that MongoDB is running and accessible"]

    recommendations = []
    if validation_results["indexes"]["warnings"]:
        recommendations.append("Create the contact indexes with `rolodex indexes`")

    no_auth = validation_results["auth"]["auth_info"]["provider"] == "none"
    if no_auth and settings.environment.lower() not in DEVELOPMENT_ENVIRONMENTS:
        recommendations.append(
            "Consider configuring a proper authentication provider for non-development environments"
        )

    if not validation_results["overall_valid"]:
        recommendations.append("Fix configuration errors before deploying to production")

    return recommendations
