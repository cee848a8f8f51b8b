#!/usr/bin/env python3
"""
Main CLI entry point for Rolodex backend server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from rolodex import __version__
from rolodex.config import settings
from rolodex.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="rolodex")
def cli() -> None:
    """Rolodex CLI - run the API server and manage the database."""
    pass


@cli.command()
@click.option("--host", default=settings.api_host, show_default=True, help="Host to bind to")
@click.option(
    "--port", default=settings.api_port, type=int, show_default=True, help="Port to bind to"
)
@click.option(
    "--reload",
    is_flag=True,
    default=settings.api_reload,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default=settings.log_level.lower(),
    show_default=True,
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the Rolodex API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting Rolodex API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

    # The app module reads settings at import time
    if log_level == "debug":
        os.environ["ROLODEX_DEBUG"] = "true"
        os.environ["ROLODEX_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("ROLODEX_DEBUG", "false")
        os.environ.setdefault("ROLODEX_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "rolodex.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")


@cli.command()
def indexes() -> None:
    """Create the indexes contact lookups and search depend on."""
    from rolodex.database.connection import close_database, get_database
    from rolodex.database.seed_data import ensure_indexes

    configure_logging()

    async def do_indexes():
        try:
            await ensure_indexes(get_database())
            click.echo("✓ Indexes created")
        finally:
            await close_database()

    try:
        asyncio.run(do_indexes())
    except Exception as e:
        logger.error("Failed to create indexes", error=str(e))
        click.echo(f"✗ Error creating indexes: {e}", err=True)
        sys.exit(1)


@cli.command()
def seed() -> None:
    """Seed the database with indexes and sample contacts."""
    from rolodex.database.connection import close_database, get_database
    from rolodex.database.seed_data import ensure_indexes, seed_sample_contacts

    configure_logging()

    async def do_seed():
        db = get_database()
        try:
            await ensure_indexes(db)
            inserted = await seed_sample_contacts(db)
            click.echo(f"✓ Database seeded ({len(inserted)} contact(s) added)")
        finally:
            await close_database()

    try:
        asyncio.run(do_seed())
    except Exception as e:
        logger.error("Failed to seed database", error=str(e))
        click.echo(f"✗ Error seeding database: {e}", err=True)
        sys.exit(1)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
