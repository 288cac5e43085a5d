"""Command-line interface for TaskBase.

This module provides the CLI commands for running and managing
the TaskBase application.
"""

import asyncio
from typing import NoReturn

import click
from sqlalchemy.engine import make_url

from taskbase import __version__
from taskbase.core.config import get_settings
from taskbase.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="TaskBase")
def cli() -> None:
    """TaskBase - personal task tracking API."""


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload/--no-reload",
    default=None,
    help="Enable auto-reload (defaults to on in development)",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool | None) -> None:
    """Start the TaskBase server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    if reload is None:
        reload = settings.is_development

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting TaskBase server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "taskbase.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
def init_db() -> None:
    """Create all database tables that do not exist yet."""
    from taskbase.infrastructure.persistence.database import DatabaseManager, init_database

    settings = get_settings()
    configure_logging(settings)

    async def initialize() -> None:
        db = DatabaseManager(settings)
        try:
            await init_database(db)
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    try:
        asyncio.run(initialize())
    except RuntimeError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@cli.command()
@click.option("--name", type=str, default=None, help="Display name (prompts if not provided)")
@click.option("--email", type=str, default=None, help="Email (prompts if not provided)")
@click.option(
    "--password",
    type=str,
    default=None,
    help="Password (prompts if not provided)",
)
def create_user(name: str | None, email: str | None, password: str | None) -> None:
    """Register a user and print their bearer token."""
    from taskbase.core.exceptions import DatabaseError, DuplicateIdentityError, ValidationError
    from taskbase.domain.services import AuthService, CredentialValidator
    from taskbase.infrastructure.auth import JWTService
    from taskbase.infrastructure.persistence.database import DatabaseManager, init_database

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    if name is None:
        name = click.prompt("Name", type=str)
    if email is None:
        email = click.prompt("Email", type=str)
    if password is None:
        password = click.prompt("Password", hide_input=True, confirmation_prompt=True)

    async def create() -> None:
        db = DatabaseManager(settings)
        try:
            await init_database(db)
            async with db.session() as session:
                service = AuthService(
                    session,
                    JWTService(settings=settings),
                    validator=CredentialValidator(
                        min_length=settings.password_min_length,
                        max_length=settings.password_max_length,
                    ),
                )
                result = await service.register(name=name, email=email, password=password)
        finally:
            await db.disconnect()

        click.echo(
            f"\nUser created successfully!\n"
            f"  User ID: {result.user.id}\n"
            f"  Name:    {result.user.name}\n"
            f"  Email:   {result.user.email}\n"
            f"  Token:   {result.token}\n"
        )
        logger.info("User created via CLI", user_id=result.user.id)

    try:
        asyncio.run(create())
    except ValidationError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)
    except DuplicateIdentityError:
        click.echo(f"Error: a user with email '{email}' already exists", err=True)
        raise SystemExit(1)
    except DatabaseError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)


@cli.command()
def info() -> None:
    """Display TaskBase configuration and system information."""
    settings = get_settings()
    database_url = make_url(settings.database_url).render_as_string(hide_password=True)

    click.echo(f"""
TaskBase v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {database_url}
  Pool Size:    {settings.db_pool_size} (+{settings.db_max_overflow} overflow)
  Pool Timeout: {settings.db_pool_timeout}s

Security:
  Token Expire: {settings.token_expire_days} days

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `taskbase` command is run
    or when using `python -m taskbase`.
    """
    cli()


if __name__ == "__main__":
    main()
