"""Tessera CLI application using Typer.

This module provides command-line utilities for the Tessera backend:
secret generation for deployment configuration, schema creation and
running the API server.
"""

import asyncio
import secrets

import typer
import uvicorn
from rich.console import Console

from tessera.presentation.api.dependencies import create_tables, get_engine
from tessera_config.settings import get_settings

app = typer.Typer(
    name="tessera",
    help="Tessera - user and token authentication service CLI",
    no_args_is_help=True,
)
console = Console()


# Create secrets subcommand group
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

# Create db subcommand group
db_app = typer.Typer(
    name="db",
    help="Database utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Tessera configuration.

    Generates two required secrets:
    - JWT_SECRET_KEY: Secret for signing JWT authentication tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Tessera Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 random bytes, well above the 32-byte minimum for HS256
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


@db_app.command("create-tables")
def create_tables_command() -> None:
    """Create missing database tables on the configured database.

    Existing tables and their data are left untouched.
    """

    async def _run() -> None:
        engine = get_engine()
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    try:
        asyncio.run(_run())
    except Exception as e:
        console.print(f"[red]Failed to create tables:[/red] {e}")
        raise typer.Exit(code=1) from e

    console.print("[green]Database schema is up to date.[/green]")


@app.command("serve")
def serve(
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the API server on the configured host and port."""
    settings = get_settings()
    console.print(
        f"[green]Starting {settings.app_name} API on "
        f"{settings.api_host}:{settings.api_port}[/green]"
    )
    uvicorn.run(
        "tessera.presentation.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
