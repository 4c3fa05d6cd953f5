"""Command-line entry point: serve one SQLite file over HTTP.

Usage:
    db-explorer -db ./data.sqlite
    db-explorer -db ./data.sqlite -port 9000
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
import uvicorn
from jinja2 import TemplateError

from db_explorer.core.config import Settings
from db_explorer.main import create_app

logger = logging.getLogger(__name__)

cli = typer.Typer(
    name="db-explorer",
    help="Read-only web browser for a SQLite database file.",
    add_completion=False,
)


@cli.command()
def serve(
    ctx: typer.Context,
    db: Annotated[
        Optional[Path],
        typer.Option("-db", "--db", help="Path to the SQLite database file (required)"),
    ] = None,
    port: Annotated[
        Optional[int],
        typer.Option("-port", "--port", help="Port to run the web server on [default: 8080]"),
    ] = None,
    host: Annotated[
        Optional[str],
        typer.Option("-host", "--host", help="Interface to bind [default: 0.0.0.0]"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("-log-level", "--log-level", help="Logging level [default: INFO]"),
    ] = None,
) -> None:
    """Start the web server for the database given with -db."""
    # Flags win over DB_EXPLORER_* environment values
    overrides = {
        key: value
        for key, value in {
            "DB_PATH": db,
            "PORT": port,
            "HOST": host,
            "LOG_LEVEL": log_level,
        }.items()
        if value is not None
    }
    settings = Settings(**overrides)

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if settings.DB_PATH is None:
        logger.error("Error: -db flag is required.")
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(code=1)

    try:
        app = create_app(settings)
    except (FileNotFoundError, TemplateError) as error:
        logger.error(f"Failed to initialize application: {error}")
        raise typer.Exit(code=1)

    logger.info(f"Starting DB Explorer for '{settings.DB_PATH.name}'")
    logger.info(f"Server listening on http://localhost:{settings.PORT}")
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        timeout_keep_alive=120,
    )


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
