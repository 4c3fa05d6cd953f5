import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from jinja2 import Environment, FileSystemLoader

from db_explorer.api.router import api_router
from db_explorer.core.browser.service import Explorer
from db_explorer.core.config import Settings
from db_explorer.core.database import build_engine
from db_explorer.core.errors import APIError, api_error_handler

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAMES = ("index.html", "table.html", "query.html", "error.html")


def load_templates(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    """
    Build the Jinja environment and compile every page template up front.
    Why: a broken or missing template should stop startup, not the first request.
    """
    templates = Environment(loader=FileSystemLoader(str(templates_dir)), autoescape=True)
    for name in TEMPLATE_NAMES:
        templates.get_template(name)
    return templates


# Check the database answers before serving, close the engine once everything is done
@asynccontextmanager
async def lifespan(app: FastAPI):
    explorer: Explorer = app.state.explorer
    await explorer.ping()
    logger.info(f"Connected to database '{app.state.db_name}' (read-only)")

    yield
    await explorer.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application for one database file.

    Args:
        settings: Application settings; read from the environment when omitted.

    Returns:
        Configured FastAPI application with the explorer on app.state.

    Raises:
        FileNotFoundError: DB_PATH is unset or does not point to a file.
        jinja2.TemplateError: a page template cannot be loaded.
    """
    settings = settings or Settings()
    db_path = settings.DB_PATH
    if db_path is None or not db_path.is_file():
        raise FileNotFoundError(f"database file not found at path: {db_path}")

    app = FastAPI(title="DB Explorer", lifespan=lifespan)

    app.state.db_name = db_path.name
    app.state.templates = load_templates()
    app.state.explorer = Explorer(build_engine(db_path, echo=settings.ECHO_SQL))

    app.add_exception_handler(APIError, api_error_handler)

    # Include the master router containing all our endpoints
    app.include_router(api_router)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
