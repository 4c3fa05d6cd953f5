from pathlib import Path
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from db_explorer.core.browser.service import Explorer


def decode_text(value: bytes) -> str:
    # Invalid UTF-8 in a TEXT column shows as U+FFFD instead of failing the whole query
    return value.decode("utf-8", errors="replace")


def build_engine(db_path: Path, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine that opens the SQLite file read-only.
    Why: mode=ro makes SQLite itself refuse writes, whatever SQL gets through.
    """
    url = f"sqlite+aiosqlite:///file:{db_path.resolve().as_posix()}?mode=ro&uri=true"
    engine = create_async_engine(url, echo=echo)

    @event.listens_for(engine.sync_engine, "connect")
    def set_text_factory(dbapi_connection, connection_record):
        connection_record.driver_connection.text_factory = decode_text

    return engine


# This is the "Bridge" that gives my routes access to the explorer built by create_app
def get_explorer(request: Request) -> Explorer:
    return request.app.state.explorer


explorer_dep = Annotated[Explorer, Depends(get_explorer)]
