import logging
from typing import List, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from db_explorer.core import schemas
from db_explorer.core.browser import catalog, gate, results
from db_explorer.core.browser.pagination import Page
from db_explorer.core.errors import QueryError

logger = logging.getLogger(__name__)


def _driver_message(error: SQLAlchemyError) -> str:
    # Prefer the sqlite message ("no such table: x") over SQLAlchemy's wrapped text
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)


class Explorer:
    """
    Read-only view over one database, shared by every request.
    The engine is fixed at construction; each call borrows a pooled connection.
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def ping(self) -> None:
        async with self._engine.connect() as conn:
            # Reading sqlite_master forces SQLite to validate the file header
            await conn.exec_driver_sql("SELECT COUNT(*) FROM sqlite_master")

    async def tables(self) -> List[schemas.TableSummary]:
        async with self._engine.connect() as conn:
            return await catalog.list_tables(conn)

    async def table_page(
        self, table_name: str, page_number: int
    ) -> Tuple[Page, results.ResultSet]:
        """
        Fetch one page of a table.
        The count runs first so a missing table fails before the data query.

        Raises:
            QueryError: the table does not exist or cannot be read.
        """
        try:
            async with self._engine.connect() as conn:
                total_rows = await catalog.count_rows(conn, table_name)
                page = Page.build(page_number, total_rows)
                quoted = catalog.quote_table(conn, table_name)
                # Past the last page: LIMIT 0 still yields the columns, and a huge
                # page number never turns into an OFFSET SQLite cannot hold
                if page.offset >= total_rows:
                    sql = f"SELECT * FROM {quoted} LIMIT 0"
                else:
                    sql = f"SELECT * FROM {quoted} LIMIT {page.limit} OFFSET {page.offset}"
                result_set = await results.materialize(conn, sql)
        except SQLAlchemyError as error:
            logger.error(f"Failed to fetch table {table_name}: {error}")
            raise QueryError(_driver_message(error)) from error

        return page, result_set

    async def run_query(self, sql: str) -> results.ResultSet:
        """
        Run a user-supplied statement after the SELECT-only check.

        Raises:
            QueryRejected: the statement is not a SELECT (no DB access happens).
            QueryError: the database refused or failed the statement.
        """
        gate.ensure_read_only(sql)
        try:
            async with self._engine.connect() as conn:
                return await results.materialize(conn, sql)
        except SQLAlchemyError as error:
            logger.error(f"Query execution failed: {error}")
            raise QueryError(_driver_message(error)) from error
