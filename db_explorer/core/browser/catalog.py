import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from db_explorer.core import schemas

logger = logging.getLogger(__name__)

# SQLite keeps its own bookkeeping tables under the sqlite_ prefix
LIST_TABLES_SQL = (
    "SELECT name FROM sqlite_master "
    "WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
)

# Row count recorded when a table cannot be counted
COUNT_FAILED = -1


def quote_table(conn: AsyncConnection, name: str) -> str:
    return conn.dialect.identifier_preparer.quote_identifier(name)


async def count_rows(conn: AsyncConnection, name: str) -> int:
    result = await conn.exec_driver_sql(f"SELECT COUNT(*) FROM {quote_table(conn, name)}")
    return result.scalar_one()


async def list_tables(conn: AsyncConnection) -> List[schemas.TableSummary]:
    """
    List every user table with its row count, sorted by name.
    Why: one uncountable table (e.g. a virtual table whose module is missing)
    should not take the whole listing down, so it gets -1 instead.

    Args:
        conn: Open async connection.

    Returns:
        TableSummary per table. A failure of the listing query itself propagates.
    """
    result = await conn.exec_driver_sql(LIST_TABLES_SQL)
    names = result.scalars().all()

    tables = []
    for name in names:
        try:
            row_count = await count_rows(conn, name)
        except SQLAlchemyError as error:
            logger.warning(f"Could not count rows for table {name}: {error}")
            row_count = COUNT_FAILED

        tables.append(
            schemas.TableSummary(
                name=name,
                row_count=row_count,
                view_url=f"/table/{name}",
                api_data_url=f"/api/table/{name}",
            )
        )
    return tables
