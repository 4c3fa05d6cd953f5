import logging
from typing import List, Optional

from fastapi import APIRouter, status
from sqlalchemy.exc import SQLAlchemyError

from db_explorer.core import schemas
from db_explorer.core.browser.pagination import ROWS_PER_PAGE, parse_page
from db_explorer.core.database import explorer_dep
from db_explorer.core.errors import APIError, QueryError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Tables"])


@router.get("/tables", response_model=List[schemas.TableSummary])
async def get_tables(explorer: explorer_dep):
    """List user tables with row counts and links."""
    try:
        return await explorer.tables()
    except SQLAlchemyError as error:
        logger.error(f"Failed to list tables: {error}")
        raise APIError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to get tables")


@router.get("/table/{table_name:path}", response_model=schemas.TableDataResponse)
async def get_table_data(
    table_name: str, explorer: explorer_dep, page: Optional[str] = None
):
    """
    Return one page of rows for a table.
    Bad or missing ?page= values fall back to page 1.
    """
    try:
        current, result_set = await explorer.table_page(table_name, parse_page(page))
    except QueryError:
        raise APIError(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to get table data"
        )

    return schemas.TableDataResponse(
        table_name=table_name,
        page=current.number,
        rows_per_page=ROWS_PER_PAGE,
        total_rows=current.total_rows,
        total_pages=current.total_pages,
        has_next_page=current.has_next,
        columns=result_set.columns,
        rows=result_set.rows,
    )
