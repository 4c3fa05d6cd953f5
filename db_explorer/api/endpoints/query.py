from typing import Optional

from fastapi import APIRouter, status

from db_explorer.core import schemas
from db_explorer.core.database import explorer_dep
from db_explorer.core.errors import APIError, QueryError, QueryRejected

router = APIRouter(prefix="/api", tags=["Query"])


@router.get("/query", response_model=schemas.QueryResponse)
async def run_query(explorer: explorer_dep, sql: Optional[str] = None):
    """
    Run an ad-hoc SELECT passed as ?sql=.
    400 when sql is missing, 403 for anything that is not a SELECT.
    """
    if not sql:
        raise APIError(status.HTTP_400_BAD_REQUEST, "Missing 'sql' query parameter")

    try:
        result_set = await explorer.run_query(sql)
    except QueryRejected as rejection:
        raise APIError(status.HTTP_403_FORBIDDEN, str(rejection))
    except QueryError as error:
        raise APIError(
            status.HTTP_500_INTERNAL_SERVER_ERROR, f"Query execution failed: {error}"
        )

    return schemas.QueryResponse(
        query=sql, columns=result_set.columns, rows=result_set.rows
    )
