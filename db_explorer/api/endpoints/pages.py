import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse
from jinja2 import TemplateError
from sqlalchemy.exc import SQLAlchemyError

from db_explorer.core.browser.pagination import parse_page
from db_explorer.core.database import explorer_dep
from db_explorer.core.errors import QueryError, QueryRejected

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"], default_response_class=HTMLResponse)


def render(
    request: Request, template_name: str, status_code: int = status.HTTP_200_OK, **context
) -> HTMLResponse:
    """Render a template from app.state.templates with the database name filled in."""
    templates = request.app.state.templates
    try:
        html = templates.get_template(template_name).render(
            db_name=request.app.state.db_name, **context
        )
    except TemplateError as error:
        logger.error(f"Error executing template {template_name}: {error}")
        return HTMLResponse(
            "Internal Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return HTMLResponse(html, status_code=status_code)


def render_error(request: Request, status_code: int, message: str) -> HTMLResponse:
    return render(request, "error.html", status_code=status_code, error=message)


# Table listing
@router.get("/")
async def index(request: Request, explorer: explorer_dep):
    try:
        tables = await explorer.tables()
    except SQLAlchemyError as error:
        logger.error(f"Failed to list tables: {error}")
        return render_error(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Failed to list tables: {error}",
        )
    return render(request, "index.html", tables=tables)


# Paginated rows of one table
@router.get("/table/{table_name:path}")
async def table_view(
    request: Request,
    table_name: str,
    explorer: explorer_dep,
    page: Optional[str] = None,
):
    if not table_name:
        return render_error(
            request, status.HTTP_400_BAD_REQUEST, "Table name not specified"
        )

    try:
        current, result_set = await explorer.table_page(table_name, parse_page(page))
    except QueryError as error:
        return render_error(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Failed to fetch table data: {error}",
        )

    return render(
        request,
        "table.html",
        current_table=table_name,
        columns=result_set.columns,
        rows=result_set.rows,
        page=current,
    )


# Ad-hoc query form
@router.get("/query")
async def query_form(request: Request, sql: Optional[str] = None):
    return render(request, "query.html", query=sql or "")


@router.post("/query")
async def query_submit(
    request: Request, explorer: explorer_dep, sql: Annotated[str, Form()] = ""
):
    """
    Run the submitted SELECT and show results under the form.
    Rejections (403) and database errors (500) are shown inline on the same page.
    """
    if not sql:
        return render(request, "query.html", query=sql)

    try:
        result_set = await explorer.run_query(sql)
    except QueryRejected as rejection:
        return render(
            request,
            "query.html",
            status_code=status.HTTP_403_FORBIDDEN,
            query=sql,
            error=str(rejection),
        )
    except QueryError as error:
        return render(
            request,
            "query.html",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            query=sql,
            error=str(error),
        )

    return render(
        request,
        "query.html",
        query=sql,
        columns=result_set.columns,
        rows=result_set.rows,
    )
