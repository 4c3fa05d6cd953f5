from typing import List

from pydantic import BaseModel, ConfigDict, Field

from db_explorer.core.browser.results import Cell


# =========================
# TABLES
# =========================
class TableSummary(BaseModel):
    name: str
    row_count: int = Field(alias="rowCount")
    view_url: str = Field(alias="viewURL")
    api_data_url: str = Field(alias="apiDataURL")

    model_config = ConfigDict(populate_by_name=True)


class TableDataResponse(BaseModel):
    table_name: str = Field(alias="tableName")
    page: int
    rows_per_page: int = Field(alias="rowsPerPage")
    total_rows: int = Field(alias="totalRows")
    total_pages: int = Field(alias="totalPages")
    has_next_page: bool = Field(alias="hasNextPage")
    columns: List[str]
    rows: List[List[Cell]]

    model_config = ConfigDict(populate_by_name=True)


# =========================
# QUERY
# =========================
class QueryResponse(BaseModel):
    query: str
    columns: List[str]
    rows: List[List[Cell]]


class ErrorResponse(BaseModel):
    error: str
