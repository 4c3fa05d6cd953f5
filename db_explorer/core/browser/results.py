from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, List, Union

from sqlalchemy.ext.asyncio import AsyncConnection


# -----------------------------------------------------------------------------
# RESULT MATERIALIZER
# Purpose: run one SQL statement and turn whatever comes back into
# a columns list plus rows of display-ready cells.
# Why: the browser never knows the schema ahead of time, so every cell
# is coerced generically into something both Jinja and JSON can print.
# -----------------------------------------------------------------------------

# A cell is always one of these after coercion
Cell = Union[str, int, float, bool, None]

# SQL NULL is shown as this literal text in HTML and JSON alike
NULL_TEXT = "NULL"


@dataclass
class ResultSet:
    columns: List[str] = field(default_factory=list)
    rows: List[List[Cell]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


def format_timestamp(value: datetime) -> str:
    """
    Render a datetime as RFC 3339 without fractional seconds.
    Naive values are treated as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def to_cell(value: Any) -> Cell:
    """
    Convert one raw driver value into a Cell.

    Args:
        value: Whatever the DB driver returned for a column.

    Returns:
        bytes as text (raw bytes reinterpreted, not base64/hex),
        timestamps as RFC 3339 text, NULL as "NULL", everything else untouched.

    Example:
        to_cell(b"hi")  # "hi"
        to_cell(None)   # "NULL"
    """
    if value is None:
        return NULL_TEXT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


async def materialize(conn: AsyncConnection, sql: str) -> ResultSet:
    """
    Execute a statement and collect the whole result as a ResultSet.
    Why: the statement goes to the driver verbatim so ':name' text inside
    user SQL is never mistaken for a bind parameter.

    Args:
        conn: Open async connection.
        sql: Statement to run.

    Returns:
        ResultSet with columns discovered from the cursor.
    """
    result = await conn.exec_driver_sql(sql)
    if not result.returns_rows:
        return ResultSet()
    columns = list(result.keys())
    rows = [[to_cell(value) for value in row] for row in result.fetchall()]
    return ResultSet(columns=columns, rows=rows)
