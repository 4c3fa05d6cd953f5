import logging

from db_explorer.core.errors import QueryRejected

logger = logging.getLogger(__name__)

REJECTION_MESSAGE = "Only SELECT queries are allowed."


# Prefix check only: it does not parse the statement, so a SELECT with
# side effects in a subquery still passes. The read-only connection is the real guard.
def is_read_only(sql: str) -> bool:
    return sql.strip().upper().startswith("SELECT")


def ensure_read_only(sql: str) -> None:
    if not is_read_only(sql):
        logger.info(f"Rejected non-SELECT statement: {sql[:80]!r}")
        raise QueryRejected(REJECTION_MESSAGE)
