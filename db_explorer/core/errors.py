from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse


class QueryRejected(Exception):
    """A statement was refused before it reached the database."""


class QueryError(Exception):
    """The database failed to run a statement."""


class APIError(HTTPException):
    """HTTPException whose body is the {"error": message} envelope instead of {"detail": ...}."""


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})
