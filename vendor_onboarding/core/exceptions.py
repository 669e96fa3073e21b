"""Application-level exceptions and FastAPI exception handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from vendor_onboarding.core.response import error_envelope

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)

class ValidationError(AppException):
    """Caller input is missing a required field or carries an invalid value."""

    def __init__(self, message: str):
        super().__init__(message, status_code=400, code="VALIDATION_ERROR")

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: str | None = None):
        msg = f"{entity} not found" if not entity_id else f"{entity} '{entity_id}' not found"
        super().__init__(msg, status_code=404, code="NOT_FOUND")

class DatabaseConnectionError(AppException):
    """The database could not be reached or rejected the credentials."""

    def __init__(self, message: str):
        super().__init__(message, status_code=500, code="DB_CONNECTION_ERROR")

class NoActiveSessionError(AppException):
    def __init__(self, operation: str):
        super().__init__(
            f"Cannot {operation}: no database connection acquired",
            status_code=500,
            code="NO_ACTIVE_SESSION",
        )

class QueryError(AppException):
    """A single statement failed (constraint violation, type mismatch, lost connection)."""

    def __init__(self, statement: str, cause: BaseException):
        self.statement = statement
        self.cause = cause
        super().__init__(f"Query failed: {cause}", status_code=500, code="QUERY_ERROR")

class TransactionError(AppException):
    """A step of a multi-statement write failed; the transaction was rolled back."""

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        reason = cause.message if isinstance(cause, AppException) else str(cause)
        super().__init__(
            f"{operation} failed and was rolled back: {reason}",
            status_code=500,
            code="TRANSACTION_ERROR",
        )

class StorageError(AppException):
    """Raised when the object storage call fails (upstream service error)."""

    def __init__(self, message: str):
        super().__init__(message, status_code=500, code="STORAGE_ERROR")

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _request_validation_message(exc: RequestValidationError) -> str:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Invalid request: " + "; ".join(problems)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(request, exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=error_envelope(request, _request_validation_message(exc)),
        )

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content=error_envelope(request, "Resource not found"),
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_envelope(request, "An unexpected error occurred"),
        )
