"""Application-level exceptions and FastAPI exception handlers."""


import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

class AppException(Exception):
    """Base application exception.

    ``extra`` is merged into the JSON error body next to ``error``.
    """

    def __init__(self, message: str, status_code: int = 500, **extra: Any):
        self.message = message
        self.status_code = status_code
        self.extra = extra
        super().__init__(message)

    def to_body(self) -> dict:
        return {"error": self.message, **self.extra}

class ValidationError(AppException):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, status_code=400, field=field)
        self.field = field

class UnauthorizedError(AppException):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401)

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: str | None = None):
        super().__init__(f"{entity} not found", status_code=404)
        self.entity_id = entity_id

class ServiceUnavailableError(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=503)

class DownstreamError(AppException):
    """The KV store or the vendor database failed."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message, status_code=500, details=details)
        self.details = details

class NotificationError(Exception):
    """Email dispatch failed. Never leaves the notification dispatcher."""


@contextmanager
def failure_message(message: str) -> Iterator[None]:
    """Turn downstream and unexpected errors inside the block into a 500
    carrying *message*. Client-facing errors (400/401/404/503) pass through.
    """
    try:
        yield
    except DownstreamError as exc:
        logger.error("%s: %s", message, exc.details or exc.message)
        raise DownstreamError(message, details=exc.details or exc.message) from exc
    except AppException:
        raise
    except Exception as exc:
        logger.exception(message)
        raise DownstreamError(message, details=str(exc)) from exc

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _invalid_field(exc: RequestValidationError) -> str | None:
    for err in exc.errors():
        loc = [part for part in err.get("loc", ()) if part != "body"]
        if loc and isinstance(loc[0], str):
            return loc[0]
    return None

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        field = _invalid_field(exc)
        message = f"Invalid value for field: {field}" if field else "Invalid request body"
        logger.info("Rejected request to %s: %s", request.url.path, message)
        return JSONResponse(status_code=400, content={"error": message, "field": field})

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": "Resource not found"})

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "An unexpected error occurred", "details": str(exc)},
        )
