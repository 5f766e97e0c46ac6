"""
app/core/errors.py

Purpose: Render every failure as the ErrorResponse envelope

- QuickServeError subclasses carry their own status, code and details
- Framework 404/405 and request-body errors are mapped to fixed codes
- Anything else becomes INTERNAL_ERROR; the message is hidden in production
"""

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.exceptions import QuickServeError
from app.core.logging import get_logger
from app.schemas.response import ErrorResponse

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred. Please try again later."


def error_response(status_code: int, message: str, code: str, details: Optional[Any] = None) -> JSONResponse:
    body = ErrorResponse(error=message, code=code, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _request_errors(exc: RequestValidationError) -> list:
    # Raw pydantic errors can hold non-JSON values under "ctx" and "input"
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def add_exception_handlers(app: FastAPI):
    @app.exception_handler(QuickServeError)
    async def handle_quickserve_error(request: Request, exc: QuickServeError):
        if exc.status_code >= 500:
            logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
        return error_response(exc.status_code, exc.message, exc.code, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), "HTTP_ERROR")

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return error_response(422, "Input validation failed", "VALIDATION_ERROR", _request_errors(exc))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        client = request.client.host if request.client else "unknown"
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.method} {request.url.path} from {client}: {exc}",
            exc_info=True
        )
        message = INTERNAL_ERROR_MESSAGE if settings.is_production else str(exc)
        return error_response(500, message, "INTERNAL_ERROR")
