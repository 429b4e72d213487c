"""API error taxonomy and the handlers that render errors into the response envelope."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(HTTPException):
    """Base for errors surfaced to clients through the failure envelope."""

    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Any]] = None):
        self.message = message or self.default_message
        self.errors = list(errors or [])
        super().__init__(status_code=self.status_code, detail=self.message)


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid request"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Resource not found"


class AuthorizationError(ApiError):
    status_code = 401
    default_message = "Unauthorized request"


class PersistenceError(ApiError):
    status_code = 500
    default_message = "Database operation failed"


class UpstreamError(ApiError):
    status_code = 500
    default_message = "Media upload failed"


def error_envelope(status_code: int, message: str, errors: Optional[List[Any]] = None) -> dict:
    return {
        "status": status_code,
        "success": False,
        "message": message,
        "errors": jsonable_encoder(errors or []),
    }


async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc, ApiError):
        message, errors = exc.message, exc.errors
    else:
        message, errors = str(exc.detail), []
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.status_code, message, errors),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "form")),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=error_envelope(400, "Invalid request", errors),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content=error_envelope(500, "Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
