"""
Error taxonomy and the FastAPI handlers that turn it into `{"error": ...}`.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class HelpCenterError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFields(HelpCenterError):
    status_code = 400


class InvalidReference(HelpCenterError):
    status_code = 400


class Conflict(HelpCenterError):
    status_code = 400


class InvalidCredentials(HelpCenterError):
    status_code = 401


class Unauthorized(HelpCenterError):
    status_code = 401


class NotFound(HelpCenterError):
    status_code = 404


class DocumentStoreError(HelpCenterError):
    """The backing document is missing, malformed or could not be written."""

    status_code = 500


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(HelpCenterError)
    async def handle_help_center_error(request: Request, exc: HelpCenterError):
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed: %s", request.method, request.url.path, exc.message
            )
            return error_response(exc.status_code, INTERNAL_ERROR_MESSAGE)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"Invalid request: {location} {first.get('msg', '')}".strip()
        else:
            message = "Invalid request"
        return error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # Wrong-method requests fall through to "no route", like unmatched paths.
        if exc.status_code in (404, 405):
            return error_response(404, "Route not found")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, INTERNAL_ERROR_MESSAGE)
