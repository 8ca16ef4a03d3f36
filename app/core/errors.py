"""
Error types and FastAPI exception handlers.

Every error response carries the same machine-readable shape::

    {"error": "<message>"}

Details of upstream failures are logged server-side by the services; the
message placed on an ``InfoHubError`` is what the caller sees.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class InfoHubError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(InfoHubError):
    """A required credential or URL is missing from the server configuration."""


class UpstreamError(InfoHubError):
    """A third-party provider answered with a non-success status."""

    status_code = status.HTTP_502_BAD_GATEWAY


def error_body(message: str) -> dict:
    return {"error": message}


def register_exception_handlers(app: FastAPI) -> None:
    """Register the InfoHub exception handlers on ``app``."""

    @app.exception_handler(InfoHubError)
    async def _handle_infohub_error(request: Request, exc: InfoHubError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(Exception)
    async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error"),
        )
