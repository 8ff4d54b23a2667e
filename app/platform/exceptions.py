import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.platform.response import api_response

logger = logging.getLogger(__name__)


class InstallationError(Exception):
    """Base class for errors raised by the live-state core."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class InvalidPayloadError(InstallationError):
    """Ingest payload rejected at the boundary; nothing was applied."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


def add_exception_handlers(app):
    @app.exception_handler(InvalidPayloadError)
    async def invalid_payload_handler(request: Request, exc: InvalidPayloadError):
        logger.info(f"Rejected payload on {request.url.path}: {exc.message}")
        return api_response(
            message=exc.message,
            status_code=exc.status_code,
            data={"errors": exc.errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return api_response(message=str(exc.detail) or "Error", status_code=exc.status_code)

    # ingest endpoints answer malformed bodies with a plain client error
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return api_response(
            message="Validation failed",
            status_code=status.HTTP_400_BAD_REQUEST,
            data={"errors": exc.errors()},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return api_response(
            message="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
