"""
Global Error Handling Middleware

Every error leaves the API as ``{"status": "error", "message": ..., ...}``.
Domain errors carry their own HTTP status (see core.exception).
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.model.enums import ResponseStatus
from core.exception import PinmapError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": ResponseStatus.ERROR.value, "message": message, **extra},
    )


def _format_validation_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"field": ".".join(str(loc) for loc in error["loc"]), "message": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]


def add_error_handlers(app: FastAPI):
    """
    Register error handlers for the FastAPI application.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = _format_validation_errors(exc)
        logger.warning(f"Validation error on {request.url.path}: {errors}")
        return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, "Request validation failed", errors=errors)

    @app.exception_handler(PinmapError)
    async def pinmap_error_handler(request: Request, exc: PinmapError):
        """Not found, save failure, session not ready, bad share string."""
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(f"{type(exc).__name__} on {request.url.path}: {exc}")
        return _error_response(exc.status_code, str(exc), error=type(exc).__name__)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        logger.warning(f"ValueError on {request.url.path}: {exc}")
        return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred",
            detail=str(exc) if logger.isEnabledFor(logging.DEBUG) else None,
        )
