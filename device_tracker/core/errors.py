from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorEnvelope(JSONResponse):
    """Every failure leaves the API as ``{"error": <message>}``."""

    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        payload: dict[str, Any] = {"error": message}
        if details is not None:
            payload["details"] = details
        super().__init__(payload, status_code=status_code, headers=headers)


def storage_error_message(exc: SQLAlchemyError) -> str:
    """Return the storage engine's own message, without SQLAlchemy's decoration."""

    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    message = detail if isinstance(detail, str) else "Error"
    details = detail if isinstance(detail, dict) else None
    return ErrorEnvelope(
        status_code=exc.status_code,
        message=message,
        details=details,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return ErrorEnvelope(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Validation failed",
        details={"errors": jsonable_encoder(exc.errors())},
    )


async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    message = storage_error_message(exc)
    logger.error(
        "storage.error",
        exc_info=exc,
        extra={"extra_data": {"method": request.method, "path": request.url.path, "error": message}},
    )
    return ErrorEnvelope(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, message=message)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "request.failed",
        exc_info=exc,
        extra={"extra_data": {"method": request.method, "path": request.url.path}},
    )
    return ErrorEnvelope(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, message=str(exc) or "Internal Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, storage_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
