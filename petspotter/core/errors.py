"""
Error taxonomy and the FastAPI handlers that render it.
Every failure path ends in one of these kinds; handlers map them to status codes.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

logger = logging.getLogger(__name__)


class PetSpotterError(Exception):
    """Base class. Subclasses set the HTTP status and default message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_content(self) -> dict[str, Any] | None:
        return {"success": False, "message": self.message}


class ValidationError(PetSpotterError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class DuplicateKeyError(PetSpotterError):
    """Uniqueness violation. `fields` holds the offending column/value pairs."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Duplicated value"

    def __init__(self, fields: dict[str, Any] | None = None, message: str | None = None):
        self.fields = fields or {}
        super().__init__(message)

    def to_content(self) -> dict[str, Any]:
        return {"success": False, "message": self.message, "fields": self.fields}


class UnauthenticatedError(PetSpotterError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated"


class NotFoundError(PetSpotterError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class BadRequestError(PetSpotterError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class BadFilterError(BadRequestError):
    """Unrecognized listing filter value. Rendered as a bare 400."""

    message = "Unrecognized filter value"

    def to_content(self) -> None:
        return None


class ServiceUnavailableError(PetSpotterError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "Service not available"


def error_response(exc: PetSpotterError) -> Response:
    content = exc.to_content()
    if content is None:
        return Response(status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=content)


async def _petspotter_error_handler(request: Request, exc: PetSpotterError) -> Response:
    return error_response(exc)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Drop submitted values: a rejected password must not be echoed back
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Invalid request", "errors": errors},
    )


async def _store_error_handler(request: Request, exc: SQLAlchemyError) -> Response:
    logger.error("Store error on %s %s: %s", request.method, request.url.path, type(exc).__name__)
    store = getattr(request.app.state, "store", None)
    if store is not None and isinstance(exc, DBAPIError) and exc.connection_invalidated:
        store.ready = False
    # The engine clears `ready` when the failure was a lost connection
    if store is not None and not store.ready:
        return error_response(ServiceUnavailableError())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Invalid request"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PetSpotterError, _petspotter_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, _store_error_handler)
