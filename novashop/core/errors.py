# novashop/core/errors.py
"""
Application error taxonomy and the FastAPI handlers that render it.

Services raise these instead of HTTPException so that the HTTP mapping
lives in one place. Every error body has the shape:

    {"Status": <label>, "message": <human readable text>}
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map to a client-visible response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    label: str = "Error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "All fields are required."


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    label = "Exists"
    default_message = "User already exists. Please log in."


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password."


class MissingTokenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "User not authenticated!"


class InvalidTokenError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid token"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied for this role"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StorageUnavailableError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Image storage is not configured"


class StoreError(AppError):
    default_message = "Internal database error"


def _first_error_message(errors: list[dict]) -> str | None:
    if not errors:
        return None
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def validate_form(model: type[BaseModel], data: dict) -> BaseModel:
    """
    Build `model` from multipart form values, raising ValidationError
    instead of pydantic's own exception.
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(_first_error_message(exc.errors()))


def _render(exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"Status": exc.label, "message": exc.message},
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _render(exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Collapse FastAPI's 422 payload into a single 400 ValidationError.

    The first failing field is reported, e.g. "body.email: field required".
    """
    return _render(ValidationError(_first_error_message(list(exc.errors()))))


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Log raw database errors for operators; never leak them to clients."""
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return _render(StoreError())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
