"""Validation error types and the request-shape validation handler."""

from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from blog_api.errors.base import BaseAppError, create_exception_handler
from blog_api.monitoring import get_logger
from blog_api.utils.helpers import host

logger = get_logger(__name__)

type FieldError = dict[str, str]


def field_error(field: str, message: str, error_type: str = "value_error") -> FieldError:
    """Build one entry of a structured validation error list."""
    return {"field": field, "message": message, "type": error_type}


class ValidationFailedError(BaseAppError):
    """Raised when input fails validation; carries the structured error list."""

    def __init__(
        self,
        detail: str = "Validation failed",
        errors: list[FieldError] | None = None,
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)
        self.errors = errors or []


validation_failed_exception_handler = create_exception_handler(logger)


def _serializable_ctx(ctx: dict[str, Any]) -> dict[str, Any]:
    return {key: str(value) if isinstance(value, Exception) else value for key, value in ctx.items()}


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle request validation errors with the same body shape as ValidationFailedError.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with formatted validation errors.
    """
    exec_error = cast(RequestValidationError, exc)

    formatted_errors = []
    for error in exec_error.errors():
        formatted_error: dict[str, Any] = {
            # Skip the location prefix ('body', 'query', 'path')
            "field": ".".join(str(loc) for loc in error.get("loc", [])[1:]),
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "validation_error"),
        }
        if "ctx" in error:
            formatted_error["context"] = _serializable_ctx(error["ctx"])
        formatted_errors.append(formatted_error)

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {formatted_errors}",
    )

    return ORJSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation failed",
            "errors": formatted_errors,
        },
    )
