from collections.abc import Awaitable, Callable
from logging import Logger

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from structlog.stdlib import BoundLogger

from blog_api.configs.settings import DEFAULT_ERROR_MESSAGE
from blog_api.utils.helpers import host

# Attributes consumed by the handler itself rather than echoed in the body
RESERVED_ATTRS = frozenset({"status_code", "detail", "headers"})


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = DEFAULT_ERROR_MESSAGE,
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
        self.headers = headers

    def __str__(self) -> str:
        return self.detail


def create_exception_handler(
    logger: Logger | BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
        detail = getattr(exc, "detail", DEFAULT_ERROR_MESSAGE)
        headers = getattr(exc, "headers", None)

        logger.warning(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")

        # Extra attributes (e.g. a validation error list) ride along in the body
        content = {"detail": detail}
        content.update(
            {k: v for k, v in exc.__dict__.items() if k not in RESERVED_ATTRS},
        )

        return ORJSONResponse(content=content, status_code=status_code, headers=headers)

    return handler


def create_internal_error_handler(
    logger: Logger | BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create the catch-all handler for uncategorized failures.

    The original exception is logged with its traceback; the caller only
    ever sees a generic message.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        logger.exception(
            f"Unhandled error for ip: {host(request)} for endpoint {request.url.path}",
        )
        return ORJSONResponse(
            content={"detail": DEFAULT_ERROR_MESSAGE},
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return handler
