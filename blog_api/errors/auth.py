"""Authentication and authorization errors."""

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from blog_api.configs.settings import INVALID_CREDENTIALS_MESSAGE
from blog_api.errors.base import BaseAppError, create_exception_handler
from blog_api.monitoring import get_logger

logger = get_logger(__name__)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code, headers=BEARER_CHALLENGE)


class UnauthenticatedError(UserAuthenticationError):
    """Raised when a route needs an identity and none (or an invalid one) was sent."""

    def __init__(self, detail: str = "Not authorized to access this route") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED)


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when email or password is wrong. Never says which."""

    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS_MESSAGE, HTTP_401_UNAUTHORIZED)


class ForbiddenError(BaseAppError):
    """Raised when an authenticated identity may not act on a resource."""

    def __init__(self, detail: str = "Access denied") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


auth_exception_handler = create_exception_handler(logger)
