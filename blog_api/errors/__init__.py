from blog_api.errors.auth import (
    ForbiddenError,
    InvalidCredentialsError,
    UnauthenticatedError,
    UserAuthenticationError,
    auth_exception_handler,
)
from blog_api.errors.base import BaseAppError, create_exception_handler, create_internal_error_handler
from blog_api.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
    database_exception_handler,
)
from blog_api.errors.password_hasher import (
    PasswordHashingError,
    PasswordRehashError,
    password_hashing_exception_handler,
)
from blog_api.errors.validation import (
    FieldError,
    ValidationFailedError,
    field_error,
    validation_exception_handler,
    validation_failed_exception_handler,
)

__all__ = [
    "BaseAppError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DuplicateEntryError",
    "FieldError",
    "ForbiddenError",
    "InvalidCredentialsError",
    "PasswordHashingError",
    "PasswordRehashError",
    "RecordNotFoundError",
    "UnauthenticatedError",
    "UserAuthenticationError",
    "ValidationFailedError",
    "auth_exception_handler",
    "create_exception_handler",
    "create_internal_error_handler",
    "database_exception_handler",
    "field_error",
    "password_hashing_exception_handler",
    "validation_exception_handler",
    "validation_failed_exception_handler",
]
