"""Account signup and signin."""

from blog_api.errors import InvalidCredentialsError, ValidationFailedError, field_error
from blog_api.managers import (
    create_access_token,
    hash_password,
    verify_and_update_password,
)
from blog_api.models import UserDB
from blog_api.monitoring import get_logger
from blog_api.repositories import UserRepository
from blog_api.schemas import AuthResponse, UserCreate, UserSummary

logger = get_logger(__name__)


class AuthService:
    """Service for creating accounts and exchanging credentials for tokens."""

    def __init__(self, user_repo: UserRepository) -> None:
        self.user_repo = user_repo

    async def signup(self, payload: UserCreate) -> AuthResponse:
        """
        Register a new account and sign it in.

        Raises:
            ValidationFailedError: The email is already registered.
            DuplicateEntryError: The email was registered concurrently.
        """
        if await self.user_repo.email_exists(payload.email):
            raise ValidationFailedError(
                errors=[field_error("email", "Email is already registered", "duplicate")],
            )

        password_hash = await hash_password(payload.password.get_secret_value())
        user = await self.user_repo.create(payload, password_hash)
        logger.info("User signed up", user_id=str(user.id))
        return self.issue_token(user)

    async def authenticate_user(self, email: str, password: str) -> UserDB:
        """
        Check an email and password pair.

        Unknown emails and wrong passwords fail identically. A hash stored
        with outdated parameters is replaced after a successful check.

        Raises:
            InvalidCredentialsError: The pair does not match an account.
        """
        user = await self.user_repo.get_by_email(email)
        is_valid, new_hash = await verify_and_update_password(
            password,
            user.password_hash if user else None,
        )

        if user is None or not is_valid:
            logger.warning("Failed signin attempt", email=email)
            raise InvalidCredentialsError

        if new_hash:
            user = await self.user_repo.update_password_hash(user, new_hash)

        return user

    async def signin(self, email: str, password: str) -> AuthResponse:
        user = await self.authenticate_user(email, password)
        logger.info("User signed in", user_id=str(user.id))
        return self.issue_token(user)

    def issue_token(self, user: UserDB) -> AuthResponse:
        return AuthResponse(
            user=UserSummary.model_validate(user),
            access_token=create_access_token(user.id, user.email),
            token_type="bearer",
        )
