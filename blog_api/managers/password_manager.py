"""
Password hashing module using Argon2 with passlib's CryptContext.

Hashing is CPU bound, so the async helpers run it in a worker pool to keep
the event loop responsive. Stored hashes are opaque: only ``verify`` and
``verify_and_update`` ever look at them.
"""

from asyncio import get_running_loop
from concurrent.futures import ThreadPoolExecutor

from passlib.context import CryptContext
from passlib.exc import InternalBackendError

from blog_api.configs import CONFIG_MAP, settings
from blog_api.decorators import with_retry
from blog_api.errors import PasswordHashingError, PasswordRehashError
from blog_api.monitoring import get_logger

executor = ThreadPoolExecutor(max_workers=4)
logger = get_logger(__name__)


class PasswordHasher:
    """
    Salted, slow, one-way password hashing.

    Argon2id is the primary scheme. pbkdf2_sha256 hashes are still accepted
    but flagged for upgrade on the next successful verification.
    """

    def __init__(self, level: str | None = None) -> None:
        self.level = level or settings.PASSWORD_SECURITY_LEVEL
        params = CONFIG_MAP[self.level]
        self.pwd_context = CryptContext(
            schemes=["argon2", "pbkdf2_sha256"],
            deprecated="pbkdf2_sha256",
            argon2__memory_cost=params.memory_cost,
            argon2__time_cost=params.time_cost,
            argon2__parallelism=params.parallelism,
        )
        logger.info("PasswordHasher initialized", scheme="argon2", level=self.level)

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password.

        Raises:
            ValueError: If the password is empty.
            PasswordHashingError: If the backend fails.
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg)

        try:
            return self.pwd_context.hash(password)
        except (ValueError, InternalBackendError, UnicodeError) as e:
            logger.exception("Failed to hash password", level=self.level)
            mssg = "Failed to hash password"
            raise PasswordHashingError(mssg) from e

    def verify(self, password: str, hashed_password: str) -> bool:
        """Return True when ``password`` matches ``hashed_password``."""
        if not isinstance(hashed_password, str) or not hashed_password.strip():
            logger.warning("Invalid hash format provided")
            return False

        try:
            return self.pwd_context.verify(password, hashed_password)
        except ValueError:
            logger.exception("Stored hash is corrupted or has an unknown format")
            return False

    def check_needs_rehash(self, hashed_password: str) -> bool:
        try:
            return self.pwd_context.needs_update(hashed_password)
        except ValueError:
            logger.exception("Error checking hash currency", level=self.level)
            return False

    def verify_and_update(
        self,
        password: str,
        hashed_password: str | None,
    ) -> tuple[bool, str | None]:
        """
        Verify a password and return a replacement hash if the stored one is outdated.

        A missing hash still costs one verification so that unknown emails
        and wrong passwords take about the same time.

        Returns:
            tuple[bool, str | None]: match result, and a new hash when an
            upgrade is due.
        """
        if hashed_password is None:
            self.pwd_context.dummy_verify()
            return False, None

        if not self.verify(password, hashed_password):
            return False, None

        new_hash = None
        if self.check_needs_rehash(hashed_password):
            try:
                new_hash = self.hash(password)
                logger.info("Password hash upgraded", level=self.level)
            except PasswordHashingError as e:
                mssg = "Failed to rehash password"
                raise PasswordRehashError(mssg) from e

        return True, new_hash


_default_hasher: PasswordHasher | None = None


def get_password_hasher() -> PasswordHasher:
    """Return the process-wide hasher, creating it on first use."""
    global _default_hasher  # noqa: PLW0603
    if _default_hasher is None:
        _default_hasher = PasswordHasher()
    return _default_hasher


@with_retry(base_delay=1, max_delay=10, exec_retry=PasswordHashingError)
async def hash_password(password: str) -> str:
    """Hash ``password`` off the event loop."""
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().hash,
        password,
    )


@with_retry(base_delay=1, max_delay=10, exec_retry=PasswordRehashError)
async def verify_and_update_password(
    password: str,
    hashed_password: str | None,
) -> tuple[bool, str | None]:
    """Verify ``password`` off the event loop, returning an upgraded hash if due."""
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().verify_and_update,
        password,
        hashed_password,
    )
