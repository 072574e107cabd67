"""User repository for database operations."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import or_, select
from sqlmodel import col

from blog_api.models.user import UserDB
from blog_api.repositories.base import BaseRepository
from blog_api.schemas.user import UserCreate
from blog_api.utils.helpers import LIKE_ESCAPE_CHAR, escape_like


class UserRepository(BaseRepository[UserDB]):
    """Repository for User database operations."""

    model = UserDB

    async def create(self, user: UserCreate, password_hash: str) -> UserDB:
        """
        Persist a new user.

        Args:
            user: Validated signup payload
            password_hash: Hash of the signup password

        Returns:
            UserDB: Created user

        Raises:
            DuplicateEntryError: If the email is already taken
        """
        db_user = UserDB(
            email=user.email,
            password_hash=password_hash,
            first_name=user.first_name,
            last_name=user.last_name,
        )
        return await self._add_and_refresh(db_user)

    async def get_by_email(self, email: str) -> UserDB | None:
        statement = select(UserDB).where(UserDB.email == email.strip().lower())
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        return await self._check_exists_by_field("email", email.strip().lower())

    async def find_ids_by_name(self, name: str) -> frozenset[UUID]:
        """
        Find users whose first or last name contains ``name``, ignoring case.

        Returns:
            frozenset[UUID]: Matching user IDs, possibly empty.
        """
        pattern = f"%{escape_like(name.strip())}%"
        statement = select(UserDB.id).where(
            or_(
                col(UserDB.first_name).ilike(pattern, escape=LIKE_ESCAPE_CHAR),
                col(UserDB.last_name).ilike(pattern, escape=LIKE_ESCAPE_CHAR),
            ),
        )
        result = await self.session.execute(statement)
        return frozenset(result.scalars().all())

    async def update_password_hash(self, user: UserDB, password_hash: str) -> UserDB:
        user.password_hash = password_hash
        user.updated_at = datetime.now(tz=UTC)
        return await self._add_and_refresh(user)
