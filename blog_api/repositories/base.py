"""Base repository for database operations."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from blog_api.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
)
from blog_api.monitoring import get_logger

logger = get_logger(__name__)

type FilterValue = str | int | float | bool | UUID | datetime | None

UNIQUE_MARKERS = ("unique", "duplicate")


class BaseRepository[ModelT: SQLModel]:
    """
    Common persistence operations shared by entity repositories.

    Repositories flush but never commit; the surrounding transaction
    (see ``blog_api.db.transaction``) owns commit and rollback.

    Attributes:
        model: The SQLModel table model.
        id_field: Name of the primary key attribute.
    """

    model: type[ModelT]
    id_field: str = "id"

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        id_column = getattr(self.model, self.id_field)
        statement = select(self.model).where(id_column == record_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_or_raise(self, record_id: UUID) -> ModelT:
        """
        Get a record by ID.

        Raises:
            RecordNotFoundError: If no record has this ID.
        """
        record = await self.get_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(
                detail=f"{self.resource_name} not found",
            )
        return record

    async def get_many(self, record_ids: list[UUID]) -> dict[UUID, ModelT]:
        """Load several records at once, keyed by ID. Missing IDs are omitted."""
        if not record_ids:
            return {}
        id_column = getattr(self.model, self.id_field)
        statement = select(self.model).where(id_column.in_(set(record_ids)))
        result = await self.session.execute(statement)
        return {getattr(record, self.id_field): record for record in result.scalars().all()}

    async def delete(self, record: ModelT) -> None:
        await self.session.delete(record)
        await self.session.flush()

    @property
    def resource_name(self) -> str:
        return self.model.__name__.removesuffix("DB")

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record, flush it and reload server-side values.

        Raises:
            DuplicateEntryError: If a unique constraint is violated.
            DatabaseError: For other integrity errors.
            DatabaseConnectionError: For any other driver failure.
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            logger.warning("Integrity error while saving", model=self.resource_name, error=error_msg)
            if any(marker in error_msg.lower() for marker in UNIQUE_MARKERS):
                raise DuplicateEntryError(
                    detail=f"{self.resource_name} already exists",
                ) from e
            raise DatabaseError from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception("Failed to save record", model=self.resource_name)
            raise DatabaseConnectionError from e
        return record

    async def _check_exists_by_field(
        self,
        field_name: str,
        value: FilterValue,
        exclude_id: UUID | None = None,
    ) -> bool:
        """
        Check if a record exists with a specific field value.

        Args:
            field_name: Name of the field to check
            value: Value to check for
            exclude_id: Optional ID to exclude from check (for updates)

        Returns:
            bool: True if record exists, False otherwise
        """
        field = getattr(self.model, field_name)
        statement = select(1).where(field == value)

        if exclude_id is not None:
            id_column = getattr(self.model, self.id_field)
            statement = statement.where(id_column != exclude_id)

        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None
