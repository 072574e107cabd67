"""
Blog repository for database operations.

This is the only place where a ``BlogPredicate`` is turned into SQL. Tag
intersection needs dialect-specific JSON operators: ``jsonb ?|`` on
PostgreSQL and ``json_each`` on SQLite.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy import ColumnElement, cast, desc, false, func, select, true, update
from sqlalchemy.dialects.postgresql import JSONB, array
from sqlmodel import col

from blog_api.models.blog import BlogDB
from blog_api.repositories.base import BaseRepository
from blog_api.utils.helpers import LIKE_ESCAPE_CHAR, escape_like

if TYPE_CHECKING:
    from blog_api.services.queries import BlogPredicate

SORT_COLUMNS = {
    "created_at": col(BlogDB.created_at),
    "read_count": col(BlogDB.read_count),
    "reading_time": col(BlogDB.reading_time),
}


class BlogRepository(BaseRepository[BlogDB]):
    """Repository for Blog database operations."""

    model = BlogDB

    async def create(self, author_id: UUID, fields: dict[str, Any]) -> BlogDB:
        """
        Persist a new draft.

        Args:
            author_id: Owner of the blog
            fields: Normalized column values (title, description, body, tags, reading_time)

        Raises:
            DuplicateEntryError: If the title is already taken
        """
        db_blog = BlogDB(author_id=author_id, **fields)
        db_blog.updated_at = db_blog.created_at
        return await self._add_and_refresh(db_blog)

    async def apply_changes(self, blog: BlogDB, changes: dict[str, Any]) -> BlogDB:
        """Set ``changes`` on ``blog``, stamp ``updated_at`` and flush."""
        for key, value in changes.items():
            setattr(blog, key, value)
        blog.updated_at = datetime.now(tz=UTC)
        return await self._add_and_refresh(blog)

    async def title_exists(self, title: str, exclude_id: UUID | None = None) -> bool:
        return await self._check_exists_by_field("title", title, exclude_id)

    async def increment_read_count(self, blog_id: UUID) -> None:
        """Add one to ``read_count`` in a single UPDATE statement."""
        statement = (
            update(BlogDB)
            .where(col(BlogDB.id) == blog_id)
            .values(read_count=col(BlogDB.read_count) + 1)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(statement)

    async def reload(self, blog: BlogDB) -> BlogDB:
        await self.session.refresh(blog)
        return blog

    async def find(
        self,
        predicate: "BlogPredicate",
        sort_key: str,
        offset: int,
        limit: int,
    ) -> list[BlogDB]:
        """
        Return one page of blogs matching ``predicate``, newest or largest first.

        Ties on the sort column are broken by ID so pages never overlap.
        """
        sort_column = SORT_COLUMNS.get(sort_key, SORT_COLUMNS["created_at"])
        statement = (
            select(BlogDB)
            .where(*self._conditions(predicate))
            .order_by(desc(sort_column), desc(col(BlogDB.id)))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count(self, predicate: "BlogPredicate") -> int:
        statement = select(func.count()).select_from(BlogDB).where(*self._conditions(predicate))
        result = await self.session.execute(statement)
        return result.scalar() or 0

    def _conditions(self, predicate: "BlogPredicate") -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = [true()]

        if predicate.state is not None:
            conditions.append(col(BlogDB.state) == predicate.state)
        if predicate.author_id is not None:
            conditions.append(col(BlogDB.author_id) == predicate.author_id)
        if predicate.author_ids is not None:
            conditions.append(
                col(BlogDB.author_id).in_(predicate.author_ids) if predicate.author_ids else false(),
            )
        if predicate.title:
            pattern = f"%{escape_like(predicate.title)}%"
            conditions.append(col(BlogDB.title).ilike(pattern, escape=LIKE_ESCAPE_CHAR))
        if predicate.tags:
            conditions.append(self._tags_intersect(list(predicate.tags)))

        return conditions

    def _tags_intersect(self, tags: list[str]) -> ColumnElement[bool]:
        if self.session.get_bind().dialect.name == "postgresql":
            return cast(BlogDB.tags, JSONB).has_any(array(tags))

        tag_values = func.json_each(BlogDB.tags).table_valued("value").alias("tag_values")
        return select(tag_values.c.value).where(tag_values.c.value.in_(tags)).exists()
