"""Blog database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, DateTime, Index, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

BLOG_STATE_DRAFT = "draft"
BLOG_STATE_PUBLISHED = "published"


class BlogDB(SQLModel, table=True):
    """
    Blog database model.

    ``reading_time`` is derived from ``body`` and ``read_count`` only moves
    through the blog service; neither is ever written from request data.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    __table_args__ = (
        Index("ix_blogs_state_created", "state", "created_at"),
        Index("ix_blogs_author_state", "author_id", "state"),
    )

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog ID",
    )

    author_id: UUID = Field(
        sa_column=Column(
            "author_id",
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Author ID (foreign key to users.id)",
    )

    title: str = Field(
        sa_column=Column(String(200), unique=True, nullable=False, index=True),
        description="Blog title (unique)",
    )
    description: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Short description",
    )
    body: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Blog body",
    )

    state: str = Field(
        default=BLOG_STATE_DRAFT,
        sa_column=Column(String(20), nullable=False, index=True),
        description="Blog state (draft, published)",
    )
    read_count: int = Field(
        default=0,
        nullable=False,
        description="Number of authorized single-blog reads",
    )
    reading_time: int = Field(
        default=0,
        nullable=False,
        description="Estimated reading time in minutes",
    )

    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False),
        description="Blog tags",
    )

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "author_id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Notes on the Analytical Engine",
                "description": "A short tour",
                "body": "The engine weaves algebraic patterns...",
                "state": "draft",
                "read_count": 0,
                "reading_time": 1,
                "tags": ["history", "computing"],
            },
        },
    )
