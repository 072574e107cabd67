"""
Blog schemas.

Request models only describe shape. Content rules (non-blank title and
body, tag hygiene, fields that may not be patched) are checked by the blog
service so that every failure comes back as one structured error list.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from blog_api.schemas.user import UserSummary


class BlogCreate(BaseModel):
    """Blog creation payload."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(
        ...,
        description="Blog title (unique)",
        examples=["Notes on the Analytical Engine"],
    )
    description: str | None = Field(
        default=None,
        description="Short description (optional)",
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Free-text labels",
        examples=[["history", "computing"]],
    )
    body: str = Field(
        ...,
        description="Blog body",
        examples=["The engine weaves algebraic patterns just as the loom weaves flowers."],
    )


class BlogUpdate(BaseModel):
    """
    Partial blog update.

    Unknown keys are kept in ``model_extra`` so the service can reject them
    by name instead of silently dropping them.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "title": "Notes on the Analytical Engine, revised",
                "tags": ["history"],
            },
        },
    )

    title: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    body: str | None = None


class BlogStateUpdate(BaseModel):
    """State change payload. The value is checked by the blog service."""

    state: str = Field(..., description="Target state", examples=["published"])


class BlogResponse(BaseModel):
    """Blog response model."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    author_id: UUID = Field(alias="authorId")
    author: UserSummary | None = None
    title: str
    description: str | None = None
    body: str
    state: str
    read_count: int = Field(alias="readCount")
    reading_time: int = Field(alias="readingTime")
    tags: list[str]
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class BlogPage(BaseModel):
    """One page of a blog listing."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[BlogResponse]
    count_in_page: int = Field(alias="countInPage")
    total: int
    page: int
    pages: int
