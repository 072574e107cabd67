"""
Blog visibility and ownership rules.

These checks are pure: they look at the requester and the blog and never
touch the database. The ``ensure_*`` variants raise ``ForbiddenError`` so
services can call them inline.
"""

from uuid import UUID

from blog_api.errors import ForbiddenError
from blog_api.models import BLOG_STATE_PUBLISHED, BlogDB


def can_view(requester_id: UUID | None, blog: BlogDB) -> bool:
    """Published blogs are public; drafts are visible to their author only."""
    if blog.state == BLOG_STATE_PUBLISHED:
        return True
    return requester_id is not None and requester_id == blog.author_id


def can_mutate(requester_id: UUID | None, blog: BlogDB) -> bool:
    """Only the author may update, change state or delete a blog."""
    return requester_id is not None and requester_id == blog.author_id


def ensure_can_view(requester_id: UUID | None, blog: BlogDB) -> None:
    if not can_view(requester_id, blog):
        raise ForbiddenError("Access denied")


def ensure_can_mutate(requester_id: UUID | None, blog: BlogDB) -> None:
    if not can_mutate(requester_id, blog):
        raise ForbiddenError("Not authorized to modify this blog")
