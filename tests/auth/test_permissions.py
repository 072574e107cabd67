"""Tests for blog visibility and ownership rules."""

from uuid import uuid4

import pytest

from blog_api.auth import can_mutate, can_view, ensure_can_mutate, ensure_can_view
from blog_api.errors import ForbiddenError
from blog_api.models import BLOG_STATE_DRAFT, BLOG_STATE_PUBLISHED, BlogDB


def make_blog(state: str = BLOG_STATE_DRAFT) -> BlogDB:
    return BlogDB(author_id=uuid4(), title="Title", body="Body", state=state)


class TestCanView:
    def test_published_visible_to_anonymous(self) -> None:
        assert can_view(None, make_blog(BLOG_STATE_PUBLISHED))

    def test_published_visible_to_other_user(self) -> None:
        assert can_view(uuid4(), make_blog(BLOG_STATE_PUBLISHED))

    def test_draft_hidden_from_anonymous(self) -> None:
        assert not can_view(None, make_blog())

    def test_draft_hidden_from_other_user(self) -> None:
        assert not can_view(uuid4(), make_blog())

    def test_draft_visible_to_author(self) -> None:
        blog = make_blog()
        assert can_view(blog.author_id, blog)


class TestCanMutate:
    def test_author_may_mutate(self) -> None:
        blog = make_blog(BLOG_STATE_PUBLISHED)
        assert can_mutate(blog.author_id, blog)

    def test_other_user_may_not_mutate_published(self) -> None:
        """Being able to read a blog does not grant edit rights."""
        assert not can_mutate(uuid4(), make_blog(BLOG_STATE_PUBLISHED))

    def test_anonymous_may_not_mutate(self) -> None:
        assert not can_mutate(None, make_blog())

    def test_checks_do_not_modify_blog(self) -> None:
        blog = make_blog()
        before = blog.model_dump()
        can_view(uuid4(), blog)
        can_mutate(uuid4(), blog)
        assert blog.model_dump() == before


class TestEnsureHelpers:
    def test_ensure_can_view_raises_forbidden(self) -> None:
        with pytest.raises(ForbiddenError) as exc_info:
            ensure_can_view(uuid4(), make_blog())
        assert exc_info.value.status_code == 403

    def test_ensure_can_mutate_raises_forbidden(self) -> None:
        with pytest.raises(ForbiddenError):
            ensure_can_mutate(uuid4(), make_blog())

    def test_ensure_helpers_pass_for_author(self) -> None:
        blog = make_blog()
        ensure_can_view(blog.author_id, blog)
        ensure_can_mutate(blog.author_id, blog)
