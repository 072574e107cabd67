"""
Blog lifecycle: creation, reads, edits, publishing and deletion.

Every operation receives the requester explicitly. Lookups happen before
ownership checks, so a missing blog is a 404 for everyone and an existing
one owned by someone else is a 403. The one exception is ``change_state``,
which rejects an unknown state before looking anything up.
"""

from math import ceil
from uuid import UUID

from blog_api.auth import ensure_can_mutate, ensure_can_view
from blog_api.configs import WORDS_PER_MINUTE
from blog_api.errors import FieldError, ValidationFailedError, field_error
from blog_api.models import BLOG_STATE_DRAFT, BLOG_STATE_PUBLISHED, BlogDB, UserDB
from blog_api.monitoring import get_logger
from blog_api.repositories import BlogRepository, UserRepository
from blog_api.schemas import BlogCreate, BlogPage, BlogResponse, BlogUpdate, UserSummary
from blog_api.services.queries import (
    ListFilters,
    ListQuery,
    PageMeta,
    build_list_query,
    build_own_query,
    parse_tags,
)

logger = get_logger(__name__)

BLOG_STATES = (BLOG_STATE_DRAFT, BLOG_STATE_PUBLISHED)
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 500

# Compared after dropping underscores and case, so readCount, read_count
# and READ_COUNT are all caught.
PROTECTED_FIELDS = frozenset({"author", "authorid", "readcount", "readingtime", "state"})


def calculate_word_count(body: str) -> int:
    return len(body.split())


def calculate_reading_time(body: str) -> int:
    """Minutes to read ``body`` at 200 words per minute, rounded up."""
    return ceil(calculate_word_count(body) / WORDS_PER_MINUTE)


def normalize_tags(tags: list[str] | None) -> list[str]:
    """Trim labels, drop blanks and keep the first occurrence of each."""
    if not tags:
        return []
    return list(dict.fromkeys(tag.strip() for tag in tags if tag.strip()))


def _check_title(title: str | None, errors: list[FieldError]) -> None:
    if title is None or not title.strip():
        errors.append(field_error("title", "Title is required", "missing"))
    elif len(title.strip()) > TITLE_MAX_LENGTH:
        errors.append(
            field_error("title", f"Title must be at most {TITLE_MAX_LENGTH} characters", "string_too_long"),
        )


def _check_body(body: str | None, errors: list[FieldError]) -> None:
    if body is None or not body.strip():
        errors.append(field_error("body", "Body is required", "missing"))


def _check_description(description: str | None, errors: list[FieldError]) -> None:
    if description is not None and len(description.strip()) > DESCRIPTION_MAX_LENGTH:
        errors.append(
            field_error(
                "description",
                f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters",
                "string_too_long",
            ),
        )


def validate_blog_create(payload: BlogCreate) -> list[FieldError]:
    errors: list[FieldError] = []
    _check_title(payload.title, errors)
    _check_body(payload.body, errors)
    _check_description(payload.description, errors)
    return errors


def validate_blog_update(patch: BlogUpdate) -> list[FieldError]:
    """
    Check a partial update.

    Derived and ownership fields may never be patched, and unknown keys are
    reported rather than ignored. Title and body may be omitted but not blanked.
    """
    errors: list[FieldError] = []

    for key in patch.model_extra or {}:
        if key.replace("_", "").lower() in PROTECTED_FIELDS:
            errors.append(field_error(key, f"{key} cannot be updated", "forbidden_field"))
        else:
            errors.append(field_error(key, "Unknown field", "extra_forbidden"))

    provided = patch.model_fields_set
    if "title" in provided:
        _check_title(patch.title, errors)
    if "body" in provided:
        _check_body(patch.body, errors)
    if "description" in provided:
        _check_description(patch.description, errors)

    return errors


def _duplicate_title_error() -> ValidationFailedError:
    return ValidationFailedError(
        errors=[field_error("title", "A blog with this title already exists", "duplicate")],
    )


def to_response(blog: BlogDB, author: UserDB | None = None) -> BlogResponse:
    response = BlogResponse.model_validate(blog)
    if author is not None:
        response.author = UserSummary.model_validate(author)
    return response


class BlogService:
    """Service for blog lifecycle operations."""

    def __init__(self, blog_repo: BlogRepository, user_repo: UserRepository) -> None:
        self.blog_repo = blog_repo
        self.user_repo = user_repo

    async def create(self, author_id: UUID, payload: BlogCreate) -> BlogResponse:
        """
        Create a draft owned by ``author_id``.

        Raises:
            ValidationFailedError: Blank title or body, or the title is taken.
            DuplicateEntryError: The title was taken concurrently.
        """
        if errors := validate_blog_create(payload):
            raise ValidationFailedError(errors=errors)

        title = payload.title.strip()
        if await self.blog_repo.title_exists(title):
            raise _duplicate_title_error()

        blog = await self.blog_repo.create(
            author_id,
            {
                "title": title,
                "description": (payload.description or "").strip() or None,
                "body": payload.body,
                "tags": normalize_tags(payload.tags),
                "state": BLOG_STATE_DRAFT,
                "read_count": 0,
                "reading_time": calculate_reading_time(payload.body),
            },
        )
        logger.info("Blog created", blog_id=str(blog.id), author_id=str(author_id))
        return to_response(blog)

    async def record_view(self, requester_id: UUID | None, blog_id: UUID) -> BlogResponse:
        """
        Read a single blog, counting the view.

        Every authorized read counts, the author's own included.

        Raises:
            RecordNotFoundError: No such blog.
            ForbiddenError: The blog is a draft and the requester is not its author.
        """
        blog = await self.blog_repo.get_or_raise(blog_id)
        ensure_can_view(requester_id, blog)

        await self.blog_repo.increment_read_count(blog.id)
        blog = await self.blog_repo.reload(blog)
        author = await self.user_repo.get_by_id(blog.author_id)
        return to_response(blog, author)

    async def update(
        self,
        requester_id: UUID,
        blog_id: UUID,
        patch: BlogUpdate,
    ) -> BlogResponse:
        """
        Apply a partial update from the blog's author.

        ``reading_time`` is recomputed only when the body is part of the patch.

        Raises:
            RecordNotFoundError: No such blog.
            ForbiddenError: Requester is not the author.
            ValidationFailedError: Bad values, protected or unknown fields, or a taken title.
        """
        blog = await self.blog_repo.get_or_raise(blog_id)
        ensure_can_mutate(requester_id, blog)

        if errors := validate_blog_update(patch):
            raise ValidationFailedError(errors=errors)

        provided = patch.model_fields_set
        changes: dict[str, object] = {}

        if "title" in provided and patch.title is not None:
            title = patch.title.strip()
            if title != blog.title and await self.blog_repo.title_exists(title, exclude_id=blog.id):
                raise _duplicate_title_error()
            changes["title"] = title
        if "description" in provided:
            changes["description"] = (patch.description or "").strip() or None
        if "tags" in provided:
            changes["tags"] = normalize_tags(patch.tags)
        if "body" in provided and patch.body is not None:
            changes["body"] = patch.body
            changes["reading_time"] = calculate_reading_time(patch.body)

        blog = await self.blog_repo.apply_changes(blog, changes)
        logger.info("Blog updated", blog_id=str(blog.id), fields=sorted(changes))
        return to_response(blog)

    async def change_state(
        self,
        requester_id: UUID,
        blog_id: UUID,
        new_state: str,
    ) -> BlogResponse:
        """
        Publish or unpublish a blog. Asking for the current state changes nothing.

        Raises:
            ValidationFailedError: ``new_state`` is not draft or published.
            RecordNotFoundError: No such blog.
            ForbiddenError: Requester is not the author.
        """
        if new_state not in BLOG_STATES:
            raise ValidationFailedError(
                errors=[
                    field_error(
                        "state",
                        f"State must be one of: {', '.join(BLOG_STATES)}",
                        "enum",
                    ),
                ],
            )

        blog = await self.blog_repo.get_or_raise(blog_id)
        ensure_can_mutate(requester_id, blog)

        if blog.state == new_state:
            return to_response(blog)

        blog = await self.blog_repo.apply_changes(blog, {"state": new_state})
        event = "Blog published" if new_state == BLOG_STATE_PUBLISHED else "Blog unpublished"
        logger.info(event, blog_id=str(blog.id))
        return to_response(blog)

    async def delete(self, requester_id: UUID, blog_id: UUID) -> None:
        blog = await self.blog_repo.get_or_raise(blog_id)
        ensure_can_mutate(requester_id, blog)

        await self.blog_repo.delete(blog)
        logger.info("Blog deleted", blog_id=str(blog_id), author_id=str(requester_id))

    async def list_published(
        self,
        *,
        title: str | None = None,
        tags: str | None = None,
        author: str | None = None,
        order_by: str | None = None,
        page: int | str | None = None,
        limit: int | str | None = None,
    ) -> BlogPage:
        """
        List published blogs with author summaries.

        ``author`` matches first or last names; when no user matches, the
        page is empty.
        """
        author_ids = None
        if author and author.strip():
            author_ids = await self.user_repo.find_ids_by_name(author)

        query = build_list_query(
            ListFilters(title=title, tags=parse_tags(tags), author_ids=author_ids),
            order_by=order_by,
            page=page,
            limit=limit,
        )
        return await self._page(query, with_authors=True)

    async def list_own(
        self,
        requester_id: UUID,
        *,
        state: str | None = None,
        page: int | str | None = None,
        limit: int | str | None = None,
    ) -> BlogPage:
        """List the requester's blogs in every state, or only ``state``."""
        query = build_own_query(requester_id, state=state or None, page=page, limit=limit)
        return await self._page(query, with_authors=False)

    async def _page(self, query: ListQuery, *, with_authors: bool) -> BlogPage:
        total = await self.blog_repo.count(query.predicate)
        blogs = await self.blog_repo.find(
            query.predicate,
            sort_key=query.sort_key,
            offset=query.offset,
            limit=query.limit,
        )

        authors: dict[UUID, UserDB] = {}
        if with_authors:
            authors = await self.user_repo.get_many([blog.author_id for blog in blogs])

        items = [to_response(blog, authors.get(blog.author_id)) for blog in blogs]
        meta = PageMeta.build(total, query.page, query.limit)
        return BlogPage(
            items=items,
            count_in_page=len(items),
            total=meta.total,
            page=meta.page,
            pages=meta.pages,
        )
