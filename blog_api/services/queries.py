"""
Listing query construction.

Turns raw listing parameters into a storage-agnostic ``ListQuery``. Nothing
here touches the database; ``BlogRepository`` translates the predicate.
"""

from dataclasses import dataclass
from math import ceil
from uuid import UUID

from blog_api.configs import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT
from blog_api.models import BLOG_STATE_PUBLISHED

# Wire name -> column name
ORDER_BY_FIELDS = {
    "read_count": "read_count",
    "reading_time": "reading_time",
    "createdAt": "created_at",
}
DEFAULT_ORDER_BY = "createdAt"
SORT_DESCENDING = "desc"

# Paging values are capped to what a signed 64-bit SQL integer (and orjson) can hold
MAX_SQL_INTEGER = 2**63 - 1


@dataclass(frozen=True)
class BlogPredicate:
    """
    Conjunction of blog filters.

    ``author_ids`` is ``None`` when no author filter applies; an empty set
    means the filter matched no user and the query yields nothing.
    """

    state: str | None = None
    author_id: UUID | None = None
    author_ids: frozenset[UUID] | None = None
    title: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class ListFilters:
    """Filters accepted by the public listing."""

    title: str | None = None
    tags: tuple[str, ...] = ()
    author_ids: frozenset[UUID] | None = None


@dataclass(frozen=True)
class ListQuery:
    predicate: BlogPredicate
    sort_key: str
    offset: int
    limit: int
    page: int
    sort_direction: str = SORT_DESCENDING


@dataclass(frozen=True)
class PageMeta:
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PageMeta":
        return cls(total=total, page=page, limit=limit, pages=ceil(total / limit))


def parse_positive_int(value: int | str | None, default: int) -> int:
    """Return ``value`` as a positive int, or ``default`` if it is missing or unusable."""
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def parse_tags(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated tag filter, dropping blanks and repeats."""
    if not raw:
        return ()
    return tuple(dict.fromkeys(tag.strip() for tag in raw.split(",") if tag.strip()))


def resolve_sort_key(order_by: str | None) -> str:
    return ORDER_BY_FIELDS.get(order_by or DEFAULT_ORDER_BY, ORDER_BY_FIELDS[DEFAULT_ORDER_BY])


def _paging(page: int | str | None, limit: int | str | None) -> tuple[int, int, int]:
    page_number = min(parse_positive_int(page, DEFAULT_PAGE), MAX_SQL_INTEGER)
    page_size = min(parse_positive_int(limit, DEFAULT_PAGE_LIMIT), MAX_SQL_INTEGER)
    offset = min((page_number - 1) * page_size, MAX_SQL_INTEGER)
    return page_number, page_size, offset


def build_list_query(
    filters: ListFilters,
    order_by: str | None = None,
    page: int | str | None = None,
    limit: int | str | None = None,
) -> ListQuery:
    """
    Build the public listing query. Only published blogs are ever matched.

    Args:
        filters: Title, tag and resolved author filters
        order_by: One of ``read_count``, ``reading_time``, ``createdAt``
        page: 1-based page number
        limit: Page size

    Returns:
        ListQuery: Predicate, sort and paging for the repository
    """
    page_number, page_size, offset = _paging(page, limit)
    title = filters.title.strip() if filters.title else None
    predicate = BlogPredicate(
        state=BLOG_STATE_PUBLISHED,
        author_ids=filters.author_ids,
        title=title or None,
        tags=filters.tags,
    )
    return ListQuery(
        predicate=predicate,
        sort_key=resolve_sort_key(order_by),
        offset=offset,
        limit=page_size,
        page=page_number,
    )


def build_own_query(
    requester_id: UUID,
    state: str | None = None,
    page: int | str | None = None,
    limit: int | str | None = None,
) -> ListQuery:
    """Build the "my blogs" query: every blog of ``requester_id``, optionally one state."""
    page_number, page_size, offset = _paging(page, limit)
    return ListQuery(
        predicate=BlogPredicate(state=state, author_id=requester_id),
        sort_key=ORDER_BY_FIELDS[DEFAULT_ORDER_BY],
        offset=offset,
        limit=page_size,
        page=page_number,
    )
