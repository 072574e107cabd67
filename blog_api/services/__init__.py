from blog_api.services.auth import AuthService
from blog_api.services.blog import BlogService, calculate_reading_time, calculate_word_count
from blog_api.services.queries import (
    BlogPredicate,
    ListFilters,
    ListQuery,
    PageMeta,
    build_list_query,
    build_own_query,
)

__all__ = [
    "AuthService",
    "BlogPredicate",
    "BlogService",
    "ListFilters",
    "ListQuery",
    "PageMeta",
    "build_list_query",
    "build_own_query",
    "calculate_reading_time",
    "calculate_word_count",
]
