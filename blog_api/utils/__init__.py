"""Utility helper functions."""

from blog_api.utils.helpers import (
    LIKE_ESCAPE_CHAR,
    escape_like,
    get_summary,
    host,
    today_str,
)

__all__ = [
    "LIKE_ESCAPE_CHAR",
    "escape_like",
    "get_summary",
    "host",
    "today_str",
]
