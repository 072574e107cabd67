"""Database models for the application."""

from blog_api.models.blog import BLOG_STATE_DRAFT, BLOG_STATE_PUBLISHED, BlogDB
from blog_api.models.user import UserDB

__all__ = ["BLOG_STATE_DRAFT", "BLOG_STATE_PUBLISHED", "BlogDB", "UserDB"]
