from blog_api.schemas.auth import AuthResponse, TokenData
from blog_api.schemas.blog import (
    BlogCreate,
    BlogPage,
    BlogResponse,
    BlogStateUpdate,
    BlogUpdate,
)
from blog_api.schemas.health import HealthCheckResponse
from blog_api.schemas.user import UserCreate, UserSignin, UserSummary

__all__ = [
    "AuthResponse",
    "BlogCreate",
    "BlogPage",
    "BlogResponse",
    "BlogStateUpdate",
    "BlogUpdate",
    "HealthCheckResponse",
    "TokenData",
    "UserCreate",
    "UserSignin",
    "UserSummary",
]
