"""Request-scoped dependencies: sessions, repositories, services and identity."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.db import get_session
from blog_api.errors import UnauthenticatedError
from blog_api.managers import decode_access_token
from blog_api.models import UserDB
from blog_api.repositories import BlogRepository, UserRepository
from blog_api.services import AuthService, BlogService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/signin", auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_user_repository(session: SessionDep) -> UserRepository:
    return UserRepository(session)


def get_blog_repository(session: SessionDep) -> BlogRepository:
    return BlogRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
BlogRepoDep = Annotated[BlogRepository, Depends(get_blog_repository)]


def get_auth_service(user_repo: UserRepoDep) -> AuthService:
    return AuthService(user_repo)


def get_blog_service(blog_repo: BlogRepoDep, user_repo: UserRepoDep) -> BlogService:
    return BlogService(blog_repo, user_repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]


async def _resolve_user(token: str | None, user_repo: UserRepository) -> UserDB | None:
    if not token:
        return None
    token_data = decode_access_token(token)
    if token_data is None:
        return None
    return await user_repo.get_by_id(token_data.user_id)


async def get_current_user(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    user_repo: UserRepoDep,
) -> UserDB:
    """
    Resolve the bearer token to a user.

    Raises:
        UnauthenticatedError: Missing, invalid or expired token, or the user no longer exists.
    """
    user = await _resolve_user(token, user_repo)
    if user is None:
        raise UnauthenticatedError
    return user


async def get_optional_user(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    user_repo: UserRepoDep,
) -> UserDB | None:
    """Like ``get_current_user``, but anything short of a valid token means anonymous."""
    return await _resolve_user(token, user_repo)


UserDBDep = Annotated[UserDB, Depends(get_current_user)]
OptionalUserDep = Annotated[UserDB | None, Depends(get_optional_user)]


@dataclass(frozen=True)
class BlogListQuery:
    """
    Raw public listing parameters.

    Paging values stay strings so that bad input falls back to the defaults
    instead of failing the request.
    """

    page: str | None = None
    limit: str | None = None
    order_by: str | None = None
    title: str | None = None
    tags: str | None = None
    author: str | None = None


def get_blog_list_query(
    page: Annotated[str | None, Query(description="Page number, default 1")] = None,
    limit: Annotated[str | None, Query(description="Page size, default 20")] = None,
    order_by: Annotated[
        str | None,
        Query(description="One of read_count, reading_time, createdAt"),
    ] = None,
    title: Annotated[str | None, Query(description="Case-insensitive title substring")] = None,
    tags: Annotated[str | None, Query(description="Comma-separated tags, any may match")] = None,
    author: Annotated[str | None, Query(description="Author first or last name substring")] = None,
) -> BlogListQuery:
    return BlogListQuery(
        page=page,
        limit=limit,
        order_by=order_by,
        title=title,
        tags=tags,
        author=author,
    )


BlogQueryListDep = Annotated[BlogListQuery, Depends(get_blog_list_query)]


@dataclass(frozen=True)
class OwnBlogListQuery:
    page: str | None = None
    limit: str | None = None
    state: str | None = None


def get_own_blog_list_query(
    page: Annotated[str | None, Query(description="Page number, default 1")] = None,
    limit: Annotated[str | None, Query(description="Page size, default 20")] = None,
    state: Annotated[str | None, Query(description="Only blogs in this state")] = None,
) -> OwnBlogListQuery:
    return OwnBlogListQuery(page=page, limit=limit, state=state)


OwnBlogQueryListDep = Annotated[OwnBlogListQuery, Depends(get_own_blog_list_query)]
