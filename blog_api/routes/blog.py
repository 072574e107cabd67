"""
Blog Routes.

Summary
-------
Endpoints include:
  - Create blog (draft)
  - List published blogs (search, filter, sort, paginate)
  - List the caller's own blogs
  - Get blog by id (counts a read)
  - Update blog
  - Publish / unpublish blog
  - Delete blog

Authentication
--------------
Mutations and the caller's own listing need a bearer token. Reading a single
blog accepts an optional token so authors can see their drafts.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from blog_api.dependencies import (
    BlogQueryListDep,
    BlogServiceDep,
    OptionalUserDep,
    OwnBlogQueryListDep,
    UserDBDep,
)
from blog_api.schemas import BlogCreate, BlogPage, BlogResponse, BlogStateUpdate, BlogUpdate

router = APIRouter(prefix="/api/blogs", tags=["📝 Blogs"])

BLOG_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "authorId": "123e4567-e89b-12d3-a456-426614174111",
    "title": "Notes on the Analytical Engine",
    "description": "A short tour",
    "body": "The engine weaves algebraic patterns...",
    "state": "draft",
    "readCount": 0,
    "readingTime": 1,
    "tags": ["history", "computing"],
    "createdAt": "2025-01-01T00:00:00Z",
    "updatedAt": "2025-01-01T00:00:00Z",
}

PAGE_EXAMPLE = {
    "items": [{**BLOG_EXAMPLE, "state": "published"}],
    "countInPage": 1,
    "total": 1,
    "page": 1,
    "pages": 1,
}

UNAUTHORIZED = {
    "description": "Missing or invalid token",
    "content": {"application/json": {"example": {"detail": "Not authorized to access this route"}}},
}
FORBIDDEN = {
    "description": "Not the author",
    "content": {"application/json": {"example": {"detail": "Not authorized to modify this blog"}}},
}
NOT_FOUND = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Blog not found"}}},
}
VALIDATION_FAILED = {
    "description": "Validation failed",
    "content": {
        "application/json": {
            "example": {
                "detail": "Validation failed",
                "errors": [{"field": "title", "message": "Title is required", "type": "missing"}],
            },
        },
    },
}


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new blog post",
    description="Create a draft owned by the caller. Reading time is computed from the body.",
    responses={
        201: {"content": {"application/json": {"example": BLOG_EXAMPLE}}},
        400: VALIDATION_FAILED,
        401: UNAUTHORIZED,
        409: {
            "description": "Title taken",
            "content": {"application/json": {"example": {"detail": "Blog already exists"}}},
        },
    },
    operation_id="blogs_create",
)
async def create_blog(
    blog: Annotated[
        BlogCreate,
        Body(
            examples=[
                {
                    "title": "Notes on the Analytical Engine",
                    "description": "A short tour",
                    "tags": ["history", "computing"],
                    "body": "The engine weaves algebraic patterns...",
                },
            ],
        ),
    ],
    user: UserDBDep,
    service: BlogServiceDep,
) -> BlogResponse:
    """
    Create a new blog post.

    Parameters
    ----------
    blog : BlogCreate
        Blog input payload.
    user : UserDB
        Authenticated author.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogResponse
        Created draft.
    """
    return await service.create(user.id, blog)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=BlogPage,
    summary="List published blogs",
    description=(
        "Published blogs only, newest first unless `order_by` is `read_count` or "
        "`reading_time`. Filter by title substring, any of several comma-separated "
        "tags, or author first/last name."
    ),
    responses={200: {"content": {"application/json": {"example": PAGE_EXAMPLE}}}},
    operation_id="blogs_list_published",
)
async def list_published_blogs(
    query: BlogQueryListDep,
    service: BlogServiceDep,
) -> BlogPage:
    """
    List published blogs.

    Parameters
    ----------
    query : BlogListQuery
        Raw paging, sort and filter parameters.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogPage
        One page of published blogs with author summaries.
    """
    return await service.list_published(
        title=query.title,
        tags=query.tags,
        author=query.author,
        order_by=query.order_by,
        page=query.page,
        limit=query.limit,
    )


@router.get(
    "/user/me",
    response_class=ORJSONResponse,
    response_model=BlogPage,
    summary="List my blogs",
    description="Every blog of the caller, drafts included, optionally narrowed by `state`.",
    responses={
        200: {"content": {"application/json": {"example": {**PAGE_EXAMPLE, "items": [BLOG_EXAMPLE]}}}},
        401: UNAUTHORIZED,
    },
    operation_id="blogs_list_own",
)
async def list_my_blogs(
    query: OwnBlogQueryListDep,
    user: UserDBDep,
    service: BlogServiceDep,
) -> BlogPage:
    return await service.list_own(user.id, state=query.state, page=query.page, limit=query.limit)


@router.get(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Get blog by ID",
    description="Retrieve a blog post and count the read. Drafts are only visible to their author.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        **BLOG_EXAMPLE,
                        "state": "published",
                        "readCount": 1,
                        "author": {
                            "id": "123e4567-e89b-12d3-a456-426614174111",
                            "firstName": "Ada",
                            "lastName": "Lovelace",
                            "email": "ada@example.com",
                        },
                    },
                },
            },
        },
        403: {
            "description": "Draft of another author",
            "content": {"application/json": {"example": {"detail": "Access denied"}}},
        },
        404: NOT_FOUND,
    },
    operation_id="blogs_get_by_id",
)
async def get_blog(
    blog_id: UUID,
    user: OptionalUserDep,
    service: BlogServiceDep,
) -> BlogResponse:
    """
    Get blog by ID and increment its read count.

    Parameters
    ----------
    blog_id : UUID
        Blog identifier.
    user : UserDB | None
        Caller, or None when anonymous.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogResponse
        Blog data with the author summary.
    """
    return await service.record_view(user.id if user else None, blog_id)


@router.put(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Update blog",
    description=(
        "Partially update title, description, tags or body. Author, read count, "
        "reading time and state cannot be set here."
    ),
    responses={
        200: {"content": {"application/json": {"example": BLOG_EXAMPLE}}},
        400: VALIDATION_FAILED,
        401: UNAUTHORIZED,
        403: FORBIDDEN,
        404: NOT_FOUND,
    },
    operation_id="blogs_update",
)
async def update_blog(
    blog_id: UUID,
    patch: BlogUpdate,
    user: UserDBDep,
    service: BlogServiceDep,
) -> BlogResponse:
    """
    Update a blog post.

    Parameters
    ----------
    blog_id : UUID
        Blog identifier.
    patch : BlogUpdate
        Fields to change; omitted fields are kept.
    user : UserDB
        Authenticated caller; must be the author.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogResponse
        Updated blog.
    """
    return await service.update(user.id, blog_id, patch)


@router.patch(
    "/{blog_id}/state",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Publish or unpublish blog",
    description="Set the state to `published` or `draft`. Setting the current state is a no-op.",
    responses={
        200: {"content": {"application/json": {"example": {**BLOG_EXAMPLE, "state": "published"}}}},
        400: VALIDATION_FAILED,
        401: UNAUTHORIZED,
        403: FORBIDDEN,
        404: NOT_FOUND,
    },
    operation_id="blogs_change_state",
)
async def change_blog_state(
    blog_id: UUID,
    payload: BlogStateUpdate,
    user: UserDBDep,
    service: BlogServiceDep,
) -> BlogResponse:
    return await service.change_state(user.id, blog_id, payload.state)


@router.delete(
    "/{blog_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete blog",
    description="Permanently delete a blog owned by the caller.",
    responses={401: UNAUTHORIZED, 403: FORBIDDEN, 404: NOT_FOUND},
    operation_id="blogs_delete",
)
async def delete_blog(
    blog_id: UUID,
    user: UserDBDep,
    service: BlogServiceDep,
) -> Response:
    """
    Delete a blog post.

    Parameters
    ----------
    blog_id : UUID
        Blog identifier.
    user : UserDB
        Authenticated caller; must be the author.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    Response
        Empty 204 response.
    """
    await service.delete(user.id, blog_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
