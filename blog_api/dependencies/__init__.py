from blog_api.dependencies.dependencies import (
    AuthServiceDep,
    BlogListQuery,
    BlogQueryListDep,
    BlogRepoDep,
    BlogServiceDep,
    OptionalUserDep,
    OwnBlogListQuery,
    OwnBlogQueryListDep,
    SessionDep,
    UserDBDep,
    UserRepoDep,
    get_current_user,
    get_optional_user,
    oauth2_scheme,
)

__all__ = [
    "AuthServiceDep",
    "BlogListQuery",
    "BlogQueryListDep",
    "BlogRepoDep",
    "BlogServiceDep",
    "OptionalUserDep",
    "OwnBlogListQuery",
    "OwnBlogQueryListDep",
    "SessionDep",
    "UserDBDep",
    "UserRepoDep",
    "get_current_user",
    "get_optional_user",
    "oauth2_scheme",
]
