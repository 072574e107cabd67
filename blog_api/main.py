"""Blogging API: accounts, drafts and published posts over FastAPI."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from blog_api.configs import settings
from blog_api.db import ping_db
from blog_api.errors import (
    DatabaseError,
    ForbiddenError,
    PasswordHashingError,
    UserAuthenticationError,
    ValidationFailedError,
    auth_exception_handler,
    create_internal_error_handler,
    database_exception_handler,
    password_hashing_exception_handler,
    validation_exception_handler,
    validation_failed_exception_handler,
)
from blog_api.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from blog_api.monitoring import get_logger
from blog_api.routes import auth_router, blog_router
from blog_api.schemas import HealthCheckResponse
from blog_api.utils.helpers import today_str

logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Blogging platform API: signup, signin, drafts, publishing and search.",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)

routes = [auth_router, blog_router]

_ = [app.include_router(router) for router in routes]

errors = [
    (ValidationFailedError, validation_failed_exception_handler),
    (UserAuthenticationError, auth_exception_handler),
    (ForbiddenError, auth_exception_handler),
    (DatabaseError, database_exception_handler),
    (PasswordHashingError, password_hashing_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (Exception, create_internal_error_handler(logger)),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "ok",
                        "version": "1.0.0",
                        "timestamp": "2025-01-01 00:00:00",
                        "database": "connected",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check() -> HealthCheckResponse:
    """
    Health check endpoint.

    Returns
    -------
    HealthCheckResponse
        Service status, version and database reachability.
    """
    database_ok = await ping_db()
    return HealthCheckResponse(
        status="ok" if database_ok else "degraded",
        version=app.version,
        timestamp=today_str(),
        database="connected" if database_ok else "unavailable",
    )


@app.get(
    "/",
    tags=["🏠 Root"],
    summary="Root access",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "message": "Welcome to the Blogging API",
                        "endpoints": {"auth": "/api/auth", "blogs": "/api/blogs"},
                    },
                },
            },
        },
    },
    operation_id="root_access",
)
async def root() -> ORJSONResponse:
    """
    Root endpoint.

    Returns
    -------
    ORJSONResponse
        Welcome message and a map of the top-level endpoints.
    """
    return ORJSONResponse(
        content={
            "message": f"Welcome to the {settings.APP_NAME}",
            "version": app.version,
            "endpoints": {
                "auth": "/api/auth",
                "blogs": "/api/blogs",
                "health": "/health",
                "docs": "/docs",
            },
        },
    )
