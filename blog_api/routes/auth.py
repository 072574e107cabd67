"""Authentication routes for account registration and signin."""

from typing import Annotated

from fastapi import APIRouter, Body
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from blog_api.dependencies import AuthServiceDep
from blog_api.schemas import AuthResponse, UserCreate, UserSignin

router = APIRouter(prefix="/api/auth", tags=["🔐 Auth"])

AUTH_EXAMPLE = {
    "user": {
        "id": "123e4567-e89b-12d3-a456-426614174111",
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
    },
    "accessToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    "tokenType": "bearer",
}


@router.post(
    "/signup",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    status_code=HTTP_201_CREATED,
    summary="Register a new account",
    description="Create an account and return an access token valid for one hour.",
    responses={
        201: {"content": {"application/json": {"example": AUTH_EXAMPLE}}},
        400: {
            "description": "Validation failed",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Validation failed",
                        "errors": [
                            {
                                "field": "email",
                                "message": "Email is already registered",
                                "type": "duplicate",
                            },
                        ],
                    },
                },
            },
        },
        409: {
            "description": "Email registered concurrently",
            "content": {"application/json": {"example": {"detail": "User already exists"}}},
        },
    },
    operation_id="auth_signup",
)
async def signup(
    payload: Annotated[
        UserCreate,
        Body(
            examples=[
                {
                    "firstName": "Ada",
                    "lastName": "Lovelace",
                    "email": "ada@example.com",
                    "password": "password123",
                },
            ],
        ),
    ],
    service: AuthServiceDep,
) -> AuthResponse:
    """
    Register a new user.

    Parameters
    ----------
    payload : UserCreate
        Names, email and password.
    service : AuthService
        Auth service dependency.

    Returns
    -------
    AuthResponse
        User summary and access token.
    """
    return await service.signup(payload)


@router.post(
    "/signin",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    summary="Sign in",
    description="Exchange email and password for an access token.",
    responses={
        200: {"content": {"application/json": {"example": AUTH_EXAMPLE}}},
        401: {
            "description": "Wrong email or password",
            "content": {"application/json": {"example": {"detail": "Invalid credentials"}}},
        },
    },
    operation_id="auth_signin",
)
async def signin(payload: UserSignin, service: AuthServiceDep) -> AuthResponse:
    """
    Sign in with email and password.

    Parameters
    ----------
    payload : UserSignin
        Credentials.
    service : AuthService
        Auth service dependency.

    Returns
    -------
    AuthResponse
        User summary and access token.
    """
    return await service.signin(payload.email, payload.password.get_secret_value())
