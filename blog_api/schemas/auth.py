from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from blog_api.schemas.user import UserSummary


class TokenData(BaseModel):
    """Claims extracted from a verified access token."""

    user_id: UUID
    email: str
    jti: str
    token_type: str


class AuthResponse(BaseModel):
    """Identity summary plus a bearer token, returned by signup and signin."""

    model_config = ConfigDict(populate_by_name=True)

    user: UserSummary
    access_token: str = Field(alias="accessToken")
    token_type: str = Field(default="bearer", alias="tokenType")
