"""Access token issuing and verification (signed JWTs)."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from jose import JWTError, jwt

from blog_api.configs import settings
from blog_api.monitoring import get_logger
from blog_api.schemas.auth import TokenData

logger = get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"


def create_access_token(
    user_id: UUID,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed access token for a user.

    Args:
        user_id: User's UUID
        email: User's email, carried as the subject
        expires_delta: Optional lifetime override

    Returns:
        str: Encoded JWT access token
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    to_encode = {
        "sub": email,
        "user_id": str(user_id),
        "jti": str(uuid4()),
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "type": ACCESS_TOKEN_TYPE,
    }

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> TokenData | None:
    """
    Verify signature, expiry, issuer and audience of an access token.

    Args:
        token: JWT token string

    Returns:
        TokenData | None: Decoded claims, or None for any invalid token
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError as e:
        logger.debug("Rejected access token", reason=str(e))
        return None

    email: str | None = payload.get("sub")
    user_id: str | None = payload.get("user_id")
    jti: str | None = payload.get("jti")
    token_type: str | None = payload.get("type")

    if not email or not user_id or not jti or token_type != ACCESS_TOKEN_TYPE:
        return None

    try:
        return TokenData(user_id=UUID(user_id), email=email, jti=jti, token_type=token_type)
    except ValueError:
        return None
