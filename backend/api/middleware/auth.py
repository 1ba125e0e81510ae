"""
Bearer-token authentication for the storefront API.

Access tokens are the ones the identity provider hands out at sign-in;
the route handlers only ever see the verified AuthenticatedUser.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from shared.config import get_settings
from ..models.user import AuthenticatedUser, TokenPayload

TOKEN_ALGORITHMS = ["HS256"]
TOKEN_AUDIENCE = "authenticated"

# Missing credentials are reported as 401 by get_current_user, not 403
bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """401 response carrying the bearer challenge header."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def decode_token(token: str) -> TokenPayload:
    """
    Verify an access token against the configured signing secret.

    Raises:
        AuthError: If the secret is unset, or the token is expired or malformed
    """
    secret = get_settings().supabase_jwt_secret
    if not secret:
        raise AuthError("Server authentication not configured")

    try:
        claims = jwt.decode(
            token, secret, algorithms=TOKEN_ALGORITHMS, audience=TOKEN_AUDIENCE
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthError("Token has expired") from e
    except JWTError as e:
        raise AuthError(f"Invalid token: {e}") from e
    return TokenPayload(**claims)


def get_user_from_payload(payload: TokenPayload) -> AuthenticatedUser:
    """Build the request's user from verified claims."""
    return AuthenticatedUser(
        id=payload.sub,
        email=payload.email,
        email_verified=payload.email_confirmed_at is not None,
        last_sign_in=datetime.fromtimestamp(payload.iat, tz=timezone.utc),
        user_metadata=payload.user_metadata,
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthenticatedUser:
    """FastAPI dependency resolving the signed-in user, or failing with 401."""
    if credentials is None:
        raise AuthError("Unauthorized")
    return get_user_from_payload(decode_token(credentials.credentials))
