"""
Bearer token authentication.

Validates access tokens issued by the auth module and extracts the
authenticated user. Failures are raised as auth module exceptions and
rendered by the application's exception handler, so a rejected bearer
token carries the same error envelope (and token kind) as a rejected
logout.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import (
    InvalidAccessTokenError,
    MissingTokenError,
    TokenErrorKind,
    TokenValidationError,
)
from modules.auth.interfaces import ITokenService
from modules.auth.models import TokenClaims
from shared.models import AuthenticatedUser
from ..dependencies import get_token_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(token: str, tokens: ITokenService) -> TokenClaims:
    """
    Decode and validate an access token.

    Raises:
        InvalidAccessTokenError: If token is invalid or expired
    """
    try:
        return tokens.decode_access(token)
    except TokenValidationError as e:
        if e.kind is TokenErrorKind.EXPIRED:
            raise InvalidAccessTokenError(e.kind, "Access token has expired") from e
        raise InvalidAccessTokenError(e.kind, f"Invalid access token: {e.message}") from e


def get_user_from_claims(claims: TokenClaims) -> AuthenticatedUser:
    """Convert access token claims to an AuthenticatedUser."""
    return AuthenticatedUser(
        id=claims.sub,
        issued_at=claims.issued_at,
        expires_at=claims.expires_at,
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: ITokenService = Depends(get_token_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise MissingTokenError()

    claims = decode_token(credentials.credentials, tokens)
    return get_user_from_claims(claims)
