"""
Access/refresh token issuing and validation.

Tokens are HS256 JWTs. Access and refresh tokens are signed with
independent secrets, so a refresh token never verifies as an access
token and vice versa. The accepted algorithm is pinned on decode; the
token's own "alg" header is never trusted.

Expiry is checked against the service clock rather than by PyJWT so
that validity windows are exact and testable: a token is valid while
now < exp and expired from exp onwards.
"""

import logging
import time
import uuid
from datetime import timedelta
from typing import Callable

import jwt
from pydantic import ValidationError as PydanticValidationError

from .models import TokenClaims, TokenPair, TokenType
from .exceptions import SigningError, TokenErrorKind, TokenValidationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_ACCESS_TTL = timedelta(minutes=15)
DEFAULT_REFRESH_TTL = timedelta(days=7)

_DECODE_OPTIONS = {
    "require": ["sub", "iat", "exp", "jti", "type"],
    "verify_exp": False,
    "verify_iat": False,
    "verify_nbf": False,
}


class JWTTokenService:
    """
    Implementation of ITokenService.

    Secrets and TTLs are fixed at construction. The service has no
    knowledge of users beyond the opaque subject string.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = DEFAULT_ACCESS_TTL,
        refresh_ttl: timedelta = DEFAULT_REFRESH_TTL,
        clock: Callable[[], float] = time.time,
    ):
        if not access_secret or not refresh_secret:
            raise ValueError("Access and refresh token secrets must be set")
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh token secrets must differ")
        if access_ttl <= timedelta(0) or refresh_ttl <= timedelta(0):
            raise ValueError("Token TTLs must be positive")

        self._keys: dict[TokenType, tuple[str, int]] = {
            TokenType.ACCESS: (access_secret, int(access_ttl.total_seconds())),
            TokenType.REFRESH: (refresh_secret, int(refresh_ttl.total_seconds())),
        }
        self._clock = clock

    @property
    def access_ttl(self) -> timedelta:
        return timedelta(seconds=self._keys[TokenType.ACCESS][1])

    @property
    def refresh_ttl(self) -> timedelta:
        return timedelta(seconds=self._keys[TokenType.REFRESH][1])

    def issue_pair(self, subject: str) -> TokenPair:
        """
        Issue an access token and a refresh token for a subject.

        Both tokens share the same issued-at instant.

        Raises:
            SigningError: If either token cannot be signed
        """
        now = int(self._clock())
        return TokenPair(
            access_token=self._sign(subject, TokenType.ACCESS, now),
            refresh_token=self._sign(subject, TokenType.REFRESH, now),
        )

    def validate_access(self, token: str) -> str:
        """Validate an access token and return its subject."""
        return self.decode_access(token).sub

    def validate_refresh(self, token: str) -> str:
        """
        Validate a refresh token and return its subject.

        This is a stateless check. Whether the token is still the one on
        file for the user is for the caller to decide.
        """
        return self.decode_refresh(token).sub

    def decode_access(self, token: str) -> TokenClaims:
        return self._decode(token, TokenType.ACCESS)

    def decode_refresh(self, token: str) -> TokenClaims:
        return self._decode(token, TokenType.REFRESH)

    def _sign(self, subject: str, token_type: TokenType, now: int) -> str:
        secret, ttl_seconds = self._keys[token_type]
        try:
            claims = TokenClaims(
                sub=subject,
                iat=now,
                exp=now + ttl_seconds,
                jti=uuid.uuid4().hex,
                type=token_type,
            )
            return jwt.encode(claims.model_dump(mode="json"), secret, algorithm=ALGORITHM)
        except (jwt.PyJWTError, PydanticValidationError, TypeError, ValueError) as e:
            logger.error("Failed to sign %s token: %s", token_type.value, e)
            raise SigningError(f"Failed to sign {token_type.value} token") from e

    def _decode(self, token: str, token_type: TokenType) -> TokenClaims:
        """
        Verify signature, claims and expiry.

        Raises:
            TokenValidationError: INVALID_SIGNATURE, MALFORMED_CLAIMS or EXPIRED
        """
        secret, _ = self._keys[token_type]

        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options=_DECODE_OPTIONS,
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as e:
            raise TokenValidationError(
                TokenErrorKind.INVALID_SIGNATURE, f"Invalid {token_type.value} token signature"
            ) from e
        except jwt.PyJWTError as e:
            raise TokenValidationError(
                TokenErrorKind.MALFORMED_CLAIMS, f"Malformed {token_type.value} token: {e}"
            ) from e

        try:
            claims = TokenClaims.model_validate(payload)
        except PydanticValidationError as e:
            raise TokenValidationError(
                TokenErrorKind.MALFORMED_CLAIMS, f"Malformed {token_type.value} token claims"
            ) from e

        if claims.type is not token_type:
            raise TokenValidationError(
                TokenErrorKind.MALFORMED_CLAIMS,
                f"Expected a {token_type.value} token, got {claims.type.value}",
            )

        if claims.is_expired(self._clock()):
            raise TokenValidationError(
                TokenErrorKind.EXPIRED, f"The {token_type.value} token has expired"
            )

        return claims
