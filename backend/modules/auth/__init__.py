"""
Authentication module.

Handles password hashing, token issuing and validation, and the
sign-up / sign-in / refresh / logout flows.

Public API:
- IAuthService: Interface for auth operations
- ITokenService, ICredentialHasher: Interfaces of the collaborators
- TokenClaims, TokenPair: Token models
- Auth exceptions: InvalidCredentialsError, InvalidRefreshTokenError, etc.
"""

from .interfaces import IAuthService, ITokenService, ICredentialHasher
from .models import TokenClaims, TokenPair, TokenType, AuthResponse
from .exceptions import (
    TokenErrorKind,
    TokenValidationError,
    InvalidAccessTokenError,
    InvalidRefreshTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    PhoneNumberTakenError,
    HashingError,
    SigningError,
    UserNotFoundError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "ITokenService",
    "ICredentialHasher",
    # Models
    "TokenClaims",
    "TokenPair",
    "TokenType",
    "AuthResponse",
    # Exceptions
    "TokenErrorKind",
    "TokenValidationError",
    "InvalidAccessTokenError",
    "InvalidRefreshTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "PhoneNumberTakenError",
    "HashingError",
    "SigningError",
    "UserNotFoundError",
]
