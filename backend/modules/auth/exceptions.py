"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.

Token failures carry a TokenErrorKind so clients can tell an expired
token from a forged or malformed one. Credential failures deliberately
carry nothing that distinguishes an unknown phone number from a wrong
password.
"""

from enum import Enum

from shared.exceptions import AuthenticationError, ConflictError, InternalError
from modules.users.exceptions import UserNotFoundError


class TokenErrorKind(str, Enum):
    """Why a token was rejected."""

    EXPIRED = "TOKEN_EXPIRED"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    MALFORMED_CLAIMS = "MALFORMED_CLAIMS"
    REVOKED = "TOKEN_REVOKED"


class TokenValidationError(AuthenticationError):
    """Raised by the token service when a token fails validation."""

    def __init__(self, kind: TokenErrorKind, message: str = "Token validation failed"):
        super().__init__(message, code=kind.value, details={"kind": kind.value})
        self.kind = kind


class InvalidAccessTokenError(AuthenticationError):
    """Raised when an access token is rejected."""

    def __init__(self, kind: TokenErrorKind, message: str = "Invalid access token"):
        super().__init__(
            message,
            code="INVALID_ACCESS_TOKEN",
            details={"kind": kind.value},
        )
        self.kind = kind


class InvalidRefreshTokenError(AuthenticationError):
    """Raised when a refresh token is rejected."""

    def __init__(self, kind: TokenErrorKind, message: str = "Invalid refresh token"):
        super().__init__(
            message,
            code="INVALID_REFRESH_TOKEN",
            details={"kind": kind.value},
        )
        self.kind = kind


class MissingTokenError(AuthenticationError):
    """Raised when a protected endpoint is called without a bearer token."""

    def __init__(self, message: str = "Missing authorization header"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """Raised when a phone number and password do not identify a user."""

    def __init__(self) -> None:
        super().__init__("Invalid phone number or password", code="INVALID_CREDENTIALS")


class PhoneNumberTakenError(ConflictError):
    """Raised when signing up with a phone number that is already registered."""

    def __init__(self) -> None:
        super().__init__(
            "Phone number is already registered",
            code="PHONE_NUMBER_TAKEN",
        )


class HashingError(InternalError):
    """Raised when the password hasher fails."""

    def __init__(self, message: str = "Password hashing failed"):
        super().__init__(message, code="HASHING_FAILURE")


class SigningError(InternalError):
    """Raised when a token cannot be signed."""

    def __init__(self, message: str = "Token signing failed"):
        super().__init__(message, code="SIGNING_FAILURE")


__all__ = [
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
