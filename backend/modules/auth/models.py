"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from enum import Enum
from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator, model_validator

from modules.users.models import E164_PATTERN


class TokenType(str, Enum):
    """Which half of a token pair a token is."""

    ACCESS = "access"
    REFRESH = "refresh"


class TokenClaims(BaseModel):
    """
    Decoded token payload.

    Every token we issue carries exactly these claims. Validation happens
    here, so callers never look claims up by string key.
    """

    sub: str = Field(..., min_length=1, description="Subject (user ID)")
    iat: int = Field(..., ge=0, description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
    jti: str = Field(..., min_length=1, description="Unique token ID")
    type: TokenType = Field(..., description="Access or refresh")

    model_config = {"frozen": True, "extra": "ignore"}

    @model_validator(mode="after")
    def _check_window(self) -> "TokenClaims":
        if self.exp <= self.iat:
            raise ValueError("exp must be after iat")
        return self

    @property
    def subject(self) -> str:
        return self.sub

    @property
    def issued_at(self) -> datetime:
        return datetime.fromtimestamp(self.iat, tz=timezone.utc)

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)

    def is_expired(self, now: float) -> bool:
        """A token is valid strictly before exp and expired at or after it."""
        return now >= self.exp


class TokenPair(BaseModel):
    """An access token and the refresh token issued alongside it."""

    access_token: str = Field(..., description="Short-lived access token")
    refresh_token: str = Field(..., description="Long-lived refresh token")

    model_config = {"frozen": True}


# -----------------------------------------------------------------------------
# Request / response models
# -----------------------------------------------------------------------------


# bcrypt reads at most 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class SignUpRequest(BaseModel):
    """Request to register a new user."""

    display_name: str = Field(..., min_length=1, max_length=32)
    phone_number: str = Field(..., pattern=E164_PATTERN)
    password: str = Field(..., min_length=8, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class SignInRequest(BaseModel):
    """Request to sign in with phone number and password."""

    phone_number: str = Field(..., pattern=E164_PATTERN)
    password: str = Field(..., min_length=8, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class RefreshRequest(BaseModel):
    """Request to exchange a refresh token for a new pair."""

    refresh_token: str = Field(..., min_length=1)


class LogoutRequest(BaseModel):
    """Request to end the session of the access token's user."""

    access_token: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Returned by sign-up and sign-in."""

    id: str = Field(..., description="User ID")
    access_token: str
    refresh_token: str


class LogoutResponse(BaseModel):
    message: str = "successfully logged out"
