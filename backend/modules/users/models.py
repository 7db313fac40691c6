"""
Users module data models.

The User record is immutable; changes are made by copying with
model_copy() and persisting the copy through the repository.
"""

import uuid
from pydantic import BaseModel, Field

# E.164: leading '+', country code without leading zero, at most 15 digits
E164_PATTERN = r"^\+[1-9]\d{1,14}$"


class User(BaseModel):
    """A registered account as stored in the users table."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="User ID (UUID)")
    display_name: str = Field(..., min_length=1, max_length=32)
    phone_number: str = Field(..., pattern=E164_PATTERN, description="E.164 sign-in handle")
    password_digest: str = Field(..., min_length=1, repr=False)
    refresh_token: str = Field(
        default="",
        repr=False,
        description="Currently valid refresh token, empty when none",
    )

    model_config = {"frozen": True}

    @property
    def has_refresh_token(self) -> bool:
        return bool(self.refresh_token)

    def with_refresh_token(self, refresh_token: str) -> "User":
        """Return a copy of this user carrying a new refresh token."""
        return self.model_copy(update={"refresh_token": refresh_token})

    def clear_refresh_token(self) -> "User":
        """Return a copy of this user with no refresh token."""
        return self.with_refresh_token("")

    def to_profile(self) -> "UserProfile":
        return UserProfile(
            id=self.id,
            display_name=self.display_name,
            phone_number=self.phone_number,
        )


class UserProfile(BaseModel):
    """Public view of a user (no digest, no tokens)."""

    id: str = Field(..., description="User ID (UUID)")
    display_name: str = Field(..., description="Display name")
    phone_number: str = Field(..., description="Phone number in E.164 format")
