"""
Users module.

Owns the user record and its persistence contract. Contains no business
logic: the auth module decides when users are created or their refresh
token changes.

Public API:
- IUserRepository: Interface for user persistence
- User: The stored user record
- Store exceptions: DuplicatePhoneNumberError, UserNotFoundError, StoreError
"""

from .interfaces import IUserRepository
from .models import User, UserProfile, E164_PATTERN
from .exceptions import (
    DuplicatePhoneNumberError,
    UserNotFoundError,
    StoreError,
)

__all__ = [
    # Interface
    "IUserRepository",
    # Models
    "User",
    "UserProfile",
    "E164_PATTERN",
    # Exceptions
    "DuplicatePhoneNumberError",
    "UserNotFoundError",
    "StoreError",
]
