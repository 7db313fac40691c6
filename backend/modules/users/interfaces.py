"""
Users module interface.

The auth module depends on IUserRepository, not a concrete store. The
methods are synchronous; async callers run them in a worker thread.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import User


@runtime_checkable
class IUserRepository(Protocol):
    """
    Persistence contract for user records.

    Implementations hold no business logic. save() and update() are
    single-record atomic operations.
    """

    def save(self, user: User) -> None:
        """
        Insert a new user.

        Raises:
            DuplicatePhoneNumberError: If the phone number is already stored
            StoreError: On any other storage failure
        """
        ...

    def update(self, user: User) -> None:
        """
        Replace the mutable fields of an existing user.

        Raises:
            UserNotFoundError: If no user has this ID
            StoreError: On any other storage failure
        """
        ...

    def replace_refresh_token(self, user_id: str, expected: str, new: str) -> bool:
        """
        Swap the stored refresh token only if it still equals `expected`.

        The comparison and the write are one atomic step, so of several
        callers presenting the same token at most one succeeds.

        Returns:
            True if the token was replaced, False if the stored token no
            longer matches (or the user does not exist)

        Raises:
            StoreError: On storage failure
        """
        ...

    def find_by_id(self, user_id: str) -> Optional[User]:
        """
        Look up a user by ID.

        Returns:
            The user, or None if not found

        Raises:
            StoreError: On storage failure
        """
        ...

    def find_by_phone_number(self, phone_number: str) -> Optional[User]:
        """
        Look up a user by phone number.

        Returns:
            The user, or None if not found

        Raises:
            StoreError: On storage failure
        """
        ...
