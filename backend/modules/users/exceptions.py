"""
Users module exceptions.

Raised by user repositories. The auth module translates them where a
different meaning is needed (e.g. a duplicate on save means the phone
number is taken).
"""

from shared.exceptions import ConflictError, ExternalServiceError, NotFoundError


class DuplicatePhoneNumberError(ConflictError):
    """Raised when saving a user whose phone number already exists."""

    def __init__(self, phone_number: str):
        super().__init__(
            "A user with this phone number already exists",
            code="DUPLICATE_PHONE_NUMBER",
            details={"phone_number": phone_number},
        )


class UserNotFoundError(NotFoundError):
    """Raised when a user record does not exist."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class StoreError(ExternalServiceError):
    """Raised when the user store fails for reasons other than a missing row or duplicate."""

    def __init__(self, operation: str, message: str = "User store operation failed"):
        super().__init__(
            message,
            service="user_store",
            code="STORE_FAILURE",
            details={"operation": operation},
        )
        self.operation = operation
