"""
In-memory user repository.

Used by tests and for running the API locally without Supabase
(USER_STORE=memory). Callers reach it from worker threads, so every
operation holds the lock.
"""

import hmac
import threading
from typing import Optional

from .models import User
from .exceptions import DuplicatePhoneNumberError, UserNotFoundError


class InMemoryUserRepository:
    """Dict-backed implementation of IUserRepository."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[str, User] = {}
        self._ids_by_phone: dict[str, str] = {}

    def save(self, user: User) -> None:
        with self._lock:
            if user.phone_number in self._ids_by_phone:
                raise DuplicatePhoneNumberError(user.phone_number)
            self._users[user.id] = user
            self._ids_by_phone[user.phone_number] = user.id

    def update(self, user: User) -> None:
        with self._lock:
            existing = self._users.get(user.id)
            if existing is None:
                raise UserNotFoundError(user.id)
            # phone_number is immutable after creation
            self._users[user.id] = user.model_copy(
                update={"phone_number": existing.phone_number}
            )

    def replace_refresh_token(self, user_id: str, expected: str, new: str) -> bool:
        with self._lock:
            existing = self._users.get(user_id)
            if existing is None or not existing.refresh_token:
                return False
            if not hmac.compare_digest(
                existing.refresh_token.encode("utf-8"), expected.encode("utf-8")
            ):
                return False
            self._users[user_id] = existing.with_refresh_token(new)
            return True

    def find_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def find_by_phone_number(self, phone_number: str) -> Optional[User]:
        with self._lock:
            user_id = self._ids_by_phone.get(phone_number)
            if user_id is None:
                return None
            return self._users[user_id]

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
