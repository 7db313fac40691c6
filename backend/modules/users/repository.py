"""
User repository backed by Supabase.

Encapsulates all queries and row mapping for the users table:
- id (uuid, primary key)
- display_name (varchar 32)
- phone_number (varchar, unique)
- password_digest (text)
- refresh_token (text, empty when none)
"""

import logging
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from shared.database import get_supabase_client
from shared.repository import BaseRepository
from .models import User
from .exceptions import DuplicatePhoneNumberError, UserNotFoundError, StoreError

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


class SupabaseUserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    Implements IUserRepository. The phone_number unique constraint in the
    database is the authority on duplicates; this class only translates
    the resulting error.
    """

    def save(self, user: User) -> None:
        """Insert a new user row."""
        try:
            self._db.table(USERS_TABLE).insert(self._map_to_row(user)).execute()
        except APIError as e:
            if self._is_unique_violation(e):
                raise DuplicatePhoneNumberError(user.phone_number) from e
            logger.error("Insert into %s failed: %s", USERS_TABLE, e)
            raise StoreError("save") from e
        except httpx.HTTPError as e:
            logger.error("Insert into %s failed: %s", USERS_TABLE, e)
            raise StoreError("save") from e

    def update(self, user: User) -> None:
        """Update the mutable columns of an existing user row."""
        data = {
            "display_name": user.display_name,
            "password_digest": user.password_digest,
            "refresh_token": user.refresh_token,
        }
        try:
            result = self._db.table(USERS_TABLE).update(data).eq("id", user.id).execute()
        except (APIError, httpx.HTTPError) as e:
            logger.error("Update of %s failed: %s", USERS_TABLE, e)
            raise StoreError("update") from e

        if not result.data:
            raise UserNotFoundError(user.id)

    def replace_refresh_token(self, user_id: str, expected: str, new: str) -> bool:
        """
        Conditional update of refresh_token.

        The filter on the current value makes the database do the compare,
        so a row comes back only for the caller whose expected token matched.
        """
        try:
            result = (
                self._db.table(USERS_TABLE)
                .update({"refresh_token": new})
                .eq("id", user_id)
                .eq("refresh_token", expected)
                .execute()
            )
        except (APIError, httpx.HTTPError) as e:
            logger.error("Refresh token swap in %s failed: %s", USERS_TABLE, e)
            raise StoreError("replace_refresh_token") from e

        return bool(result.data)

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self._find_one("id", user_id)

    def find_by_phone_number(self, phone_number: str) -> Optional[User]:
        return self._find_one("phone_number", phone_number)

    def _find_one(self, column: str, value: str) -> Optional[User]:
        try:
            result = (
                self._db.table(USERS_TABLE)
                .select("*")
                .eq(column, value)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as e:
            logger.error("Lookup in %s by %s failed: %s", USERS_TABLE, column, e)
            raise StoreError(f"find_by_{column}") from e

        row = self._first_row(result)
        if row is None:
            return None
        return self._map_to_user(row)

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_row(self, user: User) -> dict[str, Any]:
        return {
            "id": user.id,
            "display_name": user.display_name,
            "phone_number": user.phone_number,
            "password_digest": user.password_digest,
            "refresh_token": user.refresh_token,
        }

    def _map_to_user(self, row: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=str(row["id"]),
            display_name=row["display_name"],
            phone_number=row["phone_number"],
            password_digest=row["password_digest"],
            refresh_token=row.get("refresh_token") or "",
        )


# Module-level instance getter
_repository_instance: Optional[SupabaseUserRepository] = None


def get_user_repository(db: Optional[Client] = None) -> SupabaseUserRepository:
    """Get the user repository singleton."""
    global _repository_instance
    if _repository_instance is None:
        _repository_instance = SupabaseUserRepository(db or get_supabase_client())
    return _repository_instance


def reset_user_repository() -> None:
    """Reset the user repository singleton (for testing)."""
    global _repository_instance
    _repository_instance = None
