"""Tests for the Supabase user repository."""

import httpx
import pytest
from unittest.mock import MagicMock, patch

from postgrest.exceptions import APIError

from modules.users.exceptions import DuplicatePhoneNumberError, StoreError, UserNotFoundError
from modules.users.interfaces import IUserRepository
from modules.users.models import User
from modules.users.repository import (
    SupabaseUserRepository,
    USERS_TABLE,
    get_user_repository,
    reset_user_repository,
)

USER_ID = "6f1c2a3e-7b8d-4e5f-9a0b-1c2d3e4f5a6b"


def _api_error(code: str) -> APIError:
    return APIError({"code": code, "message": "error", "details": None, "hint": None})


def _user(**overrides) -> User:
    fields = {
        "id": USER_ID,
        "display_name": "Ada",
        "phone_number": "+15551234567",
        "password_digest": "digest",
    }
    fields.update(overrides)
    return User(**fields)


def _row(**overrides) -> dict:
    row = {
        "id": USER_ID,
        "display_name": "Ada",
        "phone_number": "+15551234567",
        "password_digest": "digest",
        "refresh_token": "",
        "created_at": "2024-01-01T00:00:00Z",
    }
    row.update(overrides)
    return row


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def repository(mock_db):
    return SupabaseUserRepository(mock_db)


def _select_chain(mock_db):
    return mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value


class TestSave:
    def test_inserts_row(self, repository, mock_db):
        repository.save(_user())

        mock_db.table.assert_called_with(USERS_TABLE)
        mock_db.table.return_value.insert.assert_called_once_with({
            "id": USER_ID,
            "display_name": "Ada",
            "phone_number": "+15551234567",
            "password_digest": "digest",
            "refresh_token": "",
        })

    def test_unique_violation_is_duplicate(self, repository, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = _api_error("23505")

        with pytest.raises(DuplicatePhoneNumberError) as exc_info:
            repository.save(_user())
        assert isinstance(exc_info.value.__cause__, APIError)

    def test_other_api_error_is_store_error(self, repository, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = _api_error("42P01")

        with pytest.raises(StoreError) as exc_info:
            repository.save(_user())
        assert exc_info.value.operation == "save"

    def test_transport_error_is_store_error(self, repository, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = httpx.ConnectError("down")

        with pytest.raises(StoreError):
            repository.save(_user())


class TestUpdate:
    def test_updates_mutable_columns(self, repository, mock_db):
        chain = mock_db.table.return_value.update.return_value.eq.return_value
        chain.execute.return_value.data = [_row(refresh_token="token")]

        repository.update(_user(refresh_token="token"))

        mock_db.table.return_value.update.assert_called_once_with({
            "display_name": "Ada",
            "password_digest": "digest",
            "refresh_token": "token",
        })
        mock_db.table.return_value.update.return_value.eq.assert_called_once_with("id", USER_ID)

    def test_missing_row(self, repository, mock_db):
        chain = mock_db.table.return_value.update.return_value.eq.return_value
        chain.execute.return_value.data = []

        with pytest.raises(UserNotFoundError):
            repository.update(_user())

    def test_store_failure(self, repository, mock_db):
        chain = mock_db.table.return_value.update.return_value.eq.return_value
        chain.execute.side_effect = httpx.ReadTimeout("slow")

        with pytest.raises(StoreError) as exc_info:
            repository.update(_user())
        assert exc_info.value.operation == "update"


class TestReplaceRefreshToken:
    @staticmethod
    def _chain(mock_db):
        return mock_db.table.return_value.update.return_value.eq.return_value.eq.return_value

    def test_filters_on_id_and_expected_token(self, repository, mock_db):
        self._chain(mock_db).execute.return_value.data = [_row(refresh_token="new")]

        assert repository.replace_refresh_token(USER_ID, "old", "new")

        update = mock_db.table.return_value.update
        update.assert_called_once_with({"refresh_token": "new"})
        update.return_value.eq.assert_called_once_with("id", USER_ID)
        update.return_value.eq.return_value.eq.assert_called_once_with("refresh_token", "old")

    def test_no_matching_row_means_lost_swap(self, repository, mock_db):
        self._chain(mock_db).execute.return_value.data = []

        assert not repository.replace_refresh_token(USER_ID, "old", "new")

    def test_store_failure(self, repository, mock_db):
        self._chain(mock_db).execute.side_effect = httpx.ConnectError("down")

        with pytest.raises(StoreError) as exc_info:
            repository.replace_refresh_token(USER_ID, "old", "new")
        assert exc_info.value.operation == "replace_refresh_token"


class TestFind:
    def test_find_by_id(self, repository, mock_db):
        _select_chain(mock_db).execute.return_value.data = [_row(refresh_token="token")]

        user = repository.find_by_id(USER_ID)

        assert user == _user(refresh_token="token")
        mock_db.table.return_value.select.return_value.eq.assert_called_once_with("id", USER_ID)

    def test_find_by_phone_number(self, repository, mock_db):
        _select_chain(mock_db).execute.return_value.data = [_row()]

        user = repository.find_by_phone_number("+15551234567")

        assert user.id == USER_ID
        mock_db.table.return_value.select.return_value.eq.assert_called_once_with(
            "phone_number", "+15551234567"
        )

    def test_null_refresh_token_maps_to_empty(self, repository, mock_db):
        _select_chain(mock_db).execute.return_value.data = [_row(refresh_token=None)]
        assert repository.find_by_id(USER_ID).refresh_token == ""

    def test_not_found_returns_none(self, repository, mock_db):
        _select_chain(mock_db).execute.return_value.data = []
        assert repository.find_by_id(USER_ID) is None

    def test_store_failure(self, repository, mock_db):
        _select_chain(mock_db).execute.side_effect = _api_error("XX000")

        with pytest.raises(StoreError) as exc_info:
            repository.find_by_phone_number("+15551234567")
        assert exc_info.value.operation == "find_by_phone_number"


class TestSingleton:
    def test_implements_interface(self, repository):
        assert isinstance(repository, IUserRepository)

    def test_get_user_repository_caches(self):
        db = MagicMock()
        first = get_user_repository(db)
        second = get_user_repository()
        assert first is second
        assert first._db is db

    @patch("modules.users.repository.get_supabase_client")
    def test_defaults_to_shared_client(self, mock_client):
        reset_user_repository()
        repository = get_user_repository()
        assert repository._db is mock_client.return_value
