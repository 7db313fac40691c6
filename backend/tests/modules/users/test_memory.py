"""Tests for the in-memory user repository."""

import threading

import pytest

from modules.users.exceptions import DuplicatePhoneNumberError, UserNotFoundError
from modules.users.interfaces import IUserRepository
from modules.users.memory import InMemoryUserRepository
from modules.users.models import User


def _user(phone_number: str = "+15551234567", **overrides) -> User:
    return User(
        display_name=overrides.pop("display_name", "Ada"),
        phone_number=phone_number,
        password_digest="digest",
        **overrides,
    )


class TestInMemoryUserRepository:
    def test_implements_interface(self, user_repository):
        assert isinstance(user_repository, IUserRepository)

    def test_save_and_find(self, user_repository):
        user = _user()
        user_repository.save(user)

        assert user_repository.find_by_id(user.id) == user
        assert user_repository.find_by_phone_number(user.phone_number) == user

    def test_find_missing_returns_none(self, user_repository):
        assert user_repository.find_by_id("missing") is None
        assert user_repository.find_by_phone_number("+15550000000") is None

    def test_duplicate_phone_number(self, user_repository):
        user_repository.save(_user())

        with pytest.raises(DuplicatePhoneNumberError) as exc_info:
            user_repository.save(_user(display_name="Grace"))
        assert exc_info.value.details["phone_number"] == "+15551234567"
        assert len(user_repository) == 1

    def test_update_replaces_record(self, user_repository):
        user = _user()
        user_repository.save(user)

        user_repository.update(user.with_refresh_token("token"))

        assert user_repository.find_by_id(user.id).refresh_token == "token"
        assert user_repository.find_by_phone_number(user.phone_number).refresh_token == "token"

    def test_update_keeps_phone_number(self, user_repository):
        user = _user()
        user_repository.save(user)

        user_repository.update(user.model_copy(update={"phone_number": "+15559999999"}))

        assert user_repository.find_by_id(user.id).phone_number == "+15551234567"
        assert user_repository.find_by_phone_number("+15559999999") is None

    def test_update_unknown_user(self, user_repository):
        with pytest.raises(UserNotFoundError):
            user_repository.update(_user())

    def test_concurrent_saves_of_same_phone(self):
        repository = InMemoryUserRepository()
        errors = []

        def save(name):
            try:
                repository.save(_user(display_name=name))
            except DuplicatePhoneNumberError as e:
                errors.append(e)

        threads = [threading.Thread(target=save, args=(f"user{i}",)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(repository) == 1
        assert len(errors) == 7


class TestReplaceRefreshToken:
    def test_swaps_when_expected_matches(self, user_repository):
        user = _user(refresh_token="old")
        user_repository.save(user)

        assert user_repository.replace_refresh_token(user.id, "old", "new")
        assert user_repository.find_by_id(user.id).refresh_token == "new"

    def test_refuses_stale_expected(self, user_repository):
        user = _user(refresh_token="current")
        user_repository.save(user)

        assert not user_repository.replace_refresh_token(user.id, "stale", "new")
        assert user_repository.find_by_id(user.id).refresh_token == "current"

    def test_refuses_when_nothing_stored(self, user_repository):
        user = _user()
        user_repository.save(user)

        assert not user_repository.replace_refresh_token(user.id, "", "new")
        assert user_repository.find_by_id(user.id).refresh_token == ""

    def test_unknown_user(self, user_repository):
        assert not user_repository.replace_refresh_token("missing", "old", "new")

    def test_concurrent_swaps_of_same_token(self):
        repository = InMemoryUserRepository()
        user = _user(refresh_token="old")
        repository.save(user)
        outcomes = []

        def swap(i):
            outcomes.append(repository.replace_refresh_token(user.id, "old", f"new-{i}"))

        threads = [threading.Thread(target=swap, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert outcomes.count(True) == 1
        assert repository.find_by_id(user.id).refresh_token.startswith("new-")
