"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import timedelta

from api.dependencies import reset_container
from modules.auth.hasher import BcryptHasher
from modules.auth.service import AuthService
from modules.auth.tokens import JWTTokenService
from modules.users.memory import InMemoryUserRepository
from modules.users.repository import reset_user_repository


# Test secrets (only for testing). Long enough for HS256 key-length checks.
TEST_ACCESS_SECRET = "test-access-secret-key-for-testing-only-0123456789"
TEST_REFRESH_SECRET = "test-refresh-secret-key-for-testing-only-9876543210"

# Fixed starting point for the fake clock (2023-11-14T22:13:20Z)
START_TIME = 1_700_000_000.0


class FakeClock:
    """Manually advanced clock for token expiry tests."""

    def __init__(self, now: float = START_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container and repository singletons around each test."""
    reset_container()
    reset_user_repository()
    yield
    reset_container()
    reset_user_repository()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token_service(clock: FakeClock) -> JWTTokenService:
    """Token service with test secrets, default TTLs and a fake clock."""
    return JWTTokenService(
        access_secret=TEST_ACCESS_SECRET,
        refresh_secret=TEST_REFRESH_SECRET,
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(days=7),
        clock=clock,
    )


@pytest.fixture(scope="session")
def hasher() -> BcryptHasher:
    """bcrypt hasher at the minimum cost so tests stay fast."""
    return BcryptHasher(rounds=4)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def auth_service(
    user_repository: InMemoryUserRepository,
    hasher: BcryptHasher,
    token_service: JWTTokenService,
) -> AuthService:
    return AuthService(users=user_repository, hasher=hasher, tokens=token_service)


@pytest.fixture
def access_secret() -> str:
    return TEST_ACCESS_SECRET


@pytest.fixture
def refresh_secret() -> str:
    return TEST_REFRESH_SECRET
