"""Fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer, set_container
from modules.auth.tokens import JWTTokenService
from shared.config import Settings


@pytest.fixture
def settings(access_secret, refresh_secret) -> Settings:
    return Settings(
        jwt_access_secret=access_secret,
        jwt_refresh_secret=refresh_secret,
        user_store="memory",
        bcrypt_rounds=4,
    )


@pytest.fixture
def container(settings, clock, hasher) -> ServiceContainer:
    """Container wired to the in-memory store with a fake clock."""
    container = ServiceContainer(settings)
    container._hasher = hasher
    container._tokens = JWTTokenService(
        access_secret=settings.jwt_access_secret,
        refresh_secret=settings.jwt_refresh_secret,
        clock=clock,
    )
    set_container(container)
    return container


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_app())
