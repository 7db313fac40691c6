"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

When we're ready to extract a module to a microservice, we only need
to change the implementation here to an HTTP client.
"""

from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService, ICredentialHasher, ITokenService
    from modules.users.interfaces import IUserRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._users: "IUserRepository | None" = None
        self._hasher: "ICredentialHasher | None" = None
        self._tokens: "ITokenService | None" = None
        self._auth_service: "IAuthService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def users(self) -> "IUserRepository":
        """Get the user repository selected by USER_STORE."""
        if self._users is None:
            if self.settings.user_store == "memory":
                from modules.users.memory import InMemoryUserRepository
                self._users = InMemoryUserRepository()
            else:
                from shared.database import get_supabase_client
                from modules.users.repository import get_user_repository
                self._users = get_user_repository(get_supabase_client(self.settings))
        return self._users

    @property
    def hasher(self) -> "ICredentialHasher":
        """Get the password hasher instance."""
        if self._hasher is None:
            from modules.auth.hasher import BcryptHasher
            self._hasher = BcryptHasher(rounds=self.settings.bcrypt_rounds)
        return self._hasher

    @property
    def tokens(self) -> "ITokenService":
        """Get the token service instance."""
        if self._tokens is None:
            settings = self.settings
            if not settings.jwt_access_secret or not settings.jwt_refresh_secret:
                raise RuntimeError(
                    "Token configuration missing. "
                    "Set JWT_ACCESS_SECRET and JWT_REFRESH_SECRET environment variables."
                )
            from modules.auth.tokens import JWTTokenService
            self._tokens = JWTTokenService(
                access_secret=settings.jwt_access_secret,
                refresh_secret=settings.jwt_refresh_secret,
                access_ttl=timedelta(minutes=settings.access_token_ttl_minutes),
                refresh_ttl=timedelta(days=settings.refresh_token_ttl_days),
            )
        return self._tokens

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                users=self.users,
                hasher=self.hasher,
                tokens=self.tokens,
            )
        return self._auth_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._users = None
        self._hasher = None
        self._tokens = None
        self._auth_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a specific container (used by tests and scripts)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_token_service() -> "ITokenService":
    """FastAPI dependency for token service."""
    return get_container().tokens
