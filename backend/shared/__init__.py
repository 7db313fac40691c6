"""
Shared infrastructure for the PhoneAuth backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- repository: Base class for Supabase-backed repositories

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    PhoneAuthError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    ConflictError,
    InternalError,
    ExternalServiceError,
)
from .models import AuthenticatedUser

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "PhoneAuthError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "ConflictError",
    "InternalError",
    "ExternalServiceError",
    "AuthenticatedUser",
]
