"""
PhoneAuth API package.

Provides the FastAPI application for the phone-number authentication service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
