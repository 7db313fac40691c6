"""
Authentication service implementation.

Coordinates the user store, the password hasher and the token service
to implement sign-up, sign-in, refresh and logout.

Every user holds at most one valid refresh token: sign-up stores the
first one, sign-in and refresh replace it, logout clears it. A refresh
token is only accepted while it is the one on file.
"""

import asyncio
import hmac
import logging
import uuid
from typing import Type

from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import AuthenticationError, ValidationError
from modules.users.interfaces import IUserRepository
from modules.users.models import User, UserProfile
from modules.users.exceptions import DuplicatePhoneNumberError, UserNotFoundError

from .interfaces import IAuthService, ICredentialHasher, ITokenService
from .models import MAX_PASSWORD_BYTES, AuthResponse, TokenPair
from .exceptions import (
    InvalidAccessTokenError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    PhoneNumberTakenError,
    TokenErrorKind,
    TokenValidationError,
)

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Holds no per-request state, so one instance is shared by all
    requests. Hashing, signing and store calls are blocking and run in
    worker threads; cancelling the calling task abandons the operation
    at the next await.
    """

    def __init__(
        self,
        users: IUserRepository,
        hasher: ICredentialHasher,
        tokens: ITokenService,
    ):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    async def sign_up(
        self,
        display_name: str,
        phone_number: str,
        password: str,
    ) -> AuthResponse:
        """
        Register a user and issue their first token pair.

        The lookup below is only a fast path: two concurrent sign-ups for
        the same number can both pass it, and the store's unique
        constraint decides which one wins.
        """
        if not _fits_bcrypt(password):
            raise ValidationError(
                "Invalid sign-up data",
                details={"password": f"must be at most {MAX_PASSWORD_BYTES} bytes"},
            )

        existing = await asyncio.to_thread(self._users.find_by_phone_number, phone_number)
        if existing is not None:
            logger.info("Sign-up rejected: phone number already registered")
            raise PhoneNumberTakenError()

        digest = await asyncio.to_thread(self._hasher.hash, password)

        try:
            user = User(
                display_name=display_name,
                phone_number=phone_number,
                password_digest=digest,
            )
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid sign-up data",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e

        pair = await asyncio.to_thread(self._tokens.issue_pair, user.id)
        user = user.with_refresh_token(pair.refresh_token)

        try:
            await asyncio.to_thread(self._users.save, user)
        except DuplicatePhoneNumberError as e:
            logger.info("Sign-up lost a race for the same phone number")
            raise PhoneNumberTakenError() from e

        logger.info("User signed up: %s", user.id)
        return AuthResponse(
            id=user.id,
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        )

    async def sign_in(self, phone_number: str, password: str) -> AuthResponse:
        """
        Authenticate and issue a new pair.

        The new refresh token replaces the stored one, so signing in on
        one device ends the refresh ability of any earlier session.
        """
        if not _fits_bcrypt(password):
            # No stored digest can match a password bcrypt would not accept
            logger.info("Sign-in rejected: invalid credentials")
            raise InvalidCredentialsError()

        user = await asyncio.to_thread(self._users.find_by_phone_number, phone_number)
        if user is None:
            await asyncio.to_thread(self._hasher.dummy_verify, password)
            logger.info("Sign-in rejected: invalid credentials")
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(self._hasher.verify, user.password_digest, password)
        if not matches:
            logger.info("Sign-in rejected: invalid credentials")
            raise InvalidCredentialsError()

        pair = await self._rotate(user)

        logger.info("User signed in: %s", user.id)
        return AuthResponse(
            id=user.id,
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        )

    async def refresh(self, refresh_token: str) -> TokenPair:
        """
        Exchange the current refresh token for a new pair.

        The swap of the stored token is conditional on it still being the
        presented one, so concurrent refreshes with one token yield a single
        new pair.
        """
        try:
            subject = await asyncio.to_thread(self._tokens.validate_refresh, refresh_token)
        except TokenValidationError as e:
            logger.info("Refresh rejected: %s", e.kind.value)
            raise InvalidRefreshTokenError(e.kind) from e

        user_id = _parse_user_id(subject, InvalidRefreshTokenError)
        user = await self._get_user(user_id)

        if not _same_token(user.refresh_token, refresh_token):
            logger.warning("Refresh rejected for user %s: token is not current", user.id)
            raise _revoked()

        pair = await asyncio.to_thread(self._tokens.issue_pair, user.id)
        swapped = await asyncio.to_thread(
            self._users.replace_refresh_token, user.id, refresh_token, pair.refresh_token
        )
        if not swapped:
            logger.warning("Refresh rejected for user %s: token was rotated concurrently", user.id)
            raise _revoked()

        logger.info("Tokens refreshed for user %s", user.id)
        return pair

    async def logout(self, access_token: str) -> None:
        """Clear the stored refresh token of the access token's user."""
        try:
            subject = await asyncio.to_thread(self._tokens.validate_access, access_token)
        except TokenValidationError as e:
            logger.info("Logout rejected: %s", e.kind.value)
            raise InvalidAccessTokenError(e.kind) from e

        user_id = _parse_user_id(subject, InvalidAccessTokenError)
        user = await self._get_user(user_id)

        await asyncio.to_thread(self._users.update, user.clear_refresh_token())
        logger.info("User logged out: %s", user.id)

    async def get_profile(self, user_id: str) -> UserProfile:
        user = await self._get_user(user_id)
        return user.to_profile()

    async def _get_user(self, user_id: str) -> User:
        user = await asyncio.to_thread(self._users.find_by_id, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def _rotate(self, user: User) -> TokenPair:
        """Issue a new pair and make its refresh token the one on file."""
        pair = await asyncio.to_thread(self._tokens.issue_pair, user.id)
        await asyncio.to_thread(self._users.update, user.with_refresh_token(pair.refresh_token))
        return pair


def _parse_user_id(subject: str, error_cls: Type[AuthenticationError]) -> str:
    """Subjects we issue are always UUIDs; anything else is malformed."""
    try:
        return str(uuid.UUID(subject))
    except (ValueError, TypeError) as e:
        raise error_cls(TokenErrorKind.MALFORMED_CLAIMS) from e


def _same_token(stored: str, presented: str) -> bool:
    if not stored:
        return False
    return hmac.compare_digest(stored.encode("utf-8"), presented.encode("utf-8"))


def _revoked() -> InvalidRefreshTokenError:
    return InvalidRefreshTokenError(TokenErrorKind.REVOKED, "Refresh token is no longer valid")


def _fits_bcrypt(password: str) -> bool:
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES
