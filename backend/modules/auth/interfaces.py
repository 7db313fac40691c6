"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with mocks and future extraction
to a microservice.
"""

from typing import Protocol, runtime_checkable

from modules.users.models import UserProfile
from .models import AuthResponse, TokenClaims, TokenPair


@runtime_checkable
class ICredentialHasher(Protocol):
    """One-way hashing and verification of user secrets."""

    def hash(self, secret: str) -> str:
        """
        Hash a secret with a fresh salt.

        Raises:
            HashingError: If the hashing backend fails
        """
        ...

    def verify(self, digest: str, secret: str) -> bool:
        """
        Check a secret against a digest in constant time.

        Returns:
            False on mismatch (never raises for a wrong secret)

        Raises:
            HashingError: If the digest is malformed
        """
        ...

    def dummy_verify(self, secret: str) -> None:
        """Spend the time of one verify when there is no digest to check."""
        ...


@runtime_checkable
class ITokenService(Protocol):
    """Issues and statelessly validates access/refresh token pairs."""

    def issue_pair(self, subject: str) -> TokenPair:
        """
        Issue a token pair for a subject.

        Raises:
            SigningError: On internal signing failure
        """
        ...

    def validate_access(self, token: str) -> str:
        """
        Validate an access token.

        Returns:
            The token subject

        Raises:
            TokenValidationError: With kind EXPIRED, INVALID_SIGNATURE or MALFORMED_CLAIMS
        """
        ...

    def validate_refresh(self, token: str) -> str:
        """
        Validate a refresh token (signature, claims and expiry only).

        Returns:
            The token subject

        Raises:
            TokenValidationError: With kind EXPIRED, INVALID_SIGNATURE or MALFORMED_CLAIMS
        """
        ...

    def decode_access(self, token: str) -> TokenClaims:
        """Validate an access token and return all of its claims."""
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer. Implementations must provide all these methods.
    """

    async def sign_up(
        self,
        display_name: str,
        phone_number: str,
        password: str,
    ) -> AuthResponse:
        """
        Register a user and issue their first token pair.

        Raises:
            PhoneNumberTakenError: If the phone number is already registered
            HashingError, SigningError, StoreError: On collaborator failure
        """
        ...

    async def sign_in(self, phone_number: str, password: str) -> AuthResponse:
        """
        Authenticate with phone number and password and rotate the refresh token.

        Raises:
            InvalidCredentialsError: Unknown phone number or wrong password
        """
        ...

    async def refresh(self, refresh_token: str) -> TokenPair:
        """
        Exchange the current refresh token for a new pair.

        Raises:
            InvalidRefreshTokenError: If the token is invalid, expired or no longer current
            UserNotFoundError: If the token's user does not exist
        """
        ...

    async def logout(self, access_token: str) -> None:
        """
        Clear the stored refresh token of the access token's user.

        Raises:
            InvalidAccessTokenError: If the access token is rejected
            UserNotFoundError: If the token's user does not exist
        """
        ...

    async def get_profile(self, user_id: str) -> UserProfile:
        """
        Get a user's public profile.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        ...
