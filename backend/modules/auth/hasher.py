"""
Password hashing with bcrypt.

bcrypt is deliberately slow; async callers must run these methods in a
worker thread.
"""

import secrets

import bcrypt

from .exceptions import HashingError

DEFAULT_ROUNDS = 12


class BcryptHasher:
    """Implementation of ICredentialHasher using salted bcrypt."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self._rounds = rounds
        # Compared against when the user is unknown, so that sign-in takes
        # the same time either way.
        self._dummy_digest = bcrypt.hashpw(
            secrets.token_hex(16).encode("utf-8"), bcrypt.gensalt(rounds)
        )

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, secret: str) -> str:
        """Return a salted bcrypt digest of the secret."""
        try:
            digest = bcrypt.hashpw(secret.encode("utf-8"), bcrypt.gensalt(self._rounds))
        except (ValueError, TypeError) as e:
            raise HashingError(f"Password hashing failed: {e}") from e
        return digest.decode("utf-8")

    def verify(self, digest: str, secret: str) -> bool:
        """
        Check a secret against a stored digest.

        Returns:
            True if the secret matches, False otherwise

        Raises:
            HashingError: If the digest is not a valid bcrypt hash
        """
        try:
            return bcrypt.checkpw(secret.encode("utf-8"), digest.encode("utf-8"))
        except (ValueError, TypeError) as e:
            raise HashingError(f"Password verification failed: {e}") from e

    def dummy_verify(self, secret: str) -> None:
        """Spend the cost of one verify without a real digest."""
        try:
            bcrypt.checkpw(secret.encode("utf-8"), self._dummy_digest)
        except (ValueError, TypeError) as e:
            raise HashingError(f"Password verification failed: {e}") from e
