"""
Credential storage and comparison.

Every password read or written by the services goes through a
``CredentialVerifier`` so the storage scheme can change without touching
callers.
"""
import hmac
from typing import Protocol

from passlib.context import CryptContext

from app.config import Settings


class CredentialVerifier(Protocol):
    """Turns plain passwords into stored form and checks them."""

    def hash_password(self, plain_password: str) -> str:
        ...

    def verify_password(self, plain_password: str, stored_password: str) -> bool:
        ...


class PlaintextCredentialVerifier:
    """
    Stores passwords as given and compares them byte-for-byte.

    This is the scheme used by existing data files.
    """

    def hash_password(self, plain_password: str) -> str:
        return plain_password

    def verify_password(self, plain_password: str, stored_password: str) -> bool:
        return hmac.compare_digest(
            plain_password.encode("utf-8"),
            stored_password.encode("utf-8"),
        )


class BcryptCredentialVerifier:
    """Salted bcrypt hashes via passlib."""

    def __init__(self):
        # Password hashing context using bcrypt
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    def hash_password(self, plain_password: str) -> str:
        """
        Hash a plain password using bcrypt.

        Args:
            plain_password: The plain text password to hash

        Returns:
            Hashed password string
        """
        return self.pwd_context.hash(plain_password)

    def verify_password(self, plain_password: str, stored_password: str) -> bool:
        """
        Verify a plain password against a bcrypt hash.

        Returns False (rather than raising) when the stored value is not a
        recognised hash, e.g. a legacy plaintext entry.
        """
        try:
            return self.pwd_context.verify(plain_password, stored_password)
        except ValueError:
            return False


def get_credential_verifier(settings: Settings) -> CredentialVerifier:
    """Build the verifier selected by ``settings.password_scheme``."""
    scheme = settings.password_scheme.lower()
    if scheme == "plaintext":
        return PlaintextCredentialVerifier()
    if scheme == "bcrypt":
        return BcryptCredentialVerifier()
    raise ValueError(f"Unknown password scheme: {settings.password_scheme}")
