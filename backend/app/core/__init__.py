"""
Core module - Error taxonomy and credential handling.
"""
from app.core.exceptions import (
    MemoryBoxError,
    DuplicateKeyError,
    NotFoundError,
    InvalidInputError,
    StoreUnavailableError,
    SendFailureError,
)
from app.core.security import (
    CredentialVerifier,
    PlaintextCredentialVerifier,
    BcryptCredentialVerifier,
    get_credential_verifier,
)

__all__ = [
    "MemoryBoxError",
    "DuplicateKeyError",
    "NotFoundError",
    "InvalidInputError",
    "StoreUnavailableError",
    "SendFailureError",
    "CredentialVerifier",
    "PlaintextCredentialVerifier",
    "BcryptCredentialVerifier",
    "get_credential_verifier",
]
