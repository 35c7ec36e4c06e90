"""
Error taxonomy for the persistence and identity layer.

Services raise these; the route layer decides how they map onto HTTP.
"""


class MemoryBoxError(Exception):
    """Base exception for all domain errors."""
    pass


# ==================== Uniqueness ====================

class DuplicateKeyError(MemoryBoxError):
    """Raised when an email or username is already taken."""
    pass


class DuplicateEmailError(DuplicateKeyError):
    """Raised when an account with the same email exists."""

    def __init__(self, email: str):
        super().__init__("User already exists")
        self.email = email


class DuplicateUsernameError(DuplicateKeyError):
    """Raised when the username is taken (case-insensitive)."""

    def __init__(self, username: str):
        super().__init__("Username already taken")
        self.username = username


# ==================== Lookups ====================

class NotFoundError(MemoryBoxError):
    """Raised when an account, photo or reset entry is absent."""
    pass


class AccountNotFoundError(NotFoundError):
    def __init__(self, identifier: str):
        super().__init__("User not found")
        self.identifier = identifier


class PhotoNotFoundError(NotFoundError):
    def __init__(self, email: str, photo_id: str):
        super().__init__("Photo not found")
        self.email = email
        self.photo_id = photo_id


class ResetEntryNotFoundError(NotFoundError):
    """Raised when no live reset code exists for an email."""

    def __init__(self, email: str):
        super().__init__("No reset code requested for this account")
        self.email = email


# ==================== Validation ====================

class InvalidInputError(MemoryBoxError):
    """Raised when input fails validation."""
    pass


class InvalidUsernameError(InvalidInputError):
    def __init__(self, username: str | None):
        super().__init__(
            "Username may only contain letters, numbers and underscores"
        )
        self.username = username


class PasswordTooShortError(InvalidInputError):
    def __init__(self, min_length: int):
        super().__init__(f"Password must be at least {min_length} characters")
        self.min_length = min_length


class BadPasswordError(MemoryBoxError):
    """Raised when the supplied password does not match."""

    def __init__(self):
        super().__init__("Invalid password")


# ==================== Password reset flow ====================

class ResetFlowError(MemoryBoxError):
    """Base for reset code state violations."""
    pass


class CodeExpiredError(ResetFlowError):
    def __init__(self, email: str):
        super().__init__("Reset code has expired, please request a new one")
        self.email = email


class CodeMismatchError(ResetFlowError):
    def __init__(self, email: str):
        super().__init__("Invalid reset code")
        self.email = email


class CodeNotVerifiedError(ResetFlowError):
    def __init__(self, email: str):
        super().__init__("Reset code has not been verified")
        self.email = email


# ==================== Infrastructure ====================

class StoreUnavailableError(MemoryBoxError):
    """Raised when the document cannot be read from or written to storage."""
    pass


class SendFailureError(MemoryBoxError):
    """Raised when the mailer could not deliver a message."""
    pass
