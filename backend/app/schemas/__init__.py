"""
Request and response schemas for API endpoints.
"""
from app.schemas.auth import (
    SignupRequest,
    LoginRequest,
    AuthResponse,
    ForgotPasswordRequest,
    ResendCodeRequest,
    VerifyCodeRequest,
    ResetPasswordRequest,
    ResetTicket,
)
from app.schemas.user import (
    UserResponse,
    AccountSummary,
    ProfileUpdate,
    DeleteAccountRequest,
)
from app.schemas.photo import PhotoCreate, PhotoUpdate

__all__ = [
    # Auth
    "SignupRequest",
    "LoginRequest",
    "AuthResponse",
    "ForgotPasswordRequest",
    "ResendCodeRequest",
    "VerifyCodeRequest",
    "ResetPasswordRequest",
    "ResetTicket",
    # User
    "UserResponse",
    "AccountSummary",
    "ProfileUpdate",
    "DeleteAccountRequest",
    # Photo
    "PhotoCreate",
    "PhotoUpdate",
]
