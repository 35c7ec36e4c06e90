"""
Authentication and password-reset request/response schemas.
"""
from pydantic import BaseModel, EmailStr, Field, TypeAdapter, ValidationError, field_validator

from app.schemas.user import UserResponse

_email_adapter = TypeAdapter(EmailStr)


class SignupRequest(BaseModel):
    """Signup request body."""
    email: str = Field(..., description="User email address (account key)")
    password: str = Field(..., description="User password")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    username: str = Field(..., description="Unique username (letters, digits, underscore)")

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        # The account key is kept exactly as sent; EmailStr would normalize it
        try:
            _email_adapter.validate_python(value)
        except ValidationError:
            raise ValueError("Invalid email address")
        return value


class LoginRequest(BaseModel):
    """Login request body."""
    identifier: str = Field(..., min_length=1, description="Email or username")
    password: str = Field(..., description="User password")


class AuthResponse(BaseModel):
    """Signup/login response."""
    success: bool = True
    user: UserResponse


class ForgotPasswordRequest(BaseModel):
    """Start the reset flow for an email or username."""
    identifier: str = Field(..., min_length=1, description="Email or username")


class ResendCodeRequest(BaseModel):
    email: str = Field(..., min_length=1, description="Account email")


class VerifyCodeRequest(BaseModel):
    email: str = Field(..., min_length=1, description="Account email")
    code: str = Field(..., description="6-digit code from the reset email")


class ResetPasswordRequest(BaseModel):
    email: str = Field(..., min_length=1, description="Account email")
    code: str = Field(..., description="Verified 6-digit code")
    new_password: str = Field(..., alias="newPassword", description="New password")

    class Config:
        populate_by_name = True


class ResetTicket(BaseModel):
    """Result of issuing (or re-issuing) a reset code."""
    success: bool = True
    email: str = Field(..., description="Account the code was sent for")
    name: str = Field(..., description="Account display name")
    delivery_reference: str = Field(
        ...,
        alias="deliveryReference",
        description="Reference returned by the mailer",
    )
    expires_in_seconds: int = Field(
        ...,
        alias="expiresInSeconds",
        description="Code validity",
    )

    class Config:
        populate_by_name = True
