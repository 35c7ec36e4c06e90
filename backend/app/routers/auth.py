"""
Authentication router: signup, login and the password-reset flow.
"""
from fastapi import APIRouter, HTTPException, status

from app.core.exceptions import AccountNotFoundError
from app.dependencies.services import PasswordReset, Users
from app.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    ResendCodeRequest,
    ResetPasswordRequest,
    ResetTicket,
    SignupRequest,
    VerifyCodeRequest,
)
from app.schemas.user import UserResponse

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    summary="Register a new account",
)
def signup(body: SignupRequest, users: Users):
    """
    Create an account and its empty photo collection.

    - **email**: Account key (must be unique)
    - **username**: Letters, digits and underscores; unique ignoring case
    - **password**: Minimum length set by configuration
    """
    account = users.create(
        email=body.email,
        name=body.name,
        username=body.username,
        password=body.password,
    )
    return AuthResponse(user=UserResponse.from_account(account))


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Check credentials",
)
def login(body: LoginRequest, users: Users):
    """
    Validate an email or username with its password.

    No session is created; clients re-send credentials when needed.
    """
    try:
        account = users.authenticate(body.identifier, body.password)
    except AccountNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
    return AuthResponse(user=UserResponse.from_account(account))


@router.post(
    "/forgot-password",
    response_model=ResetTicket,
    summary="Email a reset code",
)
def forgot_password(body: ForgotPasswordRequest, password_reset: PasswordReset):
    """Find the account for an email or username and send it a reset code."""
    return password_reset.request_code(body.identifier)


@router.post(
    "/resend-code",
    response_model=ResetTicket,
    summary="Send a new reset code",
)
def resend_code(body: ResendCodeRequest, password_reset: PasswordReset):
    """Replace any pending code for the account and email the new one."""
    return password_reset.resend_code(body.email)


@router.post("/verify-code", summary="Verify a reset code")
def verify_code(body: VerifyCodeRequest, password_reset: PasswordReset):
    password_reset.verify_code(body.email, body.code)
    return {"success": True}


@router.post("/reset-password", summary="Set a new password")
def reset_password(body: ResetPasswordRequest, password_reset: PasswordReset):
    """Set a new password with a verified code. The code can only be used once."""
    password_reset.reset_password(body.email, body.code, body.new_password)
    return {"success": True}
