"""
User router for browsing accounts and managing profiles.
"""
from fastapi import APIRouter

from app.dependencies.services import AccountKey, Users
from app.schemas.user import (
    AccountSummary,
    DeleteAccountRequest,
    ProfileUpdate,
    UserResponse,
)

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=list[AccountSummary], summary="List accounts")
def list_users(users: Users):
    """List every account with its photo count (for browsing boxes)."""
    return users.list_accounts()


@router.get("/{user_id}", response_model=UserResponse, summary="Get account info")
def get_user(email: AccountKey, users: Users):
    return UserResponse.from_account(users.get(email))


@router.patch("/{user_id}", response_model=UserResponse, summary="Update profile")
def update_user(email: AccountKey, body: ProfileUpdate, users: Users):
    """
    Partially update a profile.

    - **name**: New display name
    - **username**: New username, unique ignoring case
    - **profilePhoto**: New image, or `null` to remove it
    """
    return UserResponse.from_account(users.update_profile(email, body))


@router.delete("/{user_id}", summary="Delete account")
def delete_user(email: AccountKey, body: DeleteAccountRequest, users: Users):
    """Delete an account and all its photos after re-checking the password."""
    users.confirm_password(email, body.password)
    users.delete(email)
    return {"success": True}
