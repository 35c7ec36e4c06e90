"""
User request/response schemas.
"""
from typing import Optional

from pydantic import BaseModel, Field

from app.models.user import Account


class UserResponse(BaseModel):
    """Public account information (excludes the password)."""
    id: str = Field(..., description="Account email")
    name: str = Field(..., description="Display name")
    username: str = Field(..., description="Username")
    profile_photo: Optional[str] = Field(None, alias="profilePhoto", description="Profile image")

    class Config:
        populate_by_name = True

    @classmethod
    def from_account(cls, account: Account) -> "UserResponse":
        return cls(
            id=account.email,
            name=account.name,
            username=account.username,
            profile_photo=account.profile_photo,
        )


class AccountSummary(BaseModel):
    """Entry of the account browsing list."""
    id: str = Field(..., description="Account email")
    name: str = Field(..., description="Display name")
    username: str = Field(..., description="Username")
    photo_count: int = Field(..., alias="photoCount", description="Number of photos")

    class Config:
        populate_by_name = True


class ProfileUpdate(BaseModel):
    """
    Partial profile update.

    Only fields present in the request are applied; send
    ``"profilePhoto": null`` to remove the profile photo.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100, description="Display name")
    username: Optional[str] = Field(None, description="New username")
    profile_photo: Optional[str] = Field(None, alias="profilePhoto", description="Profile image")

    class Config:
        populate_by_name = True


class DeleteAccountRequest(BaseModel):
    password: str = Field(..., description="Current password")
