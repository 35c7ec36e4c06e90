"""
Service dependencies for route handlers.

Services are built once per application in the lifespan and kept on
``app.state``; handlers receive them through these dependencies.
"""
from typing import Annotated
from urllib.parse import unquote

from fastapi import Depends, Path, Request

from app.database.document_store import DocumentStore
from app.services.password_reset_service import PasswordResetService
from app.services.photo_service import PhotoService
from app.services.user_service import UserService


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.document_store


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_photo_service(request: Request) -> PhotoService:
    return request.app.state.photo_service


def get_password_reset_service(request: Request) -> PasswordResetService:
    return request.app.state.password_reset_service


def get_account_key(
    user_id: Annotated[str, Path(description="Account email (may be percent-encoded)")]
) -> str:
    """Percent-decode the account key taken from the path."""
    return unquote(user_id)


# Type aliases for cleaner route signatures
Users = Annotated[UserService, Depends(get_user_service)]
Photos = Annotated[PhotoService, Depends(get_photo_service)]
PasswordReset = Annotated[PasswordResetService, Depends(get_password_reset_service)]
Store = Annotated[DocumentStore, Depends(get_document_store)]
AccountKey = Annotated[str, Depends(get_account_key)]
