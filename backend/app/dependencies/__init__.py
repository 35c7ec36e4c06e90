"""
Dependencies for dependency injection in routes.
"""
from app.dependencies.services import (
    get_document_store,
    get_user_service,
    get_photo_service,
    get_password_reset_service,
    get_account_key,
)

__all__ = [
    "get_document_store",
    "get_user_service",
    "get_photo_service",
    "get_password_reset_service",
    "get_account_key",
]
