"""
Pydantic models for the persisted document and reset state.
"""
from app.models.user import Account, epoch_millis, is_valid_username
from app.models.photo import Photo
from app.models.document import Document
from app.models.reset_entry import ResetEntry

__all__ = [
    "Account",
    "Photo",
    "Document",
    "ResetEntry",
    "epoch_millis",
    "is_valid_username",
]
