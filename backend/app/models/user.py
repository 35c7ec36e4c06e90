"""
Account model for the users map of the document.
"""
import re
import time
from typing import Optional

from pydantic import BaseModel, Field

USERNAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")


def epoch_millis() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


class Account(BaseModel):
    """
    Account record stored under ``users[<email>]``.

    The email is the map key; it is carried on the model for convenience but
    never written inside the record itself.
    """
    email: str = Field("", exclude=True, description="Account key (not persisted in the record)")
    name: str = Field("", description="Display name")
    username: str = Field("", description="Lower-cased, unique across accounts")
    password: str = Field(..., description="Stored credential (scheme set by the verifier)")
    profile_photo: Optional[str] = Field(
        None,
        alias="profilePhoto",
        description="Opaque image reference",
    )
    created_at: int = Field(
        default_factory=epoch_millis,
        alias="createdAt",
        description="Creation timestamp in epoch milliseconds",
    )

    class Config:
        populate_by_name = True


def is_valid_username(username: Optional[str]) -> bool:
    """Check a username against ``[A-Za-z0-9_]+``."""
    return bool(username) and USERNAME_PATTERN.fullmatch(username) is not None


def normalize_username(username: str) -> str:
    return username.lower()
