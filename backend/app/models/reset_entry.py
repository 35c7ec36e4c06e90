"""
Pending password-reset verification state.
"""
from datetime import datetime

from pydantic import BaseModel, Field


class ResetEntry(BaseModel):
    """One live reset code for an email."""
    code: str = Field(..., min_length=6, max_length=6, description="6-digit numeric code")
    expires_at: datetime = Field(..., description="Instant after which the code is void")
    verified: bool = Field(False, description="Set once the code has been checked")

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
