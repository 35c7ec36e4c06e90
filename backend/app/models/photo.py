"""
Photo model for the per-account photo collections.
"""
from typing import Optional

from pydantic import BaseModel, Field

from app.models.user import epoch_millis


class Photo(BaseModel):
    """
    Photo record stored in ``photos[<email>]``.

    ``angle`` and ``radius`` position the photo in the client layout and are
    opaque to the backend.
    """
    id: str = Field(..., description="Unique within the owning collection")
    image_data: Optional[str] = Field(None, alias="imageData", description="Opaque image blob")
    caption: str = Field("", description="Photo caption")
    angle: Optional[float] = Field(None, description="Placement angle")
    radius: Optional[float] = Field(None, description="Placement radius")
    group: Optional[str] = Field(None, description="Optional group label")
    created_at: int = Field(
        default_factory=epoch_millis,
        alias="createdAt",
        description="Creation timestamp in epoch milliseconds",
    )

    class Config:
        populate_by_name = True
