"""
Photo request schemas.
"""
from typing import Optional

from pydantic import BaseModel, Field


class PhotoCreate(BaseModel):
    """Append a photo to a collection."""
    image_data: str = Field(..., alias="imageData", description="Opaque image blob")
    caption: str = Field("", description="Caption")
    angle: float = Field(..., description="Placement angle")
    radius: float = Field(..., description="Placement radius")
    group: Optional[str] = Field(None, description="Optional group label")

    class Config:
        populate_by_name = True


class PhotoUpdate(BaseModel):
    """
    Patch a photo in place.

    Fields left out of the request are untouched; ``"group": null`` clears
    the group.
    """
    caption: Optional[str] = Field(None, description="New caption")
    group: Optional[str] = Field(None, description="New group label")
