"""
Photo collection router.
"""
from fastapi import APIRouter

from app.dependencies.services import AccountKey, Photos
from app.models.photo import Photo
from app.schemas.photo import PhotoCreate, PhotoUpdate

router = APIRouter(prefix="/api/photos", tags=["Photos"])


@router.get("/{user_id}", response_model=list[Photo], summary="List photos")
def list_photos(email: AccountKey, photos: Photos):
    """List an account's photos in the order they were added."""
    return photos.list(email)


@router.post("/{user_id}", response_model=Photo, summary="Add a photo")
def add_photo(email: AccountKey, body: PhotoCreate, photos: Photos):
    return photos.append(email, body)


@router.patch("/{user_id}/{photo_id}", response_model=Photo, summary="Update a photo")
def update_photo(email: AccountKey, photo_id: str, body: PhotoUpdate, photos: Photos):
    """Change caption and/or group; omitted fields are left as they are."""
    return photos.patch(email, photo_id, body)


@router.delete("/{user_id}/{photo_id}", summary="Delete a photo")
def delete_photo(email: AccountKey, photo_id: str, photos: Photos):
    photos.remove(email, photo_id)
    return {"success": True}


@router.delete("/{user_id}", summary="Delete all photos")
def clear_photos(email: AccountKey, photos: Photos):
    photos.clear(email)
    return {"success": True}
