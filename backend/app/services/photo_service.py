"""
Photo collections: one ordered list of photos per account email.
"""
import logging
from typing import List

from app.core.exceptions import PhotoNotFoundError
from app.database.document_store import DocumentStore
from app.models.photo import Photo
from app.models.user import epoch_millis
from app.schemas.photo import PhotoCreate, PhotoUpdate

logger = logging.getLogger(__name__)


class PhotoService:
    """Service for photo collection operations."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def list(self, email: str) -> list[Photo]:
        """List photos in insertion order; empty for unknown accounts."""
        return [photo.model_copy() for photo in self.store.snapshot().photos.get(email, [])]

    def append(self, email: str, data: PhotoCreate) -> Photo:
        """
        Append a photo, assigning a fresh id and creation timestamp.

        Creates the collection if the email has none yet.
        """
        with self.store.transaction() as doc:
            photos = doc.photos.setdefault(email, [])
            now = epoch_millis()
            photo = Photo(
                id=self._next_id(photos, now),
                image_data=data.image_data,
                caption=data.caption or "",
                angle=data.angle,
                radius=data.radius,
                group=data.group or None,
                created_at=now,
            )
            photos.append(photo)

        logger.info("Added photo %s for %s", photo.id, email)
        return photo.model_copy()

    def patch(self, email: str, photo_id: str, changes: PhotoUpdate) -> Photo:
        """
        Update caption and/or group of one photo.

        Raises:
            PhotoNotFoundError: If the collection has no photo with this id
        """
        fields = changes.model_fields_set
        with self.store.transaction() as doc:
            photo = next(
                (p for p in doc.photos.get(email, []) if p.id == photo_id),
                None,
            )
            if photo is None:
                raise PhotoNotFoundError(email, photo_id)

            if "caption" in fields:
                photo.caption = changes.caption or ""
            if "group" in fields:
                photo.group = changes.group

        return photo.model_copy()

    def remove(self, email: str, photo_id: str) -> None:
        """Remove one photo. Unknown ids are ignored."""
        with self.store.transaction() as doc:
            photos = doc.photos.get(email)
            if photos is not None:
                doc.photos[email] = [p for p in photos if p.id != photo_id]

    def clear(self, email: str) -> None:
        """Empty the collection, creating it if absent."""
        with self.store.transaction() as doc:
            doc.photos[email] = []
        logger.info("Cleared photos for %s", email)

    @staticmethod
    def _next_id(photos: List[Photo], now: int) -> str:
        # Millisecond timestamp, bumped past any id already in the collection
        taken = {p.id for p in photos}
        candidate = now
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)
