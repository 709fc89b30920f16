"""
Photo service for upload, lookup, update and deletion of photos.

Photos are uploaded independently of any travel and assigned to days later.
"""
from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, NamedTuple, Optional
import logging
from app.core.config import settings
from app.core.exceptions import ValidationError, ForbiddenError
from app.models.user import User
from app.models.travel import Travel
from app.models.photo import Photo, Comment
from app.schemas.photo import PhotoMetadata
from app.services.blob_service import BlobStoreError
from app.services.day_service import reassign_photo
from app.services.travel_queries import get_photo, get_day

logger = logging.getLogger(__name__)


class UploadedFile(NamedTuple):
    """File content read from a multipart upload."""
    filename: Optional[str]
    content_type: Optional[str]
    data: bytes


def upload_photos(
    files: List[UploadedFile],
    metadata: List[PhotoMetadata],
    requester: User,
    blob_store,
    db: Session
) -> List[Photo]:
    """Store each file in the blob store and create unassigned photo rows."""
    if not files:
        raise ValidationError("At least one photo file is required")
    if len(files) != len(metadata):
        raise ValidationError("The number of files does not match the number of metadata entries")

    for file in files:
        if file.content_type not in settings.ALLOWED_IMAGE_TYPES:
            raise ValidationError(f"Invalid file type: {file.content_type}")
        if len(file.data) > settings.MAX_UPLOAD_SIZE:
            raise ValidationError(f"File too large: {file.filename}")

    saved_photos = []
    for file, meta in zip(files, metadata):
        url = blob_store.store(file.data, file.content_type, file.filename)

        latitude, longitude = meta.latitude, meta.longitude
        if latitude is None or longitude is None:
            latitude = longitude = None

        photo = Photo(
            user_id=requester.id,
            file_path=url,
            original_name=meta.original_name or file.filename,
            taken_at=meta.taken_at,
            latitude=latitude,
            longitude=longitude
        )
        db.add(photo)
        saved_photos.append(photo)

    db.commit()
    for photo in saved_photos:
        db.refresh(photo)

    logger.info(f"User {requester.id} uploaded {len(saved_photos)} photos")
    return saved_photos


def list_map_photos(requester: User, db: Session) -> List[Photo]:
    """All of the requester's photos, for map markers."""
    return db.query(Photo).filter(
        Photo.user_id == requester.id
    ).order_by(Photo.id).all()


def update_photo(
    photo_id: int,
    requester: User,
    resolver,
    db: Session,
    taken_at: Optional[datetime] = None,
    day_id: Optional[int] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None
) -> Photo:
    """Apply the non-null fields of a partial photo update."""
    photo = get_photo(photo_id, db)
    if photo.user_id != requester.id:
        raise ForbiddenError("You can only edit your own photos")

    if taken_at is not None:
        photo.taken_at = taken_at.replace(tzinfo=None)

    # Location first, so a move below votes with the new coordinates
    if latitude is not None and longitude is not None:
        photo.latitude = latitude
        photo.longitude = longitude

    if day_id is not None:
        reassign_photo(photo, get_day(day_id, db), requester, resolver, db)

    db.commit()
    db.refresh(photo)
    return photo


def delete_photo(photo_id: int, requester: User, blob_store, db: Session) -> int:
    """
    Delete a photo with its comments and blob.

    Any travel using it as representative photo has the pointer cleared.
    """
    photo = get_photo(photo_id, db)
    if photo.user_id != requester.id:
        raise ForbiddenError("You can only delete your own photos")

    db.query(Travel).filter(
        Travel.representative_photo_id == photo.id
    ).update({Travel.representative_photo_id: None}, synchronize_session="fetch")

    try:
        blob_store.delete(photo.file_path)
    except BlobStoreError as e:
        logger.error(f"Failed to delete blob for photo {photo.id}: {e}")

    db.query(Comment).filter(Comment.photo_id == photo.id).delete(synchronize_session="fetch")
    db.delete(photo)
    db.commit()
    return photo_id
