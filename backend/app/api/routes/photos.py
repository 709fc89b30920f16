"""
Photo routes for upload, lookup, update, deletion and comments.
"""
from fastapi import APIRouter, Depends, UploadFile, File, Form, status
from pydantic import TypeAdapter, ValidationError as PydanticValidationError
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.core.exceptions import ValidationError
from app.models.user import User
from app.schemas.photo import (
    PhotoMetadata, PhotoResponse, PhotoDetailResponse, MapPhotoResponse,
    PhotoUpdate, MovePhotoRequest, CommentRequest, CommentResponse
)
from app.services import photo_service, comment_service, day_service
from app.services.travel_queries import get_photo, comments_of
from app.api.dependencies import get_current_user, get_region_resolver, get_blob_store

router = APIRouter(tags=["photos"])

_metadata_adapter = TypeAdapter(List[PhotoMetadata])


def _to_response(photo) -> PhotoResponse:
    return PhotoResponse(
        id=photo.id,
        day_id=photo.day_id,
        url=photo.file_path,
        original_name=photo.original_name,
        taken_at=photo.taken_at,
        latitude=photo.latitude,
        longitude=photo.longitude,
        created_at=photo.created_at
    )


@router.post("/photos", response_model=List[PhotoResponse], status_code=status.HTTP_201_CREATED)
async def upload_photos(
    files: List[UploadFile] = File(...),
    metadata: str = Form(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    blob_store=Depends(get_blob_store)
):
    """Upload photos with a JSON array of per-file metadata (takenAt, coordinates)."""
    try:
        meta_list = _metadata_adapter.validate_json(metadata)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid photo metadata: {e.errors()[0]['msg']}")

    uploaded = []
    for file in files:
        content = await file.read()
        uploaded.append(photo_service.UploadedFile(file.filename, file.content_type, content))

    photos = photo_service.upload_photos(uploaded, meta_list, current_user, blob_store, db)
    return [_to_response(photo) for photo in photos]


@router.get("/photos/map", response_model=List[MapPhotoResponse])
async def get_map_photos(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Photo markers of the current user."""
    return [
        MapPhotoResponse(
            photo_id=photo.id,
            latitude=photo.latitude,
            longitude=photo.longitude,
            thumbnail_url=photo.file_path
        )
        for photo in photo_service.list_map_photos(current_user, db)
    ]


@router.get("/photos/{photo_id}", response_model=PhotoDetailResponse)
async def get_photo_detail(
    photo_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a photo with its comments."""
    photo = get_photo(photo_id, db)
    return PhotoDetailResponse(
        **_to_response(photo).model_dump(),
        comments=[CommentResponse.model_validate(c) for c in comments_of(photo.id, db)]
    )


@router.patch("/photos/{photo_id}", response_model=PhotoResponse)
async def update_photo(
    photo_id: int,
    update: PhotoUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    resolver=Depends(get_region_resolver)
):
    """Update taken time, location and/or day of a photo."""
    photo = photo_service.update_photo(
        photo_id,
        current_user,
        resolver,
        db,
        taken_at=update.taken_at,
        day_id=update.day_id,
        latitude=update.latitude,
        longitude=update.longitude
    )
    return _to_response(photo)


@router.patch("/photos/{photo_id}/day")
async def move_photo(
    photo_id: int,
    request: MovePhotoRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    resolver=Depends(get_region_resolver)
):
    """Move a photo to another day."""
    day_service.move_photo_to_day(photo_id, request.day_id, current_user, resolver, db)
    return {"message": "Photo moved successfully"}


@router.delete("/photos/{photo_id}")
async def delete_photo(
    photo_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    blob_store=Depends(get_blob_store)
):
    """Delete a photo, its comments and its file."""
    deleted_id = photo_service.delete_photo(photo_id, current_user, blob_store, db)
    return {"message": "Photo deleted successfully", "photo_id": deleted_id}


@router.post("/photos/{photo_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    photo_id: int,
    request: CommentRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Comment on a photo."""
    return comment_service.create_comment(photo_id, request.content, current_user, db)


@router.put("/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    request: CommentRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Edit your own comment."""
    return comment_service.update_comment(comment_id, request.content, current_user, db)


@router.delete("/comments/{comment_id}")
async def delete_comment(
    comment_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a comment as its writer or as the photo owner."""
    comment_service.delete_comment(comment_id, current_user, db)
    return {"message": "Comment deleted successfully"}
