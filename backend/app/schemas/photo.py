"""
Pydantic schemas for Photo and Comment entities.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime


class PhotoMetadata(BaseModel):
    """Per-file metadata sent alongside an upload."""
    original_name: Optional[str] = Field(None, alias="originalName")
    taken_at: datetime = Field(..., alias="takenAt")
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    model_config = {"populate_by_name": True}

    @field_validator("taken_at")
    @classmethod
    def drop_offset(cls, v: datetime) -> datetime:
        """Keep the wall-clock time the photo was taken, without its offset."""
        return v.replace(tzinfo=None)


class PhotoResponse(BaseModel):
    """Schema for photo response."""
    id: int
    day_id: Optional[int] = None
    url: str
    original_name: Optional[str] = None
    taken_at: datetime
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    created_at: datetime
    
    class Config:
        from_attributes = True


class MapPhotoResponse(BaseModel):
    """Schema for map marker response."""
    photo_id: int
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    thumbnail_url: str


class PhotoUpdate(BaseModel):
    """Schema for partial photo update; only non-null fields are applied."""
    taken_at: Optional[datetime] = None
    day_id: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class MovePhotoRequest(BaseModel):
    day_id: int


class CommentRequest(BaseModel):
    content: str = Field(..., min_length=1)


class CommentResponse(BaseModel):
    """Schema for comment response."""
    id: int
    photo_id: int
    writer_id: int
    content: str
    created_at: datetime
    
    class Config:
        from_attributes = True


class PhotoDetailResponse(PhotoResponse):
    """Schema for photo response with comments."""
    comments: List[CommentResponse] = []
