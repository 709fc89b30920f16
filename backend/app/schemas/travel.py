"""
Pydantic schemas for Travel, TravelDay and TravelLog entities.
"""
from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date, datetime


class TravelCreate(BaseModel):
    """Schema for travel creation from already uploaded photos."""
    title: str = Field(..., min_length=1, max_length=200)
    region: Optional[str] = None  # Overrides the majority-vote region when given
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    photo_ids: List[int] = Field(..., min_length=1)
    representative_photo_id: Optional[int] = None

    @model_validator(mode="after")
    def check_date_range(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class TravelUpdate(BaseModel):
    """Schema for partial travel update."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    representative_photo_id: Optional[int] = None


class RepresentativePhotoUpdate(BaseModel):
    """Schema for setting or clearing the representative photo."""
    photo_id: Optional[int] = None


class TravelCreatedResponse(BaseModel):
    travel_id: int


class TravelSummary(BaseModel):
    """Schema for travel list items."""
    travel_id: int
    title: str
    region: Optional[str] = None
    start_date: date
    end_date: date
    representative_image_url: Optional[str] = None


class CommentDetail(BaseModel):
    comment_id: int
    writer_id: int
    content: str
    created_at: datetime


class PhotoDetail(BaseModel):
    photo_id: int
    url: str
    original_name: Optional[str] = None
    taken_at: datetime
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    comments: List[CommentDetail] = []


class DiaryDetail(BaseModel):
    log_id: int
    content: str
    created_at: datetime


class TravelDayDetail(BaseModel):
    day_id: int
    day_number: int
    date: date
    region: Optional[str] = None
    photos: List[PhotoDetail] = []
    diary: Optional[DiaryDetail] = None


class TravelDetailResponse(BaseModel):
    """Full nested travel structure."""
    travel_id: int
    title: str
    region: Optional[str] = None
    representative_photo_id: Optional[int] = None
    share_url: Optional[str] = None
    start_date: date
    end_date: date
    days: List[TravelDayDetail] = []


class DayCreate(BaseModel):
    """Schema for adding a day manually."""
    date: date


class DayCreatedResponse(BaseModel):
    day_id: int


class DayResponse(BaseModel):
    """Schema for a single day."""
    day_id: int
    day_number: int
    date: date
    region: Optional[str] = None


class DayPhotosAdd(BaseModel):
    photo_ids: List[int] = Field(..., min_length=1)


class DayPhotosAddedResponse(BaseModel):
    added: int


class LogRequest(BaseModel):
    """Schema for creating or updating a diary log."""
    content: str = Field(..., min_length=1)


class LogCreatedResponse(BaseModel):
    log_id: int


class ShareUrlResponse(BaseModel):
    travel_id: int
    share_url: str
