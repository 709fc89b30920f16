"""
Travel management routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.schemas.travel import (
    TravelCreate, TravelCreatedResponse, TravelSummary, TravelDetailResponse,
    TravelUpdate, RepresentativePhotoUpdate, DayCreate, DayCreatedResponse,
    DayResponse, ShareUrlResponse
)
from app.services import travel_service, day_service
from app.api.dependencies import get_current_user, get_region_resolver, get_blob_store

router = APIRouter(prefix="/travels", tags=["travels"])


@router.get("", response_model=List[TravelSummary])
async def list_travels(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all travels of the current user."""
    return travel_service.list_travels(current_user, db)


@router.post("", response_model=TravelCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_travel(
    travel_data: TravelCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    resolver=Depends(get_region_resolver)
):
    """Create a travel from uploaded photos; days are derived from photo dates."""
    travel_id = travel_service.create_travel(
        title=travel_data.title,
        photo_ids=travel_data.photo_ids,
        requester=current_user,
        resolver=resolver,
        db=db,
        start_date=travel_data.start_date,
        end_date=travel_data.end_date,
        region=travel_data.region,
        representative_photo_id=travel_data.representative_photo_id
    )
    return TravelCreatedResponse(travel_id=travel_id)


@router.get("/{travel_id}", response_model=TravelDetailResponse)
async def get_travel(
    travel_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get travel details with days, photos, comments and diary logs."""
    return travel_service.get_travel_detail(travel_id, current_user, db)


@router.patch("/{travel_id}")
async def update_travel(
    travel_id: int,
    update: TravelUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update title and/or representative photo."""
    travel_service.update_travel(
        travel_id,
        current_user,
        db,
        title=update.title,
        representative_photo_id=update.representative_photo_id
    )
    return {"message": "Travel updated successfully"}


@router.delete("/{travel_id}")
async def delete_travel(
    travel_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    blob_store=Depends(get_blob_store)
):
    """Delete a travel with all of its days, photos and logs."""
    travel_service.delete_travel(travel_id, current_user, blob_store, db)
    return {"message": "Travel deleted successfully"}


@router.put("/{travel_id}/representative-photo")
async def update_representative_photo(
    travel_id: int,
    update: RepresentativePhotoUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Set or clear the representative photo."""
    travel_service.update_representative_photo(travel_id, update.photo_id, current_user, db)
    return {"message": "Representative photo updated successfully"}


@router.post("/{travel_id}/days", response_model=DayCreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_day(
    travel_id: int,
    day_data: DayCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add an empty day; later days are renumbered."""
    day = day_service.add_day(travel_id, day_data.date, current_user, db)
    return DayCreatedResponse(day_id=day.id)


@router.get("/{travel_id}/days/{day_number}", response_model=DayResponse)
async def get_day(
    travel_id: int,
    day_number: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a single day by its number."""
    day = day_service.get_day_by_number(travel_id, day_number, current_user, db)
    return DayResponse(
        day_id=day.id,
        day_number=day.day_number,
        date=day.date,
        region=day.region
    )


@router.post("/{travel_id}/share", response_model=ShareUrlResponse)
async def share_travel(
    travel_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the share URL, creating it on first request."""
    share_url = travel_service.get_or_create_share_url(travel_id, current_user, db)
    return ShareUrlResponse(travel_id=travel_id, share_url=share_url)
