"""
Travel day routes: deleting days, assigning photos and diary logs.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.models.user import User
from app.schemas.travel import DayPhotosAdd, DayPhotosAddedResponse, LogRequest, LogCreatedResponse
from app.services import day_service, diary_service
from app.api.dependencies import get_current_user, get_region_resolver

router = APIRouter(tags=["days"])


@router.delete("/days/{day_id}")
async def delete_day(
    day_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a day. Its photos are kept but detached."""
    day_service.delete_day(day_id, current_user, db)
    return {"message": "Day deleted successfully"}


@router.post("/days/{day_id}/photos", response_model=DayPhotosAddedResponse)
async def add_photos_to_day(
    day_id: int,
    request: DayPhotosAdd,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    resolver=Depends(get_region_resolver)
):
    """Assign uploaded photos to a day."""
    added = day_service.add_photos_to_day(day_id, request.photo_ids, current_user, resolver, db)
    return DayPhotosAddedResponse(added=added)


@router.post("/days/{day_id}/logs", response_model=LogCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_log(
    day_id: int,
    request: LogRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Write the diary log of a day."""
    travel_log = diary_service.create_log(day_id, request.content, current_user, db)
    return LogCreatedResponse(log_id=travel_log.id)


@router.put("/logs/{log_id}")
async def update_log(
    log_id: int,
    request: LogRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a diary log."""
    diary_service.update_log(log_id, request.content, current_user, db)
    return {"message": "Diary log updated successfully"}


@router.delete("/logs/{log_id}")
async def delete_log(
    log_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a diary log."""
    diary_service.delete_log(log_id, current_user, db)
    return {"message": "Diary log deleted successfully"}
