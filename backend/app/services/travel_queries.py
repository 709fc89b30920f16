"""
Explicit lookups across the travel / day / photo graph.

Models carry one-directional foreign keys only; navigation goes through
these functions.
"""
from sqlalchemy.orm import Session
from typing import List, Optional
from app.core.exceptions import NotFoundError, ForbiddenError
from app.models.user import User
from app.models.travel import Travel, TravelDay, TravelLog
from app.models.photo import Photo, Comment


def get_travel(travel_id: int, db: Session) -> Travel:
    travel = db.query(Travel).filter(Travel.id == travel_id).first()
    if not travel:
        raise NotFoundError(f"Travel not found: {travel_id}")
    return travel


def get_day(day_id: int, db: Session) -> TravelDay:
    day = db.query(TravelDay).filter(TravelDay.id == day_id).first()
    if not day:
        raise NotFoundError(f"Day not found: {day_id}")
    return day


def get_photo(photo_id: int, db: Session) -> Photo:
    photo = db.query(Photo).filter(Photo.id == photo_id).first()
    if not photo:
        raise NotFoundError(f"Photo not found: {photo_id}")
    return photo


def get_owned_travel(travel_id: int, requester: User, db: Session) -> Travel:
    """Load a travel and require the requester to own it."""
    travel = get_travel(travel_id, db)
    if travel.user_id != requester.id:
        raise ForbiddenError("Access denied to this travel")
    return travel


def get_owned_day(day_id: int, requester: User, db: Session) -> TravelDay:
    """Load a day and require the requester to own its travel."""
    day = get_day(day_id, db)
    get_owned_travel(day.travel_id, requester, db)
    return day


def days_of(travel_id: int, db: Session) -> List[TravelDay]:
    """Days of a travel in date order."""
    return db.query(TravelDay).filter(
        TravelDay.travel_id == travel_id
    ).order_by(TravelDay.date).all()


def photos_of(day_id: int, db: Session) -> List[Photo]:
    """Photos of a day in creation order."""
    return db.query(Photo).filter(
        Photo.day_id == day_id
    ).order_by(Photo.created_at, Photo.id).all()


def comments_of(photo_id: int, db: Session) -> List[Comment]:
    """Comments of a photo in creation order."""
    return db.query(Comment).filter(
        Comment.photo_id == photo_id
    ).order_by(Comment.created_at, Comment.id).all()


def log_of(day_id: int, db: Session) -> Optional[TravelLog]:
    return db.query(TravelLog).filter(TravelLog.day_id == day_id).first()

