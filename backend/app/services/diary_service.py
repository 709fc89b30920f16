"""
Diary service for the single free-text log of a travel day.
"""
from sqlalchemy.orm import Session
from app.core.exceptions import NotFoundError, ConflictError
from app.models.user import User
from app.models.travel import TravelLog
from app.services.travel_queries import get_owned_day, log_of


def get_owned_log(log_id: int, requester: User, db: Session) -> TravelLog:
    """Load a log and require the requester to own its travel."""
    travel_log = db.query(TravelLog).filter(TravelLog.id == log_id).first()
    if not travel_log:
        raise NotFoundError(f"Diary log not found: {log_id}")
    get_owned_day(travel_log.day_id, requester, db)
    return travel_log


def create_log(day_id: int, content: str, requester: User, db: Session) -> TravelLog:
    """Create the diary log of a day."""
    day = get_owned_day(day_id, requester, db)
    if log_of(day.id, db) is not None:
        raise ConflictError("This day already has a diary log")

    travel_log = TravelLog(day_id=day.id, content=content)
    db.add(travel_log)
    db.commit()
    db.refresh(travel_log)
    return travel_log


def update_log(log_id: int, content: str, requester: User, db: Session) -> TravelLog:
    """Replace the content of a diary log."""
    travel_log = get_owned_log(log_id, requester, db)
    travel_log.content = content
    db.commit()
    db.refresh(travel_log)
    return travel_log


def delete_log(log_id: int, requester: User, db: Session) -> None:
    """Delete a diary log."""
    travel_log = get_owned_log(log_id, requester, db)
    db.delete(travel_log)
    db.commit()
