"""
Day service: derives travel days from photo dates and keeps day numbering,
day regions and the travel date range consistent.
"""
from sqlalchemy.orm import Session
from datetime import date
from typing import Dict, List, Optional
import logging
from app.core.exceptions import ValidationError, ConflictError, ForbiddenError, NotFoundError
from app.models.user import User
from app.models.travel import Travel, TravelDay, TravelLog
from app.models.photo import Photo
from app.services.region_service import majority_region
from app.services.travel_queries import (
    get_travel, get_owned_travel, get_owned_day, get_day, get_photo, days_of, photos_of
)

logger = logging.getLogger(__name__)


def bucket_photos(
    travel: Travel,
    photos: List[Photo],
    resolver,
    db: Session
) -> List[TravelDay]:
    """
    Create one day per distinct photo date and assign each photo to its day.

    Days already present for a date are reused, so bucketing the same photos
    twice does not duplicate days. Day numbers are 1..N in date order.
    """
    dated_photos = [photo for photo in photos if photo.taken_at is not None]
    if not dated_photos:
        raise ValidationError("No photos with taken-at info")

    photo_dates = sorted({photo.taken_at.date() for photo in dated_photos})

    day_map: Dict[date, TravelDay] = {day.date: day for day in days_of(travel.id, db)}
    for photo_date in photo_dates:
        if photo_date not in day_map:
            day = TravelDay(travel_id=travel.id, date=photo_date, day_number=0)
            db.add(day)
            day_map[photo_date] = day

    for number, photo_date in enumerate(sorted(day_map), start=1):
        day_map[photo_date].day_number = number
    db.flush()

    # Exact date match only
    photos_by_date: Dict[date, List[Photo]] = {}
    for photo in dated_photos:
        photo_date = photo.taken_at.date()
        photo.day_id = day_map[photo_date].id
        photos_by_date.setdefault(photo_date, []).append(photo)
    db.flush()

    for photo_date in photo_dates:
        day = day_map[photo_date]
        day_region = majority_region(photos_by_date[photo_date], resolver)
        if day_region is not None:
            day.region = day_region
            logger.info(f"Day {day.day_number} of travel {travel.id} region set: {day_region}")

    return [day_map[photo_date] for photo_date in sorted(day_map)]


def insert_day(travel: Travel, new_date: date, db: Session) -> TravelDay:
    """
    Insert an empty day at its date-sorted position.

    Later days are shifted up by one and the travel range widened if needed.
    """
    days = days_of(travel.id, db)
    if any(day.date == new_date for day in days):
        raise ConflictError(f"Date already exists: {new_date.isoformat()}")

    new_day_number = 1 + sum(1 for day in days if day.date < new_date)

    new_day = TravelDay(travel_id=travel.id, date=new_date, day_number=new_day_number)
    db.add(new_day)

    for day in days:
        if day.date > new_date:
            day.day_number += 1

    if new_date < travel.start_date:
        travel.start_date = new_date
    if new_date > travel.end_date:
        travel.end_date = new_date

    db.flush()
    return new_day


def remove_day(day: TravelDay, db: Session) -> None:
    """
    Delete a day, detaching (not deleting) its photos and deleting its log.

    Remaining days keep their numbers; the travel range is recomputed.
    """
    db.query(Photo).filter(Photo.day_id == day.id).update(
        {Photo.day_id: None}, synchronize_session="fetch"
    )
    db.query(TravelLog).filter(TravelLog.day_id == day.id).delete(synchronize_session="fetch")

    travel = get_travel(day.travel_id, db)
    db.delete(day)
    db.flush()

    refresh_travel_dates(travel, db)


def refresh_travel_dates(travel: Travel, db: Session) -> None:
    """Set the travel range to the min/max date of its remaining days."""
    remaining_days = days_of(travel.id, db)

    if not remaining_days:
        # Keep the last known range rather than blanking it
        logger.warning(f"All days of travel {travel.id} have been removed")
        return

    new_start_date = remaining_days[0].date
    new_end_date = remaining_days[-1].date

    if new_start_date != travel.start_date or new_end_date != travel.end_date:
        travel.start_date = new_start_date
        travel.end_date = new_end_date
        logger.info(f"Travel {travel.id} dates updated: {new_start_date} ~ {new_end_date}")


def refresh_day_region(day: TravelDay, resolver, db: Session) -> Optional[str]:
    """Recompute a day's region over its current photos; None leaves it unchanged."""
    day_region = majority_region(photos_of(day.id, db), resolver)
    if day_region is not None:
        day.region = day_region
        logger.info(f"Day {day.id} region set: {day_region}")
    else:
        logger.warning(f"Day {day.id} region not updated - no photo could be geocoded")
    return day_region


def reassign_photo(
    photo: Photo,
    target_day: TravelDay,
    requester: User,
    resolver,
    db: Session
) -> None:
    """
    Move a photo to ``target_day``.

    The photo owner, the target travel owner and the requester must all be the
    same user. Only the target day's region is recomputed.
    """
    target_travel = get_travel(target_day.travel_id, db)
    if photo.user_id != requester.id:
        raise ForbiddenError("You can only move your own photos")
    if target_travel.user_id != photo.user_id:
        raise ForbiddenError("You cannot add photos to this travel")

    photo.day_id = target_day.id
    db.flush()

    refresh_day_region(target_day, resolver, db)


def add_day(travel_id: int, new_date: date, requester: User, db: Session) -> TravelDay:
    """Add an empty day to a travel."""
    travel = get_owned_travel(travel_id, requester, db)
    day = insert_day(travel, new_date, db)
    db.commit()
    db.refresh(day)
    return day


def delete_day(day_id: int, requester: User, db: Session) -> None:
    """Delete a day of a travel the requester owns."""
    day = get_owned_day(day_id, requester, db)
    remove_day(day, db)
    db.commit()


def add_photos_to_day(
    day_id: int,
    photo_ids: List[int],
    requester: User,
    resolver,
    db: Session
) -> int:
    """
    Assign the requester's photos to a day.

    Returns how many photos were newly placed on the day; repeated ids and
    photos already there are not counted.
    """
    day = get_owned_day(day_id, requester, db)

    photos = []
    for photo_id in dict.fromkeys(photo_ids):
        photo = get_photo(photo_id, db)
        if photo.user_id != requester.id:
            raise ForbiddenError("You can only add your own photos")
        photos.append(photo)

    moved = [photo for photo in photos if photo.day_id != day.id]
    for photo in moved:
        photo.day_id = day.id
    db.flush()

    refresh_day_region(day, resolver, db)
    db.commit()
    return len(moved)


def move_photo_to_day(
    photo_id: int,
    day_id: int,
    requester: User,
    resolver,
    db: Session
) -> None:
    """Move one photo to another day."""
    photo = get_photo(photo_id, db)
    target_day = get_day(day_id, db)
    reassign_photo(photo, target_day, requester, resolver, db)
    db.commit()


def get_day_by_number(travel_id: int, day_number: int, requester: User, db: Session) -> TravelDay:
    """Look up a day by its number within a travel."""
    get_owned_travel(travel_id, requester, db)
    day = db.query(TravelDay).filter(
        TravelDay.travel_id == travel_id,
        TravelDay.day_number == day_number
    ).first()
    if not day:
        raise NotFoundError(f"Day {day_number} not found in travel {travel_id}")
    return day
