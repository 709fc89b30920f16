"""
Travel service: creation, detail assembly, update, sharing and deletion of a
travel together with its days, logs and photos.
"""
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional
import logging
import uuid
from app.core.config import settings
from app.core.exceptions import ValidationError, NotFoundError, ForbiddenError
from app.core.utils import clean_label
from app.models.user import User
from app.models.travel import Travel, TravelDay, TravelLog
from app.models.photo import Photo, Comment
from app.schemas.travel import (
    TravelDetailResponse, TravelDayDetail, PhotoDetail, CommentDetail,
    DiaryDetail, TravelSummary
)
from app.services.blob_service import BlobStoreError
from app.services.day_service import bucket_photos
from app.services.region_service import CachedRegionResolver, majority_region
from app.services.travel_queries import (
    get_owned_travel, get_photo, days_of, photos_of, comments_of, log_of
)

logger = logging.getLogger(__name__)


def create_travel(
    title: str,
    photo_ids: List[int],
    requester: User,
    resolver,
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    region: Optional[str] = None,
    representative_photo_id: Optional[int] = None
) -> int:
    """
    Create a travel from already uploaded photos.

    Photos that do not exist or have no taken-at time are skipped. Without an
    explicit range the dates come from the photos. Returns the new travel id.
    """
    if not photo_ids:
        raise ValidationError("Select at least one photo")

    photos = db.query(Photo).filter(Photo.id.in_(photo_ids)).all()
    photos_by_id = {photo.id: photo for photo in photos}
    # Keep the caller's ordering; it decides region ties
    photos = [
        photos_by_id[photo_id] for photo_id in dict.fromkeys(photo_ids)
        if photo_id in photos_by_id and photos_by_id[photo_id].taken_at is not None
    ]
    if not photos:
        raise ValidationError("No photos with taken date")
    if any(photo.user_id != requester.id for photo in photos):
        raise ForbiddenError("You can only create a travel from your own photos")
    if representative_photo_id is not None:
        get_photo(representative_photo_id, db)

    photo_dates = sorted({photo.taken_at.date() for photo in photos})
    if start_date is None or end_date is None:
        start_date = photo_dates[0]
        end_date = photo_dates[-1]

    # Day and travel votes see the same photos; look each location up once
    resolver = CachedRegionResolver(resolver)

    travel_region = clean_label(region)
    if travel_region is None:
        travel_region = majority_region(photos, resolver) or settings.UNSPECIFIED_REGION
        logger.info(f"Travel region chosen automatically: {travel_region}")

    travel = Travel(
        user_id=requester.id,
        title=title,
        region=travel_region,
        start_date=start_date,
        end_date=end_date,
        representative_photo_id=representative_photo_id
    )
    db.add(travel)
    db.flush()

    bucket_photos(travel, photos, resolver, db)

    db.commit()
    db.refresh(travel)
    logger.info(f"Travel {travel.id} created with {len(photo_dates)} days and {len(photos)} photos")
    return travel.id


def list_travels(requester: User, db: Session) -> List[TravelSummary]:
    """List the requester's travels, newest first."""
    travels = db.query(Travel).filter(
        Travel.user_id == requester.id
    ).order_by(Travel.id.desc()).all()

    summaries = []
    for travel in travels:
        photo_url = None
        if travel.representative_photo_id is not None:
            photo = db.query(Photo).filter(Photo.id == travel.representative_photo_id).first()
            photo_url = photo.file_path if photo else None

        summaries.append(TravelSummary(
            travel_id=travel.id,
            title=travel.title,
            region=travel.region,
            start_date=travel.start_date,
            end_date=travel.end_date,
            representative_image_url=photo_url
        ))
    return summaries


def _share_url(travel: Travel) -> Optional[str]:
    if not travel.share_token:
        return None
    return f"{settings.SHARE_BASE_URL}{travel.share_token}"


def _build_day_detail(day: TravelDay, db: Session) -> TravelDayDetail:
    photo_details = []
    for photo in photos_of(day.id, db):
        photo_details.append(PhotoDetail(
            photo_id=photo.id,
            url=photo.file_path,
            original_name=photo.original_name,
            taken_at=photo.taken_at,
            latitude=photo.latitude,
            longitude=photo.longitude,
            comments=[
                CommentDetail(
                    comment_id=comment.id,
                    writer_id=comment.writer_id,
                    content=comment.content,
                    created_at=comment.created_at
                )
                for comment in comments_of(photo.id, db)
            ]
        ))

    diary = None
    travel_log = log_of(day.id, db)
    if travel_log is not None:
        diary = DiaryDetail(
            log_id=travel_log.id,
            content=travel_log.content,
            created_at=travel_log.created_at
        )

    return TravelDayDetail(
        day_id=day.id,
        day_number=day.day_number,
        date=day.date,
        region=day.region,
        photos=photo_details,
        diary=diary
    )


def build_travel_detail(travel: Travel, db: Session) -> TravelDetailResponse:
    """Assemble the nested travel view. No access check is done here."""
    return TravelDetailResponse(
        travel_id=travel.id,
        title=travel.title,
        region=travel.region,
        representative_photo_id=travel.representative_photo_id,
        share_url=_share_url(travel),
        start_date=travel.start_date,
        end_date=travel.end_date,
        days=[_build_day_detail(day, db) for day in days_of(travel.id, db)]
    )


def get_travel_detail(travel_id: int, requester: User, db: Session) -> TravelDetailResponse:
    """Full travel detail for its owner."""
    travel = get_owned_travel(travel_id, requester, db)
    return build_travel_detail(travel, db)


def update_travel(
    travel_id: int,
    requester: User,
    db: Session,
    title: Optional[str] = None,
    representative_photo_id: Optional[int] = None
) -> Travel:
    """Apply the non-null fields of a partial travel update."""
    travel = get_owned_travel(travel_id, requester, db)

    if title is not None:
        travel.title = title
    if representative_photo_id is not None:
        get_photo(representative_photo_id, db)
        travel.representative_photo_id = representative_photo_id

    db.commit()
    db.refresh(travel)
    return travel


def update_representative_photo(
    travel_id: int,
    photo_id: Optional[int],
    requester: User,
    db: Session
) -> None:
    """
    Set or clear the representative photo.

    The photo must exist; it is not required to belong to this travel.
    """
    travel = get_owned_travel(travel_id, requester, db)

    if photo_id is not None:
        get_photo(photo_id, db)

    travel.representative_photo_id = photo_id
    db.commit()


def get_or_create_share_url(travel_id: int, requester: User, db: Session) -> str:
    """Return the public share URL, generating the token on first use."""
    travel = get_owned_travel(travel_id, requester, db)

    if not travel.share_token:
        travel.share_token = str(uuid.uuid4())
        db.commit()
        db.refresh(travel)
        logger.info(f"Share token created for travel {travel.id}")

    return _share_url(travel)


def get_travel_by_share_token(share_token: str, db: Session) -> TravelDetailResponse:
    """Travel detail through a share token; no owner check."""
    travel = db.query(Travel).filter(Travel.share_token == share_token).first()
    if not travel:
        raise NotFoundError("Invalid share token")
    return build_travel_detail(travel, db)


def delete_travel(travel_id: int, requester: User, blob_store, db: Session) -> None:
    """
    Delete a travel with its days, logs, photos, comments and blobs.

    Children are deleted before parents. A failing blob delete is logged and
    the remaining deletions still go through.
    """
    travel = get_owned_travel(travel_id, requester, db)
    days = days_of(travel.id, db)
    day_ids = [day.id for day in days]

    for day in days:
        for photo in photos_of(day.id, db):
            try:
                blob_store.delete(photo.file_path)
            except BlobStoreError as e:
                logger.error(f"Failed to delete blob for photo {photo.id}: {e}")

    if day_ids:
        photo_ids = [
            photo_id for (photo_id,) in
            db.query(Photo.id).filter(Photo.day_id.in_(day_ids)).all()
        ]
        if photo_ids:
            # Other travels may use one of these as representative photo
            db.query(Travel).filter(
                Travel.representative_photo_id.in_(photo_ids)
            ).update({Travel.representative_photo_id: None}, synchronize_session="fetch")
            db.query(Comment).filter(Comment.photo_id.in_(photo_ids)).delete(synchronize_session="fetch")
            db.query(Photo).filter(Photo.id.in_(photo_ids)).delete(synchronize_session="fetch")
        db.query(TravelLog).filter(TravelLog.day_id.in_(day_ids)).delete(synchronize_session="fetch")
        db.query(TravelDay).filter(TravelDay.id.in_(day_ids)).delete(synchronize_session="fetch")

    db.delete(travel)
    db.commit()
    logger.info(f"Travel {travel_id} deleted with {len(day_ids)} days")
