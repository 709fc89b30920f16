"""
Tests for photo upload/update/deletion, comments and diary logs.
"""
import pytest
from datetime import datetime
from app.core.exceptions import ValidationError, ForbiddenError, NotFoundError, ConflictError
from app.models.photo import Photo, Comment
from app.models.travel import Travel
from app.schemas.photo import PhotoMetadata
from app.services import photo_service, travel_service, comment_service, diary_service
from app.services.photo_service import UploadedFile
from app.services.travel_queries import days_of, photos_of

HAEUNDAE = (35.1631, 129.1635)


def jpeg(name="a.jpg"):
    return UploadedFile(name, "image/jpeg", b"\xff\xd8\xff\xe0fake")


def test_upload_photos_stores_blobs_and_unassigned_rows(db, alice, blob_store):
    metadata = [
        PhotoMetadata(originalName="beach.jpg", takenAt="2024-08-02T22:38:06+09:00", latitude=35.16, longitude=129.16),
        PhotoMetadata(originalName="night.jpg", takenAt="2025-11-12T10:00:00"),
    ]

    photos = photo_service.upload_photos([jpeg("beach.jpg"), jpeg("night.jpg")], metadata, alice, blob_store, db)

    assert len(blob_store.stored) == 2
    assert [p.file_path for p in photos] == blob_store.stored
    assert all(p.day_id is None and p.user_id == alice.id for p in photos)
    # Offset is dropped, wall-clock time kept
    assert photos[0].taken_at == datetime(2024, 8, 2, 22, 38, 6)
    assert (photos[0].latitude, photos[0].longitude) == (35.16, 129.16)
    assert photos[1].latitude is None


def test_upload_photos_requires_matching_metadata(db, alice, blob_store):
    metadata = [PhotoMetadata(takenAt="2025-01-15T10:00:00")]

    with pytest.raises(ValidationError):
        photo_service.upload_photos([jpeg(), jpeg()], metadata, alice, blob_store, db)
    assert blob_store.stored == []


def test_upload_photos_rejects_unsupported_type(db, alice, blob_store):
    metadata = [PhotoMetadata(takenAt="2025-01-15T10:00:00")]

    with pytest.raises(ValidationError):
        photo_service.upload_photos([UploadedFile("doc.pdf", "application/pdf", b"%PDF")], metadata, alice, blob_store, db)
    assert db.query(Photo).count() == 0


def test_upload_photos_drops_half_coordinates(db, alice, blob_store):
    metadata = [PhotoMetadata(takenAt="2025-01-15T10:00:00", latitude=35.1)]

    photo = photo_service.upload_photos([jpeg()], metadata, alice, blob_store, db)[0]

    assert photo.latitude is None and photo.longitude is None


def test_update_photo_moves_day_and_location(db, alice, make_photo, resolver):
    photos = [make_photo(alice, datetime(2025, 1, 15, 9)), make_photo(alice, datetime(2025, 1, 16, 9))]
    travel_id = travel_service.create_travel("Trip", [p.id for p in photos], alice, resolver, db)
    day1, day2 = days_of(travel_id, db)

    photo = photo_service.update_photo(
        photos[0].id, alice, resolver, db,
        day_id=day2.id, latitude=HAEUNDAE[0], longitude=HAEUNDAE[1]
    )

    assert photo.day_id == day2.id
    assert photos_of(day1.id, db) == []
    assert day2.region == "Haeundae-gu"


def test_update_photo_requires_owner(db, alice, bob, make_photo, resolver):
    photo = make_photo(alice, datetime(2025, 1, 15, 9))

    with pytest.raises(ForbiddenError):
        photo_service.update_photo(photo.id, bob, resolver, db, taken_at=datetime(2025, 1, 1))


def test_delete_photo_clears_representative_and_comments(db, alice, bob, make_photo, resolver, blob_store):
    photo = make_photo(alice, datetime(2025, 1, 15, 9))
    url = photo.file_path
    travel_id = travel_service.create_travel(
        "Trip", [photo.id], alice, resolver, db, representative_photo_id=photo.id
    )
    comment_service.create_comment(photo.id, "Great", bob, db)

    photo_service.delete_photo(photo.id, alice, blob_store, db)

    assert db.query(Travel).filter(Travel.id == travel_id).first().representative_photo_id is None
    assert db.query(Comment).count() == 0
    assert db.query(Photo).count() == 0
    assert blob_store.deleted == [url]


def test_delete_photo_requires_owner(db, alice, bob, make_photo, blob_store):
    photo = make_photo(alice, datetime(2025, 1, 15, 9))

    with pytest.raises(ForbiddenError):
        photo_service.delete_photo(photo.id, bob, blob_store, db)
    assert blob_store.deleted == []


def test_comment_permissions(db, alice, bob, make_photo):
    photo = make_photo(alice, datetime(2025, 1, 15, 9))
    comment = comment_service.create_comment(photo.id, "Hello", bob, db)

    with pytest.raises(ForbiddenError):
        comment_service.update_comment(comment.id, "Edited", alice, db)
    assert comment_service.update_comment(comment.id, "Edited", bob, db).content == "Edited"

    # The photo owner may remove comments written by others
    comment_service.delete_comment(comment.id, alice, db)
    assert db.query(Comment).count() == 0

    with pytest.raises(NotFoundError):
        comment_service.create_comment(9999, "Lost", bob, db)


def test_diary_log_lifecycle(db, alice, bob, make_photo, resolver):
    photo = make_photo(alice, datetime(2025, 1, 15, 9))
    travel_id = travel_service.create_travel("Trip", [photo.id], alice, resolver, db)
    day = days_of(travel_id, db)[0]

    travel_log = diary_service.create_log(day.id, "First draft", alice, db)
    with pytest.raises(ConflictError):
        diary_service.create_log(day.id, "Second", alice, db)
    with pytest.raises(ForbiddenError):
        diary_service.update_log(travel_log.id, "Hijack", bob, db)

    assert diary_service.update_log(travel_log.id, "Final", alice, db).content == "Final"
    diary_service.delete_log(travel_log.id, alice, db)
    with pytest.raises(NotFoundError):
        diary_service.delete_log(travel_log.id, alice, db)
