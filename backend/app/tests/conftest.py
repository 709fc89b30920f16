"""
Shared fixtures: in-memory database, fake collaborators and an API client.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import datetime, timedelta
from jose import jwt
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.db.base import Base
from app.db.session import get_db
from app.models import User, Photo
from app.core.config import settings
from app.services.region_service import RegionInfo
from app.services.blob_service import BlobStoreError
from app.api.dependencies import get_region_resolver, get_blob_store
from app.main import app


class FakeRegionResolver:
    """Region resolver answering from a fixed coordinate table."""

    def __init__(self, regions=None):
        self.regions = dict(regions or {})
        self.calls = []

    def lookup(self, latitude, longitude):
        self.calls.append((latitude, longitude))
        return self.regions.get((latitude, longitude))


class FakeBlobStore:
    """Blob store that records calls and can fail for chosen URLs."""

    def __init__(self):
        self.stored = []
        self.deleted = []
        self.fail_on = set()

    def store(self, data, content_type, filename=None):
        url = f"https://blobs.test/{len(self.stored) + 1}-{filename}"
        self.stored.append(url)
        return url

    def delete(self, url):
        if url in self.fail_on:
            raise BlobStoreError(f"Failed to delete {url}")
        self.deleted.append(url)


# Coordinates used across tests
HAEUNDAE = (35.1631, 129.1635)
JUNG = (35.1064, 129.0324)
JEJU = (33.4996, 126.5312)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def resolver():
    return FakeRegionResolver({
        HAEUNDAE: RegionInfo("Busan", "Haeundae-gu"),
        JUNG: RegionInfo("Busan", "Jung-gu"),
        JEJU: RegionInfo("Jeju-do", "Jeju-si"),
    })


@pytest.fixture
def blob_store():
    return FakeBlobStore()


@pytest.fixture
def alice(db):
    user = User(username="alice", email="alice@example.com")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def bob(db):
    user = User(username="bob", email="bob@example.com")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def make_photo(db):
    """Create a stored photo owned by ``user``."""
    counter = {"n": 0}

    def _make_photo(user, taken_at, location=None, day_id=None):
        counter["n"] += 1
        latitude, longitude = location if location else (None, None)
        photo = Photo(
            user_id=user.id,
            day_id=day_id,
            file_path=f"https://blobs.test/photo-{counter['n']}.jpg",
            original_name=f"IMG_{counter['n']:04d}.jpg",
            taken_at=taken_at,
            latitude=latitude,
            longitude=longitude
        )
        db.add(photo)
        db.commit()
        db.refresh(photo)
        return photo

    return _make_photo


@pytest.fixture
def client(db, resolver, blob_store):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_region_resolver] = lambda: resolver
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        # Same claims the authentication service puts in its tokens
        claims = {
            "sub": user.username,
            "user_id": user.id,
            "exp": datetime.utcnow() + timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS),
        }
        token = jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers

