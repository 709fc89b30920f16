"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.travel import Travel, TravelDay, TravelLog
from app.models.photo import Photo, Comment

__all__ = [
    "User",
    "Travel",
    "TravelDay",
    "TravelLog",
    "Photo",
    "Comment",
]
