"""
Photo and comment models.

Photos are uploaded first and assigned to a travel day later, so ``day_id``
is nullable. Coordinates are nullable because not every image carries GPS data.
"""
from sqlalchemy import Column, String, DateTime, Text, Numeric, ForeignKey, Integer, Index
from app.db.base import BaseModel


class Photo(BaseModel):
    """Uploaded photo, optionally assigned to one travel day."""
    __tablename__ = "photos"
    __table_args__ = (
        Index("idx_photo_day_time", "day_id", "taken_at"),
    )
    
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    day_id = Column(Integer, ForeignKey("travel_days.id"), nullable=True)
    file_path = Column(String(2048), nullable=False)  # Blob store URL
    original_name = Column(String(255), nullable=True)
    latitude = Column(Numeric(10, 8, asdecimal=False), nullable=True)
    longitude = Column(Numeric(11, 8, asdecimal=False), nullable=True)
    taken_at = Column(DateTime, nullable=False)

    @property
    def url(self) -> str:
        return self.file_path

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class Comment(BaseModel):
    """Short text comment on a single photo."""
    __tablename__ = "comments"
    
    photo_id = Column(Integer, ForeignKey("photos.id"), nullable=False, index=True)
    writer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
