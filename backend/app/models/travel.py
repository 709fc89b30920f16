"""
Travel model and its dated day buckets and diary logs.
"""
from sqlalchemy import Column, String, Date, Text, ForeignKey, Integer, UniqueConstraint
from app.db.base import BaseModel


class Travel(BaseModel):
    """Trip record owned by a single user."""
    __tablename__ = "travels"
    
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    region = Column(String(100), nullable=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    representative_photo_id = Column(Integer, nullable=True)  # Soft reference, not a foreign key
    share_token = Column(String(64), unique=True, nullable=True, index=True)


class TravelDay(BaseModel):
    """One dated bucket within a travel."""
    __tablename__ = "travel_days"
    __table_args__ = (
        UniqueConstraint("travel_id", "date", name="uq_travel_day_date"),
    )
    
    travel_id = Column(Integer, ForeignKey("travels.id"), nullable=False, index=True)
    day_number = Column(Integer, nullable=False)
    date = Column(Date, nullable=False, index=True)
    region = Column(String(100), nullable=True)


class TravelLog(BaseModel):
    """Free-text diary entry, at most one per day."""
    __tablename__ = "travel_logs"
    
    day_id = Column(Integer, ForeignKey("travel_days.id"), unique=True, nullable=False, index=True)
    content = Column(Text, nullable=False)
