"""
User model for ownership of travels and photos.
"""
from sqlalchemy import Column, String, Boolean
from app.db.base import BaseModel


class User(BaseModel):
    """User model with immutable username."""
    __tablename__ = "users"
    
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=True)  # Managed by the auth service
    is_active = Column(Boolean, default=True, nullable=False)
