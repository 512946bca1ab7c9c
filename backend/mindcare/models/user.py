"""
User model for registration and profile management.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from mindcare.db.base import BaseModel


class User(BaseModel):
    """User account; email is the login identifier."""
    __tablename__ = "users"

    username = Column(String(50), nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    emergency_phone = Column(String(30), nullable=True)

    # Relationships
    mood_events = relationship("MoodEvent", back_populates="user", cascade="all, delete-orphan")
