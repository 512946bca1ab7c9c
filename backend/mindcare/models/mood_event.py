"""
Mood event model: one diary entry or daily mood check-in.
"""
from sqlalchemy import (
    Column, String, Date, DateTime, Text, LargeBinary, ForeignKey, Integer,
    Index, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from mindcare.db.base import BaseModel


class EventKind:
    """Which write path produced the event."""
    DIARY = "diary"
    CHECK_IN = "check_in"
    ALL = (DIARY, CHECK_IN)


class MoodEvent(BaseModel):
    """Mood-tagged event; created_at is the only time axis for reports."""
    __tablename__ = "mood_events"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    kind = Column(String(16), nullable=False, default=EventKind.DIARY)
    created_at = Column(DateTime, nullable=False, index=True)
    # Date of created_at for check-ins, NULL for diary entries
    check_in_day = Column(Date, nullable=True)

    mood_key = Column(String(32), nullable=False)
    mood_name = Column(String(50), nullable=True)
    mood_color = Column(String(16), nullable=True)
    mood_icon = Column(String(16), nullable=True)

    entry_text = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    image_data = Column(LargeBinary(length=16 * 1024 * 1024), nullable=True)

    # Relationships
    user = relationship("User", back_populates="mood_events")

    # One check-in per user per calendar day; NULL days never collide
    __table_args__ = (
        UniqueConstraint("user_id", "check_in_day", name="uq_user_check_in_day"),
        Index("ix_mood_events_user_created", "user_id", "created_at"),
    )
