"""
Pydantic schemas for mood events, diary entries and mood reports.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class MoodEventPatch(BaseModel):
    """
    Partial update of a mood event.

    Only fields explicitly set are written; unset fields keep their stored
    value. Interpreted by the event store into a parameterized UPDATE.
    """
    mood_key: Optional[str] = None
    mood_name: Optional[str] = None
    mood_color: Optional[str] = None
    mood_icon: Optional[str] = None
    entry_text: Optional[str] = None
    image_url: Optional[str] = None
    image_data: Optional[bytes] = None

    def changes(self) -> dict:
        """Fields set by the caller, with their values."""
        return self.model_dump(exclude_unset=True)


class DiaryEntryCreate(BaseModel):
    """Schema for saving a full diary entry."""
    user_id: Optional[int] = None
    mood_key: Optional[str] = None
    entry_text: Optional[str] = None
    mood_name: Optional[str] = None
    mood_color: Optional[str] = None
    mood_icon: Optional[str] = None
    image_url: Optional[str] = None
    image_base64: Optional[str] = None  # bare base64 or a data URI
    prefer_url: bool = False  # store inline bytes in the blob store and keep the URL


class DiaryEntryUpdate(BaseModel):
    """Schema for diary entry update."""
    mood_key: Optional[str] = None
    mood_name: Optional[str] = None
    mood_color: Optional[str] = None
    mood_icon: Optional[str] = None
    entry_text: Optional[str] = None
    image_url: Optional[str] = None
    image_base64: Optional[str] = None


class DiaryEntryView(BaseModel):
    """Diary entry as returned to clients; image is a URL or a data URI."""
    id: int
    user_id: int
    kind: str
    mood_key: str
    mood_name: Optional[str] = None
    mood_color: Optional[str] = None
    mood_icon: Optional[str] = None
    entry_text: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class MoodCheckInCreate(BaseModel):
    """Schema for the daily mood check-in."""
    user_id: Optional[int] = None
    mood_key: Optional[str] = None
    mood_name: Optional[str] = None
    mood_color: Optional[str] = None
    mood_icon: Optional[str] = None


class EntryCreated(BaseModel):
    message: str
    entry_id: int


class CheckInStatus(BaseModel):
    checked_in: bool


class MoodCount(BaseModel):
    """One row of the weekly histogram."""
    mood_key: str
    count: int


class MoodStatistic(BaseModel):
    """Per-mood count with display metadata and the latest occurrence."""
    mood_key: str
    mood_name: Optional[str] = None
    mood_color: Optional[str] = None
    mood_icon: Optional[str] = None
    count: int
    last_entry_at: datetime


class MoodSummary(BaseModel):
    """Recent mood with a display-formatted date."""
    id: int
    mood_key: str
    mood_name: Optional[str] = None
    mood_color: Optional[str] = None
    mood_icon: Optional[str] = None
    created_at: datetime
    display_date: str
