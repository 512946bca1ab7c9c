"""Models package - Import all models for SQLAlchemy registration."""
from mindcare.models.user import User
from mindcare.models.mood_event import MoodEvent, EventKind

__all__ = [
    "User",
    "MoodEvent",
    "EventKind",
]
