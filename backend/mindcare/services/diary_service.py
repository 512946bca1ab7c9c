"""
Diary and mood service: write-path rules and mood report aggregation.
"""
import logging
from datetime import datetime, time, timedelta
from typing import Callable, List, Optional, Tuple, Union

from mindcare.core.config import Settings, settings as default_settings
from mindcare.core.errors import DuplicateCheckInError, NotFoundError, ValidationError
from mindcare.core.moods import resolve_mood_display
from mindcare.core.utils import to_data_uri
from mindcare.models.mood_event import MoodEvent, EventKind
from mindcare.schemas.mood import (
    DiaryEntryView, MoodCount, MoodEventPatch, MoodStatistic, MoodSummary,
)
from mindcare.services.blob_store import LocalBlobStore
from mindcare.services.event_store import EventStore

logger = logging.getLogger(__name__)

ImageInput = Union[str, bytes, None]


def _require(value, field: str):
    """Reject missing values and blank strings."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required")
    return value.strip() if isinstance(value, str) else value


def _require_id(value, field: str = "user_id") -> int:
    """Reject missing, non-integer and non-positive ids."""
    if value is None or isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{field} is required")
    return value


class DiaryService:
    """
    Request-shaped operations on top of the event store.

    Two write paths exist on purpose: full diary entries (text required, no
    daily limit, optional image) and mood check-ins (mood only, one per
    calendar day). All reports are recomputed from the store on every call.
    """

    def __init__(
        self,
        store: EventStore,
        blob_store: Optional[LocalBlobStore] = None,
        clock: Callable[[], datetime] = datetime.now,
        settings: Settings = default_settings,
    ):
        self.store = store
        self.blob_store = blob_store
        self.clock = clock
        self.settings = settings

    # Write paths

    def record_diary_entry(
        self,
        user_id: int,
        mood_key: str,
        entry_text: str,
        image: ImageInput = None,
        mood_name: Optional[str] = None,
        mood_color: Optional[str] = None,
        mood_icon: Optional[str] = None,
        prefer_url: bool = False,
    ) -> int:
        """Save a full diary entry. Unlimited per day."""
        _require_id(user_id)
        mood_key = _require(mood_key, "mood_key")
        _require(entry_text, "entry_text")
        image_url, image_data = self._prepare_image(image, prefer_url)
        # Bytes that came back as a URL were written to the blob store
        blob_url = image_url if image_data is None and isinstance(image, (bytes, bytearray)) else None

        display = resolve_mood_display(mood_key, mood_name, mood_color, mood_icon)
        event = MoodEvent(
            user_id=user_id,
            kind=EventKind.DIARY,
            created_at=self.clock(),
            mood_key=mood_key,
            mood_name=display.name,
            mood_color=display.color,
            mood_icon=display.icon,
            entry_text=entry_text,
            image_url=image_url,
            image_data=image_data,
        )
        try:
            entry_id = self.store.insert(event)
        except Exception:
            if blob_url is not None:
                logger.warning(f"Diary entry for user {user_id} not saved; removing image {blob_url}")
                self.blob_store.delete(blob_url)
            raise
        logger.info(f"Saved diary entry {entry_id} for user {user_id} (mood={mood_key})")
        return entry_id

    def record_mood_check_in(
        self,
        user_id: int,
        mood_key: str,
        mood_name: Optional[str] = None,
        mood_color: Optional[str] = None,
        mood_icon: Optional[str] = None,
    ) -> int:
        """
        Record today's mood check-in.

        Raises DuplicateCheckInError when the user already checked in today,
        including when a concurrent request wins the race: the store's unique
        constraint on (user_id, check_in_day) rejects the second insert.
        """
        _require_id(user_id)
        mood_key = _require(mood_key, "mood_key")

        now = self.clock()
        if self.store.exists_for_day(user_id, now.date(), kind=EventKind.CHECK_IN):
            logger.warning(f"User {user_id} already checked in on {now.date()}")
            raise DuplicateCheckInError()

        display = resolve_mood_display(mood_key, mood_name, mood_color, mood_icon)
        event = MoodEvent(
            user_id=user_id,
            kind=EventKind.CHECK_IN,
            created_at=now,
            mood_key=mood_key,
            mood_name=display.name,
            mood_color=display.color,
            mood_icon=display.icon,
        )
        try:
            entry_id = self.store.insert(event)
        except DuplicateCheckInError:
            logger.warning(f"Concurrent check-in for user {user_id} on {now.date()} rejected")
            raise
        logger.info(f"Saved mood check-in {entry_id} for user {user_id} (mood={mood_key})")
        return entry_id

    def update_entry(self, entry_id: int, patch: MoodEventPatch) -> bool:
        """Apply a partial update. Zero matched rows is reported as NotFoundError."""
        changes = patch.changes()
        if not changes:
            raise ValidationError("Nothing to update")
        for field in ("mood_key", "entry_text"):
            if field in changes:
                changes[field] = _require(changes[field], field)

        if "mood_key" in changes:
            display = resolve_mood_display(
                changes["mood_key"],
                changes.get("mood_name"),
                changes.get("mood_color"),
                changes.get("mood_icon"),
            )
            changes.update(mood_name=display.name, mood_color=display.color, mood_icon=display.icon)

        # One image representation at a time
        if changes.get("image_data") is not None:
            self._check_image_size(changes["image_data"])
            changes["image_url"] = None
        elif changes.get("image_url"):
            changes["image_data"] = None

        affected = self.store.update(entry_id, MoodEventPatch(**changes))
        if affected == 0:
            logger.warning(f"Update of unknown entry {entry_id}")
            raise NotFoundError("Entry not found")
        logger.info(f"Updated entry {entry_id}: {sorted(changes)}")
        return True

    def delete_entry(self, entry_id: int) -> bool:
        affected = self.store.delete(entry_id)
        if affected == 0:
            logger.warning(f"Delete of unknown entry {entry_id}")
            raise NotFoundError("Entry not found")
        logger.info(f"Deleted entry {entry_id}")
        return True

    # Read paths

    def has_checked_in_today(self, user_id: int) -> bool:
        _require_id(user_id)
        return self.store.exists_for_day(user_id, self.clock().date(), kind=EventKind.CHECK_IN)

    def weekly_window_start(self) -> datetime:
        """Local midnight of the first day of the trailing window (today included)."""
        first_day = self.clock().date() - timedelta(days=self.settings.WEEKLY_WINDOW_DAYS - 1)
        return datetime.combine(first_day, time.min)

    def get_weekly_mood_histogram(self, user_id: int, kind: Optional[str] = None) -> List[MoodCount]:
        """
        Mood counts over the trailing week, most frequent first, ties by mood_key.

        Both write paths are counted unless ``kind`` narrows it to one, e.g.
        ``EventKind.CHECK_IN`` for the daily check-in chart.
        """
        _require_id(user_id)
        if kind is not None and kind not in EventKind.ALL:
            raise ValidationError(f"Unknown event kind: {kind}")
        stats = self.store.aggregate_by_mood_key(user_id, since=self.weekly_window_start(), kind=kind)
        return [MoodCount(mood_key=s.mood_key, count=s.count) for s in stats]

    def get_recent_moods(self, user_id: int, limit: Optional[int] = None) -> List[MoodSummary]:
        _require_id(user_id)
        if limit is None:
            limit = self.settings.RECENT_MOODS_LIMIT
        if limit < 1:
            raise ValidationError("limit must be at least 1")

        events = self.store.list_by_user(user_id, limit=limit)
        return [
            MoodSummary(
                id=event.id,
                mood_key=event.mood_key,
                mood_name=event.mood_name,
                mood_color=event.mood_color,
                mood_icon=event.mood_icon,
                created_at=event.created_at,
                display_date=event.created_at.strftime(self.settings.DISPLAY_DATE_FORMAT),
            )
            for event in events
        ]

    def get_mood_statistics(self, user_id: int) -> List[MoodStatistic]:
        """All-time per-mood counts with the last occurrence."""
        _require_id(user_id)
        return self.store.aggregate_by_mood_key(user_id)

    def get_diary_feed(self, user_id: int) -> List[DiaryEntryView]:
        """Diary entries only, newest first; check-ins have no text to show."""
        _require_id(user_id)
        events = self.store.list_by_user(user_id, kind=EventKind.DIARY)
        return [self.to_view(event) for event in events]

    def get_entry(self, entry_id: int) -> DiaryEntryView:
        return self.to_view(self.store.get_by_id(entry_id))

    # Helpers

    @staticmethod
    def to_view(event: MoodEvent) -> DiaryEntryView:
        """Normalise the image to a single form: data URI for inline bytes, else the URL."""
        if event.image_data is not None:
            image = to_data_uri(event.image_data)
        else:
            image = event.image_url
        return DiaryEntryView(
            id=event.id,
            user_id=event.user_id,
            kind=event.kind,
            mood_key=event.mood_key,
            mood_name=event.mood_name,
            mood_color=event.mood_color,
            mood_icon=event.mood_icon,
            entry_text=event.entry_text,
            image=image,
            created_at=event.created_at,
        )

    def _check_image_size(self, data: bytes):
        if len(data) > self.settings.MAX_IMAGE_SIZE:
            raise ValidationError(
                f"Image too large: {len(data)} bytes (max {self.settings.MAX_IMAGE_SIZE})"
            )

    def _prepare_image(self, image: ImageInput, prefer_url: bool) -> Tuple[Optional[str], Optional[bytes]]:
        """Split image input into (url, inline bytes); at most one is set."""
        if image is None:
            return None, None
        if isinstance(image, str):
            return (image.strip() or None), None
        if not isinstance(image, (bytes, bytearray)):
            raise ValidationError(f"Unsupported image type: {type(image).__name__}")

        data = bytes(image)
        self._check_image_size(data)
        if prefer_url:
            if self.blob_store is not None:
                return self.blob_store.store(data), None
            logger.warning("URL image storage requested but no blob store configured; storing inline")
        return None, data
