"""
Event store: durable CRUD and time-grouped reads over mood events.

Every call opens its own session and finishes in one round trip. Database
failures come back as StorageError, except the check-in day collision, which
is the expected conflict signal and becomes DuplicateCheckInError.
"""
import logging
from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from typing import Callable, Iterator, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from mindcare.core.errors import MindCareError, DuplicateCheckInError, NotFoundError, StorageError
from mindcare.models.mood_event import MoodEvent, EventKind
from mindcare.schemas.mood import MoodEventPatch, MoodStatistic

logger = logging.getLogger(__name__)

CHECK_IN_CONSTRAINT = "uq_user_check_in_day"


def _is_check_in_conflict(error: IntegrityError) -> bool:
    """True when the violation comes from the one-check-in-per-day constraint."""
    # MySQL names the key, SQLite lists the columns
    message = str(error.orig)
    return CHECK_IN_CONSTRAINT in message or "check_in_day" in message


def day_bounds(day: date) -> tuple:
    """Half-open [start, end) datetime range covering one calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


class EventStore:
    """SQLAlchemy-backed store of MoodEvent rows, scoped by user."""

    def __init__(self, session_factory: sessionmaker, clock: Callable[[], datetime] = datetime.now):
        self._session_factory = session_factory
        self._clock = clock

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except MindCareError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Event store failure: {e}", exc_info=True)
            raise StorageError(f"Event store failure: {e.__class__.__name__}") from e
        finally:
            db.close()

    def insert(self, event: MoodEvent) -> int:
        """
        Persist a new event and return its id.

        created_at defaults to the store's current local time; check-ins get
        their check_in_day from it so the unique constraint can reject a
        second check-in for the same day atomically.
        """
        if event.created_at is None:
            event.created_at = self._clock()
        if event.kind is None:
            event.kind = EventKind.DIARY
        event.check_in_day = event.created_at.date() if event.kind == EventKind.CHECK_IN else None

        with self._session() as db:
            db.add(event)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                if event.kind == EventKind.CHECK_IN and _is_check_in_conflict(e):
                    raise DuplicateCheckInError() from e
                raise
            return event.id

    def exists_for_day(self, user_id: int, day: date, kind: Optional[str] = None) -> bool:
        """Whether the user has any event (of ``kind``, if given) created on ``day``."""
        start, end = day_bounds(day)
        with self._session() as db:
            query = db.query(MoodEvent.id).filter(
                MoodEvent.user_id == user_id,
                MoodEvent.created_at >= start,
                MoodEvent.created_at < end,
            )
            if kind is not None:
                query = query.filter(MoodEvent.kind == kind)
            return query.first() is not None

    def get_by_id(self, event_id: int) -> MoodEvent:
        with self._session() as db:
            event = db.get(MoodEvent, event_id)
            if event is None:
                raise NotFoundError("Entry not found")
            return event

    def list_by_user(
        self,
        user_id: int,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
        kind: Optional[str] = None,
    ) -> List[MoodEvent]:
        """Events of a user, newest first; ``since`` is an inclusive lower bound."""
        with self._session() as db:
            query = db.query(MoodEvent).filter(MoodEvent.user_id == user_id)
            if kind is not None:
                query = query.filter(MoodEvent.kind == kind)
            if since is not None:
                query = query.filter(MoodEvent.created_at >= since)
            query = query.order_by(MoodEvent.created_at.desc(), MoodEvent.id.desc())
            if limit is not None:
                query = query.limit(limit)
            return query.all()

    def aggregate_by_mood_key(
        self,
        user_id: int,
        since: Optional[datetime] = None,
        kind: Optional[str] = None,
    ) -> List[MoodStatistic]:
        """
        Count events per mood_key with the latest created_at.

        Ordered by count descending, then mood_key ascending. Display metadata
        is denormalised per row, so any row of the group is representative.
        """
        count_col = func.count(MoodEvent.id).label("total")
        with self._session() as db:
            query = db.query(
                MoodEvent.mood_key,
                func.max(MoodEvent.mood_name).label("mood_name"),
                func.max(MoodEvent.mood_color).label("mood_color"),
                func.max(MoodEvent.mood_icon).label("mood_icon"),
                count_col,
                func.max(MoodEvent.created_at).label("last_entry_at"),
            ).filter(MoodEvent.user_id == user_id)
            if since is not None:
                query = query.filter(MoodEvent.created_at >= since)
            if kind is not None:
                query = query.filter(MoodEvent.kind == kind)
            rows = query.group_by(MoodEvent.mood_key).order_by(
                count_col.desc(), MoodEvent.mood_key.asc()
            ).all()

        return [
            MoodStatistic(
                mood_key=row.mood_key,
                mood_name=row.mood_name,
                mood_color=row.mood_color,
                mood_icon=row.mood_icon,
                count=row.total,
                last_entry_at=row.last_entry_at,
            )
            for row in rows
        ]

    def update(self, event_id: int, patch: MoodEventPatch) -> int:
        """Apply the fields set on ``patch``; returns the number of rows matched."""
        changes = patch.changes()
        if not changes:
            return 0
        with self._session() as db:
            affected = db.query(MoodEvent).filter(MoodEvent.id == event_id).update(
                changes, synchronize_session=False
            )
            db.commit()
            return affected

    def delete(self, event_id: int) -> int:
        with self._session() as db:
            affected = db.query(MoodEvent).filter(MoodEvent.id == event_id).delete(
                synchronize_session=False
            )
            db.commit()
            return affected
