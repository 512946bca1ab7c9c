"""
FastAPI dependencies wiring services to the configured database.
"""
from fastapi import Depends
from mindcare.core.config import settings
from mindcare.db.session import SessionLocal
from mindcare.services.account_service import AccountService
from mindcare.services.blob_store import LocalBlobStore
from mindcare.services.diary_service import DiaryService
from mindcare.services.event_store import EventStore


def get_event_store() -> EventStore:
    return EventStore(SessionLocal)


def get_blob_store() -> LocalBlobStore:
    return LocalBlobStore(settings.UPLOAD_DIR, settings.PUBLIC_BASE_URL)


def get_diary_service(
    store: EventStore = Depends(get_event_store),
    blob_store: LocalBlobStore = Depends(get_blob_store),
) -> DiaryService:
    """Diary service bound to the request's store."""
    return DiaryService(store, blob_store=blob_store)


def get_account_service() -> AccountService:
    return AccountService(SessionLocal)
