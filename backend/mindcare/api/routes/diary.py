"""
Diary routes: full entries with optional image.
"""
from fastapi import APIRouter, Depends, status
from typing import List, Optional
from mindcare.api.dependencies import get_diary_service
from mindcare.core.errors import ValidationError
from mindcare.core.utils import decode_base64_image, format_response
from mindcare.schemas.mood import (
    DiaryEntryCreate, DiaryEntryUpdate, DiaryEntryView, EntryCreated, MoodEventPatch,
)
from mindcare.services.diary_service import DiaryService

router = APIRouter(prefix="/diary", tags=["diary"])


def _decode_image(image_base64: Optional[str]) -> Optional[bytes]:
    try:
        return decode_base64_image(image_base64)
    except ValueError as e:
        raise ValidationError(str(e)) from e


@router.post("", response_model=EntryCreated, status_code=status.HTTP_201_CREATED)
async def save_entry(entry: DiaryEntryCreate, diary: DiaryService = Depends(get_diary_service)):
    """Save a diary entry. Inline base64 takes precedence over image_url."""
    image_data = _decode_image(entry.image_base64)
    entry_id = diary.record_diary_entry(
        user_id=entry.user_id,
        mood_key=entry.mood_key,
        entry_text=entry.entry_text,
        image=image_data if image_data is not None else entry.image_url,
        mood_name=entry.mood_name,
        mood_color=entry.mood_color,
        mood_icon=entry.mood_icon,
        prefer_url=entry.prefer_url,
    )
    return EntryCreated(message="Diary entry saved", entry_id=entry_id)


@router.get("/users/{user_id}", response_model=List[DiaryEntryView])
async def get_feed(user_id: int, diary: DiaryService = Depends(get_diary_service)):
    """All entries of a user, newest first."""
    return diary.get_diary_feed(user_id)


@router.get("/{entry_id}", response_model=DiaryEntryView)
async def get_entry(entry_id: int, diary: DiaryService = Depends(get_diary_service)):
    return diary.get_entry(entry_id)


@router.put("/{entry_id}")
async def update_entry(
    entry_id: int,
    entry: DiaryEntryUpdate,
    diary: DiaryService = Depends(get_diary_service)
):
    """Update the supplied entry fields."""
    changes = entry.model_dump(exclude_unset=True)
    image_base64 = changes.pop("image_base64", None)
    if image_base64:
        changes["image_data"] = _decode_image(image_base64)
    diary.update_entry(entry_id, MoodEventPatch(**changes))
    return format_response({"entry_id": entry_id}, message="Diary entry updated")


@router.delete("/{entry_id}")
async def delete_entry(entry_id: int, diary: DiaryService = Depends(get_diary_service)):
    diary.delete_entry(entry_id)
    return format_response({"entry_id": entry_id}, message="Diary entry deleted")
