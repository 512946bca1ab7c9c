"""
Mood check-in and mood report routes.
"""
from fastapi import APIRouter, Depends, status
from typing import List, Optional
from mindcare.api.dependencies import get_diary_service
from mindcare.schemas.mood import (
    CheckInStatus, EntryCreated, MoodCheckInCreate, MoodCount, MoodStatistic, MoodSummary,
)
from mindcare.services.diary_service import DiaryService

router = APIRouter(prefix="/mood", tags=["mood"])


@router.post("/check-in", response_model=EntryCreated, status_code=status.HTTP_201_CREATED)
async def check_in(data: MoodCheckInCreate, diary: DiaryService = Depends(get_diary_service)):
    """Record today's mood. Answers 409 when the user already checked in today."""
    entry_id = diary.record_mood_check_in(
        user_id=data.user_id,
        mood_key=data.mood_key,
        mood_name=data.mood_name,
        mood_color=data.mood_color,
        mood_icon=data.mood_icon,
    )
    return EntryCreated(message="Mood saved", entry_id=entry_id)


@router.get("/{user_id}/today", response_model=CheckInStatus)
async def checked_in_today(user_id: int, diary: DiaryService = Depends(get_diary_service)):
    return CheckInStatus(checked_in=diary.has_checked_in_today(user_id))


@router.get("/{user_id}/weekly", response_model=List[MoodCount])
async def weekly_report(
    user_id: int,
    kind: Optional[str] = None,
    diary: DiaryService = Depends(get_diary_service)
):
    """Mood counts over the last 7 calendar days, optionally for one kind (diary or check_in)."""
    return diary.get_weekly_mood_histogram(user_id, kind=kind)


@router.get("/{user_id}/recent", response_model=List[MoodSummary])
async def recent_moods(
    user_id: int,
    limit: Optional[int] = None,
    diary: DiaryService = Depends(get_diary_service)
):
    return diary.get_recent_moods(user_id, limit=limit)


@router.get("/{user_id}/stats", response_model=List[MoodStatistic])
async def mood_statistics(user_id: int, diary: DiaryService = Depends(get_diary_service)):
    """All-time mood counts with the last occurrence of each mood."""
    return diary.get_mood_statistics(user_id)
