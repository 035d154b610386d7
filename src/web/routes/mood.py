"""Mood logging and aggregate routes."""

from fastapi import APIRouter, Depends, status

from mood.service import MoodService
from web.auth import get_current_user
from web.deps import get_mood_service
from web.models import MoodCreate, MoodEntryOut

router = APIRouter(prefix="/api/mood", tags=["mood"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def log_mood(
    body: MoodCreate,
    user: dict = Depends(get_current_user),
    service: MoodService = Depends(get_mood_service),
):
    record = service.log_mood(
        user["id"],
        body.mood_value,
        emotions=body.emotions,
        note=body.note,
        logged_at=body.logged_at,
    )
    return record.to_dict()


@router.get("", response_model=list[MoodEntryOut])
async def list_moods(
    days: int = 30,
    user: dict = Depends(get_current_user),
    service: MoodService = Depends(get_mood_service),
):
    return [MoodEntryOut(**e.to_dict()) for e in service.recent(user["id"], days=days)]


@router.get("/stats")
async def mood_stats(
    days: int = 30,
    user: dict = Depends(get_current_user),
    service: MoodService = Depends(get_mood_service),
):
    return service.stats(user["id"], days=days).to_dict()


@router.get("/daily")
async def mood_daily(
    days: int = 30,
    user: dict = Depends(get_current_user),
    service: MoodService = Depends(get_mood_service),
):
    return [s.to_dict() for s in service.daily(user["id"], days=days)]


@router.get("/day/{day}", response_model=list[MoodEntryOut])
async def mood_for_day(
    day: str,
    user: dict = Depends(get_current_user),
    service: MoodService = Depends(get_mood_service),
):
    return [MoodEntryOut(**e.to_dict()) for e in service.for_date(user["id"], day)]
