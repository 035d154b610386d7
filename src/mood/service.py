"""Mood logging flow: validate, store, refresh the ERS."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

import structlog

from errors import InvalidInputError, PacefulError

from .calculator import (
    calculate_daily_summaries,
    calculate_mood_stats,
    get_entries_for_date,
    validate_mood_value,
)
from .models import DailyMoodSummary, MoodEntry, MoodStats

logger = structlog.get_logger()


@dataclass
class MoodRecord:
    entry: MoodEntry
    ers: Optional[object] = None

    def to_dict(self) -> dict:
        return {
            "entry": self.entry.to_dict(),
            "ers": self.ers.to_dict() if self.ers else None,
        }


class MoodService:
    def __init__(self, store, ers_calculator=None):
        self.store = store
        self.ers_calculator = ers_calculator

    def log_mood(
        self,
        user_id: str,
        mood_value: int,
        emotions: Optional[list[str]] = None,
        note: Optional[str] = None,
        logged_at: Optional[datetime] = None,
    ) -> MoodRecord:
        entry = MoodEntry(
            user_id=user_id,
            mood_value=validate_mood_value(mood_value),
            emotions=[e.strip().lower() for e in (emotions or []) if e.strip()],
            note=(note or "").strip() or None,
            logged_at=logged_at or datetime.now(),
        )
        self.store.add_mood_entry(entry)
        logger.info("mood.logged", user_id=user_id, mood_value=entry.mood_value)

        ers = None
        if self.ers_calculator is not None:
            try:
                ers = self.ers_calculator.calculate_and_store(user_id)
            except PacefulError as e:
                logger.warning("mood.ers_refresh_failed", user_id=user_id, error=str(e))
        return MoodRecord(entry=entry, ers=ers)

    def recent(self, user_id: str, days: int = 30) -> list[MoodEntry]:
        since = datetime.now() - timedelta(days=days)
        return self.store.list_mood_entries(user_id, since=since)

    def stats(self, user_id: str, days: int = 30) -> MoodStats:
        return calculate_mood_stats(self.recent(user_id, days))

    def daily(self, user_id: str, days: int = 30) -> list[DailyMoodSummary]:
        return calculate_daily_summaries(self.recent(user_id, days))

    def for_date(self, user_id: str, day: date | str) -> list[MoodEntry]:
        if isinstance(day, str):
            try:
                day = date.fromisoformat(day)
            except ValueError:
                raise InvalidInputError(f"Invalid date: {day!r}, expected YYYY-MM-DD") from None
        start = datetime.combine(day, time.min)
        entries = self.store.list_mood_entries(
            user_id, since=start, until=start + timedelta(days=1)
        )
        return get_entries_for_date(entries, day)
