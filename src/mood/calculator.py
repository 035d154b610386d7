"""Mood statistics, daily and weekly summaries, and display lookups."""

from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional

import numpy as np

from errors import InvalidInputError
from shared_types import Trend

from .models import (
    MOOD_MAX,
    MOOD_MIN,
    DailyMoodSummary,
    MoodColor,
    MoodEntry,
    MoodStats,
    WeeklyMoodSummary,
)

# Percent change between halves needed to call a trend
TREND_THRESHOLD_PCT = 5.0

# Variance at which mood stability bottoms out
STABILITY_VARIANCE_CEILING = 5.0


def validate_mood_value(value) -> int:
    """Return value if it is an integer on the 1-10 scale, else raise."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidInputError(f"mood value must be an integer, got {value!r}")
    if not MOOD_MIN <= value <= MOOD_MAX:
        raise InvalidInputError(f"mood value must be {MOOD_MIN}-{MOOD_MAX}, got {value}")
    return int(value)


def normalize_timestamp(ts: datetime) -> datetime:
    """Drop tzinfo after converting aware timestamps to UTC."""
    if ts.tzinfo is not None:
        return ts.astimezone(timezone.utc).replace(tzinfo=None)
    return ts


def entry_day(entry: MoodEntry) -> date:
    return normalize_timestamp(entry.logged_at).date()


def _in_range(
    entries: Iterable[MoodEntry], start: Optional[datetime], end: Optional[datetime]
) -> list[MoodEntry]:
    start = normalize_timestamp(start) if start else None
    end = normalize_timestamp(end) if end else None
    result = []
    for entry in entries:
        ts = normalize_timestamp(entry.logged_at)
        if start and ts < start:
            continue
        if end and ts > end:
            continue
        result.append(entry)
    return sorted(result, key=lambda e: normalize_timestamp(e.logged_at))


def _average(values: list[int]) -> float:
    return float(np.mean(values)) if values else 0.0


def _variance(values: list[int]) -> float:
    # Population variance; a single reading has none
    if len(values) < 2:
        return 0.0
    return float(np.var(values))


def detect_trend(values: list[int]) -> tuple[Trend, float]:
    """Compare the mean of the second half against the first half.

    Returns (trend, percent change). Fewer than four readings is always stable.
    """
    if len(values) < 4:
        return Trend.STABLE, 0.0

    midpoint = len(values) // 2
    first = _average(values[:midpoint])
    second = _average(values[midpoint:])
    percentage = (second - first) / first * 100 if first > 0 else 0.0

    if percentage > TREND_THRESHOLD_PCT:
        return Trend.IMPROVING, percentage
    if percentage < -TREND_THRESHOLD_PCT:
        return Trend.DECLINING, percentage
    return Trend.STABLE, percentage


def _top_emotions(entries: list[MoodEntry], n: int) -> list[str]:
    counts = Counter(emotion for e in entries for emotion in (e.emotions or []))
    return [emotion for emotion, _ in counts.most_common(n)]


def calculate_mood_stats(
    entries: list[MoodEntry],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> MoodStats:
    """Count, mean, spread, distribution and trend of mood values in range."""
    selected = _in_range(entries, start, end)
    if not selected:
        return MoodStats()

    values = [validate_mood_value(e.mood_value) for e in selected]
    trend, percentage = detect_trend(values)
    variance = _variance(values)
    top = _top_emotions(selected, 1)

    return MoodStats(
        count=len(values),
        average=round(_average(values), 1),
        variance=round(variance, 2),
        std_dev=round(float(np.sqrt(variance)), 2),
        distribution=dict(sorted(Counter(values).items())),
        highest=max(values),
        lowest=min(values),
        trend=trend,
        trend_percentage=round(percentage, 1),
        most_common_emotion=top[0] if top else None,
    )


def calculate_daily_summaries(
    entries: list[MoodEntry],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> list[DailyMoodSummary]:
    """One summary per calendar day that has entries, oldest first."""
    by_day: dict[date, list[MoodEntry]] = {}
    for entry in _in_range(entries, start, end):
        by_day.setdefault(entry_day(entry), []).append(entry)

    summaries = []
    for day in sorted(by_day):
        day_entries = by_day[day]
        values = [validate_mood_value(e.mood_value) for e in day_entries]
        emotions = list(dict.fromkeys(em for e in day_entries for em in (e.emotions or [])))
        summaries.append(
            DailyMoodSummary(
                date=day.isoformat(),
                average_mood=round(_average(values), 1),
                entry_count=len(day_entries),
                emotions=emotions,
                dominant_emotions=_top_emotions(day_entries, 3),
            )
        )
    return summaries


def calculate_weekly_summary(entries: list[MoodEntry], week_start: date) -> WeeklyMoodSummary:
    """Summarize the seven calendar days starting at week_start."""
    if isinstance(week_start, datetime):
        week_start = normalize_timestamp(week_start).date()
    week_end = week_start + timedelta(days=6)

    week_entries = [e for e in entries if week_start <= entry_day(e) <= week_end]
    values = [validate_mood_value(e.mood_value) for e in week_entries]

    return WeeklyMoodSummary(
        week_start=week_start.isoformat(),
        week_end=week_end.isoformat(),
        average_mood=round(_average(values), 1),
        variance=round(_variance(values), 2),
        entry_count=len(week_entries),
        dominant_emotions=_top_emotions(week_entries, 3),
    )


def get_entries_for_date(entries: list[MoodEntry], day: date | str) -> list[MoodEntry]:
    """Entries logged on one calendar day, oldest first (ties keep input order)."""
    if isinstance(day, str):
        try:
            day = date.fromisoformat(day)
        except ValueError:
            raise InvalidInputError(f"Invalid date: {day!r}, expected YYYY-MM-DD") from None
    elif isinstance(day, datetime):
        day = normalize_timestamp(day).date()
    matching = [e for e in entries if entry_day(e) == day]
    return sorted(matching, key=lambda e: normalize_timestamp(e.logged_at))


def calculate_mood_stability(entries: list[MoodEntry]) -> float:
    """0-1 stability score: lower variance means steadier mood."""
    stats = calculate_mood_stats(entries)
    stability = max(0.0, 1 - stats.variance / STABILITY_VARIANCE_CEILING)
    return round(stability, 2)


def get_mood_label(value: int) -> str:
    value = validate_mood_value(value)
    if value <= 3:
        return "Low"
    if value <= 6:
        return "Moderate"
    return "High"


_MOOD_COLORS = {
    "Low": MoodColor(bg="bg-rose-100", text="text-rose-700", border="border-rose-300", hex="#f43f5e"),
    "Moderate": MoodColor(
        bg="bg-amber-100", text="text-amber-700", border="border-amber-300", hex="#f59e0b"
    ),
    "High": MoodColor(
        bg="bg-emerald-100", text="text-emerald-700", border="border-emerald-300", hex="#10b981"
    ),
}


def get_mood_color(value: int) -> MoodColor:
    return _MOOD_COLORS[get_mood_label(value)]
