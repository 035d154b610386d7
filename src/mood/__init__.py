from .calculator import (
    calculate_daily_summaries,
    calculate_mood_stability,
    calculate_mood_stats,
    calculate_weekly_summary,
    get_entries_for_date,
    get_mood_color,
    get_mood_label,
)
from .models import DailyMoodSummary, MoodColor, MoodEntry, MoodStats, WeeklyMoodSummary

__all__ = [
    "MoodEntry",
    "MoodStats",
    "DailyMoodSummary",
    "WeeklyMoodSummary",
    "MoodColor",
    "calculate_mood_stats",
    "calculate_daily_summaries",
    "calculate_weekly_summary",
    "calculate_mood_stability",
    "get_entries_for_date",
    "get_mood_label",
    "get_mood_color",
]
