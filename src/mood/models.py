"""Mood log records and aggregate shapes."""

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional

from shared_types import Trend

MOOD_MIN = 1
MOOD_MAX = 10


@dataclass
class MoodEntry:
    user_id: str
    mood_value: int
    logged_at: datetime = field(default_factory=datetime.now)
    emotions: list[str] = field(default_factory=list)
    note: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["logged_at"] = self.logged_at.isoformat()
        return data


@dataclass
class MoodStats:
    count: int = 0
    average: float = 0.0
    variance: float = 0.0
    std_dev: float = 0.0
    distribution: dict[int, int] = field(default_factory=dict)
    highest: int = 0
    lowest: int = 0
    trend: Trend = Trend.STABLE
    trend_percentage: float = 0.0
    most_common_emotion: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DailyMoodSummary:
    date: str
    average_mood: float
    entry_count: int
    emotions: list[str] = field(default_factory=list)
    dominant_emotions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class WeeklyMoodSummary:
    week_start: str
    week_end: str
    average_mood: float
    variance: float
    entry_count: int
    dominant_emotions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MoodColor:
    bg: str
    text: str
    border: str
    hex: str
