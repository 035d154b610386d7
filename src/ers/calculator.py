"""Emotional Regulation Score (ERS) calculation.

Six components, each normalized to 0-1 (None when there is not enough data),
are combined with fixed weights into a 0-100 score:

    emotional_stability    0.25  mood spread over the mood window, plus a
                                 bonus when the second half trends upward
    self_reflection        0.15  journaling frequency and depth, last 7 days
    insight_frequency      0.20  share of recent entries with an insight marker
    behavioral_engagement  0.15  days with any log, plus a streak bonus
    coping_capacity        0.15  how often a low mood is followed by a better one
    social_readiness       0.10  latest self-reported readiness

Components without data drop out and the remaining weights are renormalized.
With no data at all the score is BASELINE_SCORE.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Optional

import numpy as np
import structlog

from errors import InvalidInputError
from journal.models import AnalyzedEntry
from mood.models import MoodEntry
from shared_types import ERSStage, Readiness, Trend

from .models import ERSScore

logger = structlog.get_logger()

DEFAULT_WEIGHTS = {
    "emotional_stability": 0.25,
    "self_reflection": 0.15,
    "insight_frequency": 0.20,
    "behavioral_engagement": 0.15,
    "coping_capacity": 0.15,
    "social_readiness": 0.10,
}
COMPONENTS = tuple(DEFAULT_WEIGHTS)

BASELINE_SCORE = 50.0
DEFAULT_DEAD_BAND = 2.0

MIN_MOOD_ENTRIES = 3
MIN_JOURNAL_ENTRIES = 2
LOW_MOOD_MAX = 3
NO_LOWS_COPING = 0.7

READINESS_SCORES = {
    Readiness.NOT_AT_ALL: 0.15,
    Readiness.A_LITTLE: 0.35,
    Readiness.MOSTLY: 0.65,
    Readiness.COMPLETELY: 0.90,
}

STAGE_INFO = {
    ERSStage.HEALING: {
        "label": "Healing",
        "description": "Focus on self-care and emotional processing",
        "min_score": 0,
        "max_score": 49,
    },
    ERSStage.REBUILDING: {
        "label": "Rebuilding",
        "description": "Building new patterns and emotional strength",
        "min_score": 50,
        "max_score": 74,
    },
    ERSStage.READY: {
        "label": "Ready",
        "description": "Emotionally prepared for meaningful connections",
        "min_score": 75,
        "max_score": 100,
    },
}


def _clamp_unit(value: Optional[float]) -> Optional[float]:
    """Clamp to [0, 1] and round to 2 dp; NaN / inf become None."""
    if value is None or not np.isfinite(value):
        return None
    return round(max(0.0, min(1.0, float(value))), 2)


def combine_components(
    components: dict[str, Optional[float]], weights: Optional[dict[str, float]] = None
) -> float:
    """Weighted 0-100 score over the components that have data."""
    weights = weights or DEFAULT_WEIGHTS
    weighted_sum = 0.0
    total_weight = 0.0
    for name, weight in weights.items():
        value = components.get(name)
        if value is None:
            continue
        weighted_sum += value * weight
        total_weight += weight
    if total_weight == 0:
        return BASELINE_SCORE
    return round(max(0.0, min(100.0, weighted_sum / total_weight * 100)), 2)


def determine_stage(score: float) -> ERSStage:
    if score >= STAGE_INFO[ERSStage.READY]["min_score"]:
        return ERSStage.READY
    if score >= STAGE_INFO[ERSStage.REBUILDING]["min_score"]:
        return ERSStage.REBUILDING
    return ERSStage.HEALING


def classify_trend(delta: Optional[float], dead_band: float = DEFAULT_DEAD_BAND) -> Trend:
    if delta is None:
        return Trend.STABLE
    if delta > dead_band:
        return Trend.IMPROVING
    if delta < -dead_band:
        return Trend.DECLINING
    return Trend.STABLE


def get_stage_info(stage: ERSStage | str) -> dict:
    try:
        return dict(STAGE_INFO[ERSStage(stage)])
    except ValueError:
        raise InvalidInputError(f"Unknown ERS stage: {stage!r}") from None


def week_start(day: date) -> date:
    """Monday of the week containing day."""
    return day - timedelta(days=day.weekday())


# --- Component formulas ---


def emotional_stability_score(values: list[int]) -> Optional[float]:
    if len(values) < MIN_MOOD_ENTRIES:
        return None
    stability = max(0.0, 1 - float(np.std(values)) / 4)
    if len(values) >= 4:
        midpoint = len(values) // 2
        first = float(np.mean(values[:midpoint]))
        second = float(np.mean(values[midpoint:]))
        if second > first:
            stability += min(0.2, (second - first) / 5)
    return min(1.0, stability)


def self_reflection_score(entries: list[AnalyzedEntry], window_days: int = 7) -> Optional[float]:
    if len(entries) < MIN_JOURNAL_ENTRIES:
        return None
    frequency = min(40.0, len(entries) / window_days * 40)
    avg_words = sum(e.word_count for e in entries) / len(entries)
    if avg_words >= 100:
        depth = 30
    elif avg_words >= 50:
        depth = 20
    elif avg_words >= 20:
        depth = 15
    else:
        depth = 5
    variety = 30
    return min(100.0, frequency + depth + variety) / 100


def insight_frequency_score(entries: list[AnalyzedEntry]) -> Optional[float]:
    if not entries:
        return None
    return sum(1 for e in entries if e.has_insight) / len(entries)


def behavioral_engagement_score(days_logged: list[date], window_days: int) -> Optional[float]:
    if not days_logged:
        return None
    days = sorted(set(days_logged))
    logging_rate = min(1.0, len(days) / max(1, window_days))

    max_streak = current = 1
    for prev, curr in zip(days, days[1:]):
        if (curr - prev).days == 1:
            current += 1
            max_streak = max(max_streak, current)
        else:
            current = 1

    streak_bonus = min(0.15, max_streak / 7 * 0.15)
    return min(1.0, logging_rate + streak_bonus)


def coping_capacity_score(values: list[int]) -> Optional[float]:
    """Share of low moods followed by a higher reading."""
    if len(values) < MIN_MOOD_ENTRIES:
        return None
    lows = [i for i, v in enumerate(values) if v <= LOW_MOOD_MAX]
    if not lows:
        return NO_LOWS_COPING
    recovered = sum(1 for i in lows if i + 1 < len(values) and values[i + 1] > values[i])
    return min(1.0, 0.3 + 0.7 * recovered / len(lows))


def social_readiness_score(readiness: Optional[Readiness]) -> Optional[float]:
    if readiness is None:
        return None
    return READINESS_SCORES.get(readiness)


@dataclass
class BatchResult:
    success: int = 0
    failed: int = 0
    errors: list[dict] = field(default_factory=list)


class ERSCalculator:
    """Computes and persists ERS scores from a user's stored history."""

    def __init__(
        self,
        store,
        weights: Optional[dict[str, float]] = None,
        dead_band: float = DEFAULT_DEAD_BAND,
        mood_window_days: int = 14,
        journal_window_days: int = 7,
        insight_window_days: int = 14,
    ):
        """
        Args:
            store: WellnessStore (or anything with the same read/write methods)
            weights: Component weights; must cover every component and sum to 1
            dead_band: Score change (points) below which the trend is stable
            mood_window_days: Lookback for stability, coping and engagement
            journal_window_days: Lookback for self-reflection
            insight_window_days: Lookback for insight frequency
        """
        weights = dict(weights or DEFAULT_WEIGHTS)
        if set(weights) != set(COMPONENTS):
            raise InvalidInputError(f"ERS weights must cover exactly {list(COMPONENTS)}")
        if abs(sum(weights.values()) - 1.0) > 0.01:
            raise InvalidInputError(f"ERS weights must sum to 1.0, got {sum(weights.values())}")
        self.store = store
        self.weights = weights
        self.dead_band = dead_band
        self.mood_window_days = mood_window_days
        self.journal_window_days = journal_window_days
        self.insight_window_days = insight_window_days

    def calculate(self, user_id: str, now: Optional[datetime] = None) -> ERSScore:
        """Compute a score at `now` without storing it."""
        if not isinstance(user_id, str) or not user_id.strip():
            raise InvalidInputError("user_id must be a non-empty string")
        now = now or datetime.now()
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc).replace(tzinfo=None)

        mood_since = now - timedelta(days=self.mood_window_days)
        insight_since = now - timedelta(days=self.insight_window_days)
        journal_since = now - timedelta(days=self.journal_window_days)
        earliest = min(mood_since, insight_since, journal_since)

        moods: list[MoodEntry] = self.store.list_mood_entries(user_id, since=mood_since, until=now)
        analyses: list[AnalyzedEntry] = self.store.list_analyses(
            user_id, since=earliest, until=now
        )
        readiness = self.store.get_latest_readiness(user_id, before=now)

        mood_values = [m.mood_value for m in moods]
        recent_journal = [a for a in analyses if a.entry_created_at >= journal_since]
        insight_journal = [a for a in analyses if a.entry_created_at >= insight_since]
        active_days = [m.logged_at.date() for m in moods] + [
            a.entry_created_at.date() for a in analyses if a.entry_created_at >= mood_since
        ]

        components = {
            "emotional_stability": _clamp_unit(emotional_stability_score(mood_values)),
            "self_reflection": _clamp_unit(
                self_reflection_score(recent_journal, self.journal_window_days)
            ),
            "insight_frequency": _clamp_unit(insight_frequency_score(insight_journal)),
            "behavioral_engagement": _clamp_unit(
                behavioral_engagement_score(active_days, self.mood_window_days)
            ),
            "coping_capacity": _clamp_unit(coping_capacity_score(mood_values)),
            "social_readiness": _clamp_unit(social_readiness_score(readiness)),
        }

        score = combine_components(components, self.weights)
        available = sum(1 for v in components.values() if v is not None)
        is_baseline = available == 0

        previous = self.store.get_previous_ers_score(user_id, before=now)
        delta = round(score - previous.score, 2) if previous else None

        return ERSScore(
            user_id=user_id,
            score=score,
            components=components,
            stage=determine_stage(score),
            trend=classify_trend(delta, self.dead_band),
            confidence=round(available / len(COMPONENTS), 2),
            delta=delta,
            computed_at=now,
            week_of=week_start(now.date()).isoformat(),
            data_points=len(moods) + len(analyses) + (1 if readiness else 0),
            mood_entries_count=len(moods),
            is_baseline=is_baseline,
        )

    def calculate_and_store(self, user_id: str, now: Optional[datetime] = None) -> ERSScore:
        """Compute a score and append it to the user's history."""
        result = self.calculate(user_id, now=now)
        self.store.save_ers_score(result)
        logger.info(
            "ers.calculated",
            user_id=user_id,
            score=result.score,
            stage=str(result.stage),
            trend=str(result.trend),
            baseline=result.is_baseline,
        )
        return result

    def calculate_for_all_users(self, now: Optional[datetime] = None) -> BatchResult:
        """Recompute every known user; per-user failures are collected, not raised."""
        result = BatchResult()
        for user_id in self.store.list_user_ids():
            try:
                self.calculate_and_store(user_id, now=now)
                result.success += 1
            except Exception as e:
                logger.warning("ers.batch_user_failed", user_id=user_id, error=str(e))
                result.failed += 1
                result.errors.append({"user_id": user_id, "error": str(e)})
        logger.info("ers.batch_complete", success=result.success, failed=result.failed)
        return result


def calculate_and_store_ers_score(store, user_id: str, **kwargs) -> ERSScore:
    """One-shot helper: default-configured calculator, compute and store."""
    return ERSCalculator(store).calculate_and_store(user_id, **kwargs)
