"""Shared enums and types for Paceful."""

from enum import StrEnum


class SentimentLevel(StrEnum):
    VERY_NEGATIVE = "very_negative"
    NEGATIVE = "negative"
    SLIGHTLY_NEGATIVE = "slightly_negative"
    NEUTRAL = "neutral"
    SLIGHTLY_POSITIVE = "slightly_positive"
    POSITIVE = "positive"
    VERY_POSITIVE = "very_positive"

    @property
    def rank(self) -> int:
        """Position on the negative -> positive scale (0-6)."""
        return list(SentimentLevel).index(self)


class EmotionType(StrEnum):
    JOY = "joy"
    SADNESS = "sadness"
    ANGER = "anger"
    FEAR = "fear"
    SURPRISE = "surprise"
    DISGUST = "disgust"
    TRUST = "trust"
    ANTICIPATION = "anticipation"
    LOVE = "love"
    GRATITUDE = "gratitude"
    HOPE = "hope"
    ANXIETY = "anxiety"
    LONELINESS = "loneliness"
    ACCEPTANCE = "acceptance"
    CONFUSION = "confusion"
    RELIEF = "relief"


class InsightMarker(StrEnum):
    SELF_REFLECTION = "self_reflection"
    GRATITUDE = "gratitude"
    FUTURE_THINKING = "future_thinking"
    ACCEPTANCE = "acceptance"
    GROWTH_MINDSET = "growth_mindset"


class Trend(StrEnum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class ERSStage(StrEnum):
    HEALING = "healing"
    REBUILDING = "rebuilding"
    READY = "ready"


class Readiness(StrEnum):
    NOT_AT_ALL = "not_at_all"
    A_LITTLE = "a_little"
    MOSTLY = "mostly"
    COMPLETELY = "completely"
