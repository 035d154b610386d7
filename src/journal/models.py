"""Journal entry and analysis result records."""

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional

from shared_types import EmotionType, InsightMarker, SentimentLevel


@dataclass
class JournalEntry:
    user_id: str
    content: str
    title: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data


@dataclass(frozen=True)
class SentimentResult:
    score: float
    level: SentimentLevel
    confidence: float


@dataclass(frozen=True)
class EmotionDetection:
    emotion: EmotionType
    intensity: float
    count: int
    word_matches: tuple[str, ...] = ()


@dataclass(frozen=True)
class EmotionResult:
    primary: Optional[EmotionType] = None
    secondary: Optional[EmotionType] = None
    detected: tuple[EmotionDetection, ...] = ()


@dataclass(frozen=True)
class InsightResult:
    has_self_reflection: bool = False
    has_gratitude: bool = False
    has_future_thinking: bool = False
    has_acceptance: bool = False
    has_growth_mindset: bool = False
    insight_score: float = 0.0

    @property
    def markers(self) -> list[InsightMarker]:
        flags = {
            InsightMarker.SELF_REFLECTION: self.has_self_reflection,
            InsightMarker.GRATITUDE: self.has_gratitude,
            InsightMarker.FUTURE_THINKING: self.has_future_thinking,
            InsightMarker.ACCEPTANCE: self.has_acceptance,
            InsightMarker.GROWTH_MINDSET: self.has_growth_mindset,
        }
        return [marker for marker, present in flags.items() if present]


@dataclass(frozen=True)
class LanguageMetrics:
    word_count: int = 0
    avg_sentence_length: float = 0.0
    vocabulary_diversity: float = 0.0
    complexity: float = 0.0
    uses_first_person: bool = False
    question_count: int = 0


@dataclass(frozen=True)
class HealingIndicators:
    progress_score: int = 0
    healthy_processing: bool = False
    emotional_regulation: bool = False
    forward_looking: bool = False


@dataclass(frozen=True)
class AnalysisResult:
    """Everything the analyzer derives from one journal entry."""

    sentiment: SentimentResult
    emotions: EmotionResult
    insights: InsightResult
    language: LanguageMetrics
    healing: HealingIndicators
    notable_phrases: tuple[str, ...] = ()
    lexicon_version: str = ""

    @property
    def valence(self) -> float:
        return self.sentiment.score

    @property
    def level(self) -> SentimentLevel:
        return self.sentiment.level

    @property
    def markers(self) -> list[InsightMarker]:
        return self.insights.markers

    @property
    def emotion_counts(self) -> dict[EmotionType, int]:
        return {d.emotion: d.count for d in self.emotions.detected}

    def to_dict(self) -> dict:
        data = asdict(self)
        data["markers"] = [str(m) for m in self.markers]
        data["emotion_counts"] = {str(k): v for k, v in self.emotion_counts.items()}
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisResult":
        sentiment = data["sentiment"]
        emotions = data.get("emotions") or {}
        return cls(
            sentiment=SentimentResult(
                score=sentiment["score"],
                level=SentimentLevel(sentiment["level"]),
                confidence=sentiment["confidence"],
            ),
            emotions=EmotionResult(
                primary=EmotionType(emotions["primary"]) if emotions.get("primary") else None,
                secondary=(
                    EmotionType(emotions["secondary"]) if emotions.get("secondary") else None
                ),
                detected=tuple(
                    EmotionDetection(
                        emotion=EmotionType(d["emotion"]),
                        intensity=d["intensity"],
                        count=d["count"],
                        word_matches=tuple(d.get("word_matches", ())),
                    )
                    for d in emotions.get("detected", [])
                ),
            ),
            insights=InsightResult(**(data.get("insights") or {})),
            language=LanguageMetrics(**(data.get("language") or {})),
            healing=HealingIndicators(**(data.get("healing") or {})),
            notable_phrases=tuple(data.get("notable_phrases", ())),
            lexicon_version=data.get("lexicon_version", ""),
        )


@dataclass
class AnalyzedEntry:
    """A stored analysis row, flattened for scoring queries."""

    entry_id: str
    user_id: str
    entry_created_at: datetime
    analyzed_at: datetime
    sentiment_score: float
    sentiment_level: SentimentLevel
    word_count: int
    insight_score: float
    markers: list[InsightMarker] = field(default_factory=list)
    analysis: Optional[AnalysisResult] = None

    @property
    def has_insight(self) -> bool:
        return bool(self.markers)

    def to_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "user_id": self.user_id,
            "entry_created_at": self.entry_created_at.isoformat(),
            "analyzed_at": self.analyzed_at.isoformat(),
            "sentiment_score": self.sentiment_score,
            "sentiment_level": str(self.sentiment_level),
            "word_count": self.word_count,
            "insight_score": self.insight_score,
            "markers": [str(m) for m in self.markers],
            "analysis": self.analysis.to_dict() if self.analysis else None,
        }
