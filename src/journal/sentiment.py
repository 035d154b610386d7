"""Lexicon-based text analysis for journal entries.

The analyzer is deterministic and has no I/O: the same text always yields the
same AnalysisResult for a given LEXICON_VERSION. TextAnalyzer is the seam for
a future model-backed implementation.
"""

import re
from abc import ABC, abstractmethod
from collections import defaultdict

import structlog

from errors import InvalidInputError
from shared_types import EmotionType, InsightMarker, SentimentLevel

from . import lexicon
from .models import (
    AnalysisResult,
    EmotionDetection,
    EmotionResult,
    HealingIndicators,
    InsightResult,
    LanguageMetrics,
    SentimentResult,
)

logger = structlog.get_logger()

_CLAUSE_SPLIT = re.compile(r"[.,;:!?\n]+")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_TOKEN = re.compile(r"[a-z'-]+")

NOTABLE_PHRASES_LIMIT = 5

# Inclusive upper bounds for the negative levels
_LEVEL_THRESHOLDS = (
    (-0.6, SentimentLevel.VERY_NEGATIVE),
    (-0.3, SentimentLevel.NEGATIVE),
    (-0.1, SentimentLevel.SLIGHTLY_NEGATIVE),
)


def tokenize(text: str) -> list[list[str]]:
    """Split text into clauses of lowercase word tokens.

    Letters, apostrophes and hyphens form words; clause punctuation and line
    breaks start a new clause. Empty clauses are dropped.
    """
    normalized = text.lower().replace("\u2019", "'").replace("\u2018", "'")
    clauses = []
    for chunk in _CLAUSE_SPLIT.split(normalized):
        words = [w.strip("'-") for w in _TOKEN.findall(chunk)]
        words = [w for w in words if w]
        if words:
            clauses.append(words)
    return clauses


def sentiment_level(score: float) -> SentimentLevel:
    """Map a valence score in [-1, 1] to its ordered level."""
    for upper, level in _LEVEL_THRESHOLDS:
        if score <= upper:
            return level
    if score < 0.1:
        return SentimentLevel.NEUTRAL
    if score < 0.3:
        return SentimentLevel.SLIGHTLY_POSITIVE
    if score < 0.6:
        return SentimentLevel.POSITIVE
    return SentimentLevel.VERY_POSITIVE


def _is_negated(words: list[str], index: int) -> int | None:
    """Return the index of a negation word within the look-back window, if any."""
    for i in range(max(0, index - lexicon.NEGATION_WINDOW), index):
        if words[i] in lexicon.NEGATION_WORDS:
            return i
    return None


def _intensity(words: list[str], index: int) -> tuple[float, int]:
    """Intensity multiplier and how many preceding words it spans."""
    modifier, span = 1.0, 0
    if index > 0 and words[index - 1] in lexicon.INTENSIFIERS:
        modifier, span = lexicon.INTENSIFIERS[words[index - 1]], 1
    if index > 1:
        compound = f"{words[index - 2]} {words[index - 1]}"
        if compound in lexicon.INTENSIFIERS:
            modifier, span = lexicon.INTENSIFIERS[compound], 2
    return modifier, span


def _contains_phrase(clause_text: str, pattern: str) -> bool:
    # Word start boundary only, so "accept" also matches "acceptance"
    return f" {pattern}" in clause_text


class TextAnalyzer(ABC):
    """Abstract journal text analyzer."""

    name: str = "base"

    @abstractmethod
    def analyze(self, text: str) -> AnalysisResult:
        """Analyze one entry's text."""

    def __call__(self, text: str) -> AnalysisResult:
        return self.analyze(text)


class RuleBasedAnalyzer(TextAnalyzer):
    """Word-list analyzer with negation, intensifiers and phrase patterns."""

    name = "rules"

    def __init__(self, notable_limit: int = NOTABLE_PHRASES_LIMIT):
        self.notable_limit = notable_limit
        self._emotion_index: dict[str, list[EmotionType]] = defaultdict(list)
        self._emotion_phrases: dict[str, list[EmotionType]] = defaultdict(list)
        for emotion, keywords in lexicon.EMOTION_WORDS.items():
            for keyword in keywords:
                target = self._emotion_phrases if " " in keyword else self._emotion_index
                target[keyword].append(emotion)

    def analyze(self, text: str) -> AnalysisResult:
        if not isinstance(text, str):
            raise InvalidInputError(f"text must be str, got {type(text).__name__}")

        clauses = tokenize(text)
        sentiment, notable = self._analyze_sentiment(clauses)
        emotions = self._analyze_emotions(clauses)
        insights = self._analyze_insights(clauses)
        language = self._analyze_language(text, clauses)
        healing = self._analyze_healing(sentiment, emotions, insights)

        return AnalysisResult(
            sentiment=sentiment,
            emotions=emotions,
            insights=insights,
            language=language,
            healing=healing,
            notable_phrases=tuple(notable),
            lexicon_version=lexicon.LEXICON_VERSION,
        )

    def _analyze_sentiment(
        self, clauses: list[list[str]]
    ) -> tuple[SentimentResult, list[str]]:
        word_count = sum(len(c) for c in clauses)
        if word_count == 0:
            return SentimentResult(score=0.0, level=SentimentLevel.NEUTRAL, confidence=0.0), []

        total = 0.0
        matches = 0
        hits: list[tuple[float, int, str]] = []
        position = 0
        for words in clauses:
            for index, word in enumerate(words):
                position += 1
                weight = lexicon.VALENCE.get(word)
                if not weight:
                    continue

                start = index
                negation_at = _is_negated(words, index)
                if negation_at is not None:
                    # Negation flips and dampens rather than fully reversing
                    weight = -weight * 0.5
                    start = negation_at

                modifier, span = _intensity(words, index)
                weight *= modifier
                start = min(start, index - span)

                total += weight
                matches += 1
                hits.append((abs(weight), position, " ".join(words[start : index + 1])))

        score = total / matches if matches else 0.0
        score = max(-1.0, min(1.0, score))
        density = matches / word_count
        confidence = min(1.0, density * 3 + (0.3 if word_count > 50 else 0.0))

        result = SentimentResult(
            score=round(score, 4),
            level=sentiment_level(score),
            confidence=round(confidence, 2),
        )
        return result, self._notable_phrases(hits)

    def _notable_phrases(self, hits: list[tuple[float, int, str]]) -> list[str]:
        phrases: list[str] = []
        for _, _, phrase in sorted(hits, key=lambda h: (-h[0], h[1])):
            if phrase not in phrases:
                phrases.append(phrase)
            if len(phrases) >= self.notable_limit:
                break
        return phrases

    def _analyze_emotions(self, clauses: list[list[str]]) -> EmotionResult:
        counts: dict[EmotionType, int] = defaultdict(int)
        matched: dict[EmotionType, list[str]] = defaultdict(list)

        def record(emotions: list[EmotionType], term: str) -> None:
            for emotion in emotions:
                counts[emotion] += 1
                if term not in matched[emotion]:
                    matched[emotion].append(term)

        for words in clauses:
            for index, word in enumerate(words):
                if _is_negated(words, index) is not None:
                    continue
                if word in self._emotion_index:
                    record(self._emotion_index[word], word)
                if index > 0:
                    bigram = f"{words[index - 1]} {word}"
                    if bigram in self._emotion_phrases and _is_negated(words, index - 1) is None:
                        record(self._emotion_phrases[bigram], bigram)

        detected = [
            EmotionDetection(
                emotion=emotion,
                intensity=round(min(1.0, counts[emotion] / 3), 2),
                count=counts[emotion],
                word_matches=tuple(matched[emotion]),
            )
            for emotion in lexicon.EMOTION_WORDS
            if counts.get(emotion)
        ]
        detected.sort(key=lambda d: d.intensity, reverse=True)

        return EmotionResult(
            primary=detected[0].emotion if detected else None,
            secondary=detected[1].emotion if len(detected) > 1 else None,
            detected=tuple(detected),
        )

    def _analyze_insights(self, clauses: list[list[str]]) -> InsightResult:
        clause_texts = [" " + " ".join(words) for words in clauses]

        found: dict[InsightMarker, int] = {}
        for marker, patterns in lexicon.INSIGHT_PATTERNS.items():
            found[marker] = sum(
                1 for p in patterns if any(_contains_phrase(c, p) for c in clause_texts)
            )

        score = min(10.0, sum(found[m] * lexicon.INSIGHT_WEIGHTS[m] for m in found))
        return InsightResult(
            has_self_reflection=found[InsightMarker.SELF_REFLECTION] > 0,
            has_gratitude=found[InsightMarker.GRATITUDE] > 0,
            has_future_thinking=found[InsightMarker.FUTURE_THINKING] > 0,
            has_acceptance=found[InsightMarker.ACCEPTANCE] > 0,
            has_growth_mindset=found[InsightMarker.GROWTH_MINDSET] > 0,
            insight_score=round(score, 1),
        )

    @staticmethod
    def _analyze_language(text: str, clauses: list[list[str]]) -> LanguageMetrics:
        words = [w for clause in clauses for w in clause]
        if not words:
            return LanguageMetrics()

        sentences = [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]
        word_count = len(words)
        avg_sentence_length = word_count / len(sentences) if sentences else float(word_count)
        diversity = len(set(words)) / word_count
        avg_word_length = sum(len(w) for w in words) / word_count
        complexity = min(
            1.0,
            diversity * 0.4
            + min(avg_word_length / 8, 1.0) * 0.3
            + min(avg_sentence_length / 20, 1.0) * 0.3,
        )

        return LanguageMetrics(
            word_count=word_count,
            avg_sentence_length=round(avg_sentence_length, 1),
            vocabulary_diversity=round(diversity, 2),
            complexity=round(complexity, 2),
            uses_first_person=any(w in lexicon.FIRST_PERSON for w in words),
            question_count=text.count("?"),
        )

    @staticmethod
    def _analyze_healing(
        sentiment: SentimentResult, emotions: EmotionResult, insights: InsightResult
    ) -> HealingIndicators:
        progress = 0
        if sentiment.score > 0.2:
            progress += 2
        elif sentiment.score > -0.1:
            progress += 1
        if insights.has_self_reflection:
            progress += 2
        if insights.has_gratitude:
            progress += 2
        if insights.has_acceptance:
            progress += 2
        if insights.has_growth_mindset:
            progress += 1
        if insights.has_future_thinking:
            progress += 1

        has_difficult = any(d.emotion in lexicon.NEGATIVE_EMOTIONS for d in emotions.detected)
        has_positive = insights.has_acceptance or insights.has_growth_mindset or sentiment.score > 0

        return HealingIndicators(
            progress_score=min(10, progress),
            healthy_processing=has_difficult and has_positive,
            emotional_regulation=(
                -0.7 < sentiment.score < 0.8
                and not any(d.intensity > 0.8 for d in emotions.detected)
            ),
            forward_looking=insights.has_future_thinking or insights.has_growth_mindset,
        )


_ANALYZERS = {"rules": RuleBasedAnalyzer}


def available_analyzers() -> list[str]:
    return sorted(_ANALYZERS)


def create_analyzer(name: str = "rules", **kwargs) -> TextAnalyzer:
    """Create a text analyzer by name.

    Args:
        name: Analyzer variant. Only "rules" ships today.
        **kwargs: Passed to the analyzer constructor.
    """
    try:
        analyzer_cls = _ANALYZERS[name]
    except KeyError:
        raise InvalidInputError(
            f"Unknown analyzer: {name}. Must be one of {sorted(_ANALYZERS)}"
        ) from None
    logger.debug("analyzer.created", analyzer=name)
    return analyzer_cls(**kwargs)


_default_analyzer = RuleBasedAnalyzer()


def analyze_text(text: str) -> AnalysisResult:
    """Analyze text with the shared rule-based analyzer."""
    return _default_analyzer.analyze(text)


# --- Display helpers ---

_SENTIMENT_LABELS = {
    SentimentLevel.VERY_NEGATIVE: "Processing difficult feelings",
    SentimentLevel.NEGATIVE: "Working through challenges",
    SentimentLevel.SLIGHTLY_NEGATIVE: "Reflective",
    SentimentLevel.NEUTRAL: "Balanced",
    SentimentLevel.SLIGHTLY_POSITIVE: "Finding clarity",
    SentimentLevel.POSITIVE: "Hopeful",
    SentimentLevel.VERY_POSITIVE: "Thriving",
}

_SENTIMENT_COLORS = {
    SentimentLevel.VERY_NEGATIVE: ("text-rose-700", "bg-rose-50", "border-rose-200"),
    SentimentLevel.NEGATIVE: ("text-orange-700", "bg-orange-50", "border-orange-200"),
    SentimentLevel.SLIGHTLY_NEGATIVE: ("text-amber-700", "bg-amber-50", "border-amber-200"),
    SentimentLevel.NEUTRAL: ("text-gray-600", "bg-gray-50", "border-gray-200"),
    SentimentLevel.SLIGHTLY_POSITIVE: ("text-sky-700", "bg-sky-50", "border-sky-200"),
    SentimentLevel.POSITIVE: ("text-emerald-700", "bg-emerald-50", "border-emerald-200"),
    SentimentLevel.VERY_POSITIVE: ("text-teal-700", "bg-teal-50", "border-teal-200"),
}

_EMOTION_EMOJI = {
    EmotionType.JOY: "\U0001f60a",
    EmotionType.SADNESS: "\U0001f622",
    EmotionType.ANGER: "\U0001f620",
    EmotionType.FEAR: "\U0001f628",
    EmotionType.SURPRISE: "\U0001f632",
    EmotionType.DISGUST: "\U0001f612",
    EmotionType.TRUST: "\U0001f91d",
    EmotionType.ANTICIPATION: "\U0001f929",
    EmotionType.LOVE: "\u2764\ufe0f",
    EmotionType.GRATITUDE: "\U0001f64f",
    EmotionType.HOPE: "\U0001f31f",
    EmotionType.ANXIETY: "\U0001f630",
    EmotionType.LONELINESS: "\U0001f494",
    EmotionType.ACCEPTANCE: "\u262e\ufe0f",
    EmotionType.CONFUSION: "\U0001f615",
    EmotionType.RELIEF: "\U0001f62e\u200d\U0001f4a8",
}


def _coerce(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidInputError(f"Unknown {enum_cls.__name__}: {value!r}") from None


def get_sentiment_label(level: SentimentLevel | str) -> str:
    return _SENTIMENT_LABELS[_coerce(SentimentLevel, level)]


def get_sentiment_colors(level: SentimentLevel | str) -> dict:
    text, bg, border = _SENTIMENT_COLORS[_coerce(SentimentLevel, level)]
    return {"text": text, "bg": bg, "border": border}


def get_emotion_emoji(emotion: EmotionType | str) -> str:
    return _EMOTION_EMOJI[_coerce(EmotionType, emotion)]


def get_simple_sentiment(text: str) -> str:
    """Collapse the seven sentiment levels into five display buckets."""
    level = analyze_text(text).level
    if level in (SentimentLevel.VERY_NEGATIVE, SentimentLevel.NEGATIVE):
        return "struggling"
    if level == SentimentLevel.SLIGHTLY_NEGATIVE:
        return "processing"
    if level == SentimentLevel.NEUTRAL:
        return "neutral"
    if level == SentimentLevel.SLIGHTLY_POSITIVE:
        return "hopeful"
    return "positive"
