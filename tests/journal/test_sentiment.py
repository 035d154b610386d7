"""Tests for the rule-based text analyzer."""

from types import SimpleNamespace

import pytest

from errors import InvalidInputError
from journal.lexicon import LEXICON_VERSION, POSITIVE_WORDS
from journal.sentiment import (
    RuleBasedAnalyzer,
    TextAnalyzer,
    analyze_text,
    available_analyzers,
    create_analyzer,
    get_emotion_emoji,
    get_sentiment_colors,
    get_sentiment_label,
    get_simple_sentiment,
    sentiment_level,
    tokenize,
)
from shared_types import EmotionType, InsightMarker, SentimentLevel


class TestTokenize:
    def test_clauses_split_on_punctuation(self):
        assert tokenize("I was sad, but now I'm okay.") == [
            ["i", "was", "sad"],
            ["but", "now", "i'm", "okay"],
        ]

    def test_curly_apostrophes_normalized(self):
        assert tokenize("I\u2019m fine") == [["i'm", "fine"]]

    def test_empty(self):
        assert tokenize("") == []
        assert tokenize("  ... !!") == []


class TestSentimentLevel:
    @pytest.mark.parametrize(
        "score,level",
        [
            (-1.0, SentimentLevel.VERY_NEGATIVE),
            (-0.6, SentimentLevel.VERY_NEGATIVE),
            (-0.45, SentimentLevel.NEGATIVE),
            (-0.2, SentimentLevel.SLIGHTLY_NEGATIVE),
            (0.0, SentimentLevel.NEUTRAL),
            (0.2, SentimentLevel.SLIGHTLY_POSITIVE),
            (0.45, SentimentLevel.POSITIVE),
            (0.9, SentimentLevel.VERY_POSITIVE),
        ],
    )
    def test_bands(self, score, level):
        assert sentiment_level(score) == level

    def test_levels_are_ordered(self):
        assert SentimentLevel.VERY_NEGATIVE.rank < SentimentLevel.NEUTRAL.rank
        assert SentimentLevel.NEUTRAL.rank < SentimentLevel.VERY_POSITIVE.rank


class TestAnalyze:
    def test_empty_text_is_neutral(self, analyzer):
        result = analyzer.analyze("")
        assert result.level == SentimentLevel.NEUTRAL
        assert result.valence == 0.0
        assert result.emotion_counts == {}
        assert result.markers == []
        assert result.sentiment.confidence == 0.0

    def test_deterministic(self, analyzer):
        text = "I feel so lonely tonight, but I'm grateful for my sister. Tomorrow will be better."
        assert analyzer.analyze(text) == analyzer.analyze(text)
        assert analyzer.analyze(text).to_dict() == RuleBasedAnalyzer().analyze(text).to_dict()

    def test_lexicon_version_recorded(self, analyzer):
        assert analyzer.analyze("fine").lexicon_version == LEXICON_VERSION

    def test_rejects_non_string(self, analyzer):
        with pytest.raises(InvalidInputError):
            analyzer.analyze(None)
        with pytest.raises(ValueError):
            analyzer.analyze(42)

    def test_positive_and_negative(self, analyzer):
        assert analyzer.analyze("Today was wonderful and I feel happy").valence > 0
        assert analyzer.analyze("I feel miserable and hopeless").valence < 0

    @pytest.mark.parametrize("word", sorted(POSITIVE_WORDS))
    def test_negated_positive_is_not_positive(self, analyzer, word):
        result = analyzer.analyze("not " + word)
        assert result.valence <= 0
        assert result.level.rank <= SentimentLevel.NEUTRAL.rank

    def test_negation_is_clause_scoped(self, analyzer):
        # "not" in the first clause does not reach "happy" in the second
        result = analyzer.analyze("It was not easy, happy anyway")
        assert result.valence > 0

    def test_negation_window(self, analyzer):
        # Four tokens between "not" and "happy" puts it outside the window
        assert analyzer.analyze("not that it made me happy").valence > 0
        assert analyzer.analyze("not really happy").valence < 0

    def test_intensifier_scales_weight(self, analyzer):
        plain = analyzer.analyze("sad").valence
        boosted = analyzer.analyze("extremely sad").valence
        softened = analyzer.analyze("a bit sad").valence
        assert boosted < plain < softened < 0

    def test_score_clamped(self, analyzer):
        result = analyzer.analyze("utterly ecstatic utterly overjoyed")
        assert result.valence == 1.0
        assert result.level == SentimentLevel.VERY_POSITIVE

    def test_adding_negative_phrases_never_raises_level(self, analyzer):
        base = "I went to the store and then I cooked dinner"
        level = analyzer.analyze(base).level
        for extra in ["I feel devastated", "everything is awful", "I am worthless and broken"]:
            base = f"{base}. {extra}"
            new_level = analyzer.analyze(base).level
            assert new_level.rank <= level.rank
            level = new_level

    def test_not_anxious_anymore_grateful(self, analyzer):
        result = analyzer.analyze("I am not anxious anymore, I feel grateful")
        assert result.level.rank >= SentimentLevel.NEUTRAL.rank
        assert InsightMarker.GRATITUDE in result.markers
        assert EmotionType.ANXIETY not in result.emotion_counts
        assert result.emotion_counts[EmotionType.GRATITUDE] == 1

    def test_module_level_helper(self):
        assert analyze_text("happy").valence > 0


class TestEmotions:
    def test_primary_and_secondary(self, analyzer):
        result = analyzer.analyze("I'm sad and crying, tears everywhere. Also a bit angry.")
        assert result.emotions.primary == EmotionType.SADNESS
        assert result.emotions.secondary == EmotionType.ANGER
        sadness = result.emotions.detected[0]
        assert sadness.count == 3
        assert sadness.intensity == 1.0
        assert set(sadness.word_matches) == {"sad", "crying", "tears"}

    def test_exact_token_match(self, analyzer):
        # "sadly" and "madness" are not emotion words
        assert analyzer.analyze("sadly the madness ended").emotion_counts == {}

    def test_bigram_phrase(self, analyzer):
        result = analyzer.analyze("I am looking forward to the trip")
        assert result.emotion_counts == {EmotionType.ANTICIPATION: 1}

    def test_word_in_two_emotions(self, analyzer):
        counts = analyzer.analyze("worried").emotion_counts
        assert counts == {EmotionType.FEAR: 1, EmotionType.ANXIETY: 1}


class TestInsights:
    def test_each_marker(self, analyzer):
        cases = {
            InsightMarker.SELF_REFLECTION: "Looking back, I see now what happened",
            InsightMarker.GRATITUDE: "I appreciate my friends",
            InsightMarker.FUTURE_THINKING: "Next week I'm going to call her",
            InsightMarker.ACCEPTANCE: "I'm letting go of it",
            InsightMarker.GROWTH_MINDSET: "This is a chance to grow",
        }
        for marker, text in cases.items():
            assert marker in analyzer.analyze(text).markers, marker

    def test_pattern_needs_word_start(self, analyzer):
        # "grow" must not match inside "overgrown"
        assert analyzer.analyze("the garden is overgrown").markers == []

    def test_insight_score_capped(self, analyzer):
        text = (
            "I realize I learned so much. I'm grateful and thankful. "
            "I will accept it and move on. Tomorrow I'm going to grow stronger."
        )
        result = analyzer.analyze(text)
        assert result.insights.insight_score == 10.0
        assert len(result.markers) == 5


class TestNotablePhrases:
    def test_strongest_first_with_modifiers(self, analyzer):
        result = analyzer.analyze("It was okay. Then I felt very devastated. Not happy.")
        assert result.notable_phrases[0] == "very devastated"
        assert "not happy" in result.notable_phrases

    def test_limit(self):
        text = "happy sad calm angry hurt proud lonely brave"
        assert len(RuleBasedAnalyzer(notable_limit=3).analyze(text).notable_phrases) == 3


class TestLanguageAndHealing:
    def test_language_metrics(self, analyzer):
        result = analyzer.analyze("I walked. I ate? I slept.")
        assert result.language.word_count == 6
        assert result.language.avg_sentence_length == 2.0
        assert result.language.uses_first_person
        assert result.language.question_count == 1

    def test_healthy_processing(self, analyzer):
        result = analyzer.analyze("I'm sad it ended but I accept it and I'm growing")
        assert result.healing.healthy_processing
        assert result.healing.forward_looking
        assert result.healing.progress_score >= 3


class TestFactory:
    def test_create_default(self):
        analyzer = create_analyzer()
        assert isinstance(analyzer, TextAnalyzer)
        assert analyzer("happy").valence > 0

    def test_kwargs_forwarded(self):
        assert create_analyzer("rules", notable_limit=1).notable_limit == 1

    def test_unknown(self):
        with pytest.raises(InvalidInputError):
            create_analyzer("transformer")

    def test_available(self):
        assert available_analyzers() == ["rules"]


class TestDisplayHelpers:
    def test_label(self):
        assert get_sentiment_label(SentimentLevel.VERY_POSITIVE)
        assert get_sentiment_label("neutral")

    def test_colors(self):
        colors = get_sentiment_colors(SentimentLevel.NEGATIVE)
        assert set(colors) == {"text", "bg", "border"}

    def test_emoji(self):
        assert get_emotion_emoji(EmotionType.JOY)

    @pytest.mark.parametrize(
        "level,bucket",
        [
            (SentimentLevel.VERY_NEGATIVE, "struggling"),
            (SentimentLevel.NEGATIVE, "struggling"),
            (SentimentLevel.SLIGHTLY_NEGATIVE, "processing"),
            (SentimentLevel.NEUTRAL, "neutral"),
            (SentimentLevel.SLIGHTLY_POSITIVE, "hopeful"),
            (SentimentLevel.POSITIVE, "positive"),
            (SentimentLevel.VERY_POSITIVE, "positive"),
        ],
    )
    def test_simple_sentiment_buckets(self, monkeypatch, level, bucket):
        monkeypatch.setattr(
            "journal.sentiment.analyze_text", lambda text: SimpleNamespace(level=level)
        )
        assert get_simple_sentiment("anything") == bucket

    def test_simple_sentiment_real_text(self):
        assert get_simple_sentiment("") == "neutral"
        assert get_simple_sentiment("I feel terrible and hopeless") == "struggling"
