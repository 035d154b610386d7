"""Static word lists and rule tables for journal text analysis.

All tables are read-only views built once at import. Bump LEXICON_VERSION
whenever a weight or pattern changes so stored analyses can be recomputed.
"""

from types import MappingProxyType

from shared_types import EmotionType, InsightMarker

LEXICON_VERSION = "2024.1"

_POSITIVE = {
    # High positive
    "amazing": 0.9, "wonderful": 0.9, "fantastic": 0.9, "excellent": 0.9,
    "thrilled": 0.9, "ecstatic": 1.0, "overjoyed": 1.0, "blessed": 0.85,
    "incredible": 0.9, "extraordinary": 0.9,
    # Medium-high positive
    "happy": 0.7, "joyful": 0.75, "grateful": 0.8, "thankful": 0.8,
    "peaceful": 0.7, "calm": 0.65, "hopeful": 0.75, "optimistic": 0.75,
    "proud": 0.7, "confident": 0.7, "excited": 0.75, "love": 0.8,
    "loving": 0.75, "beautiful": 0.7, "brilliant": 0.75, "delighted": 0.8,
    # Medium positive
    "good": 0.5, "nice": 0.45, "pleasant": 0.5, "glad": 0.55, "content": 0.5,
    "satisfied": 0.55, "relieved": 0.6, "comfortable": 0.5, "fine": 0.4,
    "okay": 0.35, "better": 0.55, "improving": 0.6, "progress": 0.6,
    # Healing
    "healing": 0.7, "growth": 0.7, "stronger": 0.7, "brave": 0.7,
    "resilient": 0.75, "forward": 0.6, "clarity": 0.7, "insight": 0.65,
    "learned": 0.6, "understand": 0.55, "accept": 0.6, "accepting": 0.65,
    "release": 0.6, "letting": 0.5, "free": 0.7, "freedom": 0.75,
    "forgive": 0.7, "forgiveness": 0.75, "peace": 0.7, "serene": 0.7,
}

_NEGATIVE = {
    # High negative
    "devastated": -0.95, "hopeless": -0.9, "despair": -0.95, "anguish": -0.9,
    "miserable": -0.85, "terrible": -0.8, "awful": -0.8, "horrible": -0.85,
    "destroyed": -0.9, "shattered": -0.9, "worthless": -0.95,
    # Medium-high negative
    "sad": -0.65, "depressed": -0.8, "angry": -0.7, "furious": -0.8,
    "hurt": -0.7, "pain": -0.7, "painful": -0.7, "lonely": -0.75,
    "alone": -0.6, "scared": -0.7, "terrified": -0.85, "anxious": -0.65,
    "worried": -0.6, "afraid": -0.7, "fear": -0.7, "heartbroken": -0.85,
    # Medium negative
    "upset": -0.55, "frustrated": -0.55, "annoyed": -0.45, "disappointed": -0.55,
    "confused": -0.45, "lost": -0.5, "stuck": -0.5, "overwhelmed": -0.6,
    "exhausted": -0.55, "tired": -0.4, "stressed": -0.55, "struggling": -0.55,
    # Breakup / loss
    "betrayed": -0.85, "rejected": -0.75, "abandoned": -0.8, "cheated": -0.85,
    "lied": -0.7, "manipulated": -0.75, "used": -0.65, "broken": -0.7,
    "empty": -0.65, "numb": -0.6, "regret": -0.6, "guilt": -0.6,
    "shame": -0.7, "blame": -0.55, "miss": -0.5, "missing": -0.5,
}

POSITIVE_WORDS = MappingProxyType(_POSITIVE)
NEGATIVE_WORDS = MappingProxyType(_NEGATIVE)
VALENCE = MappingProxyType({**_POSITIVE, **_NEGATIVE})

# Multi-word entries are matched against the token stream, not raw text
EMOTION_WORDS = MappingProxyType({
    EmotionType.JOY: ("happy", "joyful", "elated", "cheerful", "delighted", "pleased",
                      "thrilled", "ecstatic", "blissful"),
    EmotionType.SADNESS: ("sad", "unhappy", "depressed", "melancholy", "sorrowful", "grief",
                          "mourning", "crying", "tears", "weeping"),
    EmotionType.ANGER: ("angry", "furious", "rage", "irritated", "annoyed", "frustrated",
                        "mad", "resentful", "bitter", "hostile"),
    EmotionType.FEAR: ("afraid", "scared", "terrified", "frightened", "nervous", "panicked",
                       "dreading", "worried"),
    EmotionType.SURPRISE: ("surprised", "shocked", "amazed", "astonished", "stunned",
                           "unexpected"),
    EmotionType.DISGUST: ("disgusted", "revolted", "repulsed", "sick", "nauseated"),
    EmotionType.TRUST: ("trust", "trusting", "faith", "believe", "confident", "secure", "safe"),
    EmotionType.ANTICIPATION: ("excited", "eager", "looking forward", "anticipating",
                               "expecting", "hopeful"),
    EmotionType.LOVE: ("love", "loving", "adore", "cherish", "affection", "caring", "devoted"),
    EmotionType.GRATITUDE: ("grateful", "thankful", "appreciative", "blessed", "fortunate"),
    EmotionType.HOPE: ("hope", "hopeful", "optimistic", "encouraged", "promising"),
    EmotionType.ANXIETY: ("anxious", "worried", "nervous", "uneasy", "restless", "tense",
                          "stressed"),
    EmotionType.LONELINESS: ("lonely", "alone", "isolated", "solitary", "disconnected",
                             "abandoned"),
    EmotionType.ACCEPTANCE: ("accept", "accepting", "embracing", "acknowledging",
                             "understanding", "peace"),
    EmotionType.CONFUSION: ("confused", "uncertain", "unsure", "bewildered", "lost", "puzzled"),
    EmotionType.RELIEF: ("relieved", "relief", "unburdened", "free", "liberated"),
})

INSIGHT_PATTERNS = MappingProxyType({
    InsightMarker.SELF_REFLECTION: (
        "i realize", "i understand", "i see now", "i learned", "i noticed",
        "looking back", "thinking about", "reflecting on", "i recognize",
        "it occurred to me", "i've been thinking", "i wonder",
    ),
    InsightMarker.GRATITUDE: (
        "grateful", "thankful", "appreciate", "blessed", "fortunate",
        "thank you", "thanks to", "lucky to have",
    ),
    InsightMarker.FUTURE_THINKING: (
        "will be", "going to", "planning to", "looking forward", "someday",
        "in the future", "next time", "tomorrow", "next week", "next month",
        "i want to", "i hope to", "i'll", "i will",
    ),
    InsightMarker.ACCEPTANCE: (
        "accept", "accepting", "it is what it is", "let go", "letting go",
        "move on", "moving on", "peace with", "okay with", "come to terms",
    ),
    InsightMarker.GROWTH_MINDSET: (
        "learn from", "grow", "growing", "stronger", "better version",
        "opportunity", "challenge", "progress", "improve", "developing",
        "becoming", "evolving",
    ),
})

# Points per distinct pattern matched, summed into insight_score (capped at 10)
INSIGHT_WEIGHTS = MappingProxyType({
    InsightMarker.SELF_REFLECTION: 2.0,
    InsightMarker.GRATITUDE: 2.0,
    InsightMarker.FUTURE_THINKING: 1.5,
    InsightMarker.ACCEPTANCE: 2.0,
    InsightMarker.GROWTH_MINDSET: 1.5,
})

NEGATION_WORDS = frozenset({
    "not", "no", "never", "none", "nothing", "neither", "nobody", "nowhere",
    "don't", "doesn't", "didn't", "won't", "wouldn't", "couldn't", "shouldn't",
    "can't", "cannot", "isn't", "aren't", "wasn't", "weren't",
})

INTENSIFIERS = MappingProxyType({
    "very": 1.3, "really": 1.25, "extremely": 1.5, "incredibly": 1.4,
    "absolutely": 1.4, "totally": 1.3, "completely": 1.35, "utterly": 1.4,
    "so": 1.2, "quite": 1.1, "pretty": 1.1, "somewhat": 0.8, "slightly": 0.7,
    "barely": 0.5, "hardly": 0.5, "a bit": 0.8, "a little": 0.75,
})

FIRST_PERSON = frozenset({"i", "me", "my", "mine", "myself", "i'm", "i've", "i'll", "i'd"})

NEGATIVE_EMOTIONS = frozenset({
    EmotionType.SADNESS,
    EmotionType.ANGER,
    EmotionType.FEAR,
    EmotionType.ANXIETY,
    EmotionType.LONELINESS,
})

# Negation looks back this many tokens within the same clause
NEGATION_WINDOW = 3
