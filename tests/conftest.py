"""Shared test fixtures for Paceful."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from journal.models import JournalEntry  # noqa: E402
from journal.sentiment import RuleBasedAnalyzer  # noqa: E402
from mood.models import MoodEntry  # noqa: E402
from storage import WellnessStore  # noqa: E402

INSIGHT_TEXT = "Today I realize I am learning to let go of the past and feel calm."
PLAIN_TEXT = "Work was busy today and I had lunch with a coworker."


@pytest.fixture
def store(tmp_path):
    """Fresh SQLite store per test."""
    return WellnessStore(tmp_path / "paceful.db")


@pytest.fixture
def analyzer():
    return RuleBasedAnalyzer()


@pytest.fixture
def base_time():
    return datetime(2024, 3, 1, 9, 0)


def _add_journal(store, analyzer, user_id, content, created_at):
    """Store an entry and its analysis the way the journal service does."""
    entry = JournalEntry(user_id=user_id, content=content, created_at=created_at)
    store.add_journal_entry(entry)
    return store.save_analysis(entry, analyzer.analyze(content))


def _add_mood(store, user_id, value, logged_at, emotions=None):
    return store.add_mood_entry(
        MoodEntry(user_id=user_id, mood_value=value, logged_at=logged_at, emotions=emotions or [])
    )


@pytest.fixture
def improving_history(store, analyzer, base_time):
    """30 days of rising mood with insight markers growing more frequent.

    One mood log and one journal entry per day at 09:00. Mood climbs from 1 to
    10; entries carry insight markers from day 10 on every other day, then
    every day from day 20.
    """
    user_id = "user-improving"
    for d in range(30):
        when = base_time + timedelta(days=d)
        _add_mood(store, user_id, 1 + d // 3, when)
        has_insight = d >= 10 and (d % 2 == 0 or d >= 20)
        _add_journal(store, analyzer, user_id, INSIGHT_TEXT if has_insight else PLAIN_TEXT, when)
    return user_id


@pytest.fixture
def add_journal(store, analyzer):
    """Write an analyzed journal entry: add_journal(user_id, content, created_at)."""

    def _add(user_id, content, created_at):
        return _add_journal(store, analyzer, user_id, content, created_at)

    return _add


@pytest.fixture
def add_mood(store):
    """Write a mood log: add_mood(user_id, value, logged_at, emotions=None)."""

    def _add(user_id, value, logged_at, emotions=None):
        return _add_mood(store, user_id, value, logged_at, emotions)

    return _add


@pytest.fixture
def insight_text():
    return INSIGHT_TEXT
