"""Tests for the journal and mood write paths."""

import sqlite3
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from ers import ERSCalculator
from errors import InvalidInputError, StorageUnavailableError
from journal.service import JournalService
from mood.service import MoodService
from shared_types import InsightMarker


@pytest.fixture
def calculator(store):
    return ERSCalculator(store)


class TestJournalService:
    def test_record_entry_stores_analysis_and_score(self, store, calculator, base_time):
        service = JournalService(store, ers_calculator=calculator)
        record = service.record_entry(
            "u1", "  Looking back I am grateful for my friends  ", title="Sun", created_at=base_time
        )

        assert record.entry.content == "Looking back I am grateful for my friends"
        assert store.get_journal_entry("u1", record.entry.id).title == "Sun"
        assert InsightMarker.GRATITUDE in record.analysis.markers
        assert store.get_analysis("u1", record.entry.id) is not None
        assert record.ers is not None
        assert store.get_latest_ers_score("u1") is not None

        data = record.to_dict()
        assert data["entry"]["id"] == record.entry.id
        assert data["ers"]["user_id"] == "u1"

    @pytest.mark.parametrize("content", ["", "   ", None, "too short"])
    def test_rejects_empty_or_short(self, store, content):
        service = JournalService(store)
        with pytest.raises(InvalidInputError):
            service.record_entry("u1", content)
        assert store.list_journal_entries("u1") == []

    def test_min_words_configurable(self, store):
        record = JournalService(store, min_words=2).record_entry("u1", "feeling calm")
        assert record.ers is None

    def test_ers_failure_keeps_entry(self, store, base_time):
        failing = MagicMock()
        failing.calculate_and_store.side_effect = StorageUnavailableError("locked")
        service = JournalService(store, ers_calculator=failing)

        record = service.record_entry("u1", "I had a hard but honest day today", created_at=base_time)
        assert record.ers is None
        assert store.get_journal_entry("u1", record.entry.id) is not None

    def test_failed_analysis_write_leaves_no_entry(self, store, calculator, base_time, monkeypatch):
        def locked(*args):
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr(store, "_insert_analysis", locked)
        service = JournalService(store, ers_calculator=calculator)

        with pytest.raises(StorageUnavailableError):
            service.record_entry("u1", "I had a hard but honest day today", created_at=base_time)
        assert store.list_journal_entries("u1") == []
        assert store.list_analyses("u1") == []
        assert store.get_latest_ers_score("u1") is None

    def test_delete_refreshes_score(self, store, calculator, base_time):
        service = JournalService(store, ers_calculator=calculator)
        record = service.record_entry("u1", "I realize that I miss the old routine", created_at=base_time)
        assert service.delete_entry("u1", record.entry.id)
        assert not service.delete_entry("u1", record.entry.id)

    def test_reanalyze(self, store, base_time):
        service = JournalService(store)
        record = service.record_entry("u1", "today was fine and pretty calm", created_at=base_time)
        again = service.reanalyze("u1", record.entry.id)
        assert again.sentiment_score == record.analysis.sentiment_score
        assert service.reanalyze("u1", "missing") is None


class TestMoodService:
    def test_log_and_query(self, store, calculator, base_time):
        service = MoodService(store, ers_calculator=calculator)
        record = service.log_mood("u1", 7, emotions=[" Calm ", ""], note=" fine ")

        assert record.entry.emotions == ["calm"]
        assert record.entry.note == "fine"
        assert record.ers is not None
        assert service.stats("u1").count == 1
        assert len(service.daily("u1")) == 1

    def test_invalid_value_not_stored(self, store):
        service = MoodService(store)
        with pytest.raises(InvalidInputError):
            service.log_mood("u1", 0)
        assert store.list_mood_entries("u1") == []

    def test_for_date(self, store, base_time):
        service = MoodService(store)
        service.log_mood("u1", 3, logged_at=base_time)
        service.log_mood("u1", 6, logged_at=base_time + timedelta(hours=4))
        service.log_mood("u1", 9, logged_at=base_time + timedelta(days=1))

        assert [e.mood_value for e in service.for_date("u1", "2024-03-01")] == [3, 6]
        with pytest.raises(InvalidInputError):
            service.for_date("u1", "yesterday")
