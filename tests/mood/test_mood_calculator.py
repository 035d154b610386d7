"""Tests for mood statistics and summaries."""

from datetime import date, datetime, timedelta, timezone

import numpy as np
import pytest

from errors import InvalidInputError
from mood import (
    MoodEntry,
    calculate_daily_summaries,
    calculate_mood_stability,
    calculate_mood_stats,
    calculate_weekly_summary,
    get_entries_for_date,
    get_mood_color,
    get_mood_label,
)
from mood.calculator import detect_trend, validate_mood_value
from shared_types import Trend


def _entry(value, logged_at, emotions=None):
    return MoodEntry(user_id="u1", mood_value=value, logged_at=logged_at, emotions=emotions or [])


class TestValidate:
    @pytest.mark.parametrize("value", [1, 5, 10, np.int64(7)])
    def test_valid(self, value):
        assert validate_mood_value(value) == int(value)

    @pytest.mark.parametrize("value", [0, 11, -3, 5.5, "5", True, None])
    def test_invalid(self, value):
        with pytest.raises(InvalidInputError):
            validate_mood_value(value)


class TestStats:
    def test_empty(self):
        stats = calculate_mood_stats([])
        assert stats.count == 0
        assert stats.average == 0.0
        assert stats.trend == Trend.STABLE

    def test_basic(self, base_time):
        entries = [
            _entry(v, base_time + timedelta(hours=i), ["calm"] if v > 5 else ["sad"])
            for i, v in enumerate([4, 6, 8, 6])
        ]
        stats = calculate_mood_stats(entries)
        assert stats.count == 4
        assert stats.average == 6.0
        assert stats.variance == 2.0
        assert stats.std_dev == pytest.approx(1.41)
        assert stats.distribution == {4: 1, 6: 2, 8: 1}
        assert stats.highest == 8
        assert stats.lowest == 4
        assert stats.most_common_emotion == "calm"

    def test_single_entry_has_no_variance(self, base_time):
        stats = calculate_mood_stats([_entry(7, base_time)])
        assert stats.variance == 0.0
        assert stats.std_dev == 0.0

    def test_range_filter(self, base_time):
        entries = [_entry(v, base_time + timedelta(days=i)) for i, v in enumerate([2, 4, 6, 8])]
        stats = calculate_mood_stats(
            entries, start=base_time + timedelta(days=1), end=base_time + timedelta(days=2)
        )
        assert stats.count == 2
        assert stats.average == 5.0

    def test_trend_improving(self, base_time):
        entries = [_entry(v, base_time + timedelta(days=i)) for i, v in enumerate([3, 3, 7, 8])]
        stats = calculate_mood_stats(entries)
        assert stats.trend == Trend.IMPROVING
        assert stats.trend_percentage > 5


class TestTrend:
    def test_too_few(self):
        assert detect_trend([1, 9, 9]) == (Trend.STABLE, 0.0)

    def test_declining(self):
        trend, pct = detect_trend([8, 8, 4, 4])
        assert trend == Trend.DECLINING
        assert pct == -50.0

    def test_within_threshold_is_stable(self):
        assert detect_trend([6, 6, 6, 6.2])[0] == Trend.STABLE


class TestDaily:
    def test_groups_by_day_oldest_first(self, base_time):
        entries = [
            _entry(8, base_time + timedelta(days=1), ["happy"]),
            _entry(4, base_time, ["tired"]),
            _entry(6, base_time + timedelta(hours=3), ["tired", "calm"]),
        ]
        summaries = calculate_daily_summaries(entries)
        assert [s.date for s in summaries] == ["2024-03-01", "2024-03-02"]
        assert summaries[0].average_mood == 5.0
        assert summaries[0].entry_count == 2
        assert summaries[0].emotions == ["tired", "calm"]
        assert summaries[0].dominant_emotions[0] == "tired"

    def test_aware_timestamps_use_utc_day(self):
        late = datetime(2024, 3, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        summaries = calculate_daily_summaries([_entry(5, late)])
        assert summaries[0].date == "2024-03-02"


class TestWeekly:
    def test_seven_day_window(self):
        week_start = date(2024, 3, 4)
        entries = [
            _entry(2, datetime(2024, 3, 3, 12)),
            _entry(4, datetime(2024, 3, 4, 12)),
            _entry(8, datetime(2024, 3, 10, 12)),
            _entry(9, datetime(2024, 3, 11, 12)),
        ]
        summary = calculate_weekly_summary(entries, week_start)
        assert summary.week_end == "2024-03-10"
        assert summary.entry_count == 2
        assert summary.average_mood == 6.0
        assert summary.variance == 4.0


class TestForDate:
    def test_sorted_and_filtered(self, base_time):
        entries = [
            _entry(5, base_time + timedelta(hours=5)),
            _entry(3, base_time),
            _entry(9, base_time + timedelta(days=1)),
        ]
        result = get_entries_for_date(entries, "2024-03-01")
        assert [e.mood_value for e in result] == [3, 5]
        assert get_entries_for_date(entries, date(2024, 3, 2))[0].mood_value == 9

    def test_bad_date(self):
        with pytest.raises(InvalidInputError):
            get_entries_for_date([], "March 1st")


class TestStabilityAndDisplay:
    def test_stability(self, base_time):
        steady = [_entry(6, base_time + timedelta(hours=i)) for i in range(4)]
        swings = [_entry(v, base_time + timedelta(hours=i)) for i, v in enumerate([1, 10, 1, 10])]
        assert calculate_mood_stability(steady) == 1.0
        assert calculate_mood_stability(swings) == 0.0

    @pytest.mark.parametrize(
        "value,label", [(1, "Low"), (3, "Low"), (4, "Moderate"), (6, "Moderate"), (7, "High")]
    )
    def test_labels(self, value, label):
        assert get_mood_label(value) == label

    def test_color(self):
        assert get_mood_color(9).hex.startswith("#")
        with pytest.raises(InvalidInputError):
            get_mood_color(0)
