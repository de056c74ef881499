"""Tests for the half-open overlap rules."""

from datetime import UTC, datetime, timedelta

from flock.availability.overlap import ONE_DAY, occurs_during, starts_before_or_at_interval


def _at(hhmm: str) -> datetime:
    return datetime.fromisoformat(f"2024-03-01T{hhmm}:00").replace(tzinfo=UTC)


HALF_HOUR = timedelta(minutes=30)


class TestOccursDuring:
    """Test occurs_during boundary semantics."""

    def test_occurrence_inside_interval(self):
        assert occurs_during(_at("09:05"), _at("09:00"), _at("09:15"), timedelta(minutes=5))

    def test_occurrence_containing_interval(self):
        assert occurs_during(_at("08:00"), _at("09:00"), _at("09:15"), timedelta(hours=3))

    def test_occurrence_starting_at_interval_end_is_excluded(self):
        assert not occurs_during(_at("09:15"), _at("09:00"), _at("09:15"), HALF_HOUR)

    def test_occurrence_ending_at_interval_start_is_excluded(self):
        assert not occurs_during(_at("08:30"), _at("09:00"), _at("09:15"), HALF_HOUR)

    def test_occurrence_starting_at_interval_start(self):
        assert occurs_during(_at("09:00"), _at("09:00"), _at("09:15"), HALF_HOUR)

    def test_zero_length_occurrence_at_interval_start(self):
        assert not occurs_during(_at("09:00"), _at("09:00"), _at("09:15"), timedelta(0))

    def test_one_day_duration(self):
        midnight = _at("00:00")
        assert ONE_DAY == timedelta(days=1)
        assert occurs_during(midnight, _at("23:45"), midnight + ONE_DAY, ONE_DAY)


class TestStartsBeforeOrAtInterval:
    """Test the carry-forward check."""

    def test_started_earlier_and_still_running(self):
        assert starts_before_or_at_interval(_at("09:30"), _at("09:45"), HALF_HOUR)

    def test_started_exactly_at_interval_start(self):
        assert starts_before_or_at_interval(_at("09:45"), _at("09:45"), HALF_HOUR)

    def test_finished_exactly_at_interval_start(self):
        assert not starts_before_or_at_interval(_at("09:15"), _at("09:45"), HALF_HOUR)

    def test_starts_after_interval_start(self):
        assert not starts_before_or_at_interval(_at("09:50"), _at("09:45"), HALF_HOUR)
