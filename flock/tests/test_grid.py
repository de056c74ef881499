"""Tests for interval grid construction."""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from flock.availability import build_interval_grid
from flock.errors import InvalidIntervalError


class TestBuildIntervalGrid:
    """Test grid layout and validation."""

    def test_single_day_quarter_hours(self):
        grid = build_interval_grid(date(2024, 3, 1), date(2024, 3, 1), 9, 10)
        assert len(grid) == 4
        assert grid[0].start == datetime(2024, 3, 1, 9, tzinfo=UTC)
        assert grid[-1].end == datetime(2024, 3, 1, 10, tzinfo=UTC)
        for a, b in zip(grid, grid[1:]):
            assert a.end == b.start

    def test_multiple_days(self):
        grid = build_interval_grid(date(2024, 3, 1), date(2024, 3, 3), 9, 11, slot_minutes=30)
        assert len(grid) == 12
        assert {slot.start.date() for slot in grid} == {date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 3)}

    def test_partial_last_slot_is_truncated(self):
        grid = build_interval_grid(date(2024, 3, 1), date(2024, 3, 1), 9, 10, slot_minutes=25)
        assert [slot.end - slot.start for slot in grid] == [
            timedelta(minutes=25),
            timedelta(minutes=25),
            timedelta(minutes=10),
        ]

    def test_full_day(self):
        grid = build_interval_grid(date(2024, 3, 1), date(2024, 3, 1), 0, 24, slot_minutes=60)
        assert len(grid) == 24
        assert grid[-1].end == datetime(2024, 3, 2, tzinfo=UTC)

    def test_timezone(self):
        grid = build_interval_grid(date(2024, 3, 1), date(2024, 3, 1), 9, 10, tz="America/Vancouver")
        assert grid[0].start == datetime(2024, 3, 1, 9, tzinfo=ZoneInfo("America/Vancouver"))
        assert grid[0].start.astimezone(UTC).hour == 17

    def test_spring_forward_day_has_no_phantom_slots(self):
        grid = build_interval_grid(date(2024, 3, 10), date(2024, 3, 10), 0, 6, slot_minutes=60, tz="America/New_York")
        assert len(grid) == 5
        assert grid[0].start == datetime(2024, 3, 10, 5, tzinfo=UTC)
        assert grid[-1].end == datetime(2024, 3, 10, 10, tzinfo=UTC)
        assert {slot.end - slot.start for slot in grid} == {timedelta(hours=1)}

    def test_fall_back_day_covers_repeated_hour(self):
        grid = build_interval_grid(date(2024, 11, 3), date(2024, 11, 3), 0, 6, slot_minutes=60, tz="America/New_York")
        assert len(grid) == 7
        assert {slot.end - slot.start for slot in grid} == {timedelta(hours=1)}
        for a, b in zip(grid, grid[1:]):
            assert a.end == b.start

    @pytest.mark.parametrize(
        "start_date,end_date,start_hour,end_hour",
        [
            (date(2024, 3, 2), date(2024, 3, 1), 9, 17),
            (date(2024, 3, 1), date(2024, 3, 1), 17, 9),
            (date(2024, 3, 1), date(2024, 3, 1), 9, 9),
            (date(2024, 3, 1), date(2024, 3, 1), -1, 9),
            (date(2024, 3, 1), date(2024, 3, 1), 9, 25),
        ],
    )
    def test_invalid_ranges(self, start_date, end_date, start_hour, end_hour):
        with pytest.raises(InvalidIntervalError):
            build_interval_grid(start_date, end_date, start_hour, end_hour)

    def test_invalid_slot_width(self):
        with pytest.raises(InvalidIntervalError):
            build_interval_grid(date(2024, 3, 1), date(2024, 3, 1), 9, 10, slot_minutes=0)

    def test_too_many_days(self):
        with pytest.raises(InvalidIntervalError) as exc_info:
            build_interval_grid(date(2024, 3, 1), date(2024, 3, 31), 9, 10, max_days=7)
        assert exc_info.value.context == {"days": 31}
