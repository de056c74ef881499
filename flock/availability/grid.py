from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from flock.availability.models import Interval
from flock.errors import InvalidIntervalError

MIN_HOUR = 0
MAX_HOUR = 24


def build_interval_grid(
    start_date: date,
    end_date: date,
    start_hour: int,
    end_hour: int,
    slot_minutes: int = 15,
    tz: str = "UTC",
    max_days: int | None = None,
) -> list[Interval]:
    """Lay out fixed-width slots for each day between two hours.

    Days run from ``start_date`` to ``end_date`` inclusive, in timezone
    ``tz``. The day's window is fixed by its wall-clock hours in ``tz``, then
    stepped in absolute time and returned in UTC, so every slot lasts exactly
    ``slot_minutes`` even on days with a DST change. A last slot that would
    pass ``end_hour`` is cut short.

    Raises:
        InvalidIntervalError: If the dates, hours or slot width are invalid.
    """
    if start_date > end_date:
        raise InvalidIntervalError(detail="start_date must not be after end_date")
    if start_hour < MIN_HOUR or end_hour > MAX_HOUR or start_hour >= end_hour:
        raise InvalidIntervalError(
            detail=f"hours must satisfy {MIN_HOUR} <= start_hour < end_hour <= {MAX_HOUR}",
            start_hour=start_hour,
            end_hour=end_hour,
        )
    if slot_minutes <= 0:
        raise InvalidIntervalError(detail="slot_minutes must be positive", slot_minutes=slot_minutes)
    day_count = (end_date - start_date).days + 1
    if max_days is not None and day_count > max_days:
        raise InvalidIntervalError(detail=f"grid may span at most {max_days} days", days=day_count)

    zone = ZoneInfo(tz)
    step = timedelta(minutes=slot_minutes)
    intervals: list[Interval] = []
    for offset in range(day_count):
        day = start_date + timedelta(days=offset)
        cursor = _wall_clock(day, start_hour, zone)
        day_end = _wall_clock(day, end_hour, zone)
        while cursor < day_end:
            slot_end = min(cursor + step, day_end)
            intervals.append(Interval(start=cursor, end=slot_end))
            cursor = slot_end
    return intervals


def _wall_clock(day: date, hour: int, zone: ZoneInfo) -> datetime:
    # hour may be 24, meaning midnight of the next day.
    local = datetime.combine(day + timedelta(days=hour // 24), time(hour % 24), tzinfo=zone)
    return local.astimezone(UTC)
