"""Boundary rules shared by the calendar reducer and the manual merger.

Both checks are half-open: an occurrence that ends exactly when an interval
starts, or starts exactly when it ends, does not touch that interval.
"""

from datetime import datetime, timedelta

ONE_DAY = timedelta(days=1)


def occurs_during(
    occurrence_start: datetime,
    interval_start: datetime,
    interval_end: datetime,
    duration: timedelta,
) -> bool:
    """Return True if the occurrence overlaps ``[interval_start, interval_end)``."""
    return occurrence_start < interval_end and occurrence_start + duration > interval_start


def starts_before_or_at_interval(
    occurrence_start: datetime,
    interval_start: datetime,
    duration: timedelta,
) -> bool:
    """Return True if the occurrence began at or before the interval and is still running."""
    return occurrence_start <= interval_start and occurrence_start + duration > interval_start
