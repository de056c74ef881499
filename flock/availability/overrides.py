import logging
from collections.abc import Iterable, Sequence

from flock.availability.models import AvailabilityInterval, Interval, ManualAvailabilityInterval
from flock.availability.overlap import occurs_during
from flock.availability.reducer import check_intervals
from flock.errors import InvalidIntervalError

logger = logging.getLogger(__name__)


def apply_manual_overrides(
    manual_intervals: Iterable[ManualAvailabilityInterval],
    target_intervals: Sequence[Interval],
    base: Sequence[AvailabilityInterval] | None = None,
) -> list[AvailabilityInterval]:
    """Overlay manually declared spans on a grid.

    Targets start out available, or take their verdict from ``base`` when it
    is given (for example a calendar reduction over the same targets).
    Entries are applied in order, so a later entry wins over an earlier one
    for any target both overlap. Entries with ``available=None`` leave the
    targets they overlap untouched.
    """
    check_intervals(target_intervals)
    if base is None:
        available = [True] * len(target_intervals)
    else:
        if len(base) != len(target_intervals):
            raise InvalidIntervalError(
                detail="base availability does not match the target intervals",
                base=len(base),
                targets=len(target_intervals),
            )
        available = [slot.available for slot in base]
    applied = 0

    for manual in manual_intervals:
        if manual.available is None:
            continue
        applied += 1
        duration = manual.end - manual.start
        for slot, target in enumerate(target_intervals):
            if occurs_during(manual.start, target.start, target.end, duration):
                available[slot] = manual.available

    logger.debug("Applied %d manual overrides over %d intervals", applied, len(target_intervals))
    return [
        AvailabilityInterval(start=target.start, end=target.end, available=flag)
        for target, flag in zip(target_intervals, available)
    ]
