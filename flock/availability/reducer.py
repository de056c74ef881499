"""Reduce calendars to one availability flag per interval.

Intervals are usually a fixed grid of short slots, so one meeting often
covers several of them. Recurrence rules only report occurrences whose
*start* falls inside the queried window; an occurrence that starts in one
slot and runs into the next would be invisible to the next slot's query.
Each recurring event therefore keeps the occurrences it has produced so far
and, when a slot expands to nothing, checks whether one of them is still
running.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Literal

from flock.availability.models import (
    AvailabilityInterval,
    CalendarEvent,
    EventKind,
    Interval,
)
from flock.availability.overlap import ONE_DAY, occurs_during, starts_before_or_at_interval
from flock.availability.recurrence import expand_occurrences
from flock.errors import InvalidIntervalError, RecurrenceExpansionError

logger = logging.getLogger(__name__)

RecurrenceErrorPolicy = Literal["raise", "skip"]


def check_intervals(intervals: Sequence[Interval]) -> None:
    """Reject intervals that do not end after they start."""
    for index, interval in enumerate(intervals):
        if interval.start >= interval.end:
            raise InvalidIntervalError(
                index=index,
                start=interval.start.isoformat(),
                end=interval.end.isoformat(),
            )


def compute_calendar_availability(
    calendars: Iterable[Iterable[CalendarEvent]],
    intervals: Sequence[Interval],
    *,
    on_recurrence_error: RecurrenceErrorPolicy = "raise",
) -> list[AvailabilityInterval]:
    """Work out which intervals are free of every event in every calendar.

    Args:
        calendars: Calendars to read; events from all of them are treated alike.
        intervals: Slots to evaluate, in the order results should come back.
        on_recurrence_error: ``"raise"`` propagates a failed rule expansion.
            ``"skip"`` logs it and stops applying that event; slots the event
            already marked stay unavailable.

    Raises:
        InvalidIntervalError: If an interval does not end after it starts.
        RecurrenceExpansionError: If a rule fails and the policy is ``"raise"``.

    Returns:
        One AvailabilityInterval per input interval, same order.
    """
    check_intervals(intervals)
    events = [event for calendar in calendars for event in calendar]
    available = [True] * len(intervals)
    occurrence_history: dict[int, list[datetime]] = {}

    for position, event in enumerate(events):
        kind = event.kind
        if kind is EventKind.RECURRING:
            try:
                _apply_recurring(event, intervals, available, occurrence_history.setdefault(position, []))
            except RecurrenceExpansionError:
                if on_recurrence_error == "raise":
                    raise
                logger.warning("Skipping event %s: recurrence rule could not be expanded", event.label())
            continue

        duration = ONE_DAY if kind is EventKind.ALL_DAY else event.duration
        for slot, interval in enumerate(intervals):
            if occurs_during(event.start, interval.start, interval.end, duration):
                available[slot] = False

    logger.debug(
        "Reduced %d events over %d intervals: %d available",
        len(events),
        len(intervals),
        sum(available),
    )
    return [
        AvailabilityInterval(start=interval.start, end=interval.end, available=flag)
        for interval, flag in zip(intervals, available)
    ]


def _apply_recurring(
    event: CalendarEvent,
    intervals: Sequence[Interval],
    available: list[bool],
    occurrences: list[datetime],
) -> None:
    duration = event.duration
    label = event.label()
    for slot, interval in enumerate(intervals):
        # The template day of an all-day series is blocked without expanding.
        if event.all_day and occurs_during(event.start, interval.start, interval.end, ONE_DAY):
            available[slot] = False
            continue
        expanded = expand_occurrences(event.recurrence, interval.start, interval.end, label)
        if expanded:
            # An occurrence sitting on the end boundary belongs to the next slot.
            for occurrence in expanded:
                if occurrence != interval.end:
                    available[slot] = False
            occurrences.extend(expanded)
        else:
            for occurrence in occurrences:
                if starts_before_or_at_interval(occurrence, interval.start, duration):
                    available[slot] = False
