"""Combine per-source and per-participant availability.

The reducer and the manual merger each answer for one source. This module
is the layer above them: it lays a participant's manual overrides over
their calendars and tallies who is free in each slot across a group.
"""

from collections.abc import Iterable, Mapping, Sequence

from flock.availability.models import (
    AvailabilityInterval,
    CalendarEvent,
    Interval,
    ManualAvailabilityInterval,
    SlotSummary,
)
from flock.availability.overrides import apply_manual_overrides
from flock.availability.reducer import RecurrenceErrorPolicy, compute_calendar_availability
from flock.errors import InvalidIntervalError


def merge_availability(*sequences: Sequence[AvailabilityInterval]) -> list[AvailabilityInterval]:
    """AND together availability sequences computed over the same intervals.

    Raises:
        InvalidIntervalError: If the sequences are not aligned slot for slot.
    """
    if not sequences:
        return []
    first = sequences[0]
    for other in sequences[1:]:
        if len(other) != len(first):
            raise InvalidIntervalError(
                detail="availability sequences differ in length",
                lengths=[len(s) for s in sequences],
            )
        for index, (a, b) in enumerate(zip(first, other)):
            if a.start != b.start or a.end != b.end:
                raise InvalidIntervalError(detail="availability sequences are not aligned", index=index)

    return [
        AvailabilityInterval(
            start=slots[0].start,
            end=slots[0].end,
            available=all(slot.available for slot in slots),
        )
        for slots in zip(*sequences)
    ]


def participant_availability(
    calendars: Iterable[Iterable[CalendarEvent]],
    manual: Iterable[ManualAvailabilityInterval] | None,
    intervals: Sequence[Interval],
    *,
    on_recurrence_error: RecurrenceErrorPolicy = "raise",
) -> list[AvailabilityInterval]:
    """Calendar availability with the participant's manual overrides laid on top.

    Manual entries win over the calendar inside their span, in both
    directions.
    """
    from_calendars = compute_calendar_availability(
        calendars, intervals, on_recurrence_error=on_recurrence_error
    )
    if manual is None:
        return from_calendars
    return apply_manual_overrides(manual, intervals, base=from_calendars)


def summarize_group(per_participant: Mapping[str, Sequence[AvailabilityInterval]]) -> list[SlotSummary]:
    """Count who is free in each slot.

    Participants keep the mapping's order inside each slot's list.
    """
    names = list(per_participant)
    if not names:
        return []
    rows = merge_availability(*per_participant.values())
    free: dict[int, list[str]] = {index: [] for index in range(len(rows))}
    for name in names:
        for index, slot in enumerate(per_participant[name]):
            if slot.available:
                free[index].append(name)

    return [
        SlotSummary(
            start=row.start,
            end=row.end,
            available_count=len(free[index]),
            participants=free[index],
            everyone_available=row.available,
        )
        for index, row in enumerate(rows)
    ]
