"""Availability interval engine.

This package turns calendars and manual overrides into one availability
verdict per time slot.
"""

from flock.availability.grid import build_interval_grid
from flock.availability.group import merge_availability, participant_availability, summarize_group
from flock.availability.models import (
    AvailabilityInterval,
    CalendarEvent,
    EventKind,
    Interval,
    ManualAvailabilityInterval,
    RecurrenceRule,
    SlotSummary,
)
from flock.availability.overlap import ONE_DAY, occurs_during, starts_before_or_at_interval
from flock.availability.overrides import apply_manual_overrides
from flock.availability.recurrence import build_rule, expand_occurrences
from flock.availability.reducer import compute_calendar_availability

__all__ = [
    # Types
    "AvailabilityInterval",
    "CalendarEvent",
    "EventKind",
    "Interval",
    "ManualAvailabilityInterval",
    "RecurrenceRule",
    "SlotSummary",
    # Overlap rules
    "ONE_DAY",
    "occurs_during",
    "starts_before_or_at_interval",
    # Engine
    "compute_calendar_availability",
    "apply_manual_overrides",
    "build_rule",
    "expand_occurrences",
    "build_interval_grid",
    # Aggregation
    "merge_availability",
    "participant_availability",
    "summarize_group",
]
