from datetime import date

from pydantic import AwareDatetime, BaseModel, Field, model_validator

from flock.availability.models import (
    AvailabilityInterval,
    CalendarEvent,
    Interval,
    ManualAvailabilityInterval,
    SlotSummary,
)
from flock.availability.recurrence import build_rule


class CalendarEventIn(BaseModel):
    """Calendar event as sent over the wire, with its RRULE still as text."""

    start: AwareDatetime
    end: AwareDatetime
    all_day: bool = False
    rrule: str | None = None
    exdates: list[AwareDatetime] = Field(default_factory=list)
    uid: str | None = None
    summary: str | None = None

    def to_event(self) -> CalendarEvent:
        recurrence = build_rule(self.rrule, self.start, self.exdates) if self.rrule else None
        return CalendarEvent(
            start=self.start,
            end=self.end,
            all_day=self.all_day,
            recurrence=recurrence,
            uid=self.uid,
            summary=self.summary,
        )


class IntervalGrid(BaseModel):
    start_date: date
    end_date: date
    start_hour: int
    end_hour: int
    slot_minutes: int | None = None


class IntervalSource(BaseModel):
    """Either an explicit interval list or a grid to build one from."""

    intervals: list[Interval] | None = None
    grid: IntervalGrid | None = None

    @model_validator(mode="after")
    def check_source(self) -> "IntervalSource":
        if (self.intervals is None) == (self.grid is None):
            raise ValueError("exactly one of 'intervals' or 'grid' is required")
        return self


class CalendarAvailabilityRequest(IntervalSource):
    calendars: list[list[CalendarEventIn]]


class ManualAvailabilityRequest(IntervalSource):
    manual: list[ManualAvailabilityInterval]


class Participant(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    calendars: list[list[CalendarEventIn]] = Field(default_factory=list)
    manual: list[ManualAvailabilityInterval] | None = None


class GroupAvailabilityRequest(IntervalSource):
    participants: list[Participant] = Field(min_length=1)


class AvailabilityResponse(BaseModel):
    intervals: list[AvailabilityInterval]


class GroupAvailabilityResponse(BaseModel):
    participant_count: int
    intervals: list[SlotSummary]
