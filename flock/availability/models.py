from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import AwareDatetime, BaseModel, model_validator

from flock.errors import InvalidEventError


class Interval(BaseModel):
    start: AwareDatetime
    end: AwareDatetime

    @model_validator(mode="after")
    def check_order(self) -> "Interval":
        if self.start >= self.end:
            raise ValueError("interval must end after it starts")
        return self


class AvailabilityInterval(BaseModel):
    start: AwareDatetime
    end: AwareDatetime
    available: bool


class ManualAvailabilityInterval(BaseModel):
    """A span the user declared themselves; ``available=None`` means no opinion."""

    start: AwareDatetime
    end: AwareDatetime
    available: bool | None = None

    @model_validator(mode="after")
    def check_order(self) -> "ManualAvailabilityInterval":
        if self.start >= self.end:
            raise ValueError("manual interval must end after it starts")
        return self


@runtime_checkable
class RecurrenceRule(Protocol):
    """Anything that can list occurrence starts inside a window.

    ``dateutil.rrule.rrule`` and ``rruleset`` satisfy this as-is.
    """

    def between(self, after: datetime, before: datetime, inc: bool = False) -> list[datetime]: ...


class EventKind(str, Enum):
    ALL_DAY = "all_day"
    RECURRING = "recurring"
    TIMED = "timed"


@dataclass(frozen=True)
class CalendarEvent:
    """One event taken from an external calendar.

    For recurring events ``start``/``end`` describe the template occurrence
    and ``recurrence`` generates the remaining occurrence starts.
    """

    start: datetime
    end: datetime
    all_day: bool = False
    recurrence: RecurrenceRule | None = None
    uid: str | None = None
    summary: str | None = None

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidEventError(
                detail="Event ends before it starts",
                uid=self.uid,
                start=self.start.isoformat(),
                end=self.end.isoformat(),
            )

    @property
    def kind(self) -> EventKind:
        if self.recurrence is not None:
            return EventKind.RECURRING
        if self.all_day:
            return EventKind.ALL_DAY
        return EventKind.TIMED

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def label(self) -> str:
        return self.uid or self.summary or self.start.isoformat()


class SlotSummary(BaseModel):
    start: AwareDatetime
    end: AwareDatetime
    available_count: int
    participants: list[str]
    everyone_available: bool
