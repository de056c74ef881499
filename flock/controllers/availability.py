import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Query

from flock.availability import (
    CalendarEvent,
    Interval,
    apply_manual_overrides,
    build_interval_grid,
    compute_calendar_availability,
    participant_availability,
    summarize_group,
)
from flock.config import AvailabilitySettings
from flock.dependencies import AvailabilityConfig
from flock.errors import BadRequestError
from flock.models.availability import (
    AvailabilityResponse,
    CalendarAvailabilityRequest,
    CalendarEventIn,
    GroupAvailabilityRequest,
    GroupAvailabilityResponse,
    IntervalGrid,
    IntervalSource,
    ManualAvailabilityRequest,
)

logger = logging.getLogger("flock.availability.api")
router = APIRouter(prefix="/availability", tags=["availability"])


def _grid_intervals(grid: IntervalGrid, config: AvailabilitySettings) -> List[Interval]:
    return build_interval_grid(
        grid.start_date,
        grid.end_date,
        grid.start_hour,
        grid.end_hour,
        slot_minutes=grid.slot_minutes or config.slot_minutes,
        tz=config.timezone,
        max_days=config.max_grid_days,
    )


def _resolve_intervals(req: IntervalSource, config: AvailabilitySettings) -> List[Interval]:
    if req.grid is not None:
        return _grid_intervals(req.grid, config)
    return list(req.intervals or [])


def _to_calendars(calendars: List[List[CalendarEventIn]]) -> List[List[CalendarEvent]]:
    return [[event.to_event() for event in calendar] for calendar in calendars]


@router.get("/grid", response_model=List[Interval])
async def get_grid(
    config: AvailabilityConfig,
    start_date: date = Query(..., description="First day of the grid"),
    end_date: date = Query(..., description="Last day of the grid, inclusive"),
    start_hour: int = Query(..., description="Hour each day's slots start"),
    end_hour: int = Query(..., description="Hour each day's slots end"),
    slot_minutes: Optional[int] = Query(None, description="Slot width; defaults to the configured width"),
) -> List[Interval]:
    grid = IntervalGrid(
        start_date=start_date,
        end_date=end_date,
        start_hour=start_hour,
        end_hour=end_hour,
        slot_minutes=slot_minutes,
    )
    return _grid_intervals(grid, config)


@router.post("/calendar", response_model=AvailabilityResponse)
async def calendar_availability(req: CalendarAvailabilityRequest, config: AvailabilityConfig) -> AvailabilityResponse:
    intervals = _resolve_intervals(req, config)
    calendars = _to_calendars(req.calendars)
    logger.info(
        "POST /availability/calendar calendars=%d events=%d intervals=%d",
        len(calendars),
        sum(len(c) for c in calendars),
        len(intervals),
    )
    results = compute_calendar_availability(
        calendars, intervals, on_recurrence_error=config.recurrence_errors
    )
    return AvailabilityResponse(intervals=results)


@router.post("/manual", response_model=AvailabilityResponse)
async def manual_availability(req: ManualAvailabilityRequest, config: AvailabilityConfig) -> AvailabilityResponse:
    intervals = _resolve_intervals(req, config)
    logger.info("POST /availability/manual manual=%d intervals=%d", len(req.manual), len(intervals))
    return AvailabilityResponse(intervals=apply_manual_overrides(req.manual, intervals))


@router.post("/group", response_model=GroupAvailabilityResponse)
async def group_availability(req: GroupAvailabilityRequest, config: AvailabilityConfig) -> GroupAvailabilityResponse:
    intervals = _resolve_intervals(req, config)
    logger.info(
        "POST /availability/group participants=%d intervals=%d",
        len(req.participants),
        len(intervals),
    )
    per_participant = {}
    for participant in req.participants:
        if participant.name in per_participant:
            raise BadRequestError(detail="Participant names must be unique", participant=participant.name)
        per_participant[participant.name] = participant_availability(
            _to_calendars(participant.calendars),
            participant.manual,
            intervals,
            on_recurrence_error=config.recurrence_errors,
        )
    return GroupAvailabilityResponse(
        participant_count=len(per_participant),
        intervals=summarize_group(per_participant),
    )
