"""Recurrence rule parsing and window expansion.

Rules are parsed with ``dateutil.rrule.rrulestr`` so anything RFC 5545
accepts in an RRULE line works here. The reducer only ever talks to the
:class:`~flock.availability.models.RecurrenceRule` protocol, so callers can
hand in any other rule object that implements ``between``.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from dateutil.rrule import rruleset, rrulestr

from flock.availability.models import RecurrenceRule
from flock.errors import InvalidEventError, RecurrenceExpansionError

logger = logging.getLogger(__name__)


def build_rule(rrule: str, dtstart: datetime, exdates: Iterable[datetime] = ()) -> rruleset:
    """Parse an RRULE string anchored at ``dtstart``.

    Args:
        rrule: Rule text, with or without the ``RRULE:`` prefix.
        dtstart: Start of the template occurrence.
        exdates: Occurrence starts to exclude.

    Raises:
        InvalidEventError: If the rule text cannot be parsed.

    Returns:
        An ``rruleset`` containing the rule and its exclusions.
    """
    text = rrule.strip()
    try:
        rule = rrulestr(text, dtstart=dtstart, forceset=True)
    except (ValueError, TypeError) as e:
        raise InvalidEventError(detail=f"Invalid recurrence rule: {e}", rrule=text) from e
    for exdate in exdates:
        rule.exdate(exdate)
    return rule


def expand_occurrences(
    rule: RecurrenceRule,
    window_start: datetime,
    window_end: datetime,
    label: str | None = None,
) -> list[datetime]:
    """Return occurrence starts in ``[window_start, window_end]``, both ends inclusive.

    Raises:
        RecurrenceExpansionError: If the rule fails while expanding.
    """
    try:
        return list(rule.between(window_start, window_end, inc=True))
    except Exception as e:
        logger.debug("Expansion failed for %s in [%s, %s]: %r", label, window_start, window_end, e)
        raise RecurrenceExpansionError(
            detail=f"Recurrence rule could not be expanded: {e}",
            event=label,
        ) from e
