"""Date-range arithmetic used by the availability calculator.

All helpers treat ranges as half-open ``[start, end)``. Calendar rounding
(start of day, start of next month) happens in the configured time zone,
UTC unless ``AVAILABILITY_TIMEZONE`` says otherwise.
"""

from __future__ import annotations

from datetime import datetime, tzinfo

from dateutil.relativedelta import relativedelta

from unit_availability.config import settings
from unit_availability.domain.errors import InvalidRange
from unit_availability.domain.models import DateRange


def overlaps(a: DateRange, b: DateRange) -> bool:
    """Return True if the two ranges share at least one instant.

    Exact boundary touches (a.end == b.start) are NOT overlaps.
    """
    return a.start < b.end and b.start < a.end


def ensure_valid_range(requested_range: DateRange) -> None:
    """Reject ranges that bypassed model validation (e.g. ``model_construct``)."""
    if requested_range.start >= requested_range.end:
        raise InvalidRange(
            f"start ({requested_range.start.isoformat()}) must be before "
            f"end ({requested_range.end.isoformat()})"
        )


def latest_end(ranges: list[DateRange]) -> datetime | None:
    if not ranges:
        return None
    return max(r.end for r in ranges)


def start_of_day(instant: datetime, zone: tzinfo | None = None) -> datetime:
    local = instant.astimezone(zone or settings.tzinfo)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_next_month(instant: datetime, zone: tzinfo | None = None) -> datetime:
    """First instant of the calendar month following *instant*'s month."""
    local = instant.astimezone(zone or settings.tzinfo)
    first_of_month = local.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return first_of_month + relativedelta(months=1)


def range_from_duration(start: datetime, months: int) -> DateRange:
    """Build the range a booking of *months* whole months starting at *start* covers."""
    if months <= 0:
        raise InvalidRange("months must be positive")
    return DateRange(start=start, end=start + relativedelta(months=months))
