"""Service for detecting bookings that block a unit during a date range."""

from __future__ import annotations

from datetime import datetime

from unit_availability.domain.intervals import overlaps
from unit_availability.domain.models import Booking, DateRange


def find_conflicts(
    unit_id: str,
    requested_range: DateRange,
    existing_bookings: list[Booking],
) -> list[Booking]:
    """Return blocking bookings on *unit_id* whose impact range overlaps the request.

    Overlap rule: conflict if requested.start < impact.end AND impact.start < requested.end.
    Exact boundary touches (end == start) are NOT considered conflicts, and
    cancelled or expired bookings never conflict.
    """
    return [
        booking
        for booking in existing_bookings
        if unit_id in booking.unit_ids
        and booking.status.is_blocking
        and overlaps(requested_range, booking.impact_range)
    ]


def find_future_conflicts(
    unit_id: str,
    from_instant: datetime,
    existing_bookings: list[Booking],
) -> list[Booking]:
    """Return blocking bookings on *unit_id* still in effect after *from_instant*,
    ordered by the end of their impact range."""
    future = [
        booking
        for booking in existing_bookings
        if unit_id in booking.unit_ids
        and booking.status.is_blocking
        and booking.impact_range.end > from_instant
    ]
    return sorted(future, key=lambda b: b.impact_range.end)
