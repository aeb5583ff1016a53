"""Tests for the conflict-detection service."""

from datetime import datetime, timezone

from unit_availability.domain.models import Booking, BookingStatus, DateRange
from unit_availability.services.conflicts import find_conflicts, find_future_conflicts


def _make_booking(
    start: datetime,
    end: datetime,
    booking_id: str = "b1",
    unit_ids: set[str] | None = None,
    status: BookingStatus = BookingStatus.ACTIVE,
) -> Booking:
    return Booking(
        id=booking_id,
        unit_ids=unit_ids or {"unit-1"},
        status=status,
        impact_range=DateRange(start=start, end=end),
        owner_name="Existing",
    )


def _request(start: datetime, end: datetime) -> DateRange:
    return DateRange(start=start, end=end)


def test_no_overlap():
    """Bookings that don't overlap should not be returned as conflicts."""
    existing = [
        _make_booking(
            datetime(2025, 1, 1, tzinfo=timezone.utc),
            datetime(2025, 2, 1, tzinfo=timezone.utc),
        ),
    ]
    conflicts = find_conflicts(
        "unit-1",
        _request(
            datetime(2025, 3, 1, tzinfo=timezone.utc),
            datetime(2025, 4, 1, tzinfo=timezone.utc),
        ),
        existing,
    )
    assert conflicts == []


def test_partial_overlap():
    """A booking that partially overlaps should be returned as a conflict."""
    existing = [
        _make_booking(
            datetime(2025, 1, 1, tzinfo=timezone.utc),
            datetime(2025, 3, 15, tzinfo=timezone.utc),
        ),
    ]
    conflicts = find_conflicts(
        "unit-1",
        _request(
            datetime(2025, 3, 1, tzinfo=timezone.utc),
            datetime(2025, 4, 1, tzinfo=timezone.utc),
        ),
        existing,
    )
    assert len(conflicts) == 1
    assert conflicts[0].id == "b1"


def test_exact_boundary_no_conflict():
    """When impact end == requested start, there is no conflict (boundary touch)."""
    existing = [
        _make_booking(
            datetime(2025, 1, 1, tzinfo=timezone.utc),
            datetime(2025, 3, 1, tzinfo=timezone.utc),
        ),
    ]
    conflicts = find_conflicts(
        "unit-1",
        _request(
            datetime(2025, 3, 1, tzinfo=timezone.utc),
            datetime(2025, 4, 1, tzinfo=timezone.utc),
        ),
        existing,
    )
    assert conflicts == []


def test_other_units_bookings_ignored():
    existing = [
        _make_booking(
            datetime(2025, 1, 1, tzinfo=timezone.utc),
            datetime(2025, 12, 1, tzinfo=timezone.utc),
            unit_ids={"unit-2", "unit-3"},
        ),
    ]
    conflicts = find_conflicts(
        "unit-1",
        _request(
            datetime(2025, 3, 1, tzinfo=timezone.utc),
            datetime(2025, 4, 1, tzinfo=timezone.utc),
        ),
        existing,
    )
    assert conflicts == []


def test_cancelled_and_expired_never_conflict():
    existing = [
        _make_booking(
            datetime(2025, 1, 1, tzinfo=timezone.utc),
            datetime(2025, 12, 1, tzinfo=timezone.utc),
            booking_id=status.value,
            status=status,
        )
        for status in BookingStatus
    ]
    conflicts = find_conflicts(
        "unit-1",
        _request(
            datetime(2025, 3, 1, tzinfo=timezone.utc),
            datetime(2025, 4, 1, tzinfo=timezone.utc),
        ),
        existing,
    )
    assert sorted(c.id for c in conflicts) == ["active", "pending", "scheduled"]


def test_future_conflicts_sorted_by_end():
    existing = [
        _make_booking(
            datetime(2025, 5, 1, tzinfo=timezone.utc),
            datetime(2025, 9, 1, tzinfo=timezone.utc),
            booking_id="late",
        ),
        _make_booking(
            datetime(2025, 1, 1, tzinfo=timezone.utc),
            datetime(2025, 4, 1, tzinfo=timezone.utc),
            booking_id="early",
        ),
        _make_booking(
            datetime(2025, 1, 1, tzinfo=timezone.utc),
            datetime(2025, 2, 1, tzinfo=timezone.utc),
            booking_id="over",
        ),
    ]
    future = find_future_conflicts(
        "unit-1", datetime(2025, 2, 1, tzinfo=timezone.utc), existing
    )
    assert [b.id for b in future] == ["early", "late"]
