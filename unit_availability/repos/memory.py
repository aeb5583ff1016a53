"""In-memory repositories for units and bookings."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from unit_availability.domain.intervals import range_from_duration, start_of_day
from unit_availability.domain.models import (
    Booking,
    BookingStatus,
    DateRange,
    RentalUnit,
)
from unit_availability.services.conflicts import find_conflicts, find_future_conflicts


class BookingRepository:
    """Dict-backed store for Booking instances, keyed by id.

    Implements the ``ConflictStore`` protocol.
    """

    def __init__(self) -> None:
        self._store: dict[str, Booking] = {}

    def add(self, booking: Booking) -> None:
        self._store[booking.id] = booking

    def list_all(self) -> list[Booking]:
        return list(self._store.values())

    async def find_blocking_bookings(
        self, unit_id: str, requested_range: DateRange
    ) -> list[Booking]:
        return find_conflicts(unit_id, requested_range, self.list_all())

    async def find_future_blocking_bookings(
        self, unit_id: str, from_instant: datetime
    ) -> list[Booking]:
        return find_future_conflicts(unit_id, from_instant, self.list_all())


class UnitRepository:
    """Insertion-ordered store for RentalUnit instances.

    Implements the ``UnitCatalogue`` protocol.
    """

    def __init__(self) -> None:
        self._store: dict[str, RentalUnit] = {}

    def add(self, unit: RentalUnit) -> None:
        self._store[unit.id] = unit

    def list_all(self) -> list[RentalUnit]:
        return list(self._store.values())

    async def get_unit(self, unit_id: str) -> RentalUnit | None:
        return self._store.get(unit_id)

    async def list_units(
        self,
        type_filter: list[str] | None,
        manually_available_only: bool,
        limit: int,
    ) -> list[RentalUnit]:
        matches = [
            u
            for u in self._store.values()
            if (not manually_available_only or u.manually_available)
            and (type_filter is None or u.type in type_filter)
        ]
        return matches[:limit]


# ---------------------------------------------------------------------------
# Seed data – a small shop floor with a few running contracts
# ---------------------------------------------------------------------------


def _seed_units(repo: UnitRepository) -> None:
    repo.add(RentalUnit(id="shelf-1", type="shelf", label="Shelf by the entrance"))
    repo.add(RentalUnit(id="shelf-2", type="shelf", label="Shelf, back wall"))
    repo.add(RentalUnit(id="cold-1", type="cold-storage", label="Fridge 1"))
    repo.add(RentalUnit(id="cold-2", type="cold-storage", label="Fridge 2"))
    repo.add(RentalUnit(id="freezer-1", type="freezer", label="Chest freezer"))
    repo.add(
        RentalUnit(
            id="window-1",
            type="shop-window",
            label="Shop window (under repair)",
            manually_available=False,
        )
    )


def _seed_bookings(repo: BookingRepository) -> None:
    today = start_of_day(datetime.now(timezone.utc))

    repo.add(
        Booking(
            id="booking-1",
            unit_ids={"shelf-1"},
            status=BookingStatus.ACTIVE,
            impact_range=range_from_duration(today - timedelta(days=30), 6),
            owner_name="Hofladen Sommer",
        )
    )
    repo.add(
        Booking(
            id="booking-2",
            unit_ids={"cold-1", "freezer-1"},
            status=BookingStatus.SCHEDULED,
            impact_range=range_from_duration(today + timedelta(days=14), 3),
            owner_name="Käserei am Berg",
        )
    )
    repo.add(
        Booking(
            id="booking-3",
            unit_ids={"shelf-2"},
            status=BookingStatus.CANCELLED,
            impact_range=range_from_duration(today, 12),
            owner_name="Imkerei Lindner",
        )
    )


def create_unit_repository() -> UnitRepository:
    """Return a UnitRepository pre-loaded with sample data."""
    repo = UnitRepository()
    _seed_units(repo)
    return repo


def create_booking_repository() -> BookingRepository:
    """Return a BookingRepository pre-loaded with sample data."""
    repo = BookingRepository()
    _seed_bookings(repo)
    return repo
