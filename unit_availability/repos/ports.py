"""Read-only interfaces the availability engine needs from its collaborators.

Booking persistence and the unit catalogue are owned elsewhere; any backend
(database, remote API, in-memory) that satisfies these protocols can be
plugged into the calculator.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from unit_availability.domain.models import Booking, DateRange, RentalUnit


class ConflictStore(Protocol):
    """Query side of the booking store.

    Implementations raise ``StoreUnavailable`` when the backend cannot be reached.
    """

    async def find_blocking_bookings(
        self, unit_id: str, requested_range: DateRange
    ) -> list[Booking]:
        """Blocking bookings on the unit whose impact range overlaps the range."""
        ...

    async def find_future_blocking_bookings(
        self, unit_id: str, from_instant: datetime
    ) -> list[Booking]:
        """Blocking bookings on the unit ending after *from_instant*, ascending by end."""
        ...


class UnitCatalogue(Protocol):
    async def get_unit(self, unit_id: str) -> RentalUnit | None:
        ...

    async def list_units(
        self,
        type_filter: list[str] | None,
        manually_available_only: bool,
        limit: int,
    ) -> list[RentalUnit]:
        """Units in catalogue order; ``type_filter=None`` matches every type."""
        ...
