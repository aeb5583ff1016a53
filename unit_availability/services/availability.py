"""Service for calculating whether a rental unit is free for a date range."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, TypeVar

from unit_availability.config import Settings, settings as default_settings
from unit_availability.domain.errors import UnitNotFound
from unit_availability.domain.intervals import (
    ensure_valid_range,
    latest_end,
    start_of_day,
    start_of_next_month,
)
from unit_availability.domain.models import (
    AvailabilityMetrics,
    AvailabilityOptions,
    AvailabilityResult,
    BookingConflict,
    DateRange,
    RentalUnit,
)
from unit_availability.repos.ports import ConflictStore, UnitCatalogue

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AvailabilityCalculator:
    """Single-unit availability check against a read-only booking store."""

    def __init__(
        self,
        store: ConflictStore,
        catalogue: UnitCatalogue,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self.catalogue = catalogue
        self.settings = settings or default_settings
        self.clock = clock
        self._metrics = AvailabilityMetrics()

    async def calculate_availability(
        self,
        unit: RentalUnit | str,
        requested_range: DateRange,
        options: AvailabilityOptions | None = None,
    ) -> AvailabilityResult:
        """Return availability, conflicts and next free date for one unit.

        Raises ``InvalidRange`` before touching the store, ``UnitNotFound``
        when a unit id is not in the catalogue, and lets ``StoreUnavailable``
        propagate.
        """
        ensure_valid_range(requested_range)
        opts = options or AvailabilityOptions()
        resolved = await self._resolve_unit(unit)
        self._metrics.units_checked += 1

        # Administrative block: not booking-derived, so no conflicts and no date.
        if not resolved.manually_available:
            logger.debug("Unit %s is manually blocked", resolved.id)
            return AvailabilityResult(available=False)

        bookings = await self._query(
            self.store.find_blocking_bookings(resolved.id, requested_range)
        )
        available = not bookings
        result = AvailabilityResult(available=available)

        if not available:
            self._metrics.conflicts_found += len(bookings)
            if opts.include_conflicts:
                result.conflicts = [BookingConflict.from_booking(b) for b in bookings]
            if opts.calculate_next_available:
                result.next_available = await self._next_available(
                    resolved.id, requested_range.end, self._max_search_date(opts)
                )

        logger.debug(
            "Unit %s for %s..%s: available=%s conflicts=%d",
            resolved.id,
            requested_range.start.isoformat(),
            requested_range.end.isoformat(),
            available,
            len(bookings),
        )
        return result

    def get_metrics(self) -> AvailabilityMetrics:
        return self._metrics.model_copy()

    def reset_metrics(self) -> None:
        self._metrics = AvailabilityMetrics()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _resolve_unit(self, unit: RentalUnit | str) -> RentalUnit:
        if isinstance(unit, RentalUnit):
            return unit
        resolved = await self.catalogue.get_unit(unit)
        if resolved is None:
            raise UnitNotFound(unit)
        return resolved

    async def _query(self, pending: Awaitable[T]) -> T:
        started = time.perf_counter()
        try:
            return await pending
        finally:
            self._metrics.queries_executed += 1
            self._metrics.total_query_time_ms += (time.perf_counter() - started) * 1000

    def _max_search_date(self, opts: AvailabilityOptions) -> datetime:
        if opts.max_search_date is not None:
            if opts.max_search_date.tzinfo is None:
                return opts.max_search_date.replace(tzinfo=timezone.utc)
            return opts.max_search_date
        return self.clock() + timedelta(days=self.settings.search_horizon_days)

    async def _next_available(
        self, unit_id: str, search_start: datetime, max_search_date: datetime
    ) -> datetime | None:
        """First day of the month after the latest future blocking booking ends.

        Only the latest end counts: gaps between future bookings are not
        searched, so a unit free between two bookings is reported free only
        after the last one.
        """
        zone = self.settings.tzinfo
        future = await self._query(
            self.store.find_future_blocking_bookings(unit_id, search_start)
        )
        if not future:
            return start_of_day(search_start, zone)

        latest = latest_end([b.impact_range for b in future])
        if latest is None or latest > max_search_date:
            return None
        return start_of_next_month(latest, zone)
