"""Service for finding units of given types that are free for a date range."""

from __future__ import annotations

import logging

from unit_availability.domain.errors import InvalidRange
from unit_availability.domain.intervals import ensure_valid_range
from unit_availability.domain.models import (
    AvailabilityOptions,
    AvailableUnit,
    DateRange,
)
from unit_availability.repos.ports import UnitCatalogue
from unit_availability.services.batch import BatchAvailabilityCoordinator

logger = logging.getLogger(__name__)

ALL_TYPES = "all"

# Existence check only; conflicts and next-free dates are not needed for search.
_SEARCH_OPTIONS = AvailabilityOptions(
    include_conflicts=False, calculate_next_available=False
)


class InventorySearch:
    def __init__(
        self,
        catalogue: UnitCatalogue,
        coordinator: BatchAvailabilityCoordinator,
    ) -> None:
        self.catalogue = catalogue
        self.coordinator = coordinator

    async def find_available_units(
        self,
        requested_types: list[str],
        requested_range: DateRange,
        limit: int | None = None,
    ) -> list[AvailableUnit]:
        """Return free units of the requested types, in catalogue order.

        At most *limit* candidates are checked, so when more than *limit*
        units of a type exist the result can undercount what is actually free.
        Units whose check failed are left out rather than reported as free.
        """
        if limit is None:
            limit = self.coordinator.calculator.settings.default_search_limit
        if limit <= 0:
            raise InvalidRange("limit must be positive")
        ensure_valid_range(requested_range)

        type_filter = None if ALL_TYPES in requested_types else list(requested_types)
        candidates = await self.catalogue.list_units(
            type_filter=type_filter, manually_available_only=True, limit=limit
        )

        results = await self.coordinator.calculate_for_units(
            candidates, requested_range, _SEARCH_OPTIONS
        )

        available: list[AvailableUnit] = []
        for unit in candidates:
            availability = results[unit.id]
            if availability.error is not None:
                logger.warning(
                    "Skipping unit %s in search, availability unknown: %s",
                    unit.id,
                    availability.error,
                )
                continue
            if availability.available:
                available.append(
                    AvailableUnit(**unit.model_dump(), availability=availability)
                )
        logger.info(
            "Inventory search for %s: %d of %d candidates available",
            ",".join(requested_types),
            len(available),
            len(candidates),
        )
        return available
