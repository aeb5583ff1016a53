"""Concurrent availability checks across many units with per-unit isolation."""

from __future__ import annotations

import asyncio
import logging

from unit_availability.domain.errors import AvailabilityTimeout, StoreUnavailable
from unit_availability.domain.intervals import ensure_valid_range
from unit_availability.domain.models import (
    AvailabilityOptions,
    AvailabilityResult,
    BatchAvailabilityRequest,
    DateRange,
    RentalUnit,
)
from unit_availability.services.availability import AvailabilityCalculator

logger = logging.getLogger(__name__)


def _unit_key(unit: RentalUnit | str) -> str:
    return unit.id if isinstance(unit, RentalUnit) else unit


class BatchAvailabilityCoordinator:
    """Fans the calculator out over units, one task per unit.

    A failing or slow unit never fails the batch: its slot carries an error
    result and every other unit is still computed.
    """

    def __init__(
        self,
        calculator: AvailabilityCalculator,
        timeout_seconds: float | None = None,
    ) -> None:
        self.calculator = calculator
        self.timeout_seconds = (
            timeout_seconds
            if timeout_seconds is not None
            else calculator.settings.batch_timeout_seconds
        )

    async def calculate_batch_availability(
        self, request: BatchAvailabilityRequest
    ) -> dict[str, AvailabilityResult]:
        """Return exactly one result per distinct unit id in *request*."""
        return await self.calculate_for_units(
            request.unit_ids,
            request.requested_range,
            request.options,
            timeout_seconds=request.timeout_seconds,
        )

    async def calculate_for_units(
        self,
        units: list[RentalUnit] | list[str],
        requested_range: DateRange,
        options: AvailabilityOptions | None = None,
        timeout_seconds: float | None = None,
    ) -> dict[str, AvailabilityResult]:
        # Caller error: reject once, before any task reaches the store.
        ensure_valid_range(requested_range)

        # Later duplicates replace earlier ones; order follows first appearance.
        by_key = {_unit_key(u): u for u in units}
        if not by_key:
            return {}

        tasks = {
            key: asyncio.ensure_future(
                self.calculator.calculate_availability(unit, requested_range, options)
            )
            for key, unit in by_key.items()
        }
        deadline = timeout_seconds if timeout_seconds is not None else self.timeout_seconds
        try:
            _, pending = await asyncio.wait(tasks.values(), timeout=deadline)
        finally:
            # Also runs when the batch itself is cancelled: no orphaned store queries.
            unfinished = [task for task in tasks.values() if not task.done()]
            for task in unfinished:
                task.cancel()
            if unfinished:
                await asyncio.gather(*unfinished, return_exceptions=True)

        results: dict[str, AvailabilityResult] = {}
        for key, task in tasks.items():
            if task in pending:
                logger.warning("Availability check for unit %s timed out after %ss", key, deadline)
                results[key] = AvailabilityResult.failed(
                    AvailabilityTimeout(f"no result within {deadline}s")
                )
                continue
            if task.cancelled():
                logger.warning("Availability check for unit %s was cancelled", key)
                results[key] = AvailabilityResult.failed(StoreUnavailable("query cancelled"))
                continue
            exc = task.exception()
            if exc is not None:
                logger.warning("Availability check for unit %s failed: %s", key, exc)
                results[key] = AvailabilityResult.failed(exc)
            else:
                results[key] = task.result()
        return results
