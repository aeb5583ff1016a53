"""FastAPI application: entry point for the unit availability service."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import FastAPI, HTTPException, Query
from pydantic import ValidationError

from unit_availability.config import settings
from unit_availability.domain.errors import StoreUnavailable, UnitNotFound
from unit_availability.domain.models import (
    AvailabilityCheckRequest,
    AvailabilityMetrics,
    AvailabilityResult,
    AvailableUnit,
    BatchAvailabilityRequest,
    DateRange,
)
from unit_availability.repos.memory import (
    BookingRepository,
    UnitRepository,
    create_booking_repository,
    create_unit_repository,
)
from unit_availability.services.availability import AvailabilityCalculator
from unit_availability.services.batch import BatchAvailabilityCoordinator
from unit_availability.services.inventory import InventorySearch

logging.basicConfig(level=settings.log_level)

app = FastAPI(title="Unit Availability Service")

# ── Singletons (created at import time for simplicity) ────────────────
if settings.seed_demo_data:
    unit_repo = create_unit_repository()
    booking_repo = create_booking_repository()
else:
    unit_repo = UnitRepository()
    booking_repo = BookingRepository()

calculator = AvailabilityCalculator(store=booking_repo, catalogue=unit_repo)
coordinator = BatchAvailabilityCoordinator(calculator)
inventory_search = InventorySearch(catalogue=unit_repo, coordinator=coordinator)


# ── Routes ────────────────────────────────────────────────────────────


@app.post("/units/{unit_id}/availability", response_model=AvailabilityResult)
async def check_unit_availability(
    unit_id: str, body: AvailabilityCheckRequest
) -> AvailabilityResult:
    """Check one unit for the requested range, with conflicts and next free date.

    A reversed range is rejected with 422 while the body is parsed.
    """
    try:
        return await calculator.calculate_availability(
            unit_id, body.requested_range, body.options
        )
    except UnitNotFound:
        raise HTTPException(status_code=404, detail="Unit not found")
    except StoreUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc))


@app.post("/availability/batch", response_model=dict[str, AvailabilityResult])
async def check_batch_availability(
    body: BatchAvailabilityRequest,
) -> dict[str, AvailabilityResult]:
    """Check many units at once; failed units carry an error in their slot."""
    return await coordinator.calculate_batch_availability(body)


@app.get("/units/available", response_model=list[AvailableUnit])
async def list_available_units(
    start: datetime,
    end: datetime,
    types: list[str] = Query(default=["all"]),
    limit: int | None = Query(default=None, gt=0),
) -> list[AvailableUnit]:
    """Return units of the given types that are free for ``[start, end)``."""
    try:
        requested_range = DateRange(start=start, end=end)
    except ValidationError:
        raise HTTPException(status_code=422, detail="end must be after start")
    return await inventory_search.find_available_units(types, requested_range, limit)


@app.get("/availability/metrics", response_model=AvailabilityMetrics)
def get_availability_metrics() -> AvailabilityMetrics:
    return calculator.get_metrics()
