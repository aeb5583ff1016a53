"""Domain models for unit availability and booking conflicts."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator, model_validator

from unit_availability.domain.errors import AvailabilityError, InvalidRange


class BookingStatus(StrEnum):
    ACTIVE = "active"
    SCHEDULED = "scheduled"
    PENDING = "pending"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    @property
    def is_blocking(self) -> bool:
        return self in BLOCKING_STATUSES


BLOCKING_STATUSES = frozenset(
    {BookingStatus.ACTIVE, BookingStatus.SCHEDULED, BookingStatus.PENDING}
)


# ---------------------------------------------------------------------------
# Core domain models
# ---------------------------------------------------------------------------


class DateRange(BaseModel):
    """Half-open interval ``[start, end)``."""

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _end_after_start(self) -> DateRange:
        if self.end <= self.start:
            raise InvalidRange("end must be after start")
        return self


class RentalUnit(BaseModel):
    id: str
    type: str
    manually_available: bool = True
    label: str | None = None


class Booking(BaseModel):
    id: str
    unit_ids: set[str]
    status: BookingStatus
    impact_range: DateRange
    owner_name: str = "Unknown"


class BookingConflict(BaseModel):
    booking_id: str
    range: DateRange
    owner_name: str
    status: BookingStatus

    @classmethod
    def from_booking(cls, booking: Booking) -> BookingConflict:
        return cls(
            booking_id=booking.id,
            range=booking.impact_range,
            owner_name=booking.owner_name,
            status=booking.status,
        )


class AvailabilityResult(BaseModel):
    available: bool
    conflicts: list[BookingConflict] = Field(default_factory=list)
    next_available: datetime | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def failed(cls, exc: BaseException) -> AvailabilityResult:
        """Slot for a unit whose check failed: availability is unknown."""
        code = exc.code if isinstance(exc, AvailabilityError) else "error"
        return cls(
            available=False,
            error=f"Calculation failed: {exc}",
            error_code=code,
        )


class AvailableUnit(RentalUnit):
    availability: AvailabilityResult


class AvailabilityMetrics(BaseModel):
    total_query_time_ms: float = 0.0
    queries_executed: int = 0
    units_checked: int = 0
    conflicts_found: int = 0


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class AvailabilityOptions(BaseModel):
    include_conflicts: bool = True
    calculate_next_available: bool = True
    # None means now + the configured search horizon
    max_search_date: datetime | None = None


class AvailabilityCheckRequest(BaseModel):
    requested_range: DateRange
    options: AvailabilityOptions = Field(default_factory=AvailabilityOptions)


class BatchAvailabilityRequest(BaseModel):
    unit_ids: list[str]
    requested_range: DateRange
    options: AvailabilityOptions = Field(default_factory=AvailabilityOptions)
    timeout_seconds: float | None = Field(default=None, gt=0)
