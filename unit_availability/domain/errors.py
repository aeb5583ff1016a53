"""Errors raised by the availability engine."""

from __future__ import annotations


class AvailabilityError(Exception):
    """Base class; ``code`` is the machine-readable tag stored in batch slots."""

    code = "error"


class InvalidRange(AvailabilityError, ValueError):
    """Caller supplied start >= end, or a non-positive limit."""

    code = "invalid_range"


class UnitNotFound(AvailabilityError, LookupError):
    code = "unit_not_found"

    def __init__(self, unit_id: str) -> None:
        super().__init__(f"Unit {unit_id} not found")
        self.unit_id = unit_id


class StoreUnavailable(AvailabilityError):
    """The booking store or unit catalogue could not be queried."""

    code = "store_unavailable"


class AvailabilityTimeout(AvailabilityError):
    code = "timeout"
