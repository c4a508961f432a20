from __future__ import annotations


class ParkWiseError(Exception):
    """Base class for errors raised by the pricing service."""


class InvalidInput(ParkWiseError, ValueError):
    """Malformed duration, spend or qualifier values."""


class DataUnavailable(ParkWiseError):
    """The parking lot catalog could not be loaded."""


class CalculationError(ParkWiseError):
    """A lot's rate tiers break the ordering/contiguity invariants."""
