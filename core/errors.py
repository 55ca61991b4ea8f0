"""Exception taxonomy for the celestial engine."""

from __future__ import annotations


class CelestialError(Exception):
    """Base class for all engine errors."""


class DomainViolation(CelestialError):
    """Raised when an internal invariant of the math is broken.

    These are programming errors (a declination outside physical bounds,
    an acos argument outside [-1, 1] that no caller accounted for) and
    are never corrected silently.
    """

    def __init__(self, quantity: str, value: float, detail: str = ""):
        self.quantity = quantity
        self.value = value
        message = f"{quantity} = {value!r} violates its domain"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InputOutOfRange(CelestialError, ValueError):
    """Raised when a caller-supplied value is outside its valid bounds."""

    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class DegenerateGeometry(CelestialError):
    """The requested geometry does not exist for the given instant.

    Raised for a terminator latitude the boundary never reaches.
    """

    def __init__(self, latitude: float, declination: float):
        self.latitude = latitude
        self.declination = declination
        super().__init__(
            f"Terminator does not reach latitude {latitude:.4f} "
            f"(sub-solar latitude {declination:.4f})"
        )
