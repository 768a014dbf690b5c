"""
Custom exceptions for the lift controller.
"""


class LiftError(Exception):
    """Base exception for all lift-related errors."""

    pass


class ConstructionError(LiftError, ValueError):
    """Raised when the floor bounds or the start floor are invalid."""

    pass


class OutOfRangeError(LiftError, ValueError):
    """Raised when a requested floor is outside the served range."""

    def __init__(self, floor: int, min_floor: int, max_floor: int):
        self.floor = floor
        self.min_floor = min_floor
        self.max_floor = max_floor
        super().__init__(
            f"floor {floor} out of range [{min_floor}, {max_floor}]"
        )


class BusyError(LiftError):
    """Raised when a timed operation is started while another is in flight."""

    pass


class DoorsOpenError(LiftError):
    """Raised when a move is attempted with the doors open."""

    pass


class NoDestinationError(LiftError):
    """Raised when a move is requested but nothing is pending."""

    pass
