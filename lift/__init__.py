"""
Single-car lift controller.

The controller owns the car state, the pending requests and the timed
door/motion operations. Drivers (the HTTP app, the simulation runner or a
test) register requests and await the timed operations.
"""

from lift.controller.controller import CarController
from lift.exceptions import (
    BusyError,
    ConstructionError,
    DoorsOpenError,
    LiftError,
    NoDestinationError,
    OutOfRangeError,
)
from lift.models.car import Call, Direction, DoorState

__all__ = [
    "CarController",
    "Call",
    "Direction",
    "DoorState",
    "LiftError",
    "ConstructionError",
    "OutOfRangeError",
    "BusyError",
    "DoorsOpenError",
    "NoDestinationError",
]
