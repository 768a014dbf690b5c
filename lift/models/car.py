"""
Car model for the lift controller.
"""

import enum
import json
from dataclasses import dataclass


class Direction(int, enum.Enum):
    """Travel direction of the car; the value is the floor delta of one move."""

    UP = 1
    DOWN = -1
    IDLE = 0

    def reversed(self) -> "Direction":
        if self is Direction.UP:
            return Direction.DOWN
        if self is Direction.DOWN:
            return Direction.UP
        return Direction.IDLE

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "Direction":
        """
        Parse a lowercase label such as "up" back into a Direction.

        Args:
            label: One of "up", "down" or "idle"

        Returns:
            The matching Direction
        """
        try:
            return cls[label.upper()]
        except KeyError:
            raise ValueError(f"unknown direction: {label!r}") from None


class DoorState(str, enum.Enum):
    """Possible states of the car doors."""

    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class Call:
    """
    Pickup request made from a floor.

    Attributes:
        floor: The floor where the call button was pressed
        direction: UP or DOWN, the way the caller wants to travel
    """

    floor: int
    direction: Direction

    def __post_init__(self):
        if self.direction is Direction.IDLE:
            raise ValueError("a call must request UP or DOWN")

    def to_dict(self) -> dict:
        return {"floor": self.floor, "direction": self.direction.label}


class CarState:
    """
    Mutable state of the car, owned by exactly one controller.

    Attributes:
        min_floor: Lowest served floor
        max_floor: Highest served floor
        current_floor: The floor where the car currently is
        direction: Current travel direction (up, down, idle)
        door_state: Whether the doors are open or closed
        busy: True while a timed operation is in flight
    """

    def __init__(self, min_floor: int, max_floor: int, current_floor: int):
        self.min_floor = min_floor
        self.max_floor = max_floor
        self.current_floor = current_floor
        self.direction = Direction.IDLE
        self.door_state = DoorState.CLOSED
        self.busy = False

    def in_range(self, floor: int) -> bool:
        return self.min_floor <= floor <= self.max_floor

    def to_dict(self) -> dict:
        """
        Convert car state to a dictionary.

        Returns:
            Dictionary representation of car state
        """
        return {
            "min_floor": self.min_floor,
            "max_floor": self.max_floor,
            "current_floor": self.current_floor,
            "direction": self.direction.label,
            "door_state": self.door_state.value,
            "busy": self.busy,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
