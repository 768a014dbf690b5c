"""
Dispatch policy for a single car.

Pure decision logic: given the car position, its direction and the pending
requests, pick a direction when idle and decide whether to stop at a floor.
"""

from typing import Optional, Tuple

from lift.models.car import Direction
from lift.models.requests import RequestStore


def choose_direction(
    current_floor: int, store: RequestStore
) -> Tuple[Direction, Optional[int]]:
    """
    Pick a travel direction towards the nearest pending floor.

    Panel floors (ascending) are considered before call floors (insertion
    order); on equal distance the first candidate wins. A call's own
    direction does not bias the choice.

    Args:
        current_floor: The floor where the car is
        store: Pending requests

    Returns:
        (direction, target). (IDLE, None) when nothing is pending;
        (IDLE, current_floor) when the nearest target is the current floor.
    """
    candidates = store.candidate_floors()
    if not candidates:
        return Direction.IDLE, None

    nearest = candidates[0]
    best_distance = abs(nearest - current_floor)
    for floor in candidates[1:]:
        distance = abs(floor - current_floor)
        if distance < best_distance:
            nearest = floor
            best_distance = distance

    if nearest > current_floor:
        return Direction.UP, nearest
    if nearest < current_floor:
        return Direction.DOWN, nearest
    return Direction.IDLE, nearest


def should_stop(floor: int, direction: Direction, store: RequestStore) -> bool:
    """
    Decide whether the car stops at a floor it has just reached.

    Stops for a panel request there, or for a call there that matches the
    travel direction. Calls asking the other way are passed by.
    """
    if store.has_panel_request(floor):
        return True
    calls_here = store.calls_at(floor)
    if not calls_here:
        return False
    if direction is Direction.IDLE:
        return True
    return any(call.direction is direction for call in calls_here)
