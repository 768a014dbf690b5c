from lift.models.car import Call, CarState, Direction, DoorState
from lift.models.requests import RequestStore

__all__ = ["Call", "CarState", "Direction", "DoorState", "RequestStore"]
