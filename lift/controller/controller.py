"""
Car Controller

This module controls a single lift car: it accepts panel requests and floor
calls, picks a direction when idle, and runs the timed door and motion
operations. Only one timed operation may be in flight at a time; the busy
flag rejects overlapping commands instead of queuing them.
"""

import asyncio
from typing import Callable, List, Optional, Set

import structlog

from lift import config
from lift.clock import AsyncioClock, Clock
from lift.controller.dispatch import choose_direction, should_stop
from lift.exceptions import (
    BusyError,
    ConstructionError,
    DoorsOpenError,
    NoDestinationError,
    OutOfRangeError,
)
from lift.models.car import Call, CarState, Direction, DoorState
from lift.models.requests import RequestStore

logger = structlog.get_logger(__name__)

StatusListener = Callable[[str, dict], None]


class CarController:
    """
    Controller that owns one car and its pending requests.

    The controller:
    1. Registers panel requests and floor calls
    2. Chooses a travel direction whenever the car is idle
    3. Opens and closes doors, and moves one floor at a time
    4. Clears satisfied requests when the doors open at a floor
    5. Publishes every state change to registered listeners
    """

    def __init__(
        self,
        min_floor: int = config.MIN_FLOOR,
        max_floor: int = config.MAX_FLOOR,
        start_floor: int = config.START_FLOOR,
        *,
        clock: Optional[Clock] = None,
        door_operation_time: Optional[float] = None,
        floor_travel_time: Optional[float] = None,
    ):
        """
        Initialize the car controller.

        Args:
            min_floor: Lowest served floor
            max_floor: Highest served floor
            start_floor: The floor where the car starts
            clock: Time source for the timed operations
            door_operation_time: Time units to open or close the doors
            floor_travel_time: Time units to travel one floor

        Raises:
            ConstructionError: If the bounds or the start floor are invalid
        """
        if min_floor > max_floor:
            raise ConstructionError(
                f"min_floor ({min_floor}) must be <= max_floor ({max_floor})"
            )
        if not min_floor <= start_floor <= max_floor:
            raise ConstructionError(
                f"start_floor {start_floor} out of range [{min_floor}, {max_floor}]"
            )

        self._state = CarState(min_floor, max_floor, start_floor)
        self._requests = RequestStore()
        self._clock = clock or AsyncioClock(config.TIME_UNIT_SECONDS)
        self.door_operation_time = (
            config.DOOR_OPERATION_UNITS
            if door_operation_time is None
            else door_operation_time
        )
        self.floor_travel_time = (
            config.FLOOR_TRAVEL_UNITS
            if floor_travel_time is None
            else floor_travel_time
        )
        self._listeners: List[StatusListener] = []
        self._background_tasks: Set[asyncio.Task] = set()

        logger.info("car_initialized", floor=start_floor, min_floor=min_floor, max_floor=max_floor)

    # --- observers ---

    @property
    def min_floor(self) -> int:
        return self._state.min_floor

    @property
    def max_floor(self) -> int:
        return self._state.max_floor

    @property
    def current_floor(self) -> int:
        return self._state.current_floor

    @property
    def direction(self) -> Direction:
        return self._state.direction

    @property
    def door_state(self) -> DoorState:
        return self._state.door_state

    @property
    def busy(self) -> bool:
        return self._state.busy

    @property
    def pending_panel_requests(self) -> List[int]:
        return self._requests.pending_panel_requests()

    @property
    def pending_calls(self) -> List[Call]:
        return self._requests.pending_calls()

    def status(self) -> dict:
        """
        Snapshot of the car state and its pending requests.

        Returns:
            Dictionary representation, safe to JSON-encode
        """
        data = self._state.to_dict()
        data.update(
            {
                "pending_panel_requests": self.pending_panel_requests,
                "pending_calls": [call.to_dict() for call in self.pending_calls],
            }
        )
        return data

    def add_listener(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StatusListener) -> None:
        self._listeners.remove(listener)

    # --- external commands ---

    def press_button(self, floor: int) -> None:
        """
        Register a destination pressed on the in-car panel.

        Args:
            floor: The requested floor

        Raises:
            OutOfRangeError: If the floor is not served
        """
        self._check_floor(floor)
        self._requests.add_panel_request(floor)
        logger.info("panel_button_pressed", floor=floor)
        self._publish_status("panel_request_registered")
        self._update_direction_if_idle()

    def call_from(self, floor: int, direction: Direction) -> None:
        """
        Register a pickup call from a floor.

        Args:
            floor: The floor where the call button was pressed
            direction: UP or DOWN

        Raises:
            OutOfRangeError: If the floor is not served
            ValueError: If direction is IDLE
        """
        self._check_floor(floor)
        call = Call(floor=floor, direction=Direction(direction))
        self._requests.add_call(call)
        logger.info("call_registered", floor=floor, direction=call.direction.label)
        self._publish_status("call_registered")
        self._update_direction_if_idle()

    # --- timed operations ---

    async def open_doors(self) -> None:
        """
        Open the doors, then clear the requests satisfied at this floor.

        Does nothing if the doors are already open.

        Raises:
            BusyError: If another timed operation is in flight
        """
        if not self._reserve_door_operation(DoorState.OPEN):
            return
        await self._finish_opening()

    async def close_doors(self) -> None:
        """
        Close the doors, then reassess direction if the car is idle.

        Does nothing if the doors are already closed.

        Raises:
            BusyError: If another timed operation is in flight
        """
        if not self._reserve_door_operation(DoorState.CLOSED):
            return
        try:
            logger.info("closing_doors", floor=self.current_floor, duration=self.door_operation_time)
            self._publish_status("doors_closing")
            await self._clock.sleep(self.door_operation_time)
            self._state.door_state = DoorState.CLOSED
            logger.info("doors_closed", floor=self.current_floor)
        finally:
            self._state.busy = False
        self._publish_status("doors_closed")
        # requests may have arrived while the doors were open
        self._update_direction_if_idle()

    async def move_one_floor(self) -> None:
        """
        Travel one floor in the current direction and stop if needed.

        At the edge of the served range the direction is reversed instead,
        without moving and without taking any time.

        Raises:
            DoorsOpenError: If the doors are open
            BusyError: If another timed operation is in flight
            NoDestinationError: If the car is idle and nothing is pending
        """
        if self.door_state is DoorState.OPEN:
            raise DoorsOpenError("cannot move while doors are open")
        if self.busy:
            raise BusyError("car is busy")
        if self.direction is Direction.IDLE:
            self._update_direction_if_idle()
            if self.direction is Direction.IDLE:
                raise NoDestinationError("no destination to move to")

        next_floor = self.current_floor + self.direction.value
        if not self._state.in_range(next_floor):
            self._state.direction = self.direction.reversed()
            logger.info(
                "edge_reversal",
                floor=self.current_floor,
                direction=self.direction.label,
            )
            self._publish_status("edge_reversal")
            return

        self._state.busy = True
        try:
            logger.info(
                "moving_to_floor",
                current_floor=self.current_floor,
                next_floor=next_floor,
                direction=self.direction.label,
                duration=self.floor_travel_time,
            )
            self._publish_status("moving")
            await self._clock.sleep(self.floor_travel_time)
            self._state.current_floor = next_floor
        finally:
            self._state.busy = False

        logger.info("arrived_at_floor", floor=self.current_floor)
        self._publish_status("arrived")
        if should_stop(self.current_floor, self.direction, self._requests):
            logger.info("stopping_at_floor", floor=self.current_floor)
            await self.open_doors()

    async def step_until_stop(self, max_steps: int = config.MAX_STEPS) -> None:
        """
        Move floor by floor until the doors open or the car goes idle.

        Args:
            max_steps: Upper bound on move attempts
        """
        for _ in range(max_steps):
            if self.door_state is DoorState.OPEN or self.direction is Direction.IDLE:
                return
            await self.move_one_floor()
        if self.door_state is DoorState.OPEN or self.direction is Direction.IDLE:
            return
        logger.warning("step_limit_reached", max_steps=max_steps, floor=self.current_floor)

    async def wait_for_background(self) -> None:
        """Wait for any detached door opening still in flight."""
        while self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)

    # --- helpers ---

    def _check_floor(self, floor: int) -> None:
        if not self._state.in_range(floor):
            logger.warning("invalid_floor", floor=floor)
            raise OutOfRangeError(floor, self.min_floor, self.max_floor)

    def _reserve_door_operation(self, target: DoorState) -> bool:
        """Claim the busy flag for a door operation; False if already at target."""
        if self.door_state is target:
            return False
        if self.busy:
            raise BusyError("car is busy")
        self._state.busy = True
        return True

    async def _finish_opening(self) -> None:
        try:
            logger.info("opening_doors", floor=self.current_floor, duration=self.door_operation_time)
            self._publish_status("doors_opening")
            await self._clock.sleep(self.door_operation_time)
            self._state.door_state = DoorState.OPEN
            logger.info("doors_opened", floor=self.current_floor)
            removed = self._requests.fulfill(self.current_floor)
            logger.info("requests_fulfilled", floor=self.current_floor, removed=removed)
            if not self._requests.has_pending():
                self._state.direction = Direction.IDLE
                logger.info("going_idle", floor=self.current_floor)
        finally:
            self._state.busy = False
        self._publish_status("doors_opened")

    def _update_direction_if_idle(self) -> None:
        if self.direction is not Direction.IDLE:
            return

        direction, target = choose_direction(self.current_floor, self._requests)
        if target is None:
            return

        self._state.direction = direction
        if direction is Direction.IDLE:
            logger.info("already_at_target", floor=self.current_floor)
            self._open_doors_in_background()
        else:
            logger.info("direction_chosen", direction=direction.label, target=target)
            self._publish_status("direction_chosen")

    def _open_doors_in_background(self) -> None:
        """
        Start opening the doors without waiting for it.

        The busy flag is claimed before returning, so a racing command sees
        the car as busy. Without a running event loop the opening is left to
        the next direction reassessment.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("background_open_skipped", floor=self.current_floor, reason="no_event_loop")
            return
        try:
            if not self._reserve_door_operation(DoorState.OPEN):
                return
        except BusyError:
            logger.warning("background_open_skipped", floor=self.current_floor, reason="busy")
            return

        task = loop.create_task(self._finish_opening())
        self._background_tasks.add(task)
        task.add_done_callback(self._on_background_done)

    def _on_background_done(self, task: asyncio.Task) -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("background_open_failed", floor=self.current_floor, error=str(exc))

    def _publish_status(self, event: str) -> None:
        if not self._listeners:
            return
        status = self.status()
        for listener in list(self._listeners):
            try:
                listener(event, status)
            except Exception:
                logger.exception("status_listener_failed", event_name=event)
