#!/usr/bin/env python3
"""
Lift Simulation Entry Point

Runs a single car through a short list of requests until every request has
been served, logging each stop.
"""

import asyncio

import structlog

from lift import config
from lift.controller.controller import CarController
from lift.models.car import Direction, DoorState

logger = structlog.get_logger(__name__)


async def serve_all(car: CarController, max_steps: int = config.MAX_STEPS) -> int:
    """
    Drive the car until no requests remain.

    Gives up when a round of step_until_stop ends without a stop, which
    happens for a call that never matches the travel direction at an edge.

    Args:
        car: The controller to drive
        max_steps: Move attempts allowed per stop

    Returns:
        Number of stops made
    """
    stops = 0
    await car.wait_for_background()
    while True:
        if car.door_state is DoorState.OPEN:
            stops += 1
            logger.info(
                "stop_served",
                floor=car.current_floor,
                remaining_panel=car.pending_panel_requests,
                remaining_calls=len(car.pending_calls),
            )
            await car.close_doors()
            await car.wait_for_background()
            continue
        if car.direction is Direction.IDLE:
            break
        await car.step_until_stop(max_steps)
        if car.door_state is DoorState.CLOSED and car.direction is not Direction.IDLE:
            logger.warning(
                "requests_unreachable",
                floor=car.current_floor,
                remaining_panel=car.pending_panel_requests,
                remaining_calls=[call.to_dict() for call in car.pending_calls],
            )
            break
    return stops


async def main():
    config.configure_logging()
    car = CarController(config.MIN_FLOOR, config.MAX_FLOOR, config.START_FLOOR)

    car.press_button(config.MAX_FLOOR)
    car.call_from(config.MIN_FLOOR + (config.MAX_FLOOR - config.MIN_FLOOR) // 2, Direction.DOWN)
    car.press_button(config.MIN_FLOOR)

    logger.info("simulation_started", status=car.status())
    stops = await serve_all(car)
    logger.info("simulation_finished", stops=stops, status=car.status())


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("simulation_stopped_by_keyboard_interrupt")
    except Exception as e:
        logger.error("simulation_failed", error=str(e))
        raise
    finally:
        logger.info("simulation_shutdown_complete")
