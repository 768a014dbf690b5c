# lift/app/main.py
from contextlib import asynccontextmanager
from typing import Literal

import structlog
from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from lift import config
from lift.controller.controller import CarController
from lift.exceptions import (
    BusyError,
    DoorsOpenError,
    LiftError,
    NoDestinationError,
    OutOfRangeError,
)
from lift.models.car import Direction

logger = structlog.get_logger(__name__)

ERROR_STATUS_CODES = {
    OutOfRangeError: 422,
    BusyError: 409,
    DoorsOpenError: 409,
    NoDestinationError: 409,
}


# --- Startup and shutdown events ---
@asynccontextmanager
async def lifespan(app: FastAPI):  # pylint: disable=redefined-outer-name
    """Create the car before the application starts receiving requests"""
    config.configure_logging()
    logger.info("application_starting")
    app.state.car = CarController(
        config.MIN_FLOOR, config.MAX_FLOOR, config.START_FLOOR
    )
    try:
        yield
    finally:
        await app.state.car.wait_for_background()
        logger.info("application_shutdown_complete")


app = FastAPI(title="Lift Controller", lifespan=lifespan)


def get_car(request: Request) -> CarController:
    return request.app.state.car


@app.exception_handler(LiftError)
async def lift_error_handler(request: Request, exc: LiftError):
    status_code = ERROR_STATUS_CODES.get(type(exc), 400)
    logger.warning(
        "lift_error", path=request.url.path, error=type(exc).__name__, detail=str(exc)
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


class PanelRequestModel(BaseModel):
    """Model for in-car panel presses (destination buttons)."""

    floor: int = Field(..., description="Requested destination floor")

    model_config = ConfigDict(json_schema_extra={"example": {"floor": 5}})


class CallRequestModel(BaseModel):
    """Model for floor calls (up/down buttons)."""

    floor: int = Field(..., description="Floor number where the button was pressed")
    direction: Literal["up", "down"] = Field(..., description="Direction (up or down)")

    model_config = ConfigDict(
        json_schema_extra={"example": {"floor": 3, "direction": "up"}}
    )


@app.get("/api/car", status_code=200)
async def get_car_status(car: CarController = Depends(get_car)):
    """Get the current car status."""
    return car.status()


@app.post("/api/panel", status_code=202)
async def press_button(req: PanelRequestModel, car: CarController = Depends(get_car)):
    logger.info("received_panel_request", floor=req.floor)
    car.press_button(req.floor)
    return car.status()


@app.post("/api/calls", status_code=202)
async def call_from(req: CallRequestModel, car: CarController = Depends(get_car)):
    logger.info("received_call", floor=req.floor, direction=req.direction)
    car.call_from(req.floor, Direction.from_label(req.direction))
    return car.status()


@app.post("/api/car/doors/open", status_code=200)
async def open_doors(car: CarController = Depends(get_car)):
    await car.open_doors()
    return car.status()


@app.post("/api/car/doors/close", status_code=200)
async def close_doors(car: CarController = Depends(get_car)):
    await car.close_doors()
    return car.status()


@app.post("/api/car/move", status_code=200)
async def move_one_floor(car: CarController = Depends(get_car)):
    await car.move_one_floor()
    return car.status()


@app.post("/api/car/step", status_code=200)
async def step_until_stop(
    max_steps: int = Query(
        config.MAX_STEPS, ge=1, description="Upper bound on move attempts"
    ),
    car: CarController = Depends(get_car),
):
    await car.step_until_stop(max_steps)
    return car.status()
