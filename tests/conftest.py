from typing import Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from lift.app.main import app, get_car
from lift.clock import VirtualClock
from lift.controller.controller import CarController


@pytest.fixture
def clock():
    """A clock that advances instantly."""
    return VirtualClock()


@pytest.fixture
def make_car(clock) -> Callable[..., CarController]:
    """Factory for cars on the virtual clock with 1-unit doors and 3-unit moves."""

    def _make_car(min_floor: int = 1, max_floor: int = 5, start_floor: int = 1):
        return CarController(
            min_floor,
            max_floor,
            start_floor,
            clock=clock,
            door_operation_time=1,
            floor_travel_time=3,
        )

    return _make_car


@pytest.fixture
def car(make_car):
    return make_car()


@pytest_asyncio.fixture
async def async_client(car):
    """
    Create an async client for testing.

    Note:
        ASGITransport does not run the lifespan, so the car dependency is
        overridden with the test car.
        Reference docs: https://fastapi.tiangolo.com/advanced/testing-dependencies/#use-the-appdependency_overrides-attribute
    """
    original_overrides = app.dependency_overrides.copy()
    app.dependency_overrides[get_car] = lambda: car
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides = original_overrides
