from lift.models.car import DoorState


async def test_get_car_status(async_client):
    response = await async_client.get("/api/car")

    assert response.status_code == 200
    data = response.json()
    assert data["current_floor"] == 1
    assert data["direction"] == "idle"
    assert data["door_state"] == "closed"


async def test_press_button_then_step(async_client, car):
    response = await async_client.post("/api/panel", json={"floor": 3})

    assert response.status_code == 202
    data = response.json()
    assert data["pending_panel_requests"] == [3]
    assert data["direction"] == "up"

    response = await async_client.post("/api/car/step")

    assert response.status_code == 200
    data = response.json()
    assert data["current_floor"] == 3
    assert data["door_state"] == "open"
    assert data["pending_panel_requests"] == []
    assert car.door_state is DoorState.OPEN


async def test_create_call(async_client):
    response = await async_client.post(
        "/api/calls", json={"floor": 4, "direction": "down"}
    )

    assert response.status_code == 202
    assert response.json()["pending_calls"] == [{"floor": 4, "direction": "down"}]


async def test_call_with_invalid_direction(async_client):
    response = await async_client.post(
        "/api/calls", json={"floor": 4, "direction": "sideways"}
    )
    assert response.status_code == 422


async def test_out_of_range_floor(async_client, car):
    response = await async_client.post("/api/panel", json={"floor": 42})

    assert response.status_code == 422
    assert response.json()["error"] == "OutOfRangeError"
    assert car.pending_panel_requests == []


async def test_move_with_doors_open_conflicts(async_client):
    response = await async_client.post("/api/car/doors/open")
    assert response.status_code == 200
    assert response.json()["door_state"] == "open"

    await async_client.post("/api/panel", json={"floor": 5})
    response = await async_client.post("/api/car/move")

    assert response.status_code == 409
    assert response.json()["error"] == "DoorsOpenError"

    response = await async_client.post("/api/car/doors/close")
    assert response.json()["door_state"] == "closed"

    response = await async_client.post("/api/car/move")
    assert response.status_code == 200
    assert response.json()["current_floor"] == 2


async def test_move_without_requests(async_client):
    response = await async_client.post("/api/car/move")

    assert response.status_code == 409
    assert response.json()["error"] == "NoDestinationError"


async def test_step_rejects_non_positive_bound(async_client):
    response = await async_client.post("/api/car/step", params={"max_steps": 0})
    assert response.status_code == 422
