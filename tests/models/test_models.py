import json

import pytest

from lift.models.car import Call, CarState, Direction, DoorState
from lift.models.requests import RequestStore


def test_direction_reversed():
    assert Direction.UP.reversed() is Direction.DOWN
    assert Direction.DOWN.reversed() is Direction.UP
    assert Direction.IDLE.reversed() is Direction.IDLE


def test_direction_labels():
    assert Direction.UP.label == "up"
    assert Direction.from_label("down") is Direction.DOWN
    with pytest.raises(ValueError):
        Direction.from_label("sideways")


def test_call_rejects_idle_direction():
    with pytest.raises(ValueError):
        Call(floor=3, direction=Direction.IDLE)


def test_car_state_to_json():
    state = CarState(min_floor=1, max_floor=5, current_floor=2)
    data = json.loads(state.to_json())
    assert data == {
        "min_floor": 1,
        "max_floor": 5,
        "current_floor": 2,
        "direction": "idle",
        "door_state": DoorState.CLOSED.value,
        "busy": False,
    }


def test_store_keeps_duplicate_calls_and_dedupes_panel():
    store = RequestStore()
    store.add_panel_request(4)
    store.add_panel_request(4)
    store.add_call(Call(2, Direction.UP))
    store.add_call(Call(2, Direction.UP))

    assert store.pending_panel_requests() == [4]
    assert store.pending_calls() == [Call(2, Direction.UP), Call(2, Direction.UP)]


def test_store_fulfill_clears_every_call_at_floor():
    store = RequestStore()
    store.add_panel_request(4)
    store.add_call(Call(4, Direction.UP))
    store.add_call(Call(2, Direction.DOWN))
    store.add_call(Call(4, Direction.DOWN))

    removed = store.fulfill(4)

    assert removed == 3
    assert store.pending_panel_requests() == []
    assert store.pending_calls() == [Call(2, Direction.DOWN)]
    assert store.has_pending()


def test_store_candidate_order():
    store = RequestStore()
    store.add_panel_request(5)
    store.add_panel_request(1)
    store.add_call(Call(4, Direction.DOWN))
    store.add_call(Call(2, Direction.UP))

    assert store.candidate_floors() == [1, 5, 4, 2]


def test_store_snapshot_is_a_copy():
    store = RequestStore()
    store.add_call(Call(3, Direction.UP))
    snapshot = store.pending_calls()
    snapshot.clear()
    assert store.pending_calls() == [Call(3, Direction.UP)]
