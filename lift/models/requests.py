"""
Pending request store for the lift controller.

This module holds the two kinds of outstanding requests:
1. Panel requests - destination floors pressed inside the car
2. Calls - pickup requests made from a floor, with a wanted direction
"""

from typing import List, Set

from lift.models.car import Call


class RequestStore:
    """
    Outstanding panel requests and calls.

    Panel requests are a set of floors. Calls keep insertion order and
    duplicates; a stop clears every call at its floor.
    """

    def __init__(self):
        self.panel_requests: Set[int] = set()
        self.calls: List[Call] = []

    def add_panel_request(self, floor: int) -> None:
        self.panel_requests.add(floor)

    def add_call(self, call: Call) -> None:
        self.calls.append(call)

    def has_pending(self) -> bool:
        return bool(self.panel_requests) or bool(self.calls)

    def has_panel_request(self, floor: int) -> bool:
        return floor in self.panel_requests

    def calls_at(self, floor: int) -> List[Call]:
        return [call for call in self.calls if call.floor == floor]

    def fulfill(self, floor: int) -> int:
        """
        Clear everything satisfied by a stop at the given floor.

        Args:
            floor: The floor where the doors just opened

        Returns:
            Number of panel requests and calls removed
        """
        removed = 0
        if floor in self.panel_requests:
            self.panel_requests.discard(floor)
            removed += 1
        remaining = [call for call in self.calls if call.floor != floor]
        removed += len(self.calls) - len(remaining)
        self.calls = remaining
        return removed

    def candidate_floors(self) -> List[int]:
        """Panel floors ascending, then call floors in insertion order."""
        return sorted(self.panel_requests) + [call.floor for call in self.calls]

    def pending_panel_requests(self) -> List[int]:
        return sorted(self.panel_requests)

    def pending_calls(self) -> List[Call]:
        return list(self.calls)
