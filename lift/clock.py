"""
Time sources for the timed car operations.

Durations are expressed in abstract time units. The controller only awaits
``clock.sleep(units)``, so tests can swap in a VirtualClock and run without
wall-clock delay.
"""

import asyncio
from typing import Protocol


class Clock(Protocol):
    """Anything the controller can suspend on."""

    @property
    def now(self) -> float: ...

    async def sleep(self, units: float) -> None: ...


class AsyncioClock:
    """
    Real-time clock backed by the running event loop.

    Attributes:
        time_unit_seconds: Wall-clock seconds per time unit
    """

    def __init__(self, time_unit_seconds: float = 1.0):
        self.time_unit_seconds = time_unit_seconds

    @property
    def now(self) -> float:
        return asyncio.get_running_loop().time() / self.time_unit_seconds

    async def sleep(self, units: float) -> None:
        await asyncio.sleep(units * self.time_unit_seconds)


class VirtualClock:
    """Clock that advances instantly; yields once so other tasks can run."""

    def __init__(self, start: float = 0.0):
        self._now = start

    @property
    def now(self) -> float:
        return self._now

    async def sleep(self, units: float) -> None:
        self._now += units
        await asyncio.sleep(0)
