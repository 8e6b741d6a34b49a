from __future__ import annotations

import pytest

from planet_views.core.body import Body
from planet_views.rendering.surfaces import MemoryReadout, MemorySurface


class ScriptedSystem:
    """Engine double that replays fixed snapshots, one per tick."""

    def __init__(self, frames: list[list[Body]], fail_on_tick: int | None = None) -> None:
        self.frames = frames
        self.fail_on_tick = fail_on_tick
        self.ticks = 0
        self.calls: list[str] = []

    def tick(self) -> None:
        self.calls.append("tick")
        if self.fail_on_tick is not None and self.ticks == self.fail_on_tick:
            raise RuntimeError("integration diverged")
        self.ticks += 1

    def get_planets(self) -> list[Body]:
        self.calls.append("get_planets")
        return list(self.frames[min(self.ticks, len(self.frames)) - 1]) if self.frames else []


class ManualScheduler:
    def __init__(self) -> None:
        self.pending = None
        self.armed = 0
        self.cancelled = 0

    def arm(self, callback) -> None:
        self.pending = callback
        self.armed += 1

    def cancel(self) -> None:
        self.pending = None
        self.cancelled += 1

    def fire(self) -> None:
        callback, self.pending = self.pending, None
        if callback is not None:
            callback()


@pytest.fixture
def surfaces() -> list[MemorySurface]:
    return [MemorySurface() for _ in range(3)]


@pytest.fixture
def readout() -> MemoryReadout:
    return MemoryReadout()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def scripted():
    return ScriptedSystem
