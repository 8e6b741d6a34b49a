from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable


@dataclass(frozen=True, slots=True)
class Body:
    """One planet as seen by the renderer: a position and a weight."""

    x: float
    y: float
    z: float
    weight: float

    @property
    def position(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@runtime_checkable
class PlanetarySystemEngine(Protocol):
    """What the frame driver needs from a simulation engine."""

    def tick(self) -> None:
        ...

    def get_planets(self) -> Sequence[Body]:
        ...
