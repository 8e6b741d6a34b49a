"""
Drawing surface and rate readout interfaces.

The frame driver only talks to these protocols. ``MemorySurface`` and
``MemoryReadout`` record what they are asked to draw and back the headless
benchmark; the pyglet implementations live in ``pyglet_host``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence, runtime_checkable

from planet_views.errors import SurfaceSetupError
from planet_views.rendering.projector import SURFACE_SIZE, VIEW_COUNT, view_axes


@runtime_checkable
class DrawingSurface(Protocol):
    size: int

    def clear(self) -> None:
        ...

    def draw_marker(self, x: int, y: int, radius: int, color: tuple[int, int, int, int]) -> None:
        ...


@runtime_checkable
class RateReadout(Protocol):
    def show_rate(self, rate: int) -> None:
        ...


@dataclass(frozen=True, slots=True)
class View:
    index: int
    axes: tuple[int, int]
    surface: DrawingSurface


@dataclass(frozen=True, slots=True)
class DrawCommand:
    x: int
    y: int
    radius: int
    color: tuple[int, int, int, int]


@dataclass
class MemorySurface:
    """Surface that keeps the draw commands of the current frame."""

    size: int = SURFACE_SIZE
    commands: list[DrawCommand] = field(default_factory=list)
    clears: int = 0

    def clear(self) -> None:
        self.commands.clear()
        self.clears += 1

    def draw_marker(self, x: int, y: int, radius: int, color: tuple[int, int, int, int]) -> None:
        self.commands.append(DrawCommand(int(x), int(y), int(radius), tuple(color)))


@dataclass
class MemoryReadout:
    rates: list[int] = field(default_factory=list)

    @property
    def text(self) -> str:
        return format_rate(self.rates[-1]) if self.rates else ""

    def show_rate(self, rate: int) -> None:
        self.rates.append(int(rate))


def format_rate(rate: int) -> str:
    return f"{int(rate)} fps"


def build_views(surfaces: Sequence[DrawingSurface | None], size: int = SURFACE_SIZE) -> tuple[View, ...]:
    """
    Pair the three surfaces with their axis pairs.

    Raises:
        SurfaceSetupError: a surface is missing, cannot draw, or has the
            wrong size.
    """
    if len(surfaces) != VIEW_COUNT:
        raise SurfaceSetupError(f"expected {VIEW_COUNT} drawing surfaces, got {len(surfaces)}")

    views: list[View] = []
    for idx, surface in enumerate(surfaces):
        if surface is None:
            raise SurfaceSetupError(f"drawing surface {idx} is missing")
        if not isinstance(surface, DrawingSurface):
            raise SurfaceSetupError(
                f"drawing surface {idx} ({type(surface).__name__}) needs size, clear() and draw_marker()"
            )
        if int(surface.size) != int(size):
            raise SurfaceSetupError(f"drawing surface {idx} is {surface.size}px, expected {size}px")
        views.append(View(index=idx, axes=view_axes(idx), surface=surface))
    return tuple(views)


def check_readout(readout: RateReadout | None) -> RateReadout:
    if readout is None:
        raise SurfaceSetupError("rate readout is missing")
    if not isinstance(readout, RateReadout):
        raise SurfaceSetupError(f"rate readout ({type(readout).__name__}) needs show_rate()")
    return readout
