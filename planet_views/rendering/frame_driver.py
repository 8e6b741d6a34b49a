"""
Frame driver: one simulation step and one full redraw of the three views
per scheduling tick, plus the frames-per-second readout.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from planet_views.core.body import Body, PlanetarySystemEngine
from planet_views.errors import EngineError, EngineFailure
from planet_views.rendering import projector
from planet_views.rendering.frame_counter import FrameCounter
from planet_views.rendering.surfaces import DrawingSurface, RateReadout, View, build_views, check_readout


class Scheduler(Protocol):
    def arm(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` once, on the next tick."""

    def cancel(self) -> None:
        ...


@dataclass(frozen=True, slots=True)
class FrameReport:
    index: int
    body_count: int
    markers_drawn: int
    published_rate: int | None


class FrameDriver:
    def __init__(
        self,
        engine: PlanetarySystemEngine,
        surfaces: Sequence[DrawingSurface],
        readout: RateReadout,
        radius: float,
        *,
        size: int = projector.SURFACE_SIZE,
        base_marker_radius: int = projector.BASE_MARKER_RADIUS,
        min_marker_radius: int = projector.MIN_MARKER_RADIUS,
        origin_radius: int = 2,
        origin_color: tuple[int, int, int] = (255, 255, 255),
        clock: Callable[[], float] = time.monotonic,
        on_rate: Callable[[int], None] | None = None,
    ) -> None:
        radius = float(radius)
        if not radius > 0.0:
            raise ValueError(f"system radius must be > 0, got {radius}")
        self.engine = engine
        self.views: tuple[View, ...] = build_views(surfaces, size)
        self.readout = check_readout(readout)
        self.radius = radius
        self.size = int(size)
        self.base_marker_radius = int(base_marker_radius)
        self.min_marker_radius = int(min_marker_radius)
        self.origin_radius = int(origin_radius)
        self.origin_color = (*origin_color[:3], 255)
        self.clock = clock
        self.on_rate = on_rate
        self.counter = FrameCounter()
        self.frame_index = 0
        self.failure: BaseException | None = None
        self._scheduler: Scheduler | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    # -------------------------------------------------------------------------
    # Loop control
    # -------------------------------------------------------------------------

    def start(self, scheduler: Scheduler) -> None:
        if self._running:
            return
        self._scheduler = scheduler
        self._running = True
        self.failure = None
        scheduler.arm(self._on_tick)

    def stop(self) -> None:
        self._running = False
        if self._scheduler is not None:
            self._scheduler.cancel()

    def _on_tick(self) -> None:
        if not self._running:
            return
        try:
            self.render_frame()
        except BaseException:
            self.stop()
            raise
        if self._running and self._scheduler is not None:
            self._scheduler.arm(self._on_tick)

    # -------------------------------------------------------------------------
    # One frame
    # -------------------------------------------------------------------------

    def render_frame(self, now: float | None = None) -> FrameReport:
        """
        Advance the engine once and redraw every view.

        Raises:
            EngineFailure: ``tick()`` or ``get_planets()`` raised, or a planet
                is not finite; the loop is stopped and the original
                exception is chained.
        """
        snapshot = self._take_snapshot()

        heaviest = projector.max_weight(snapshot)
        drawn = 0
        for view in self.views:
            drawn += self._draw_view(view, snapshot, heaviest)

        if now is None:
            now = self.clock()
        published = self.counter.record(now)
        if published is not None:
            self.readout.show_rate(published)
            if self.on_rate is not None:
                self.on_rate(published)

        report = FrameReport(self.frame_index, len(snapshot), drawn, published)
        self.frame_index += 1
        return report

    def _take_snapshot(self) -> tuple[Body, ...]:
        try:
            self.engine.tick()
            snapshot = tuple(self.engine.get_planets())
            _check_finite(snapshot)
            return snapshot
        except Exception as exc:
            self.failure = exc
            self.stop()
            raise EngineFailure(self.frame_index, str(exc) or type(exc).__name__) from exc

    def _draw_view(self, view: View, snapshot: tuple[Body, ...], heaviest: float) -> int:
        surface = view.surface
        surface.clear()
        center = self.size // 2
        surface.draw_marker(center, center, self.origin_radius, self.origin_color)
        if not snapshot:
            return 0

        markers = projector.project_snapshot(
            snapshot,
            self.radius,
            view.axes,
            size=self.size,
            base_radius=self.base_marker_radius,
            min_radius=self.min_marker_radius,
            heaviest=heaviest,
        )
        for marker in markers:
            surface.draw_marker(marker.x, marker.y, marker.radius, marker.color)
        return len(markers)


def _check_finite(snapshot: tuple[Body, ...]) -> None:
    for idx, body in enumerate(snapshot):
        if not all(math.isfinite(v) for v in (body.x, body.y, body.z, body.weight)):
            raise EngineError(f"planet {idx} is not finite: position={body.position}, weight={body.weight}")
