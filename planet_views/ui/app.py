from __future__ import annotations

import sys
from pathlib import Path

from planet_views.core.planetary_system import PlanetarySystem, planetary_system_radius
from planet_views.params import ViewerParams
from planet_views.rendering.frame_driver import FrameDriver
from planet_views.rendering.pyglet_host import PygletHost


class PlanetViewsApp:
    def __init__(self, params: ViewerParams | None = None, params_path: str | Path | None = None) -> None:
        self.params_path = Path(params_path) if params_path else Path(__file__).resolve().parent / "params.json"
        self.params = params if params is not None else self._load_initial_params()
        for warning in self.params.validate():
            print(f"[params] {warning}", file=sys.stderr)

        self.engine = PlanetarySystem.from_params(self.params)
        self.radius = planetary_system_radius()
        self.host = PygletHost(self.params)
        self.driver = FrameDriver(
            self.engine,
            self.host.surfaces,
            self.host.readout,
            self.radius,
            size=self.params.surface_size,
            base_marker_radius=self.params.base_marker_radius,
            min_marker_radius=self.params.min_marker_radius,
            origin_radius=self.params.origin_radius,
            origin_color=self.params.origin_color,
            on_rate=self._print_rate if self.params.print_fps else None,
        )

    def _load_initial_params(self) -> ViewerParams:
        if self.params_path.exists():
            return ViewerParams.load(self.params_path)
        return ViewerParams().clamp()

    def _print_rate(self, rate: int) -> None:
        print(f"[fps] {rate}")

    def run(self) -> None:
        print(
            f"[viewer] {self.params.planet_count} planets, radius {self.radius:.6g} km, "
            f"scheduling={self.params.scheduling}"
        )
        self.driver.start(self.host.scheduler)
        try:
            self.host.run()
        finally:
            self.driver.stop()
            self.host.close()
