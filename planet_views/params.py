from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

SECONDS_PER_DAY = 60.0 * 60.0 * 24.0


@dataclass(slots=True)
class ViewerParams:
    surface_size: int = 640
    view_gap: int = 8
    readout_height: int = 28
    background: tuple[int, int, int] = (11, 16, 32)
    surface_background: tuple[int, int, int] = (0, 0, 0)

    origin_color: tuple[int, int, int] = (255, 255, 255)
    origin_radius: int = 2
    base_marker_radius: int = 8
    min_marker_radius: int = 1  # 0 keeps zero-weight planets invisible

    scheduling: str = "refresh"  # refresh | interval
    interval_s: float = 0.1

    planet_count: int = 128
    unit_time: float = SECONDS_PER_DAY
    softening: float = 0.0  # km
    seed: int | None = None
    strict_engine: bool = True

    mac_compat: bool = True  # pyglet options for macOS (no MSAA context, shadow window off)
    print_fps: bool = False
    title: str = "Planetary system - YZ / ZX / XY"

    def clamp(self) -> "ViewerParams":
        self.surface_size = max(64, min(4096, int(self.surface_size)))
        self.view_gap = max(0, min(128, int(self.view_gap)))
        self.readout_height = max(12, min(128, int(self.readout_height)))
        self.background = _clamp_rgb(self.background)
        self.surface_background = _clamp_rgb(self.surface_background)
        self.origin_color = _clamp_rgb(self.origin_color)
        self.origin_radius = max(1, min(32, int(self.origin_radius)))
        self.base_marker_radius = max(1, min(128, int(self.base_marker_radius)))
        self.min_marker_radius = max(0, min(self.base_marker_radius, int(self.min_marker_radius)))
        self.scheduling = str(self.scheduling or "refresh").strip().lower()
        if self.scheduling in {"vsync", "raf"}:
            self.scheduling = "refresh"
        if self.scheduling not in {"refresh", "interval"}:
            self.scheduling = "refresh"
        self.interval_s = min(5.0, max(0.001, float(self.interval_s)))
        self.planet_count = max(0, min(4096, int(self.planet_count)))
        self.unit_time = max(1e-6, float(self.unit_time))
        self.softening = max(0.0, float(self.softening))
        self.seed = None if self.seed is None else int(self.seed)
        self.strict_engine = bool(self.strict_engine)
        self.mac_compat = bool(self.mac_compat)
        self.print_fps = bool(self.print_fps)
        self.title = str(self.title or "Planetary system")
        return self

    def validate(self) -> list[str]:
        warnings: list[str] = []

        if self.scheduling == "refresh" and abs(float(self.interval_s) - 0.1) > 1e-9:
            warnings.append("interval_s only applies when scheduling=interval.")
        if self.planet_count == 0:
            warnings.append("planet_count=0: only the origin markers will be drawn.")
        elif self.planet_count > 512:
            warnings.append("planet_count > 512: the pairwise gravity step is O(N^2) and will lower the frame rate.")
        if self.min_marker_radius == 0:
            warnings.append("min_marker_radius=0: zero-weight planets are not drawn.")
        if self.origin_radius >= self.base_marker_radius:
            warnings.append("origin_radius >= base_marker_radius: the origin dot can hide the heaviest planet.")

        return warnings

    @property
    def window_size(self) -> tuple[int, int]:
        width = 3 * self.surface_size + 4 * self.view_gap
        height = self.surface_size + 2 * self.view_gap + self.readout_height
        return width, height

    @classmethod
    def load(cls, path: str | Path) -> "ViewerParams":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("The parameter file must contain a JSON object.")
        # Older configs named the surface side `canvas_size`.
        if "canvas_size" in data and "surface_size" not in data:
            data["surface_size"] = data["canvas_size"]
        for key in ("background", "surface_background", "origin_color"):
            if isinstance(data.get(key), list):
                data[key] = tuple(data[key])
        filtered: dict[str, Any] = {k: v for k, v in data.items() if k in cls.__annotations__}
        return cls(**filtered).clamp()

    def save(self, path: str | Path) -> None:
        data = asdict(self)
        Path(path).write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def _clamp_rgb(value: Any) -> tuple[int, int, int]:
    try:
        r, g, b = value
    except (TypeError, ValueError):
        return (0, 0, 0)
    return tuple(max(0, min(255, int(c))) for c in (r, g, b))  # type: ignore[return-value]
