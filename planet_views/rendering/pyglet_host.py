from __future__ import annotations

from typing import Any, Callable

from planet_views.errors import SurfaceSetupError
from planet_views.params import ViewerParams
from planet_views.rendering.projector import VIEW_COUNT, view_label
from planet_views.rendering.surfaces import format_rate


def _import_pyglet() -> Any:
    try:
        import pyglet  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("Missing dependency: install pyglet (pip install pyglet).") from e
    return pyglet


class PygletViewSurface:
    """
    One square view inside the host window.

    Coordinates are logical surface pixels with y growing downward; markers
    whose centre falls outside the surface are not drawn so they never
    bleed into the neighbouring view.
    """

    def __init__(
        self,
        batch: Any,
        group: Any,
        origin_x: int,
        origin_y: int,
        size: int,
        background: tuple[int, int, int],
    ) -> None:
        pyglet = _import_pyglet()
        self.size = int(size)
        self.origin_x = int(origin_x)
        self.origin_y = int(origin_y)
        self._batch = batch
        self._group = group
        self._shapes: list[Any] = []
        self._background = pyglet.shapes.Rectangle(
            self.origin_x,
            self.origin_y,
            self.size,
            self.size,
            color=background,
            batch=batch,
        )

    def clear(self) -> None:
        for shape in self._shapes:
            shape.delete()
        self._shapes.clear()

    def draw_marker(self, x: int, y: int, radius: int, color: tuple[int, int, int, int]) -> None:
        if radius <= 0:
            return
        if not (0 <= x <= self.size and 0 <= y <= self.size):
            return
        pyglet = _import_pyglet()
        self._shapes.append(
            pyglet.shapes.Circle(
                self.origin_x + x,
                self.origin_y + (self.size - y),
                radius,
                color=color,
                batch=self._batch,
                group=self._group,
            )
        )


class PygletRateReadout:
    def __init__(self, label: Any) -> None:
        self.label = label

    def show_rate(self, rate: int) -> None:
        self.label.text = format_rate(rate)


class RefreshScheduler:
    """Runs the armed callback on the next ``on_draw`` of the window.

    With vsync on and the app loop unthrottled, ``on_draw`` fires once per
    display refresh.
    """

    app_interval = 0.0

    def __init__(self) -> None:
        self._pending: Callable[[], None] | None = None

    def arm(self, callback: Callable[[], None]) -> None:
        self._pending = callback

    def cancel(self) -> None:
        self._pending = None

    def on_refresh(self) -> None:
        callback, self._pending = self._pending, None
        if callback is not None:
            callback()


class IntervalScheduler:
    """Fixed-delay fallback for hosts without refresh callbacks."""

    app_interval = 1.0 / 60.0

    def __init__(self, interval: float) -> None:
        self.interval = max(0.001, float(interval))
        self._pending: Callable[[], None] | None = None

    def arm(self, callback: Callable[[], None]) -> None:
        pyglet = _import_pyglet()
        self._pending = callback
        pyglet.clock.schedule_once(self._fire, self.interval)

    def cancel(self) -> None:
        pyglet = _import_pyglet()
        self._pending = None
        pyglet.clock.unschedule(self._fire)

    def on_refresh(self) -> None:
        pass

    def _fire(self, dt: float) -> None:  # noqa: ARG002
        callback, self._pending = self._pending, None
        if callback is not None:
            callback()


class PygletHost:
    """Window holding the three views side by side and the fps readout."""

    def __init__(self, params: ViewerParams) -> None:
        pyglet = _import_pyglet()

        if params.mac_compat:
            # Some macOS drivers behave better without the shadow window; also force vsync to avoid busy-looping.
            pyglet.options["shadow_window"] = False
            pyglet.options["vsync"] = True

        self.params = params
        width, height = params.window_size
        try:
            # Importing gl opens the display (shadow window).
            from pyglet import gl  # type: ignore

            self.window = self._create_window(pyglet, gl, width, height, params.title, params.mac_compat)
        except pyglet.window.WindowException as exc:
            raise SurfaceSetupError(f"cannot open the viewer window: {exc}") from exc

        self.batch = pyglet.graphics.Batch()
        markers = pyglet.graphics.Group(order=1)
        labels = pyglet.graphics.Group(order=2)

        size = params.surface_size
        gap = params.view_gap
        self.surfaces: list[PygletViewSurface] = []
        self._view_labels: list[Any] = []
        for idx in range(VIEW_COUNT):
            ox = gap + idx * (size + gap)
            oy = gap + params.readout_height
            self.surfaces.append(PygletViewSurface(self.batch, markers, ox, oy, size, params.surface_background))
            self._view_labels.append(
                pyglet.text.Label(
                    view_label(idx),
                    x=ox + 6,
                    y=oy + size - 6,
                    anchor_x="left",
                    anchor_y="top",
                    font_size=11,
                    color=(170, 190, 210, 220),
                    batch=self.batch,
                    group=labels,
                )
            )

        self.readout = PygletRateReadout(
            pyglet.text.Label(
                "",
                x=width - gap,
                y=gap,
                anchor_x="right",
                anchor_y="bottom",
                font_size=13,
                color=(235, 240, 255, 245),
                batch=self.batch,
                group=labels,
            )
        )

        self.scheduler: RefreshScheduler | IntervalScheduler
        if params.scheduling == "interval":
            self.scheduler = IntervalScheduler(params.interval_s)
        else:
            self.scheduler = RefreshScheduler()

        bg_r, bg_g, bg_b = params.background
        gl.glClearColor(bg_r / 255.0, bg_g / 255.0, bg_b / 255.0, 1.0)

        @self.window.event
        def on_draw() -> None:
            self.scheduler.on_refresh()
            self.window.clear()
            self.batch.draw()

        @self.window.event
        def on_close() -> None:
            self.scheduler.cancel()
            pyglet.app.exit()

    @staticmethod
    def _create_window(pyglet: Any, gl: Any, width: int, height: int, title: str, mac_compat: bool) -> Any:
        config_candidates: list[dict[str, Any]] = []
        if mac_compat:
            config_candidates.append({"double_buffer": True, "sample_buffers": 0, "samples": 0})
        config_candidates.extend(
            [
                {"double_buffer": True, "sample_buffers": 1, "samples": 4},
                {"double_buffer": True},
            ]
        )
        for cfg_kwargs in config_candidates:
            try:
                config = gl.Config(**cfg_kwargs)
                return pyglet.window.Window(
                    width=width,
                    height=height,
                    caption=title,
                    config=config,
                    resizable=False,
                    vsync=True,
                )
            except pyglet.window.NoSuchConfigException:
                continue
        return pyglet.window.Window(width=width, height=height, caption=title, resizable=False, vsync=True)

    def run(self) -> None:
        pyglet = _import_pyglet()
        pyglet.app.run(self.scheduler.app_interval)

    def close(self) -> None:
        pyglet = _import_pyglet()
        self.scheduler.cancel()
        if not self.window.has_exit:
            self.window.close()
        pyglet.app.exit()
