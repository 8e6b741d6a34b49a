"""
Exception types shared by the viewer, the frame driver and the bundled engine.
"""

from __future__ import annotations


class PlanetViewsError(Exception):
    """Base class for every error raised by planet_views."""


class SurfaceSetupError(PlanetViewsError):
    """A drawing surface or the rate readout is missing or unusable at startup."""


class EngineError(PlanetViewsError):
    """The planetary system engine reached an invalid state."""


class EngineFailure(PlanetViewsError):
    """Raised by the frame driver when the engine fails during a frame.

    The original exception is kept as ``__cause__``.
    """

    def __init__(self, frame_index: int, message: str) -> None:
        super().__init__(f"engine failed on frame {frame_index}: {message}")
        self.frame_index = frame_index
