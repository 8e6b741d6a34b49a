"""
Orthographic projection of planets onto the three axis-aligned views.

Every function here is pure: positions and weights in, pixel coordinates,
marker sizes and colours out.
"""

from __future__ import annotations

import bisect
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from planet_views.core.body import Body


SURFACE_SIZE = 640
BASE_MARKER_RADIUS = 8
MIN_MARKER_RADIUS = 1
VIEW_COUNT = 3
AXIS_NAMES = ("x", "y", "z")

# Light planets are cold and dim, heavy ones warm and bright.
WEIGHT_GRADIENT_STOPS = [
    (0.0, (40, 60, 120)),
    (0.35, (80, 140, 230)),
    (0.7, (255, 190, 110)),
    (1.0, (255, 245, 220)),
]


@dataclass(frozen=True, slots=True)
class Marker:
    x: int
    y: int
    radius: int
    color: tuple[int, int, int, int]


# =============================================================================
# Geometry
# =============================================================================

def view_axes(view_index: int) -> tuple[int, int]:
    """
    Axis pair drawn by a view.

    View ``i`` plots axes ``(i + 1) % 3`` and ``(i + 2) % 3`` and leaves out
    axis ``i``: view 0 is Y/Z, view 1 is Z/X, view 2 is X/Y.
    """
    if not 0 <= view_index < VIEW_COUNT:
        raise ValueError(f"view_index must be in [0, {VIEW_COUNT}), got {view_index}")
    return (view_index + 1) % VIEW_COUNT, (view_index + 2) % VIEW_COUNT


def view_label(view_index: int) -> str:
    a, b = view_axes(view_index)
    return f"{AXIS_NAMES[a].upper()}{AXIS_NAMES[b].upper()}"


def project_value(value: float, radius: float, size: int = SURFACE_SIZE) -> int:
    """Map ``value`` in ``[-radius, radius]`` to a pixel in ``[0, size]``."""
    if not radius > 0.0:
        raise ValueError(f"radius must be > 0, got {radius}")
    return math.floor((value + radius) * size / (2.0 * radius))


def project(
    position: tuple[float, float, float],
    radius: float,
    axes: tuple[int, int],
    size: int = SURFACE_SIZE,
) -> tuple[int, int]:
    """
    Project a 3D position onto one view.

    Positions outside the system cube land outside ``[0, size)``; clipping
    is left to the drawing surface.

    Args:
        position: (x, y, z)
        radius: System radius, the half side of the visible cube
        axes: Pair of axis indices drawn by the view
        size: Side of the square surface in pixels

    Returns:
        (px, py) pixel coordinates
    """
    a, b = axes
    return project_value(position[a], radius, size), project_value(position[b], radius, size)


# =============================================================================
# Visual encoding
# =============================================================================

def intensity(weight: float, max_weight: float) -> float:
    """Weight relative to the heaviest planet of the snapshot, in [0, 1]."""
    if not max_weight > 0.0:
        return 0.0
    return max(0.0, min(1.0, float(weight) / float(max_weight)))


def marker_radius(
    value: float,
    base_radius: int = BASE_MARKER_RADIUS,
    min_radius: int = MIN_MARKER_RADIUS,
) -> int:
    return max(int(min_radius), int(round(base_radius * value)))


def marker_color(
    value: float,
    stops: list[tuple[float, tuple[int, int, int]]] | None = None,
    alpha: int = 255,
) -> tuple[int, int, int, int]:
    """Marker colour for an intensity; ``stops`` defaults to the weight gradient."""
    stops = WEIGHT_GRADIENT_STOPS if stops is None else stops
    level = max(0.0, min(1.0, float(value)))

    lightest_at, lightest = stops[0]
    heaviest_at, heaviest = stops[-1]
    if level <= lightest_at:
        return (*lightest, alpha)
    if level >= heaviest_at:
        return (*heaviest, alpha)

    upper = bisect.bisect_right([at for at, _ in stops], level)
    (lo_at, lo), (hi_at, hi) = stops[upper - 1], stops[upper]
    share = (level - lo_at) / (hi_at - lo_at)
    return (*(_mix(a, b, share) for a, b in zip(lo, hi)), alpha)


def _mix(a: int, b: int, share: float) -> int:
    return int(round(a + (b - a) * share))


def brightness(color: tuple[int, ...]) -> float:
    """Relative luminance of an RGB(A) colour, 0-255."""
    return 0.2126 * color[0] + 0.7152 * color[1] + 0.0722 * color[2]


# =============================================================================
# Snapshot projection
# =============================================================================

def max_weight(bodies: Iterable["Body"]) -> float:
    return max((float(body.weight) for body in bodies), default=0.0)


def project_snapshot(
    bodies: tuple["Body", ...],
    radius: float,
    axes: tuple[int, int],
    *,
    size: int = SURFACE_SIZE,
    base_radius: int = BASE_MARKER_RADIUS,
    min_radius: int = MIN_MARKER_RADIUS,
    heaviest: float | None = None,
) -> list[Marker]:
    """
    Markers for every planet of a snapshot in one view.

    ``heaviest`` lets the caller compute the maximum weight once per frame
    and share it between the views.
    """
    if not bodies:
        return []
    if heaviest is None:
        heaviest = max_weight(bodies)

    markers: list[Marker] = []
    for body in bodies:
        level = intensity(body.weight, heaviest)
        px, py = project(body.position, radius, axes, size)
        markers.append(Marker(px, py, marker_radius(level, base_radius, min_radius), marker_color(level)))
    return markers
