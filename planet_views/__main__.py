"""
Planetary system viewer.

Usage:
    python -m planet_views [--params params.json] [--scheduling interval --interval 0.1]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from planet_views.errors import EngineFailure, SurfaceSetupError
from planet_views.params import ViewerParams


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="planet-views",
        description="Show a planetary system on three orthogonal views (YZ, ZX, XY).",
    )
    parser.add_argument("--params", type=Path, default=None, help="JSON parameter file")
    parser.add_argument("--scheduling", choices=["refresh", "interval"], default=None,
                        help="redraw on every display refresh or on a fixed timer")
    parser.add_argument("--interval", type=float, default=None, help="timer delay in seconds (interval scheduling)")
    parser.add_argument("--planets", type=int, default=None, help="number of planets")
    parser.add_argument("--seed", type=int, default=None, help="random seed for new planets")
    parser.add_argument("--surface-size", type=int, default=None, help="side of each view in pixels")
    parser.add_argument("--min-marker-radius", type=int, default=None,
                        help="smallest marker radius; 0 hides zero-weight planets")
    parser.add_argument("--print-fps", action="store_true", help="also print the frame rate every second")
    return parser


def params_from_args(args: argparse.Namespace) -> ViewerParams:
    default_path = Path(__file__).resolve().parent / "ui" / "params.json"
    if args.params is not None:
        params = ViewerParams.load(args.params)
    elif default_path.exists():
        params = ViewerParams.load(default_path)
    else:
        params = ViewerParams()

    overrides = {
        "scheduling": args.scheduling,
        "interval_s": args.interval,
        "planet_count": args.planets,
        "seed": args.seed,
        "surface_size": args.surface_size,
        "min_marker_radius": args.min_marker_radius,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(params, key, value)
    if args.print_fps:
        params.print_fps = True
    return params.clamp()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        params = params_from_args(args)
    except (OSError, ValueError) as exc:
        print(f"[params] {exc}", file=sys.stderr)
        return 2

    from planet_views.ui.app import PlanetViewsApp

    try:
        app = PlanetViewsApp(params)
    except (SurfaceSetupError, RuntimeError) as exc:
        print(f"[viewer] setup failed: {exc}", file=sys.stderr)
        return 1

    try:
        app.run()
    except EngineFailure as exc:
        print(f"[engine] {exc}", file=sys.stderr)
        return 1
    except (SurfaceSetupError, RuntimeError) as exc:
        print(f"[viewer] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
