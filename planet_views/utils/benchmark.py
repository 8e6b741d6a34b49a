#!/usr/bin/env python3
"""
Headless frame benchmark.

Times the planetary system step on its own and full three-view frames drawn
into in-memory surfaces, for several planet counts.

Usage:
    python -m planet_views.utils.benchmark [--planets 32 128 512] [--frames 50]
"""

from __future__ import annotations

import argparse
import sys
import time

from planet_views.core.planetary_system import PlanetarySystem, planetary_system_radius
from planet_views.rendering.frame_driver import FrameDriver
from planet_views.rendering.surfaces import MemoryReadout, MemorySurface


def _mean_std_ms(times: list[float]) -> tuple[float, float]:
    mean = sum(times) / len(times)
    std = (sum((t - mean) ** 2 for t in times) / len(times)) ** 0.5
    return mean * 1000, std * 1000


def benchmark_tick(planets: int, frames: int, seed: int = 42) -> tuple[float, float]:
    """Benchmark the engine step alone."""
    engine = PlanetarySystem(planet_count=planets, seed=seed, strict=False)
    engine.tick()

    times = []
    for _ in range(frames):
        t0 = time.perf_counter()
        engine.tick()
        times.append(time.perf_counter() - t0)
    return _mean_std_ms(times)


def benchmark_frame(planets: int, frames: int, seed: int = 42) -> tuple[float, float]:
    """Benchmark step + snapshot + projection of the three views."""
    engine = PlanetarySystem(planet_count=planets, seed=seed, strict=False)
    surfaces = [MemorySurface() for _ in range(3)]
    driver = FrameDriver(engine, surfaces, MemoryReadout(), planetary_system_radius())

    times = []
    for i in range(frames):
        t0 = time.perf_counter()
        driver.render_frame(now=float(i))
        times.append(time.perf_counter() - t0)
    return _mean_std_ms(times)


def run_benchmark(planet_counts: list[int], frames: int) -> dict[int, dict[str, float]]:
    results: dict[int, dict[str, float]] = {}
    print(f"\n{'='*60}")
    print(f"[bench] {frames} frames per run")
    print(f"{'='*60}")
    print(f"{'planets':>8} | {'tick (ms)':>16} | {'frame (ms)':>16} | {'max fps':>8}")
    print("-" * 60)
    for n in planet_counts:
        tick_mean, tick_std = benchmark_tick(n, frames)
        frame_mean, frame_std = benchmark_frame(n, frames)
        max_fps = 1000.0 / frame_mean if frame_mean > 0 else float("inf")
        results[n] = {"tick_ms": tick_mean, "frame_ms": frame_mean, "max_fps": max_fps}
        print(
            f"{n:>8} | {tick_mean:>8.3f} ± {tick_std:<5.2f} | {frame_mean:>8.3f} ± {frame_std:<5.2f} | {max_fps:>8.1f}"
        )
    return results


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark the planetary system viewer without a window")
    parser.add_argument("--planets", "-n", type=int, nargs="+", default=[32, 128, 512], help="planet counts")
    parser.add_argument("--frames", "-f", type=int, default=50, help="frames per run")
    args = parser.parse_args()

    if args.frames < 1 or any(n < 0 for n in args.planets):
        print("[bench] frames must be >= 1 and planet counts >= 0", file=sys.stderr)
        return 2
    run_benchmark(args.planets, args.frames)
    return 0


if __name__ == "__main__":
    sys.exit(main())
