"""
Planetary system engine.

A star of fixed weight sits at the origin; planets are created at random
inside the system cube and move under the star's gravity and each other's.
Units are kilometres, kilograms and seconds; one tick advances one day.
"""

from __future__ import annotations

import math

import numpy as np

from planet_views.core.body import Body
from planet_views.errors import EngineError

DIMENSION = 3
UNIT_TIME = 60.0 * 60.0 * 24.0  # one day (s)
PLANETS_NUM = 128

PLANETARY_SYSTEM_RADIUS = 227920000.0  # Mars orbital radius (km)
STAR_WEIGHT = 1.989e30  # Sun (kg)
NEW_PLANET_LARGEST_RADIUS = 2439.7  # Mercury radius (km)
MIN_PLANET_DENSITY = 687.0e9 / 2.0  # half of Saturn (kg/km3)
MAX_PLANET_DENSITY = 2.0 * 5.51e12  # twice the Earth (kg/km3)
MAX_PLANET_AXIS_SPEED = 64.93 * 16.0  # 16x Mercury orbital speed (km/s)
GRAVITY_CONSTANT = 6.6743015e-20  # km3 / (s2 kg)


def planetary_system_radius() -> float:
    return PLANETARY_SYSTEM_RADIUS


class PlanetarySystem:
    def __init__(
        self,
        *,
        planet_count: int = PLANETS_NUM,
        unit_time: float = UNIT_TIME,
        softening: float = 0.0,
        seed: int | None = None,
        strict: bool = True,
    ) -> None:
        self.planet_count = max(0, int(planet_count))
        self.unit_time = float(unit_time)
        self.softening = max(0.0, float(softening))
        self.strict = bool(strict)
        self._rng = np.random.default_rng(seed)
        self.positions = np.empty((0, DIMENSION), dtype=np.float64)
        self.speeds = np.empty((0, DIMENSION), dtype=np.float64)
        self.weights = np.empty(0, dtype=np.float64)
        self.ticks = 0

    @classmethod
    def from_params(cls, params) -> "PlanetarySystem":
        return cls(
            planet_count=params.planet_count,
            unit_time=params.unit_time,
            softening=params.softening,
            seed=params.seed,
            strict=params.strict_engine,
        )

    def tick(self) -> None:
        missing = self.planet_count - len(self.weights)
        if missing > 0:
            self._spawn(missing)

        self.positions += self.unit_time * self.speeds
        accel = self._star_acceleration() + self._mutual_acceleration()
        self.speeds += self.unit_time * accel
        self.ticks += 1

        if self.strict:
            issues = self.validate_state()
            if issues:
                raise EngineError(f"tick {self.ticks}: " + "; ".join(issues))

    def get_planets(self) -> tuple[Body, ...]:
        return tuple(
            Body(x=float(x), y=float(y), z=float(z), weight=float(w))
            for (x, y, z), w in zip(self.positions.tolist(), self.weights.tolist())
        )

    def get_planets_positions(self) -> list[float]:
        return self.positions.reshape(-1).tolist()

    def get_planets_num(self) -> int:
        return int(len(self.weights))

    def validate_state(self) -> list[str]:
        issues: list[str] = []
        bad_pos = int(np.count_nonzero(~np.isfinite(self.positions).all(axis=1)))
        bad_speed = int(np.count_nonzero(~np.isfinite(self.speeds).all(axis=1)))
        if bad_pos:
            issues.append(f"{bad_pos} planet(s) with non-finite position")
        if bad_speed:
            issues.append(f"{bad_speed} planet(s) with non-finite speed")
        return issues

    def _spawn(self, count: int) -> None:
        rng = self._rng
        radius = NEW_PLANET_LARGEST_RADIUS * rng.random(count)
        density = MIN_PLANET_DENSITY + (MAX_PLANET_DENSITY - MIN_PLANET_DENSITY) * rng.random(count)
        weight = 4.0 / 3.0 * math.pi * radius**3 * density
        position = rng.uniform(-PLANETARY_SYSTEM_RADIUS, PLANETARY_SYSTEM_RADIUS, size=(count, DIMENSION))
        speed = rng.uniform(-MAX_PLANET_AXIS_SPEED, MAX_PLANET_AXIS_SPEED, size=(count, DIMENSION))

        self.positions = np.concatenate([self.positions, position])
        self.speeds = np.concatenate([self.speeds, speed])
        self.weights = np.concatenate([self.weights, weight])

    def _star_acceleration(self) -> np.ndarray:
        pos = self.positions
        r2 = np.sum(pos * pos, axis=1) + self.softening**2
        with np.errstate(divide="ignore", invalid="ignore"):
            inv_r3 = np.where(r2 > 0.0, r2 ** -1.5, 0.0)
        return -GRAVITY_CONSTANT * STAR_WEIGHT * pos * inv_r3[:, None]

    def _mutual_acceleration(self) -> np.ndarray:
        n = len(self.weights)
        if n < 2:
            return np.zeros((n, DIMENSION), dtype=np.float64)

        pos = self.positions
        d = pos[None, :, :] - pos[:, None, :]  # d[i, j] = p_j - p_i
        r2 = np.sum(d * d, axis=2) + self.softening**2
        np.fill_diagonal(r2, np.inf)
        with np.errstate(divide="ignore", invalid="ignore"):
            inv_r3 = np.where(r2 > 0.0, r2 ** -1.5, 0.0)
        f = GRAVITY_CONSTANT * self.weights[None, :] * inv_r3
        return np.sum(d * f[:, :, None], axis=1)
