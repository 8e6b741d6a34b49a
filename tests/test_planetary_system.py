import math
import unittest

import numpy as np

from planet_views.core.body import Body, PlanetarySystemEngine
from planet_views.core.planetary_system import (
    GRAVITY_CONSTANT,
    MAX_PLANET_DENSITY,
    NEW_PLANET_LARGEST_RADIUS,
    PLANETARY_SYSTEM_RADIUS,
    PLANETS_NUM,
    STAR_WEIGHT,
    PlanetarySystem,
    planetary_system_radius,
)
from planet_views.errors import EngineError
from planet_views.params import ViewerParams


class TestPlanetarySystem(unittest.TestCase):
    def test_satisfies_engine_protocol(self) -> None:
        self.assertIsInstance(PlanetarySystem(), PlanetarySystemEngine)

    def test_radius(self) -> None:
        self.assertEqual(planetary_system_radius(), PLANETARY_SYSTEM_RADIUS)

    def test_empty_until_first_tick(self) -> None:
        system = PlanetarySystem(seed=1)
        self.assertEqual(system.get_planets(), ())
        self.assertEqual(system.get_planets_num(), 0)

        system.tick()
        self.assertEqual(system.get_planets_num(), PLANETS_NUM)
        self.assertEqual(len(system.get_planets_positions()), 3 * PLANETS_NUM)

    def test_new_planets_inside_bounds(self) -> None:
        system = PlanetarySystem(planet_count=64, seed=3, unit_time=1e-9)
        system.tick()
        for body in system.get_planets():
            self.assertIsInstance(body, Body)
            for v in body.position:
                self.assertLessEqual(abs(v), PLANETARY_SYSTEM_RADIUS * 1.0001)
            self.assertGreaterEqual(body.weight, 0.0)

    def test_new_planet_weights_follow_size_and_density(self) -> None:
        system = PlanetarySystem(planet_count=256, seed=5)
        system.tick()
        heaviest = 4.0 / 3.0 * math.pi * NEW_PLANET_LARGEST_RADIUS**3 * MAX_PLANET_DENSITY
        self.assertEqual(system.weights.shape, (256,))
        self.assertTrue(np.all(system.weights >= 0.0))
        self.assertTrue(np.all(system.weights <= heaviest))
        self.assertFalse(hasattr(system, "radii"))

    def test_seed_is_reproducible(self) -> None:
        a = PlanetarySystem(planet_count=8, seed=7)
        b = PlanetarySystem(planet_count=8, seed=7)
        for _ in range(3):
            a.tick()
            b.tick()
        self.assertEqual(a.get_planets(), b.get_planets())

    def test_snapshot_is_a_copy(self) -> None:
        system = PlanetarySystem(planet_count=4, seed=2)
        system.tick()
        before = system.get_planets()
        system.tick()
        after = system.get_planets()
        self.assertNotEqual(before, after)
        with self.assertRaises(AttributeError):
            before[0].x = 0.0  # type: ignore[misc]

    def test_star_pulls_towards_origin(self) -> None:
        system = PlanetarySystem(planet_count=1, seed=1, unit_time=1.0)
        system.tick()
        system.positions[:] = [[1.0e8, 0.0, 0.0]]
        system.speeds[:] = 0.0
        system.tick()
        expected = -GRAVITY_CONSTANT * STAR_WEIGHT / 1.0e16
        self.assertAlmostEqual(system.speeds[0, 0] / expected, 1.0, places=9)
        self.assertEqual(system.speeds[0, 1], 0.0)
        self.assertEqual(system.speeds[0, 2], 0.0)

    def test_mutual_attraction_is_symmetric(self) -> None:
        system = PlanetarySystem(planet_count=2, seed=1)
        system.tick()
        system.positions[:] = [[-1.0e6, 0.0, 0.0], [1.0e6, 0.0, 0.0]]
        system.weights[:] = [1.0e20, 1.0e20]
        accel = system._mutual_acceleration()
        self.assertGreater(accel[0, 0], 0.0)
        self.assertLess(accel[1, 0], 0.0)
        self.assertTrue(np.allclose(accel[0], -accel[1]))
        expected = GRAVITY_CONSTANT * 1.0e20 / (2.0e6) ** 2
        self.assertTrue(math.isclose(accel[0, 0], expected, rel_tol=1e-12))

    def test_validate_state_flags_nan(self) -> None:
        system = PlanetarySystem(planet_count=2, seed=1)
        system.tick()
        self.assertEqual(system.validate_state(), [])

        system.positions[0, 0] = float("nan")
        issues = system.validate_state()
        self.assertTrue(any("non-finite position" in issue for issue in issues))

    def test_strict_tick_raises(self) -> None:
        system = PlanetarySystem(planet_count=2, seed=1)
        system.tick()
        system.speeds[1, 2] = float("inf")
        with self.assertRaises(EngineError):
            system.tick()

    def test_lenient_tick(self) -> None:
        system = PlanetarySystem(planet_count=2, seed=1, strict=False)
        system.tick()
        system.speeds[1, 2] = float("inf")
        system.tick()
        self.assertTrue(system.validate_state())

    def test_zero_planets(self) -> None:
        system = PlanetarySystem(planet_count=0)
        system.tick()
        self.assertEqual(system.get_planets(), ())

    def test_from_params(self) -> None:
        params = ViewerParams(planet_count=5, seed=9, strict_engine=False, softening=10.0).clamp()
        system = PlanetarySystem.from_params(params)
        self.assertEqual(system.planet_count, 5)
        self.assertFalse(system.strict)
        self.assertEqual(system.softening, 10.0)
