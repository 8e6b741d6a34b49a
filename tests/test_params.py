import json
import tempfile
import unittest
from pathlib import Path

from planet_views.params import ViewerParams


class TestParams(unittest.TestCase):
    def test_clamp_basic_bounds(self) -> None:
        params = ViewerParams(
            surface_size=10,
            origin_radius=0,
            base_marker_radius=4,
            min_marker_radius=9,
            scheduling="weird",
            interval_s=0.0,
            planet_count=-3,
            background=(300, -1, 20),
        ).clamp()

        self.assertEqual(params.surface_size, 64)
        self.assertEqual(params.origin_radius, 1)
        self.assertEqual(params.min_marker_radius, 4)
        self.assertEqual(params.scheduling, "refresh")
        self.assertAlmostEqual(params.interval_s, 0.001, places=6)
        self.assertEqual(params.planet_count, 0)
        self.assertEqual(params.background, (255, 0, 20))

    def test_scheduling_aliases(self) -> None:
        self.assertEqual(ViewerParams(scheduling="VSYNC").clamp().scheduling, "refresh")
        self.assertEqual(ViewerParams(scheduling=" Interval ").clamp().scheduling, "interval")

    def test_window_size(self) -> None:
        params = ViewerParams(surface_size=640, view_gap=8, readout_height=28).clamp()
        self.assertEqual(params.window_size, (3 * 640 + 32, 640 + 16 + 28))

    def test_validate_warnings(self) -> None:
        params = ViewerParams(
            scheduling="refresh",
            interval_s=0.5,
            planet_count=0,
            min_marker_radius=0,
            origin_radius=8,
            base_marker_radius=8,
        ).clamp()

        warnings = params.validate()
        self.assertTrue(any("scheduling=interval" in w for w in warnings))
        self.assertTrue(any("planet_count=0" in w for w in warnings))
        self.assertTrue(any("zero-weight" in w for w in warnings))
        self.assertTrue(any("origin_radius" in w for w in warnings))

    def test_defaults_have_no_warnings(self) -> None:
        self.assertEqual(ViewerParams().clamp().validate(), [])

    def test_save_load_roundtrip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "params.json"
            params = ViewerParams(planet_count=12, seed=4, scheduling="interval", interval_s=0.25).clamp()
            params.save(path)
            loaded = ViewerParams.load(path)
        self.assertEqual(loaded, params)

    def test_load_ignores_unknown_keys_and_renames_canvas_size(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "params.json"
            path.write_text(json.dumps({"canvas_size": 320, "unknown": 1}), encoding="utf-8")
            loaded = ViewerParams.load(path)
        self.assertEqual(loaded.surface_size, 320)

    def test_load_rejects_non_object(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "params.json"
            path.write_text("[1, 2, 3]", encoding="utf-8")
            with self.assertRaises(ValueError):
                ViewerParams.load(path)
