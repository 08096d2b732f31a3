import pathlib
import sys
import tempfile
import unittest

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from trackbuddy.config import AxisMapping, TelemetryConfig, config_from_mapping, load_config  # noqa: E402


class TelemetryConfigTest(unittest.TestCase):
    def test_defaults(self):
        cfg = TelemetryConfig()
        self.assertEqual(cfg.sensor_rate_hz, 100.0)
        self.assertEqual(cfg.render_rate_hz, 15.0)
        self.assertEqual(cfg.history_capacity, 30)
        self.assertAlmostEqual(cfg.render_tick_period, 1.0 / 15.0)
        self.assertAlmostEqual(cfg.density_ratio, 100.0 / 15.0)
        self.assertEqual(cfg.axes, AxisMapping())

    def test_sanitized_clamps_rates(self):
        cfg = TelemetryConfig(sensor_rate_hz=50.0, render_rate_hz=120.0, retention_seconds=-1.0).sanitized()
        self.assertEqual(cfg.render_rate_hz, 50.0)
        self.assertEqual(cfg.retention_seconds, 0.1)
        self.assertEqual(cfg.history_capacity, 5)

    def test_mapping_flattens_telemetry_block_and_ignores_unknown_keys(self):
        cfg = config_from_mapping(
            {
                "telemetry": {"render_rate_hz": 10, "retention_seconds": 3},
                "camera": {"fps": 30},
            }
        )
        self.assertEqual(cfg.render_rate_hz, 10.0)
        self.assertEqual(cfg.history_capacity, 30)

    def test_mapping_parses_axes_block(self):
        cfg = config_from_mapping(
            {"axes": {"lateral": "y", "longitudinal": "x", "longitudinal_sign": -1}}
        )
        self.assertEqual(cfg.axes, AxisMapping(lateral_axis="y", longitudinal_axis="x", longitudinal_sign=-1))

    def test_empty_mapping_gives_defaults(self):
        self.assertEqual(config_from_mapping(None), TelemetryConfig())

    def test_load_config_missing_file_gives_defaults(self):
        self.assertEqual(load_config("/nonexistent/trackbuddy.yaml"), TelemetryConfig())
        self.assertEqual(load_config(None), TelemetryConfig())

    def test_load_config_reads_yaml(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "telemetry.yaml"
            path.write_text(
                "telemetry:\n"
                "  sensor_rate_hz: 100\n"
                "  render_rate_hz: 10\n"
                "  retention_seconds: 1\n"
                "  axes:\n"
                "    longitudinal_sign: -1\n",
                encoding="utf-8",
            )
            cfg = load_config(path)
        self.assertEqual(cfg.history_capacity, 10)
        self.assertEqual(cfg.axes.longitudinal_sign, -1)
        self.assertEqual(cfg.axes.lateral_axis, "x")

    def test_load_config_rejects_non_mapping(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "bad.yaml"
            path.write_text("- 1\n- 2\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_config(path)

    def test_round_trip_through_mapping(self):
        cfg = TelemetryConfig(render_rate_hz=12.0, axes=AxisMapping(lateral_sign=-1)).sanitized()
        self.assertEqual(config_from_mapping(cfg.to_mapping()), cfg)


class AxisMappingTest(unittest.TestCase):
    def test_invalid_values_fall_back_to_defaults(self):
        axes = AxisMapping.from_mapping({"lateral": "w", "lateral_sign": 0, "longitudinal_sign": "abc"})
        self.assertEqual(axes, AxisMapping())

    def test_sign_is_normalized(self):
        axes = AxisMapping.from_mapping({"lateral_sign": -2.5, "longitudinal_sign": 7})
        self.assertEqual(axes.lateral_sign, -1)
        self.assertEqual(axes.longitudinal_sign, 1)

    def test_same_axis_twice_is_rejected(self):
        with self.assertRaises(ValueError):
            AxisMapping(lateral_axis="z", longitudinal_axis="z")


if __name__ == "__main__":
    unittest.main()
