from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from dryroom_plot.options import (
    DETAILED_LAYOUT,
    PREVIEW_LAYOUT,
    ChartLayout,
    DrawMode,
    RenderOptions,
    layout_from_mapping,
    load_options,
    options_from_mapping,
)


class OptionsTests(unittest.TestCase):
    def test_defaults_match_drying_room_bounds(self) -> None:
        options = RenderOptions()
        self.assertEqual(options.temp_range, "auto")
        self.assertEqual(options.humidity_range, "auto")
        self.assertEqual(options.tick_count, 5)
        self.assertEqual(options.max_time_labels, 10)
        self.assertEqual(options.bounds_for("temperature"), (65.0, 85.0))
        self.assertEqual(options.bounds_for("humidity"), (30.0, 80.0))

    def test_explicit_ranges_are_coerced_to_float_pairs(self) -> None:
        options = RenderOptions(temp_range=[60, 90], humidity_range=(20, 90))
        self.assertEqual(options.range_for("temperature"), (60.0, 90.0))
        self.assertEqual(options.range_for("humidity"), (20.0, 90.0))

    def test_invalid_options_raise_value_error(self) -> None:
        with self.assertRaises(ValueError):
            RenderOptions(tick_count=0)
        with self.assertRaises(ValueError):
            RenderOptions(max_time_labels=0)
        with self.assertRaises(ValueError):
            RenderOptions(temp_range=(90.0, 60.0))
        with self.assertRaises(ValueError):
            RenderOptions(humidity_range="fixed")
        with self.assertRaises(ValueError):
            RenderOptions(temp_bounds=(1.0,))
        with self.assertRaises(ValueError):
            RenderOptions(temp_range=(float("nan"), float("nan")))
        with self.assertRaises(ValueError):
            RenderOptions(humidity_range=(0.0, float("inf")))
        with self.assertRaises(ValueError):
            RenderOptions(humidity_bounds=(float("-inf"), 80.0))

    def test_layout_presets_follow_mode(self) -> None:
        options = RenderOptions()
        self.assertIs(options.layout_for(DrawMode.PREVIEW), PREVIEW_LAYOUT)
        for mode in ("combined", "temperature-only", "humidity-only"):
            self.assertIs(options.layout_for(mode), DETAILED_LAYOUT)
        self.assertEqual(PREVIEW_LAYOUT.padding, 20)
        self.assertFalse(PREVIEW_LAYOUT.fill)
        self.assertEqual(PREVIEW_LAYOUT.preferred_size, (400, 140))
        self.assertEqual(DETAILED_LAYOUT.padding, 40)
        self.assertTrue(DETAILED_LAYOUT.fill)
        self.assertEqual(DETAILED_LAYOUT.legend, "below")

    def test_explicit_layout_overrides_presets(self) -> None:
        layout = ChartLayout(
            padding=10,
            fill=False,
            legend="none",
            show_title=False,
            show_value_labels=False,
            show_time_labels=False,
            line_width=1,
            preferred_size=(200, 100),
        )
        options = RenderOptions(layout=layout)
        self.assertIs(options.layout_for(DrawMode.PREVIEW), layout)
        self.assertIs(options.layout_for(DrawMode.COMBINED), layout)

    def test_layout_validation(self) -> None:
        with self.assertRaises(ValueError):
            layout_from_mapping({"legend": "left"})
        with self.assertRaises(ValueError):
            layout_from_mapping({"line_width": 0})
        with self.assertRaises(ValueError):
            layout_from_mapping({"base": "poster"})
        with self.assertRaises(ValueError):
            layout_from_mapping({"shadow": True})

    def test_mode_titles_and_series(self) -> None:
        self.assertEqual(DrawMode.TEMPERATURE.title, "Temperature Over Time")
        self.assertEqual(DrawMode.HUMIDITY.title, "Humidity Over Time")
        self.assertEqual(DrawMode.COMBINED.title, "Temperature & Humidity")
        self.assertEqual(DrawMode.PREVIEW.series_keys, ("temperature", "humidity"))
        self.assertFalse(DrawMode.HUMIDITY.is_dual_axis)
        with self.assertRaises(ValueError):
            DrawMode("scatter")

    def test_load_options_from_toml(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "chart.toml"
            path.write_text(
                "\n".join(
                    [
                        "temp_range = [60, 90]",
                        'humidity_range = "auto"',
                        "tick_count = 4",
                        "max_time_labels = 6",
                        "humidity_bounds = [40, 80]",
                        "",
                        "[layout]",
                        'base = "preview"',
                        "padding = 10",
                        "preferred_size = [320, 120]",
                        "grid_color = [200, 200, 200, 255]",
                    ]
                ),
                encoding="utf-8",
            )
            options = load_options(path)
        self.assertEqual(options.temp_range, (60.0, 90.0))
        self.assertEqual(options.humidity_range, "auto")
        self.assertEqual(options.tick_count, 4)
        self.assertEqual(options.max_time_labels, 6)
        self.assertEqual(options.humidity_bounds, (40.0, 80.0))
        assert options.layout is not None
        self.assertEqual(options.layout.padding, 10)
        self.assertEqual(options.layout.preferred_size, (320, 120))
        self.assertEqual(options.layout.grid_color, (200, 200, 200, 255))
        self.assertFalse(options.layout.fill)
        self.assertEqual(options.layout.legend, "inline")

    def test_unknown_option_keys_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            options_from_mapping({"tick_cuont": 3})

    def test_missing_options_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                load_options(Path(tmp) / "missing.toml")
