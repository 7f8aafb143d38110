from __future__ import annotations

import unittest

import numpy as np

from dryroom_plot.scales import (
    AxisRange,
    ChartArea,
    decimate_time_indices,
    finite_runs,
    format_tick,
    format_ticks_for_axis,
    gridline_levels,
    map_values,
    resolve_axis_range,
    sample_x_positions,
)


class ScalesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.area = ChartArea(width=400, height=140, padding=20)

    def test_chart_area_removes_padding_on_every_side(self) -> None:
        self.assertEqual((self.area.chart_width, self.area.chart_height), (360, 100))
        self.assertEqual((self.area.left, self.area.top, self.area.right, self.area.bottom), (20, 20, 380, 120))
        self.assertTrue(self.area.is_drawable)
        self.assertFalse(ChartArea(width=40, height=40, padding=20).is_drawable)

    def test_auto_range_widens_to_domain_bounds(self) -> None:
        axis = resolve_axis_range(np.asarray([72.0, 75.0, 74.0]), "auto", (65.0, 85.0))
        self.assertEqual((axis.vmin, axis.vmax), (65.0, 85.0))

    def test_auto_range_follows_data_beyond_bounds(self) -> None:
        axis = resolve_axis_range(np.asarray([60.0, 92.5]), "auto", (65.0, 85.0))
        self.assertEqual((axis.vmin, axis.vmax), (60.0, 92.5))

    def test_auto_range_ignores_nan_and_falls_back_to_bounds(self) -> None:
        axis = resolve_axis_range(np.asarray([np.nan, 50.0, np.nan]), "auto", (30.0, 80.0))
        self.assertEqual((axis.vmin, axis.vmax), (30.0, 80.0))
        empty = resolve_axis_range(np.asarray([np.nan, np.nan]), "auto", (30.0, 80.0))
        self.assertEqual((empty.vmin, empty.vmax), (30.0, 80.0))

    def test_explicit_range_is_used_verbatim(self) -> None:
        axis = resolve_axis_range(np.asarray([72.0, 75.0]), (0.0, 100.0), (65.0, 85.0))
        self.assertEqual((axis.vmin, axis.vmax), (0.0, 100.0))

    def test_degenerate_range_becomes_centred_unit_range(self) -> None:
        explicit = resolve_axis_range(np.asarray([70.0, 70.0]), (70.0, 70.0), (65.0, 85.0))
        self.assertEqual((explicit.vmin, explicit.vmax), (69.5, 70.5))
        auto = resolve_axis_range(np.asarray([70.0, 70.0]), "auto", (70.0, 70.0))
        self.assertEqual((auto.vmin, auto.vmax), (69.5, 70.5))

    def test_sample_positions_span_full_chart_width(self) -> None:
        xs = sample_x_positions(7, self.area)
        self.assertEqual(xs[0], 20.0)
        self.assertEqual(xs[-1], 380.0)
        self.assertTrue(np.all(np.diff(xs) > 0))

    def test_sample_positions_require_two_samples(self) -> None:
        with self.assertRaises(ValueError):
            sample_x_positions(1, self.area)

    def test_min_maps_to_bottom_and_max_to_top(self) -> None:
        ys = map_values(np.asarray([65.0, 85.0, 75.0]), AxisRange(65.0, 85.0), self.area)
        self.assertEqual(ys.tolist(), [120.0, 20.0, 70.0])

    def test_values_outside_range_are_clamped_and_nan_is_kept(self) -> None:
        ys = map_values(np.asarray([-10.0, 200.0, np.nan]), AxisRange(0.0, 100.0), self.area)
        self.assertEqual(ys[0], 120.0)
        self.assertEqual(ys[1], 20.0)
        self.assertTrue(np.isnan(ys[2]))

    def test_gridline_levels_run_from_max_at_top_to_min_at_bottom(self) -> None:
        levels = gridline_levels(AxisRange(65.0, 85.0), 5, self.area)
        self.assertEqual(len(levels), 6)
        self.assertEqual((levels[0].y, levels[0].value), (20.0, 85.0))
        self.assertEqual((levels[-1].y, levels[-1].value), (120.0, 65.0))
        self.assertAlmostEqual(levels[1].value, 81.0)
        with self.assertRaises(ValueError):
            gridline_levels(AxisRange(0.0, 1.0), 0, self.area)

    def test_time_decimation_matches_ceil_step(self) -> None:
        self.assertEqual(decimate_time_indices(13, 3), [0, 5, 10])
        self.assertEqual(decimate_time_indices(7, 10), list(range(7)))
        self.assertEqual(decimate_time_indices(0, 5), [])

    def test_time_decimation_bounds_label_count_and_keeps_first_index(self) -> None:
        for n in range(1, 60):
            for max_labels in range(1, 13):
                indices = decimate_time_indices(n, max_labels)
                self.assertEqual(indices[0], 0)
                self.assertLessEqual(len(indices), max_labels + 1)
                self.assertTrue(all(i < n for i in indices))

    def test_finite_runs_split_on_nan(self) -> None:
        values = np.asarray([1.0, np.nan, 2.0, 3.0, np.nan, np.nan, 4.0])
        self.assertEqual(finite_runs(values), [(0, 1), (2, 4), (6, 7)])
        self.assertEqual(finite_runs(np.asarray([np.nan])), [])

    def test_axis_labels_carry_unit_and_step_decimals(self) -> None:
        self.assertEqual(
            format_ticks_for_axis([85.0, 81.0, 77.0, 73.0, 69.0, 65.0], unit="°F"),
            ["85°F", "81°F", "77°F", "73°F", "69°F", "65°F"],
        )
        self.assertEqual(format_ticks_for_axis([80.0, 70.0, 60.0], unit="%"), ["80%", "70%", "60%"])
        self.assertEqual(format_ticks_for_axis([1.0, 0.75, 0.5]), ["1", "0.75", "0.5"])

    def test_tick_formatting_snaps_near_zero(self) -> None:
        self.assertEqual(format_tick(-4.4409e-16, step=1.0), "0")
