from __future__ import annotations

import math
import unittest

from widget_chart.geometry import (
    FULL_TURN,
    PIE_START_ANGLE,
    PlotRect,
    cubic_point,
    flatten_cubic,
    map_bar_x,
    map_index_x,
    map_value_y,
    plot_rect,
    slice_angles,
    spline_segments,
)
from widget_chart.scales import ResolvedDomain, format_tick, pie_total, resolve_domain, value_ticks
from widget_chart.series import DataPoint, Series
from widget_chart.theme import Padding


def _series(*values: float) -> Series:
    return Series(name=None, values=tuple(DataPoint(y=float(v)) for v in values))


class ResolveDomainTests(unittest.TestCase):
    def test_non_negative_bar_data_keeps_zero_floor(self) -> None:
        domain = resolve_domain("bar", [_series(10, 20, 5)])
        self.assertEqual(domain.min, 0.0)
        self.assertAlmostEqual(domain.max, 21.5)

    def test_line_and_scatter_float_the_floor(self) -> None:
        for kind in ("line", "scatter"):
            with self.subTest(kind=kind):
                domain = resolve_domain(kind, [_series(2, 4)])
                self.assertAlmostEqual(domain.min, 1.8)
                self.assertAlmostEqual(domain.max, 4.2)

    def test_negative_data_gets_symmetric_headroom(self) -> None:
        domain = resolve_domain("bar", [_series(-5, 5)])
        self.assertAlmostEqual(domain.min, -6.0)
        self.assertAlmostEqual(domain.max, 6.0)

    def test_degenerate_range_uses_value_as_span(self) -> None:
        domain = resolve_domain("bar", [_series(5, 5)])
        self.assertEqual((domain.min, domain.max), (0.0, 5.5))

    def test_all_zero_values_use_fallback_span(self) -> None:
        domain = resolve_domain("line", [_series(0, 0)])
        self.assertEqual((domain.min, domain.max), (-1.0, 1.0))

    def test_equal_negative_values_keep_a_positive_span(self) -> None:
        domain = resolve_domain("line", [_series(-5, -5)])
        self.assertGreater(domain.span, 0.0)
        self.assertAlmostEqual(domain.min, -5.5)
        self.assertAlmostEqual(domain.max, -4.5)

    def test_empty_series_fall_back_to_default_domain(self) -> None:
        self.assertEqual(resolve_domain("bar", [_series()]), ResolvedDomain(0.0, 10.0))
        self.assertEqual(resolve_domain("line", []), ResolvedDomain(0.0, 10.0))

    def test_xy_points_contribute_their_y(self) -> None:
        series = Series(name=None, values=(DataPoint(y=1.0, x=100.0), DataPoint(y=3.0, x=-100.0)))
        domain = resolve_domain("scatter", [series])
        self.assertAlmostEqual(domain.min, 0.8)
        self.assertAlmostEqual(domain.max, 3.2)

    def test_pie_total_sums_values(self) -> None:
        self.assertEqual(pie_total(_series(1, 2, 3.5)), 6.5)

    def test_value_ticks_divide_domain_evenly(self) -> None:
        ticks = value_ticks(ResolvedDomain(0.0, 10.0), 5)
        self.assertEqual(ticks.tolist(), [0.0, 2.0, 4.0, 6.0, 8.0, 10.0])

    def test_format_tick_uses_one_decimal(self) -> None:
        self.assertEqual(format_tick(21.5), "21.5")
        self.assertEqual(format_tick(4.3), "4.3")
        self.assertEqual(format_tick(0.25), "0.3")
        self.assertEqual(format_tick(-0.01), "0.0")


class GeometryMapperTests(unittest.TestCase):
    def setUp(self) -> None:
        self.rect = PlotRect(left=60.0, top=40.0, width=300.0, height=210.0)

    def test_plot_rect_subtracts_padding(self) -> None:
        rect = plot_rect(400, 300, Padding())
        self.assertEqual(rect, self.rect)
        self.assertEqual((rect.right, rect.bottom), (360.0, 250.0))

    def test_value_mapping_is_inverted(self) -> None:
        domain = ResolvedDomain(0.0, 10.0)
        self.assertEqual(map_value_y(0.0, domain, self.rect), 250.0)
        self.assertEqual(map_value_y(10.0, domain, self.rect), 40.0)
        self.assertEqual(map_value_y(5.0, domain, self.rect), 145.0)

    def test_index_mapping_spans_full_width(self) -> None:
        self.assertEqual(map_index_x(0, 4, self.rect), 60.0)
        self.assertEqual(map_index_x(3, 4, self.rect), 360.0)

    def test_single_category_does_not_divide_by_zero(self) -> None:
        self.assertEqual(map_index_x(0, 1, self.rect), 60.0)

    def test_bar_mapping_uses_slot_midpoints(self) -> None:
        self.assertEqual(map_bar_x(0, 3, self.rect), 110.0)
        self.assertEqual(map_bar_x(2, 3, self.rect), 310.0)


class SplineTests(unittest.TestCase):
    def test_segments_start_and_end_on_data_points(self) -> None:
        points = [(0.0, 0.0), (10.0, 5.0), (20.0, -3.0), (30.0, 8.0)]
        segments = spline_segments(points, 0.4)
        self.assertEqual(len(segments), 3)
        for i, segment in enumerate(segments):
            self.assertEqual(segment.start, points[i])
            self.assertEqual(segment.end, points[i + 1])
            self.assertEqual(cubic_point(segment, 0.0), points[i])
            self.assertEqual(cubic_point(segment, 1.0), points[i + 1])

    def test_control_points_follow_neighbor_deltas(self) -> None:
        points = [(0.0, 0.0), (6.0, 6.0), (12.0, 0.0)]
        first, second = spline_segments(points, 0.6)
        # First window reuses p1 as p0: c1 = p1 + (p2 - p1) * 0.1.
        self.assertAlmostEqual(first.control1[0], 0.6)
        self.assertAlmostEqual(first.control1[1], 0.6)
        self.assertAlmostEqual(first.control2[0], 6.0 - 12.0 * 0.1)
        self.assertAlmostEqual(first.control2[1], 6.0)
        # Last window reuses p2 as p3.
        self.assertAlmostEqual(second.control2[0], 12.0 - 6.0 * 0.1)
        self.assertAlmostEqual(second.control2[1], 0.0 - (0.0 - 6.0) * 0.1)

    def test_zero_tension_controls_sit_on_endpoints(self) -> None:
        segment = spline_segments([(0.0, 0.0), (1.0, 1.0), (2.0, 0.0)], 0.0)[0]
        self.assertEqual(segment.control1, segment.start)
        self.assertEqual(segment.control2, segment.end)

    def test_flatten_keeps_exact_endpoints(self) -> None:
        segment = spline_segments([(0.0, 0.0), (50.0, 40.0), (100.0, 0.0)], 0.5)[0]
        path = flatten_cubic(segment)
        self.assertGreater(len(path), 2)
        self.assertEqual(path[0], segment.start)
        self.assertEqual(path[-1], segment.end)


class SliceAngleTests(unittest.TestCase):
    def test_slices_cover_exactly_one_turn(self) -> None:
        for values in ([1.0], [1.0, 2.0, 3.0], [0.3] * 7, [5.0, 0.0, 5.0]):
            with self.subTest(values=values):
                angles = slice_angles(values)
                self.assertEqual(len(angles), len(values))
                self.assertEqual(angles[0][0], PIE_START_ANGLE)
                self.assertEqual(angles[-1][1], PIE_START_ANGLE + FULL_TURN)
                for (_, end), (start, _) in zip(angles, angles[1:]):
                    self.assertEqual(end, start)
                sweep = sum(end - start for start, end in angles)
                self.assertTrue(math.isclose(sweep, FULL_TURN, rel_tol=0.0, abs_tol=1e-12))

    def test_single_category_is_a_full_circle(self) -> None:
        ((start, end),) = slice_angles([42.0])
        self.assertAlmostEqual(math.degrees(end - start), 360.0)

    def test_sweeps_are_proportional(self) -> None:
        angles = slice_angles([1.0, 3.0])
        self.assertAlmostEqual(math.degrees(angles[0][1] - angles[0][0]), 90.0)
        self.assertAlmostEqual(math.degrees(angles[1][1] - angles[1][0]), 270.0)

    def test_zero_total_yields_no_slices(self) -> None:
        self.assertEqual(slice_angles([]), [])
        self.assertEqual(slice_angles([0.0, 0.0]), [])


if __name__ == "__main__":
    unittest.main()
