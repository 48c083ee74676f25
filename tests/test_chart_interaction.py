from __future__ import annotations

import unittest

import numpy as np

from widget_chart import ChartRenderer, PointerEvent, RasterSurface, parse_chart_config
from widget_chart.geometry import PointGeometry
from widget_chart.interaction import FloatingLabel, InteractionLayer, find_hit_candidate
from widget_chart.renderers import HitTarget


ZIGZAG = {
    "type": "line",
    "data": {"labels": ["1", "2", "3", "4"], "datasets": [{"label": "Load", "data": [0, 10, 0, 10]}]},
}


class FindHitCandidateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.config = parse_chart_config(ZIGZAG)
        self.targets = [
            HitTarget(series_index=0, point_index=i, geometry=PointGeometry(pixel_x=x, pixel_y=100.0))
            for i, x in enumerate((60.0, 160.0, 260.0, 360.0))
        ]

    def test_nearest_point_within_threshold_wins(self) -> None:
        candidate = find_hit_candidate(self.targets, self.config, 175.0, device_pixel_ratio=1.0, snap_threshold_px=20.0)
        assert candidate is not None
        self.assertEqual(candidate.point_index, 1)
        self.assertEqual(candidate.category_label, "2")
        self.assertEqual(candidate.raw_value.y, 10.0)

    def test_threshold_is_exclusive(self) -> None:
        self.assertIsNone(
            find_hit_candidate(self.targets, self.config, 180.0, device_pixel_ratio=1.0, snap_threshold_px=20.0)
        )
        self.assertIsNone(
            find_hit_candidate(self.targets, self.config, 110.0, device_pixel_ratio=1.0, snap_threshold_px=20.0)
        )

    def test_threshold_scales_with_device_pixel_ratio(self) -> None:
        hit = find_hit_candidate(self.targets, self.config, 179.0, device_pixel_ratio=2.0, snap_threshold_px=20.0)
        assert hit is not None
        self.assertEqual(hit.point_index, 1)
        self.assertIsNone(
            find_hit_candidate(self.targets, self.config, 180.0, device_pixel_ratio=2.0, snap_threshold_px=20.0)
        )

    def test_first_target_wins_ties(self) -> None:
        config = parse_chart_config(
            {
                "type": "line",
                "data": {"labels": ["a", "b"], "datasets": [{"data": [1, 2]}, {"data": [3, 4]}]},
            }
        )
        targets = [
            HitTarget(series_index=s, point_index=0, geometry=PointGeometry(pixel_x=50.0, pixel_y=10.0 * s))
            for s in (0, 1)
        ]
        candidate = find_hit_candidate(targets, config, 50.0, device_pixel_ratio=1.0, snap_threshold_px=20.0)
        assert candidate is not None
        self.assertEqual(candidate.series_index, 0)
        self.assertEqual(candidate.describe(), "a: 1")

    def test_xy_values_describe_both_coordinates(self) -> None:
        config = parse_chart_config(
            {"type": "scatter", "data": {"datasets": [{"data": [{"x": 1.5, "y": 2}]}]}}
        )
        target = HitTarget(series_index=0, point_index=0, geometry=PointGeometry(pixel_x=10.0, pixel_y=10.0))
        candidate = find_hit_candidate([target], config, 10.0, device_pixel_ratio=1.0, snap_threshold_px=20.0)
        assert candidate is not None
        self.assertEqual(candidate.describe(), "(1.5, 2)")


class HoverInteractionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.surface = RasterSurface(400, 300)
        self.renderer = ChartRenderer(self.surface)
        self.base = self.renderer.mount(ZIGZAG)

    def tearDown(self) -> None:
        self.renderer.unmount()

    def test_pointer_near_point_snaps_and_shows_label(self) -> None:
        self.surface.dispatch_pointer(PointerEvent("move", 175.0, 120.0))
        hovered = self.renderer.hovered
        assert hovered is not None
        self.assertEqual((hovered.series_index, hovered.point_index), (0, 1))
        self.assertEqual(self.renderer.interaction.state, "hovering")
        label = self.renderer.label
        self.assertTrue(label.visible)
        self.assertEqual(label.text, "2: 10")
        self.assertAlmostEqual(label.x, 170.0)
        self.assertAlmostEqual(label.y, 27.5)

    def test_overlay_paints_highlight_and_guideline(self) -> None:
        self.surface.dispatch_pointer(PointerEvent("move", 160.0, 50.0))
        frame = self.surface.rgba
        assert frame is not None and self.base is not None
        self.assertEqual(tuple(frame[57, 160, :3]), (255, 255, 255))
        # Dashed guideline blends over the background inside the plot area.
        self.assertFalse(np.array_equal(frame[42, 160], self.base[42, 160]))
        self.assertTrue(np.array_equal(frame[47, 160], self.base[47, 160]))

    def test_pointer_far_from_points_clears_hover(self) -> None:
        self.surface.dispatch_pointer(PointerEvent("move", 160.0, 50.0))
        self.surface.dispatch_pointer(PointerEvent("move", 110.0, 50.0))
        self.assertIsNone(self.renderer.hovered)
        self.assertEqual(self.renderer.interaction.state, "idle")
        self.assertFalse(self.renderer.label.visible)
        assert self.surface.rgba is not None and self.base is not None
        self.assertTrue(np.array_equal(self.surface.rgba, self.base))

    def test_leave_restores_base_frame(self) -> None:
        self.surface.dispatch_pointer(PointerEvent("move", 260.0, 200.0))
        self.assertIsNotNone(self.renderer.hovered)
        self.surface.dispatch_pointer(PointerEvent("leave"))
        self.assertIsNone(self.renderer.hovered)
        self.assertFalse(self.renderer.label.visible)
        assert self.surface.rgba is not None and self.base is not None
        self.assertTrue(np.array_equal(self.surface.rgba, self.base))

    def test_every_pointer_event_presents_a_frame(self) -> None:
        before = self.surface.revision
        for x in (60.0, 61.0, 300.0):
            self.renderer.handle_pointer(PointerEvent("move", x, 0.0))
        self.renderer.handle_pointer(PointerEvent("leave"))
        self.assertEqual(self.surface.revision, before + 4)

    def test_pie_charts_have_no_hover_targets(self) -> None:
        self.renderer.update({"type": "pie", "data": {"labels": ["a", "b"], "datasets": [{"data": [1, 2]}]}})
        self.assertIsNone(self.renderer.handle_pointer(PointerEvent("move", 200.0, 150.0)))
        self.assertEqual(self.renderer.interaction.state, "idle")


class LabelPrecisionTests(unittest.TestCase):
    def test_label_shows_full_precision_values(self) -> None:
        surface = RasterSurface(400, 300)
        renderer = ChartRenderer(surface)
        renderer.mount(
            {"type": "line", "data": {"labels": ["Q1", "Q2"], "datasets": [{"data": [1234567.5, 0.123456789]}]}}
        )
        renderer.handle_pointer(PointerEvent("move", 60.0, 100.0))
        self.assertEqual(renderer.label.text, "Q1: 1234567.5")
        renderer.handle_pointer(PointerEvent("move", 360.0, 100.0))
        self.assertEqual(renderer.label.text, "Q2: 0.123456789")
        renderer.unmount()


class InteractionLayerTests(unittest.TestCase):
    def test_missing_draw_resets_without_presenting(self) -> None:
        presented: list[np.ndarray] = []
        label = FloatingLabel()
        label.show("stale", 1.0, 2.0)
        layer = InteractionLayer(repaint=lambda: None, present=presented.append, label=label)
        self.assertIsNone(layer.handle(PointerEvent("move", 10.0, 10.0)))
        self.assertEqual(presented, [])
        self.assertFalse(label.visible)
        self.assertEqual(label.text, "")


if __name__ == "__main__":
    unittest.main()
