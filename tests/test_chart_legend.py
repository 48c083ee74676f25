from __future__ import annotations

import unittest

import numpy as np

from widget_chart import HtmlLegendRegion, LegendEntry, RasterLegendRegion, parse_chart_config, synthesize_legend
from widget_chart.colors import DEFAULT_PALETTE


class SynthesizeLegendTests(unittest.TestCase):
    def test_cartesian_charts_list_series(self) -> None:
        config = parse_chart_config(
            {
                "type": "line",
                "data": {
                    "labels": ["a", "b"],
                    "datasets": [{"label": "Revenue", "data": [1, 2], "borderColor": "#123456"}, {"data": [3, 4]}],
                },
            }
        )
        entries = synthesize_legend(config)
        self.assertEqual(
            entries,
            (
                LegendEntry(label="Revenue", color=(0x12, 0x34, 0x56, 255)),
                LegendEntry(label="Series 2", color=DEFAULT_PALETTE[1]),
            ),
        )

    def test_radial_charts_list_categories(self) -> None:
        config = parse_chart_config(
            {
                "type": "doughnut",
                "data": {"labels": ["x", "y", "z"], "datasets": [{"data": [1, 2, 3], "backgroundColor": ["#ff0000"]}]},
            }
        )
        entries = synthesize_legend(config)
        self.assertEqual([entry.label for entry in entries], ["x", "y", "z"])
        self.assertEqual(entries[0].color, (255, 0, 0, 255))
        self.assertEqual(entries[1].color, DEFAULT_PALETTE[1])


class HtmlLegendRegionTests(unittest.TestCase):
    def test_markup_escapes_labels(self) -> None:
        region = HtmlLegendRegion()
        region.show([LegendEntry(label="<b>Q1 & Q2</b>", color=(66, 133, 244, 255))])
        self.assertIn("&lt;b&gt;Q1 &amp; Q2&lt;/b&gt;", region.markup)
        self.assertIn("background:#4285f4", region.markup)
        self.assertEqual(region.markup.count('class="legend-item"'), 1)

    def test_empty_entries_clear_markup(self) -> None:
        region = HtmlLegendRegion()
        region.show([LegendEntry(label="a", color=(0, 0, 0, 255))])
        region.show(())
        self.assertEqual(region.markup, "")


class RasterLegendRegionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.entries = [LegendEntry(label=f"Series {i}", color=DEFAULT_PALETTE[i]) for i in range(4)]

    def test_swatches_are_painted(self) -> None:
        region = RasterLegendRegion(600)
        region.show(self.entries)
        for entry in self.entries:
            hit = np.all(region.rgba[:, :, :3] == np.asarray(entry.color[:3], dtype=np.uint8), axis=2)
            self.assertTrue(np.any(hit), entry.label)

    def test_narrow_region_wraps_rows(self) -> None:
        wide = RasterLegendRegion(600)
        narrow = RasterLegendRegion(90)
        wide.show(self.entries)
        narrow.show(self.entries)
        self.assertEqual(wide.rgba.shape[1], 600)
        self.assertGreater(narrow.rgba.shape[0], wide.rgba.shape[0])

    def test_device_pixel_ratio_scales_canvas(self) -> None:
        region = RasterLegendRegion(300, device_pixel_ratio=2.0)
        region.show(self.entries[:1])
        self.assertEqual(region.rgba.shape[1], 600)
        self.assertEqual(region.entries, tuple(self.entries[:1]))

    def test_rejects_invalid_size(self) -> None:
        with self.assertRaises(ValueError):
            RasterLegendRegion(0)
        with self.assertRaises(ValueError):
            RasterLegendRegion(100, device_pixel_ratio=0)


if __name__ == "__main__":
    unittest.main()
