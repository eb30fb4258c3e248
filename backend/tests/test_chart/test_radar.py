"""Tests for radar chart SVG layout."""

from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET

import pytest

from kpiradar.chart.colors import BASE_COLORS, CategoryPalette
from kpiradar.chart.config import RadarChartConfig
from kpiradar.chart.radar import (
    DEFAULT_LEGEND_TITLE,
    RadarGeometry,
    escape_xml,
    render_radar_svg,
    wrap_legend_label,
    wrap_words,
)
from kpiradar.models.score_table import ScoreTable
from tests.conftest import EIGHT_CATEGORIES, make_table

SVG_NS = "{http://www.w3.org/2000/svg}"


def _parse(svg: str) -> ET.Element:
    return ET.fromstring(svg.encode("utf-8"))


def _by_class(root: ET.Element, tag: str, cls: str) -> list[ET.Element]:
    return [e for e in root.iter(f"{SVG_NS}{tag}") if e.get("class") == cls]


class TestGeometry:
    def test_first_axis_points_up(self):
        cfg = RadarChartConfig()
        geo = RadarGeometry(4, cfg)
        x, y = geo.point(0, cfg.max_value)
        assert x == pytest.approx(geo.cx)
        assert y == pytest.approx(geo.cy - cfg.max_radius)

    def test_axes_proceed_clockwise(self):
        cfg = RadarChartConfig()
        geo = RadarGeometry(4, cfg)
        x, y = geo.point(1, cfg.max_value)
        # Second of four axes sits at 3 o'clock
        assert x == pytest.approx(geo.cx + cfg.max_radius)
        assert y == pytest.approx(geo.cy)

    def test_radius_scales_with_value(self):
        cfg = RadarChartConfig()
        geo = RadarGeometry(3, cfg)
        x, y = geo.point(0, 2.5)
        assert math.hypot(x - geo.cx, y - geo.cy) == pytest.approx(cfg.max_radius / 2)

    def test_zero_value_is_center(self):
        geo = RadarGeometry(5, RadarChartConfig())
        assert geo.point(3, 0.0) == pytest.approx((geo.cx, geo.cy))

    def test_center_in_chart_region(self):
        cfg = RadarChartConfig()
        cx, cy = cfg.center
        assert cx == pytest.approx(310 + (1000 - 310) / 2)
        assert cy == 300

    def test_ring_radii(self):
        geo = RadarGeometry(3, RadarChartConfig())
        assert [geo.ring_radius(lvl) for lvl in range(1, 6)] == pytest.approx(
            [44, 88, 132, 176, 220]
        )


class TestWrapping:
    def test_short_label_single_line(self):
        assert wrap_words("Nike", 15) == ["Nike"]

    def test_wraps_at_threshold(self):
        assert wrap_words("Procter & Gamble Company", 15) == ["Procter &", "Gamble Company"]

    def test_long_word_not_broken(self):
        assert wrap_words("Supercalifragilistic Inc", 15) == ["Supercalifragilistic", "Inc"]

    def test_empty(self):
        assert wrap_words("   ", 15) == []

    def test_legend_fits(self):
        assert wrap_legend_label("Leadership Behavior", 35, 2) == ["Leadership Behavior"]

    def test_legend_two_lines(self):
        label = "Communication & Transparency across all business units"
        lines = wrap_legend_label(label, 35, 2)
        assert len(lines) == 2
        assert not lines[-1].endswith("…")

    def test_legend_truncates_overflow(self):
        label = " ".join(["word"] * 40)
        lines = wrap_legend_label(label, 35, 2)
        assert len(lines) == 2
        assert lines[-1].endswith("…")
        assert all(len(line) <= 35 for line in lines)

    def test_legend_truncates_long_word(self):
        lines = wrap_legend_label("x" * 50, 35, 2)
        assert lines == ["x" * 34 + "…"]


class TestEscape:
    def test_five_specials(self):
        assert escape_xml("""a&b<c>d"e'f""") == "a&amp;b&lt;c&gt;d&quot;e&apos;f"


class TestRenderRadarSvg:
    def test_scenario_three_companies_two_categories(self, small_table):
        svg = render_radar_svg(small_table)
        root = _parse(svg)
        assert len(_by_class(root, "line", "axis-line")) == 3
        paths = _by_class(root, "path", "category-line")
        assert len(paths) == 2
        assert all(p.get("d").endswith(" Z") for p in paths)
        assert len(_by_class(root, "line", "legend-swatch")) == 2

    def test_canvas_dimensions(self, small_table):
        root = _parse(render_radar_svg(small_table))
        assert root.get("width") == "1000"
        assert root.get("height") == "600"
        assert root.get("viewBox") == "0 0 1000 600"

    def test_grid_levels(self, small_table):
        root = _parse(render_radar_svg(small_table))
        circles = _by_class(root, "circle", "grid-line")
        assert [c.get("r") for c in circles] == ["44.00", "88.00", "132.00", "176.00", "220.00"]

    def test_deterministic(self, small_table):
        assert render_radar_svg(small_table, "Title") == render_radar_svg(small_table, "Title")

    def test_equal_tables_render_identically(self):
        assert render_radar_svg(make_table(4, 9)) == render_radar_svg(make_table(4, 9))

    def test_path_visits_each_company(self):
        table = make_table(5, 1)
        root = _parse(render_radar_svg(table))
        d = _by_class(root, "path", "category-line")[0].get("d")
        assert d.startswith("M ")
        assert d.count(" L ") == 4

    def test_path_points_match_geometry(self):
        table = ScoreTable(companies=["A", "B", "C"], categories=["X"], scores=[[5, 0, 2.5]])
        cfg = RadarChartConfig()
        geo = RadarGeometry(3, cfg)
        root = _parse(render_radar_svg(table, config=cfg))
        d = _by_class(root, "path", "category-line")[0].get("d")
        coords = [tuple(float(v) for v in pair.split(",")) for pair in re.findall(r"[-\d.]+,[-\d.]+", d)]
        expected = [geo.point(0, 5), geo.point(1, 0), geo.point(2, 2.5)]
        for got, want in zip(coords, expected):
            assert got == pytest.approx(want, abs=0.01)

    def test_category_order_is_draw_order(self):
        table = ScoreTable(
            companies=["A", "B", "C"],
            categories=EIGHT_CATEGORIES,
            scores=[[1, 2, 3]] * len(EIGHT_CATEGORIES),
        )
        root = _parse(render_radar_svg(table))
        strokes = [p.get("stroke") for p in _by_class(root, "path", "category-line")]
        assert strokes == CategoryPalette(8).colors()
        assert strokes[:5] == list(BASE_COLORS)

    def test_legend_swatches_match_lines(self, small_table):
        root = _parse(render_radar_svg(small_table))
        swatches = [s.get("stroke") for s in _by_class(root, "line", "legend-swatch")]
        lines = [p.get("stroke") for p in _by_class(root, "path", "category-line")]
        assert swatches == lines

    def test_default_legend_title(self, small_table):
        root = _parse(render_radar_svg(small_table))
        title = _by_class(root, "text", "legend-title")
        assert title[0].text == DEFAULT_LEGEND_TITLE

    def test_custom_legend_title_escaped(self, small_table):
        svg = render_radar_svg(small_table, "Vergleich <KPI> & \"Score\"")
        assert "Vergleich &lt;KPI&gt; &amp; &quot;Score&quot;" in svg
        root = _parse(svg)
        assert _by_class(root, "text", "legend-title")[0].text == 'Vergleich <KPI> & "Score"'

    def test_company_names_escaped_and_wrapped(self):
        table = ScoreTable(
            companies=["Procter & Gamble Company", "AT&T"],
            categories=["Reach"],
            scores=[[3, 4]],
        )
        root = _parse(render_radar_svg(table))
        labels = [t.text for t in _by_class(root, "text", "axis-label")]
        assert labels == ["Procter &", "Gamble Company", "AT&T"]

    def test_wrapped_axis_label_centered_on_anchor(self):
        table = ScoreTable(
            companies=["Procter & Gamble Company", "B"],
            categories=["Reach"],
            scores=[[3, 4]],
        )
        cfg = RadarChartConfig()
        geo = RadarGeometry(2, cfg)
        _, anchor_y = geo.point(0, cfg.max_value + cfg.label_offset)
        root = _parse(render_radar_svg(table, config=cfg))
        ys = [float(t.get("y")) for t in _by_class(root, "text", "axis-label")[:2]]
        assert sum(ys) / 2 == pytest.approx(anchor_y, abs=0.01)
        assert ys[1] - ys[0] == pytest.approx(cfg.axis_line_height)

    def test_legend_entries_do_not_overlap(self):
        table = ScoreTable(
            companies=["A", "B", "C"],
            categories=[
                "A very long category name that certainly needs two lines",
                "Short",
            ],
            scores=[[1, 2, 3], [3, 2, 1]],
        )
        root = _parse(render_radar_svg(table))
        texts = _by_class(root, "text", "legend-text")
        assert len(texts) == 3
        ys = [float(t.get("y")) for t in texts]
        assert ys == sorted(ys)
        assert ys[2] - ys[1] >= RadarChartConfig().legend_spacing

    def test_single_company(self):
        table = ScoreTable(companies=["Solo"], categories=["X"], scores=[[3]])
        root = _parse(render_radar_svg(table))
        assert len(_by_class(root, "line", "axis-line")) == 1
        assert _by_class(root, "path", "category-line")[0].get("d").endswith(" Z")

    def test_many_categories_render(self):
        table = make_table(6, 20)
        root = _parse(render_radar_svg(table))
        assert len(_by_class(root, "path", "category-line")) == 20
        assert len(_by_class(root, "line", "legend-swatch")) == 20

    @pytest.mark.parametrize("label", ["Category", "A long category label that wraps onto two lines"])
    def test_long_legend_stays_on_canvas(self, label):
        cfg = RadarChartConfig()
        categories = [f"{label} {i}" for i in range(30)]
        table = ScoreTable(
            companies=["A", "B", "C"],
            categories=categories,
            scores=[[1, 2, 3]] * 30,
        )
        root = _parse(render_radar_svg(table, config=cfg))
        swatch_ys = [float(s.get("y1")) for s in _by_class(root, "line", "legend-swatch")]
        text_ys = [float(t.get("y")) for t in _by_class(root, "text", "legend-text")]
        assert len(swatch_ys) == 30
        assert swatch_ys == sorted(swatch_ys)
        assert len(set(swatch_ys)) == 30
        assert swatch_ys[0] >= cfg.legend_min_y
        assert max(text_ys) < cfg.height

    def test_short_legend_keeps_spacing(self):
        root = _parse(render_radar_svg(make_table(3, 4)))
        ys = [float(s.get("y1")) for s in _by_class(root, "line", "legend-swatch")]
        assert ys[1] - ys[0] == pytest.approx(RadarChartConfig().legend_spacing)

    def test_custom_canvas(self, small_table):
        cfg = RadarChartConfig(width=800, height=500, max_radius=180)
        root = _parse(render_radar_svg(small_table, config=cfg))
        assert root.get("viewBox") == "0 0 800 500"
        assert _by_class(root, "circle", "grid-line")[-1].get("r") == "180.00"
