"""Inverted radar chart as SVG — companies are spokes, categories are lines.

Pure geometry plus string formatting: no layout engine, no randomness. The
same table and title always produce byte-identical markup.
"""

from __future__ import annotations

import math
from xml.sax.saxutils import escape

from kpiradar.chart.colors import CategoryPalette
from kpiradar.chart.config import RadarChartConfig
from kpiradar.models.score_table import ScoreTable

DEFAULT_LEGEND_TITLE = "Performance Comparison"

_ELLIPSIS = "…"

# Fonts commonly present on Linux render hosts first
_FONT_STACK = (
    '"DejaVu Sans", "Liberation Sans", "Nimbus Sans L", '
    '"Helvetica Neue", Helvetica, Arial, sans-serif'
)

_STYLES = {
    ".grid-line": "stroke: #E0E0E0; stroke-width: 1; fill: none;",
    ".axis-line": "stroke: #999999; stroke-width: 1;",
    ".axis-label": f"fill: #333333; font-family: {_FONT_STACK}; font-size: 14px; text-anchor: middle;",
    ".category-line": "fill: none; stroke-width: 2;",
    ".legend-swatch": "stroke-width: 2;",
    ".legend-title": f"fill: #333333; font-family: {_FONT_STACK}; font-size: 14px; font-weight: bold;",
    ".legend-text": f"fill: #333333; font-family: {_FONT_STACK}; font-size: 13px;",
}

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def escape_xml(text: str) -> str:
    """Escape the five XML special characters."""
    return escape(text, _XML_ENTITIES)


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def _tag(tag: str, attrs: dict[str, str], text: str | None = None) -> str:
    attr_str = " ".join(f'{k}="{v}"' for k, v in attrs.items())
    if text is None:
        return f"<{tag} {attr_str}/>"
    return f"<{tag} {attr_str}>{escape_xml(text)}</{tag}>"


def wrap_words(text: str, max_chars: int) -> list[str]:
    """Greedy whitespace wrap: break before a word that would exceed ``max_chars``.

    A single word longer than ``max_chars`` stays on its own line unbroken.
    """
    lines: list[str] = []
    current = ""
    for word in text.split():
        if current and len(f"{current} {word}") > max_chars:
            lines.append(current)
            current = word
        else:
            current = f"{current} {word}" if current else word
    if current:
        lines.append(current)
    return lines


def _ellipsize(line: str, max_chars: int) -> str:
    if len(line) < max_chars:
        return line + _ELLIPSIS
    return line[: max_chars - 1].rstrip() + _ELLIPSIS


def wrap_legend_label(text: str, max_chars: int, max_lines: int) -> list[str]:
    """Wrap to at most ``max_lines``; truncate with an ellipsis on overflow."""
    lines = wrap_words(text, max_chars) or [""]
    overflow = len(lines) > max_lines
    lines = lines[:max_lines]
    out: list[str] = []
    for i, line in enumerate(lines):
        is_last = i == len(lines) - 1
        if (is_last and overflow) or len(line) > max_chars:
            line = _ellipsize(line, max_chars)
        out.append(line)
    return out


class RadarGeometry:
    """Polar coordinates for a chart with ``n_axes`` spokes."""

    def __init__(self, n_axes: int, config: RadarChartConfig) -> None:
        self.n_axes = n_axes
        self.config = config
        self.cx, self.cy = config.center
        self.angle_step = 2 * math.pi / n_axes

    def angle(self, axis: int) -> float:
        """Axis 0 at 12 o'clock, proceeding clockwise (SVG y grows downward)."""
        return self.angle_step * axis - math.pi / 2

    def point(self, axis: int, value: float) -> tuple[float, float]:
        radius = (value / self.config.max_value) * self.config.max_radius
        a = self.angle(axis)
        return (self.cx + radius * math.cos(a), self.cy + radius * math.sin(a))

    def ring_radius(self, level: int) -> float:
        return (level / self.config.levels) * self.config.max_radius


def _grid(geo: RadarGeometry) -> list[str]:
    return [
        _tag("circle", {
            "cx": _fmt(geo.cx),
            "cy": _fmt(geo.cy),
            "r": _fmt(geo.ring_radius(level)),
            "class": "grid-line",
        })
        for level in range(1, geo.config.levels + 1)
    ]


def _axes(companies: tuple[str, ...], geo: RadarGeometry) -> list[str]:
    cfg = geo.config
    out: list[str] = []
    for i, company in enumerate(companies):
        x, y = geo.point(i, cfg.max_value)
        out.append(_tag("line", {
            "x1": _fmt(geo.cx),
            "y1": _fmt(geo.cy),
            "x2": _fmt(x),
            "y2": _fmt(y),
            "class": "axis-line",
        }))

        lx, ly = geo.point(i, cfg.max_value + cfg.label_offset)
        label_lines = wrap_words(company, cfg.axis_wrap_chars) or [company]
        start_y = ly - (len(label_lines) - 1) * cfg.axis_line_height / 2
        for j, line in enumerate(label_lines):
            out.append(_tag("text", {
                "x": _fmt(lx),
                "y": _fmt(start_y + j * cfg.axis_line_height),
                "class": "axis-label",
            }, line))
    return out


def _category_lines(table: ScoreTable, colors: list[str], geo: RadarGeometry) -> list[str]:
    out: list[str] = []
    # Category order is z-order: later paths draw on top
    for ci, row in enumerate(table.scores):
        points = [geo.point(i, value) for i, value in enumerate(row)]
        d = f"M {_fmt(points[0][0])},{_fmt(points[0][1])}"
        for x, y in points[1:]:
            d += f" L {_fmt(x)},{_fmt(y)}"
        d += " Z"
        out.append(_tag("path", {
            "d": d,
            "stroke": colors[ci],
            "class": "category-line",
        }))
    return out


def _legend(table: ScoreTable, colors: list[str], title: str, cfg: RadarChartConfig) -> list[str]:
    wrapped = [
        wrap_legend_label(c, cfg.legend_wrap_chars, cfg.legend_max_lines)
        for c in table.categories
    ]
    block_height = sum(
        cfg.legend_spacing + (len(lines) - 1) * cfg.legend_line_height for lines in wrapped
    )
    # Long legends are compressed to fit between legend_min_y and the bottom edge
    available = cfg.height - cfg.legend_min_y
    scale = min(1.0, available / block_height) if block_height else 1.0
    spacing = cfg.legend_spacing * scale
    line_height = cfg.legend_line_height * scale
    block_height *= scale
    y = max(float(cfg.legend_min_y), (cfg.height - block_height) / 2)
    text_x = cfg.legend_x + 28

    out = [_tag("text", {
        "x": str(cfg.legend_x),
        "y": _fmt(y - 20),
        "class": "legend-title",
    }, title)]

    for lines, color in zip(wrapped, colors):
        out.append(_tag("line", {
            "x1": str(cfg.legend_x),
            "y1": _fmt(y),
            "x2": str(cfg.legend_x + 20),
            "y2": _fmt(y),
            "stroke": color,
            "class": "legend-swatch",
        }))
        for j, line in enumerate(lines):
            out.append(_tag("text", {
                "x": str(text_x),
                "y": _fmt(y + 4 + j * line_height),
                "class": "legend-text",
            }, line))
        y += spacing + (len(lines) - 1) * line_height

    return out


def render_radar_svg(
    table: ScoreTable,
    legend_title: str | None = None,
    config: RadarChartConfig | None = None,
) -> str:
    """Complete SVG document for ``table``.

    Each company is a spoke, each category a closed stroke-only path; the
    legend on the left lists categories with their line colors.
    """
    cfg = config or RadarChartConfig()
    geo = RadarGeometry(len(table.companies), cfg)
    colors = CategoryPalette(len(table.categories), cfg).colors()
    title = legend_title if legend_title is not None else DEFAULT_LEGEND_TITLE

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{cfg.width}" height="{cfg.height}"'
        f' viewBox="0 0 {cfg.width} {cfg.height}">',
        "  <defs>",
        "    <style>",
    ]
    for selector, props in _STYLES.items():
        lines.append(f"      {selector} {{ {props} }}")
    lines.append("    </style>")
    lines.append("  </defs>")
    lines.append(f'  <rect width="{cfg.width}" height="{cfg.height}" fill="#FFFFFF"/>')

    for part in (
        _grid(geo),
        _axes(table.companies, geo),
        _category_lines(table, colors, geo),
        _legend(table, colors, title, cfg),
    ):
        lines.extend(f"  {elem}" for elem in part)

    lines.append("</svg>")
    return "\n".join(lines)
