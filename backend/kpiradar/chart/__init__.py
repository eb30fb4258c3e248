"""Radar chart engine — category colors, SVG layout, rasterization."""

from kpiradar.chart.colors import CategoryPalette, color_for_category
from kpiradar.chart.config import RadarChartConfig
from kpiradar.chart.radar import render_radar_svg
from kpiradar.chart.rasterize import generate_radar_chart_image, render_radar_png, svg_to_png

__all__ = [
    "CategoryPalette",
    "color_for_category",
    "RadarChartConfig",
    "render_radar_svg",
    "generate_radar_chart_image",
    "render_radar_png",
    "svg_to_png",
]
