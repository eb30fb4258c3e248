"""KPI scorecard extraction and radar chart rendering."""

from kpiradar.chart.colors import CategoryPalette, color_for_category
from kpiradar.chart.config import RadarChartConfig
from kpiradar.chart.radar import render_radar_svg
from kpiradar.chart.rasterize import (
    chart_from_markdown,
    generate_radar_chart_image,
    render_radar_png,
)
from kpiradar.errors import ChartRasterizationError
from kpiradar.extract.markdown_table import (
    extract_score_table,
    has_score_table,
    split_around_table,
)
from kpiradar.models.score_table import DocumentSplit, ScoreTable

__all__ = [
    "CategoryPalette",
    "ChartRasterizationError",
    "DocumentSplit",
    "RadarChartConfig",
    "ScoreTable",
    "chart_from_markdown",
    "color_for_category",
    "extract_score_table",
    "generate_radar_chart_image",
    "has_score_table",
    "render_radar_png",
    "render_radar_svg",
    "split_around_table",
]
