"""SVG -> PNG via cairosvg, and the end-to-end chart entry points."""

from __future__ import annotations

import asyncio
import logging

from kpiradar.chart.config import RadarChartConfig
from kpiradar.chart.radar import render_radar_svg
from kpiradar.errors import ChartRasterizationError
from kpiradar.extract.markdown_table import extract_score_table
from kpiradar.models.score_table import ScoreTable

logger = logging.getLogger(__name__)

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def svg_to_png(svg: str, width: int, height: int) -> bytes:
    """Render SVG markup to PNG bytes at ``width`` x ``height``.

    Any cairosvg failure, or output that is not a PNG, raises
    ChartRasterizationError.
    """
    import cairosvg

    try:
        png_bytes = cairosvg.svg2png(
            bytestring=svg.encode("utf-8"),
            output_width=width,
            output_height=height,
        )
    except Exception as e:
        logger.warning("Failed to render SVG to PNG: %s", e)
        raise ChartRasterizationError() from e

    if not png_bytes or not png_bytes.startswith(_PNG_SIGNATURE):
        logger.warning("SVG rendered to %d bytes of non-PNG output", len(png_bytes or b""))
        raise ChartRasterizationError()

    return png_bytes


def render_radar_png(
    table: ScoreTable,
    legend_title: str | None = None,
    config: RadarChartConfig | None = None,
) -> bytes:
    """Synchronous pipeline: table -> SVG -> PNG."""
    cfg = config or RadarChartConfig()
    svg = render_radar_svg(table, legend_title, cfg)
    return svg_to_png(svg, cfg.width, cfg.height)


async def generate_radar_chart_image(
    table: ScoreTable,
    legend_title: str | None = None,
    config: RadarChartConfig | None = None,
    timeout: float | None = None,
) -> bytes:
    """Build the SVG inline, rasterize in a worker thread.

    Rasterization is the only suspension point. ``timeout`` bounds it with
    ``asyncio.wait_for`` (raises ``asyncio.TimeoutError``); cancellation
    propagates to the caller.
    """
    cfg = config or RadarChartConfig()
    svg = render_radar_svg(table, legend_title, cfg)
    job = asyncio.to_thread(svg_to_png, svg, cfg.width, cfg.height)
    if timeout is None:
        return await job
    return await asyncio.wait_for(job, timeout)


def chart_from_markdown(
    markdown: str,
    legend_title: str | None = None,
    config: RadarChartConfig | None = None,
) -> bytes | None:
    """PNG for the markdown's KPI table, or None when there is no table."""
    table = extract_score_table(markdown)
    if table is None:
        return None
    return render_radar_png(table, legend_title, config)
