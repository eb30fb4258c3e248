"""POST /api/extract and /api/radar/* — KPI table extraction and chart rendering."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from kpiradar.chart.radar import render_radar_svg
from kpiradar.chart.rasterize import generate_radar_chart_image
from kpiradar.config import Settings
from kpiradar.dependencies import get_settings
from kpiradar.errors import ChartRasterizationError
from kpiradar.extract.markdown_table import (
    extract_overall_scores,
    extract_score_table,
    split_around_table,
)
from kpiradar.models.requests import ExtractRequest, RadarRequest
from kpiradar.models.responses import ExtractResponse
from kpiradar.models.score_table import ScoreTable

logger = logging.getLogger(__name__)

router = APIRouter()

_NO_TABLE = "No KPI table found in markdown"


def _require_table(markdown: str) -> ScoreTable:
    table = extract_score_table(markdown)
    if table is None:
        raise HTTPException(status_code=404, detail=_NO_TABLE)
    return table


@router.post("/extract", response_model=ExtractResponse)
async def extract(req: ExtractRequest) -> ExtractResponse:
    table = extract_score_table(req.markdown)
    return ExtractResponse(
        found=table is not None,
        table=table,
        split=split_around_table(req.markdown),
        overall=extract_overall_scores(req.markdown),
    )


@router.post("/radar/svg")
async def radar_svg(
    req: RadarRequest,
    cfg: Settings = Depends(get_settings),
) -> Response:
    table = _require_table(req.markdown)
    svg = render_radar_svg(table, req.legend_title or cfg.default_legend_title)
    return Response(content=svg, media_type="image/svg+xml")


@router.post("/radar/png")
async def radar_png(
    req: RadarRequest,
    cfg: Settings = Depends(get_settings),
) -> Response:
    table = _require_table(req.markdown)
    try:
        png = await generate_radar_chart_image(
            table,
            req.legend_title or cfg.default_legend_title,
            timeout=cfg.rasterize_timeout_s,
        )
    except ChartRasterizationError as e:
        logger.error("Radar chart for %d companies failed: %s", len(table.companies), e)
        raise HTTPException(status_code=500, detail=str(e)) from e
    except asyncio.TimeoutError as e:
        logger.error(
            "Radar chart for %d companies timed out after %.1fs",
            len(table.companies),
            cfg.rasterize_timeout_s,
        )
        raise HTTPException(status_code=504, detail="chart rasterization timed out") from e
    return Response(content=png, media_type="image/png")
