"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ExtractRequest(BaseModel):
    markdown: str = Field(..., description="Markdown report containing a KPI table")


class RadarRequest(BaseModel):
    markdown: str = Field(..., description="Markdown report containing a KPI table")
    legend_title: str | None = Field(
        default=None,
        description="Legend heading (localized); server default when omitted",
    )
