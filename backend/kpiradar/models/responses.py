"""API response models."""

from __future__ import annotations

from pydantic import BaseModel

from kpiradar.models.score_table import DocumentSplit, ScoreTable


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"


class ExtractResponse(BaseModel):
    found: bool
    table: ScoreTable | None = None
    split: DocumentSplit | None = None
    overall: dict[str, float] | None = None
