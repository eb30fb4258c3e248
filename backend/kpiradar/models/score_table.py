"""Parsed KPI scorecard model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScoreTable(BaseModel):
    """Category scores per company, indexed ``scores[category][company]``.

    Company order defines the chart's axis order; category order defines draw
    order (later categories overlay earlier ones).
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    companies: tuple[str, ...] = Field(..., min_length=1)
    categories: tuple[str, ...] = Field(..., min_length=1)
    scores: tuple[tuple[float, ...], ...]

    @model_validator(mode="after")
    def _check_rectangular(self) -> ScoreTable:
        if len(self.scores) != len(self.categories):
            raise ValueError(
                f"expected {len(self.categories)} score rows, got {len(self.scores)}"
            )
        for i, row in enumerate(self.scores):
            if len(row) != len(self.companies):
                raise ValueError(
                    f"row {i} has {len(row)} scores, expected {len(self.companies)}"
                )
        return self


class DocumentSplit(BaseModel):
    """Markdown partitioned around the KPI table.

    Segments are line-joined without their boundary newlines. The line indices
    are kept because an empty segment cannot distinguish "no lines" from a
    single blank line.
    """

    model_config = ConfigDict(frozen=True)

    before_table: str
    table: str
    after_table: str
    table_start: int = Field(..., ge=0)
    table_end: int = Field(..., ge=0)  # inclusive
    line_count: int = Field(..., ge=1)

    def join(self) -> str:
        """Reconstruct the original document."""
        parts: list[str] = []
        if self.table_start > 0:
            parts.append(self.before_table)
        parts.append(self.table)
        if self.table_end + 1 < self.line_count:
            parts.append(self.after_table)
        return "\n".join(parts)
