"""Errors raised by the chart pipeline."""

from __future__ import annotations


class ChartRasterizationError(RuntimeError):
    """SVG to PNG conversion failed. Not retried internally."""

    def __init__(self, message: str = "chart rasterization failed") -> None:
        super().__init__(message)
