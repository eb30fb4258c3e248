"""Radar chart configuration — canvas geometry, color and wrapping thresholds."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RadarChartConfig:
    """Fixed layout for one rendered chart. Passed explicitly, never global."""

    # Canvas
    width: int = 1000
    height: int = 600
    legend_width: int = 260
    chart_gap: int = 50  # space between legend column and chart region

    # Polar grid
    max_radius: float = 220.0
    levels: int = 5  # concentric circles
    max_value: float = 5.0  # KPI scores are bounded 0-5; no auto-scaling

    # Category colors
    min_color_distance: float = 100.0  # Euclidean RGB distance
    max_color_attempts: int = 50

    # Axis labels sit slightly beyond the outer ring (v = max_value + offset)
    label_offset: float = 0.8
    axis_wrap_chars: int = 15
    axis_line_height: int = 14

    # Legend
    legend_x: int = 20
    legend_min_y: int = 80  # leaves room for the title
    legend_spacing: int = 24
    legend_line_height: int = 16
    legend_wrap_chars: int = 35
    legend_max_lines: int = 2

    @property
    def chart_x(self) -> float:
        """Left edge of the chart region."""
        return float(self.legend_width + self.chart_gap)

    @property
    def center(self) -> tuple[float, float]:
        cx = self.chart_x + (self.width - self.chart_x) / 2
        return (cx, self.height / 2)
