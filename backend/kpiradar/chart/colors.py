"""Category line colors — fixed palette plus seeded, distance-checked overflow.

The first five categories use a designed palette. Every further category gets
a color drawn from a seeded LCG, accepted only when it is at least
``min_color_distance`` (Euclidean RGB) from every color assigned before it.
Same index, same color: across calls and across processes.
"""

from __future__ import annotations

import logging
import math
import re

import numpy as np

from kpiradar.chart.config import RadarChartConfig

logger = logging.getLogger(__name__)

# Gold, dark blue, medium blue, light blue, cyan.
# Pairwise RGB distance >= 100 so the palette meets the same bar as generated colors.
BASE_COLORS: tuple[str, ...] = (
    "#F4B942",
    "#1E3A5F",
    "#2E6FD0",
    "#8EC9F5",
    "#00D4C8",
)

# Generated color i is seeded with i * COLOR_SEED_MULTIPLIER
COLOR_SEED_MULTIPLIER = 12345

# Classic LCG constants (period 233280)
_LCG_MULTIPLIER = 9301
_LCG_INCREMENT = 49297
_LCG_MODULUS = 233280

# Average channel brightness window: too dark or too washed out on white
_MIN_BRIGHTNESS = 60
_MAX_BRIGHTNESS = 220

# Fallback channels land in [50, 250) — readable but not distance-checked
_FALLBACK_SPAN = 200
_FALLBACK_FLOOR = 50

_HEX_RE = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)


class SeededRandom:
    """Reproducible uniform [0, 1) sequence."""

    def __init__(self, seed: int) -> None:
        self.state = seed

    def random(self) -> float:
        self.state = (self.state * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
        return self.state / _LCG_MODULUS

    def channel(self, span: int = 256, floor: int = 0) -> int:
        return math.floor(self.random() * span) + floor


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Parse ``#rrggbb``; anything else maps to black."""
    m = _HEX_RE.match(color.strip()) if color else None
    if m is None:
        return (0, 0, 0)
    return (int(m.group(1), 16), int(m.group(2), 16), int(m.group(3), 16))


def rgb_to_hex(rgb: tuple[int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def color_distance(a: str, b: str) -> float:
    """Euclidean distance between two hex colors in RGB space."""
    ra, ga, ba = hex_to_rgb(a)
    rb, gb, bb = hex_to_rgb(b)
    return math.sqrt((ra - rb) ** 2 + (ga - gb) ** 2 + (ba - bb) ** 2)


def _min_distance(candidate: tuple[int, int, int], existing: np.ndarray) -> float:
    if existing.size == 0:
        return math.inf
    diffs = existing - np.asarray(candidate, dtype=np.float64)
    return float(np.sqrt((diffs ** 2).sum(axis=1)).min())


def generate_distinct_color(
    existing: list[str],
    seed: int,
    min_distance: float = 100.0,
    max_attempts: int = 50,
) -> tuple[str, bool]:
    """Draw a color at least ``min_distance`` from all ``existing`` colors.

    Returns ``(hex, guaranteed)``. When no candidate passes within
    ``max_attempts``, a seed-derived fallback is returned with
    ``guaranteed=False``; this never raises.
    """
    rng = SeededRandom(seed)
    existing_rgb = np.array([hex_to_rgb(c) for c in existing], dtype=np.float64)

    for _ in range(max_attempts):
        rgb = (rng.channel(), rng.channel(), rng.channel())

        brightness = sum(rgb) / 3
        if brightness < _MIN_BRIGHTNESS or brightness > _MAX_BRIGHTNESS:
            continue

        if _min_distance(rgb, existing_rgb) >= min_distance:
            return rgb_to_hex(rgb), True

    rgb = tuple(rng.channel(_FALLBACK_SPAN, _FALLBACK_FLOOR) for _ in range(3))
    return rgb_to_hex(rgb), False


class CategoryPalette:
    """Colors for one render. Generated colors are cached per instance."""

    def __init__(
        self,
        total_categories: int,
        config: RadarChartConfig | None = None,
    ) -> None:
        self.total_categories = total_categories
        self.config = config or RadarChartConfig()
        self._colors: list[str] = list(BASE_COLORS[: min(len(BASE_COLORS), total_categories)])
        self.fallback_indices: set[int] = set()

    def color(self, index: int) -> str:
        if index < 0:
            raise ValueError(f"category index must be >= 0, got {index}")
        if index < len(BASE_COLORS):
            return BASE_COLORS[index]

        # A palette sized for fewer than five categories still reserves the
        # base colors before generating overflow ones.
        if len(self._colors) < len(BASE_COLORS):
            self._colors = list(BASE_COLORS)

        while len(self._colors) <= index:
            i = len(self._colors)
            color, guaranteed = generate_distinct_color(
                self._colors,
                seed=i * COLOR_SEED_MULTIPLIER,
                min_distance=self.config.min_color_distance,
                max_attempts=self.config.max_color_attempts,
            )
            if not guaranteed:
                self.fallback_indices.add(i)
                logger.warning(
                    "Category %d: no color >= %.0f from %d existing after %d attempts; using %s",
                    i,
                    self.config.min_color_distance,
                    len(self._colors),
                    self.config.max_color_attempts,
                    color,
                )
            self._colors.append(color)

        return self._colors[index]

    def colors(self) -> list[str]:
        """Color for every category, in category order."""
        return [self.color(i) for i in range(self.total_categories)]


def color_for_category(
    index: int,
    total_categories: int,
    config: RadarChartConfig | None = None,
) -> str:
    """Deterministic color for category ``index`` of ``total_categories``."""
    return CategoryPalette(total_categories, config).color(index)
