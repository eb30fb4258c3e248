"""Locate the KPI scorecard pipe-table in markdown and parse it.

Input is LLM-generated markdown, so every step is tolerant: malformed rows are
skipped, unparsable cells become 0, and a missing table yields None. Nothing
here raises for string input.
"""

from __future__ import annotations

import logging
import math
import re

from kpiradar.models.score_table import DocumentSplit, ScoreTable

logger = logging.getLogger(__name__)

# Header row must mention one of these (case-insensitive)
_HEADER_KEYWORDS = ("kpi", "category")

# Rows that are rendering artifacts rather than data
_OVERALL_LABEL = "overall"
_ARTIFACT_MARKERS = ("...", "…", "---")

_NON_NUMERIC_RE = re.compile(r"[^0-9.]")
_LEADING_FLOAT_RE = re.compile(r"[0-9]*\.?[0-9]*")


def parse_cell_number(raw: str) -> float:
    """Strip everything but digits and '.', then parse the leading float.

    ``"4.5x"`` -> 4.5, ``"1.2.3"`` -> 1.2, ``"N/A"`` / ``""`` -> 0.0.
    """
    if not raw:
        return 0.0
    cleaned = _NON_NUMERIC_RE.sub("", raw)
    prefix = _LEADING_FLOAT_RE.match(cleaned).group(0)
    if prefix in ("", "."):
        return 0.0
    value = float(prefix)
    # Overlong digit runs overflow to inf
    if not math.isfinite(value):
        return 0.0
    return value


def _split_cells(line: str) -> list[str]:
    """Split a pipe row, trim cells and drop the empties left by outer pipes."""
    return [cell.strip() for cell in line.split("|") if cell.strip()]


def _is_header_line(line: str) -> bool:
    if "|" not in line:
        return False
    lowered = line.lower()
    return any(keyword in lowered for keyword in _HEADER_KEYWORDS)


def _ends_table(line: str) -> bool:
    stripped = line.strip()
    return not stripped or "|" not in stripped


def _is_artifact_label(label: str) -> bool:
    if label.lower() == _OVERALL_LABEL:
        return True
    return any(marker in label for marker in _ARTIFACT_MARKERS)


def find_table_header(lines: list[str]) -> int | None:
    """Index of the first pipe line mentioning 'kpi' or 'category'."""
    for i, line in enumerate(lines):
        if _is_header_line(line):
            return i
    return None


def has_score_table(markdown: str) -> bool:
    """Whether the markdown contains a KPI table header row."""
    if not markdown or not markdown.strip():
        return False
    return find_table_header(markdown.split("\n")) is not None


def _table_rows(lines: list[str], header_idx: int) -> list[list[str]]:
    """Cell lists for each data row after the header and its separator line."""
    rows: list[list[str]] = []
    for line in lines[header_idx + 2:]:
        if _ends_table(line):
            break
        rows.append(_split_cells(line))
    return rows


def extract_score_table(markdown: str) -> ScoreTable | None:
    """Parse the first KPI table into a ScoreTable, or None if there is none."""
    if not markdown or not markdown.strip():
        return None

    lines = markdown.split("\n")
    header_idx = find_table_header(lines)
    if header_idx is None:
        logger.debug("No KPI table header found")
        return None

    header_cells = _split_cells(lines[header_idx])
    if len(header_cells) < 2:
        logger.debug("KPI header on line %d has no company columns", header_idx)
        return None
    companies = header_cells[1:]

    categories: list[str] = []
    scores: list[list[float]] = []

    for cells in _table_rows(lines, header_idx):
        if len(cells) < 2:
            continue
        label = cells[0]
        if _is_artifact_label(label):
            continue

        values = cells[1:len(companies) + 1]
        row = [parse_cell_number(v) for v in values]
        # Short rows are padded so the table stays rectangular
        row.extend([0.0] * (len(companies) - len(row)))

        categories.append(label)
        scores.append(row)

    if not categories:
        logger.debug("KPI table on line %d has no data rows", header_idx)
        return None

    logger.debug(
        "Extracted KPI table: %d categories x %d companies",
        len(categories),
        len(companies),
    )
    return ScoreTable(companies=companies, categories=categories, scores=scores)


def extract_overall_scores(markdown: str) -> dict[str, float] | None:
    """Headline score per company from the table's 'Overall' row."""
    if not markdown or not markdown.strip():
        return None

    lines = markdown.split("\n")
    header_idx = find_table_header(lines)
    if header_idx is None:
        return None

    header_cells = _split_cells(lines[header_idx])
    if len(header_cells) < 2:
        return None
    companies = header_cells[1:]

    for cells in _table_rows(lines, header_idx):
        if not cells or _OVERALL_LABEL not in cells[0].lower():
            continue
        overall: dict[str, float] = {}
        for company, raw in zip(companies, cells[1:]):
            if _NON_NUMERIC_RE.sub("", raw).strip("."):
                overall[company] = parse_cell_number(raw)
        return overall

    return None


def split_around_table(markdown: str) -> DocumentSplit | None:
    """Partition markdown into the text before, the KPI table, and after it."""
    if not markdown or not markdown.strip():
        return None

    lines = markdown.split("\n")
    start = find_table_header(lines)
    if start is None:
        return None

    end = len(lines) - 1
    for i in range(start + 2, len(lines)):
        if _ends_table(lines[i]):
            end = i - 1
            break

    return DocumentSplit(
        before_table="\n".join(lines[:start]),
        table="\n".join(lines[start:end + 1]),
        after_table="\n".join(lines[end + 1:]),
        table_start=start,
        table_end=end,
        line_count=len(lines),
    )
