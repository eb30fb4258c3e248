"""Shared test fixtures."""

from __future__ import annotations

import pytest

from kpiradar.models.score_table import ScoreTable


# Markdown samples shaped like the analysis workflow's executive summaries

SIMPLE_KPI_MD = """| KPI Category | Nike | Adidas |
|---|---|---|
| Innovation | 4 | 3.5 |
| Overall | 4 | 3.5 |"""

REPORT_MD = """# Executive Summary

Nike leads on innovation while Adidas is catching up on supply chain.

## KPI Scorecard

| KPI Category | Nike | Adidas | Puma |
|--------------|------|--------|------|
| Strategic Clarity & Mission | 4.5 | 4 | 3 |
| Leadership Behavior | 4 | 3.5x | N/A |
| Development & Mentoring | 3 | 2.5 | |
| ... | ... | ... | ... |
| Overall | 4.2 | 3.8 | 2.9 |

## Recommendations

- Invest in mentoring programs.
"""

NO_TABLE_MD = """# Summary

No scorecard was produced for this run. Revenue grew 12% year over year.
"""

# A pipe table that does not qualify, followed by one that does
TWO_TABLES_MD = """| Region | Revenue |
|---|---|
| EMEA | 120 |

| Category | Acme | Globex |
|---|---|---|
| Pricing | 2 | 5 |
| Support | 3.25 | 4 |
"""

EIGHT_CATEGORIES = [
    "Strategic Clarity & Mission",
    "Leadership Principles & Values",
    "Leadership Behavior",
    "Development & Mentoring",
    "Communication & Transparency",
    "Performance & Accountability",
    "Change Readiness & Agility",
    "Customer Centricity",
]


def make_table(n_companies: int = 3, n_categories: int = 2) -> ScoreTable:
    companies = [f"Company {chr(ord('A') + i)}" for i in range(n_companies)]
    categories = [f"Category {i + 1}" for i in range(n_categories)]
    scores = [
        [float((ci + co) % 6) for co in range(n_companies)]
        for ci in range(n_categories)
    ]
    return ScoreTable(companies=companies, categories=categories, scores=scores)


@pytest.fixture
def simple_kpi_md() -> str:
    return SIMPLE_KPI_MD


@pytest.fixture
def report_md() -> str:
    return REPORT_MD


@pytest.fixture
def small_table() -> ScoreTable:
    return make_table(3, 2)
