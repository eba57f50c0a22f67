"""Summary statistics over an offset-vs-savings comparison series.

Every function here is total: empty or misaligned series give the sentinel
and zero values instead of raising.
"""

from __future__ import annotations

import math
from typing import List

from mortgage_compare.schemas.comparison import ComparisonSeries, ComparisonSummary

NO_CROSSOVER = -1
SAMPLE_YEARS = (1, 3, 5, 10)


def crossover_year(series: ComparisonSeries) -> int:
    """First year (skipping the year-0 baseline) where savings beats the offset."""
    for year, diff in list(zip(series.years, series.difference))[1:]:
        if diff < 0:
            return year
    return NO_CROSSOVER


def _finite(values: List[float]) -> List[float]:
    return [value for value in values if math.isfinite(value)]


def max_offset_advantage(series: ComparisonSeries) -> float:
    return max(max(_finite(series.difference), default=0.0), 0.0)


def max_savings_advantage(series: ComparisonSeries) -> float:
    return min(min(_finite(series.difference), default=0.0), 0.0)


def sample_at_year(series: ComparisonSeries, year: int) -> float:
    """Difference recorded for ``year``, or 0 when that year is missing."""
    for candidate, diff in zip(series.years, series.difference):
        if candidate == year:
            return diff
    return 0.0


def summarize(series: ComparisonSeries) -> ComparisonSummary:
    y1, y3, y5, y10 = (sample_at_year(series, year) for year in SAMPLE_YEARS)
    return ComparisonSummary(
        crossoverYear=crossover_year(series),
        maxOffsetAdvantage=max_offset_advantage(series),
        maxSavingsAdvantage=max_savings_advantage(series),
        benefitAtYear1=y1,
        benefitAtYear3=y3,
        benefitAtYear5=y5,
        benefitAtYear10=y10,
    )
