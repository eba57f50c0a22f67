"""Chart.js-shaped configurations and the presenter that pushes them to chart surfaces."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from mortgage_compare.core.render_cache import ChartSurface, Rendered, SeriesAlignmentCache
from mortgage_compare.schemas.chart import ChartSeries
from mortgage_compare.schemas.comparison import ComparisonSeries

logger = logging.getLogger(__name__)

BALANCE_SURFACE = "balance"
BREAKDOWN_SURFACE = "breakdown"
COMPARISON_SURFACE = "comparison"
SURFACE_IDS = (BALANCE_SURFACE, BREAKDOWN_SURFACE, COMPARISON_SURFACE)

CHART_DATASET = "chart"
COMPARISON_DATASET = "comparison"


def _year_labels(years: List[int]) -> List[str]:
    return [f"Year {year}" for year in years]


def _line(data: List[float], label: str, color: str, fill_rgb: str, dashed: bool = False) -> Dict[str, Any]:
    dataset: Dict[str, Any] = {
        "data": list(data),
        "label": label,
        "borderColor": color,
        "backgroundColor": f"rgba({fill_rgb}, 0.1)",
        "tension": 0.3,
        "fill": False,
    }
    if dashed:
        dataset["borderDash"] = [5, 5]
    return dataset


def _options(axis_title: str, hover_index: bool) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "responsive": True,
        "maintainAspectRatio": False,
        "scales": {
            "y": {
                "display": True,
                "position": "left",
                "title": {"display": True, "text": axis_title},
            }
        },
        "plugins": {"legend": {"display": True, "position": "top"}},
    }
    if hover_index:
        options["interaction"] = {"mode": "index", "intersect": False}
    return options


def balance_config(series: ChartSeries, currency: str = "CZK") -> Dict[str, Any]:
    return {
        "type": "line",
        "data": {
            "labels": _year_labels(series.years),
            "datasets": [
                _line(series.standardBalance, "Standard Balance", "#1976d2", "25, 118, 210"),
                _line(series.offsetBalance, "Offset Balance", "#388e3c", "56, 142, 60"),
                _line(series.savingsBalance, "Savings Balance", "#f57c00", "245, 124, 0"),
            ],
        },
        "options": _options(f"Balance ({currency})", hover_index=True),
    }


def breakdown_config(series: ChartSeries, currency: str = "CZK") -> Dict[str, Any]:
    return {
        "type": "bar",
        "data": {
            "labels": _year_labels(series.years),
            "datasets": [
                {"data": list(series.yearlyPrincipal), "label": "Principal", "backgroundColor": "#1976d2"},
                {"data": list(series.yearlyInterest), "label": "Interest", "backgroundColor": "#f44336"},
            ],
        },
        "options": _options(f"Amount ({currency})", hover_index=False),
    }


def comparison_config(series: ComparisonSeries, currency: str = "CZK") -> Dict[str, Any]:
    return {
        "type": "line",
        "data": {
            "labels": _year_labels(series.years),
            "datasets": [
                _line(series.offsetBenefit, "Offset Cumulative Benefit", "#1976d2", "25, 118, 210"),
                _line(series.savingsBenefit, "Savings Cumulative Benefit", "#388e3c", "56, 142, 60"),
                _line(series.difference, "Difference (Offset - Savings)", "#f57c00", "245, 124, 0", dashed=True),
            ],
        },
        "options": _options(f"Benefit ({currency})", hover_index=True),
    }


class ChartPresenter:
    """Draws series onto the surfaces it was given, creating each renderer only once."""

    def __init__(
        self,
        surfaces: Optional[Mapping[str, ChartSurface]] = None,
        currency: str = "CZK",
        cache: Optional[SeriesAlignmentCache] = None,
    ) -> None:
        self._surfaces = dict(surfaces or {})
        self._currency = currency
        self.cache = cache or SeriesAlignmentCache()

    def show_chart(self, series: ChartSeries) -> None:
        if not series.years:
            return
        self.draw(BALANCE_SURFACE, CHART_DATASET, balance_config(series, self._currency))
        self.draw(BREAKDOWN_SURFACE, CHART_DATASET, breakdown_config(series, self._currency))

    def show_comparison(self, series: ComparisonSeries) -> None:
        if not series.years:
            return
        self.draw(COMPARISON_SURFACE, COMPARISON_DATASET, comparison_config(series, self._currency))

    def clear_comparison(self) -> None:
        self.cache.release(COMPARISON_SURFACE)

    def draw(self, surface_id: str, dataset_key: str, config: Dict[str, Any]) -> None:
        surface = self._surfaces.get(surface_id)
        if surface is None:
            return

        slot = self.cache.slot(surface_id)
        if isinstance(slot, Rendered) and slot.dataset_key != dataset_key:
            self.cache.release(surface_id)

        if self.cache.should_create(surface_id):
            logger.debug(f"Creating renderer on surface {surface_id}")
            self.cache.remember(surface_id, surface.create(config), dataset_key)
        else:
            self.cache.slot(surface_id).renderer.update(config)
