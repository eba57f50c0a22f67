"""Snapshot of everything the orchestrator has gathered so far."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field

from mortgage_compare.schemas.chart import ChartSeries
from mortgage_compare.schemas.comparison import ComparisonSeries, ComparisonSummary
from mortgage_compare.schemas.mortgage import MortgageInput, MortgageResult
from mortgage_compare.schemas.savings import SavingsInput, SavingsResult


class Slice(str, Enum):
    MORTGAGE = "mortgage"
    SAVINGS = "savings"
    CHART = "chart"
    COMPARE = "compare"
    TIP = "tip"


class SliceStatus(BaseModel):
    busy: bool = False
    error: Optional[str] = None


def _empty_status() -> Dict[str, SliceStatus]:
    return {s.value: SliceStatus() for s in Slice}


class OrchestrationState(BaseModel):
    mortgage: Optional[MortgageInput] = None
    mortgageResult: Optional[MortgageResult] = None
    savings: Optional[SavingsInput] = None
    savingsResult: Optional[SavingsResult] = None
    chart: Optional[ChartSeries] = None
    comparison: Optional[ComparisonSeries] = None
    summary: Optional[ComparisonSummary] = None
    tip: Optional[str] = None
    status: Dict[str, SliceStatus] = Field(default_factory=_empty_status)

    def slice_status(self, slice_: Slice) -> SliceStatus:
        return self.status[slice_.value]
