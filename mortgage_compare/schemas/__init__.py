"""Pydantic wire models shared by the API, the orchestrator and the downstream client."""

from mortgage_compare.schemas.chart import ChartMortgage, ChartRequest, ChartSeries
from mortgage_compare.schemas.comparison import (
    CompareMortgage,
    CompareRequest,
    ComparisonSeries,
    ComparisonSummary,
)
from mortgage_compare.schemas.mortgage import MortgageInput, MortgageResult, OffsetMode
from mortgage_compare.schemas.savings import Periodicity, SavingsInput, SavingsResult
from mortgage_compare.schemas.state import OrchestrationState, Slice, SliceStatus
from mortgage_compare.schemas.tip import TipComparison, TipMortgage, TipRequest, TipResponse

__all__ = [
    "ChartMortgage",
    "ChartRequest",
    "ChartSeries",
    "CompareMortgage",
    "CompareRequest",
    "ComparisonSeries",
    "ComparisonSummary",
    "MortgageInput",
    "MortgageResult",
    "OffsetMode",
    "OrchestrationState",
    "Periodicity",
    "SavingsInput",
    "SavingsResult",
    "Slice",
    "SliceStatus",
    "TipComparison",
    "TipMortgage",
    "TipRequest",
    "TipResponse",
]
