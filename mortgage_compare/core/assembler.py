"""Builds the payloads sent to the chart, comparison and tip services."""

from __future__ import annotations

from mortgage_compare.schemas.chart import ChartMortgage, ChartRequest
from mortgage_compare.schemas.comparison import (
    CompareMortgage,
    CompareRequest,
    ComparisonSeries,
    ComparisonSummary,
)
from mortgage_compare.schemas.mortgage import MortgageInput, OffsetMode
from mortgage_compare.schemas.savings import SavingsInput
from mortgage_compare.schemas.tip import TipComparison, TipMortgage, TipRequest


def _offset_fields(mortgage: MortgageInput) -> dict:
    return {
        "offsetMode": mortgage.offsetMode or OffsetMode.REDUCE_AMOUNT,
        "offsetRatePercent": mortgage.offsetRatePercent or 0.0,
    }


def build_chart_request(mortgage: MortgageInput, savings: SavingsInput) -> ChartRequest:
    """Fill in offset defaults; never fails for validated inputs."""
    return ChartRequest(
        mortgage=ChartMortgage(
            principal=mortgage.principal,
            annualRatePercent=mortgage.annualRatePercent,
            years=mortgage.years,
            offsetAmount=mortgage.offsetAmount or 0.0,
            **_offset_fields(mortgage),
        ),
        savings=savings,
    )


def build_compare_request(mortgage: MortgageInput, savings: SavingsInput) -> CompareRequest:
    """
    Same mapping as the chart request, with the offset amount moved to the top level.

    Only valid for a positive offset amount; CompareRequest rejects anything else.
    """
    return CompareRequest(
        mortgage=CompareMortgage(
            principal=mortgage.principal,
            annualRatePercent=mortgage.annualRatePercent,
            years=mortgage.years,
            **_offset_fields(mortgage),
        ),
        savings=savings,
        offsetAmount=mortgage.offsetAmount or 0.0,
    )


def build_tip_request(
    mortgage: MortgageInput,
    savings: SavingsInput,
    series: ComparisonSeries,
    summary: ComparisonSummary,
) -> TipRequest:
    return TipRequest(
        mortgage=TipMortgage(
            principal=mortgage.principal,
            annualRatePercent=mortgage.annualRatePercent,
            years=mortgage.years,
            offsetAmount=mortgage.offsetAmount or 0.0,
            **_offset_fields(mortgage),
        ),
        savings=savings,
        comparison=TipComparison(
            years=list(series.years),
            offsetBenefit=list(series.offsetBenefit),
            savingsBenefit=list(series.savingsBenefit),
            difference=list(series.difference),
            **summary.model_dump(),
        ),
    )
