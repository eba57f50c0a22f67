"""Data contracts for the recommendation tip service."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict

from mortgage_compare.schemas.mortgage import OffsetMode
from mortgage_compare.schemas.savings import SavingsInput


class TipMortgage(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    principal: float
    annualRatePercent: float
    years: int
    offsetAmount: float
    offsetMode: OffsetMode
    offsetRatePercent: float


class TipComparison(BaseModel):
    """Comparison series flattened together with its summary statistics."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    years: List[int]
    offsetBenefit: List[float]
    savingsBenefit: List[float]
    difference: List[float]
    crossoverYear: int
    maxOffsetAdvantage: float
    maxSavingsAdvantage: float
    benefitAtYear1: float
    benefitAtYear3: float
    benefitAtYear5: float
    benefitAtYear10: float


class TipRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    mortgage: TipMortgage
    savings: SavingsInput
    comparison: TipComparison


class TipResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tip: str
