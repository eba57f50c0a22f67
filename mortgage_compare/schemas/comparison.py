"""Data contracts for the offset-vs-savings comparison service."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from mortgage_compare.schemas.mortgage import OffsetMode
from mortgage_compare.schemas.savings import SavingsInput


class CompareMortgage(BaseModel):
    """Mortgage block of a comparison request; the offset amount travels separately."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    principal: float
    annualRatePercent: float
    years: int
    offsetMode: OffsetMode = OffsetMode.REDUCE_AMOUNT
    offsetRatePercent: float = 0.0


class CompareRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    mortgage: CompareMortgage
    savings: SavingsInput
    offsetAmount: float = Field(gt=0)


class ComparisonSeries(BaseModel):
    """
    Cumulative benefit of each strategy per year.

    The arrays are expected to be aligned and year-ascending, but nothing here
    enforces it: a misaligned payload is kept as-is so the statistics can
    degrade instead of failing.
    """

    model_config = ConfigDict(extra="ignore")

    years: List[int] = Field(default_factory=list)
    offsetBenefit: List[float] = Field(default_factory=list)
    savingsBenefit: List[float] = Field(default_factory=list)
    difference: List[float] = Field(default_factory=list)

    def with_recomputed_difference(self) -> "ComparisonSeries":
        """Return a copy whose difference is offsetBenefit - savingsBenefit wherever both exist."""
        paired = [offset - savings for offset, savings in zip(self.offsetBenefit, self.savingsBenefit)]
        difference = paired + list(self.difference[len(paired):])
        return self.model_copy(update={"difference": difference})


class ComparisonSummary(BaseModel):
    """Statistics derived locally from a ComparisonSeries."""

    model_config = ConfigDict(frozen=True)

    crossoverYear: int
    maxOffsetAdvantage: float
    maxSavingsAdvantage: float
    benefitAtYear1: float
    benefitAtYear3: float
    benefitAtYear5: float
    benefitAtYear10: float
