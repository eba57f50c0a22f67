"""Data contracts for the savings calculator."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Periodicity(str, Enum):
    YEARLY = "yearly"
    MONTHLY = "monthly"


class SavingsInput(BaseModel):
    """Savings form submission. Omitted optional fields take the chart service defaults."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    initialAmount: float = Field(default=0.0, ge=0, le=100_000_000)
    monthlyContribution: float = Field(default=0.0, ge=0, le=1_000_000)
    annualInterestRatePercent: float = Field(ge=0, le=100)
    taxRatePercent: float = Field(default=15.0, ge=0, le=100)
    periodicity: Periodicity = Periodicity.MONTHLY
    years: int = Field(ge=1, le=50)


class SavingsResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    initialAmount: float
    monthlyContribution: float
    totalContributions: float
    totalInterestEarned: float
    totalTaxPaid: float
    totalSaved: float
    effectiveYears: Optional[int] = None
