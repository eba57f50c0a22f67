"""Data contracts for the mortgage calculator."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class OffsetMode(str, Enum):
    REDUCE_AMOUNT = "reduceAmount"
    REDUCE_TERM = "reduceTerm"


class MortgageInput(BaseModel):
    """Mortgage form submission, captured once per orchestration cycle."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    principal: float = Field(gt=0, le=100_000_000)
    annualRatePercent: float = Field(ge=0, le=100)
    years: int = Field(ge=1, le=50)
    offsetAmount: Optional[float] = Field(default=None, ge=0)
    offsetMode: Optional[OffsetMode] = None
    offsetRatePercent: Optional[float] = Field(default=None, ge=0, le=100)

    @model_validator(mode="after")
    def ensure_offset_consistency(self) -> "MortgageInput":
        if self.offsetAmount is not None and self.offsetAmount > self.principal:
            raise ValueError("offsetAmount cannot exceed principal")
        if (
            self.offsetRatePercent is not None
            and self.offsetRatePercent < self.annualRatePercent
        ):
            raise ValueError("offsetRatePercent cannot be below annualRatePercent")
        return self

    @property
    def has_offset(self) -> bool:
        return (self.offsetAmount or 0.0) > 0


class MortgageResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    monthlyPayment: float
    totalPaid: float
    totalInterest: float
    effectivePrincipal: Optional[float] = None
    effectiveYears: Optional[float] = None
    totalOffsetInterestEarned: Optional[float] = None
