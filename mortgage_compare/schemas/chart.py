"""Data contracts for the balance chart service."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mortgage_compare.schemas.mortgage import OffsetMode
from mortgage_compare.schemas.savings import SavingsInput


class ChartMortgage(BaseModel):
    """Mortgage block with every offset field filled in."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    principal: float
    annualRatePercent: float
    years: int
    offsetAmount: float = 0.0
    offsetMode: OffsetMode = OffsetMode.REDUCE_AMOUNT
    offsetRatePercent: float = 0.0


class ChartRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    mortgage: ChartMortgage
    savings: SavingsInput


class ChartSeries(BaseModel):
    """Year-aligned balances returned by the chart service."""

    model_config = ConfigDict(extra="ignore")

    years: List[int] = Field(default_factory=list)
    standardBalance: List[float] = Field(default_factory=list)
    offsetBalance: List[float] = Field(default_factory=list)
    savingsBalance: List[float] = Field(default_factory=list)
    yearlyPrincipal: List[float] = Field(default_factory=list)
    yearlyInterest: List[float] = Field(default_factory=list)

    @model_validator(mode="after")
    def ensure_aligned(self) -> "ChartSeries":
        expected = len(self.years)
        for name in (
            "standardBalance",
            "offsetBalance",
            "savingsBalance",
            "yearlyPrincipal",
            "yearlyInterest",
        ):
            if len(getattr(self, name)) != expected:
                raise ValueError(f"{name} must have one value per year")
        return self

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "ChartSeries":
        """Accept either the bare arrays or the service's ``chartData`` envelope."""
        if isinstance(payload, dict) and isinstance(payload.get("chartData"), dict):
            payload = payload["chartData"]
        return cls.model_validate(payload)
