"""Readiness tracking for the downstream chart, comparison and tip requests."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from mortgage_compare.schemas.mortgage import MortgageInput
from mortgage_compare.schemas.savings import SavingsInput


class Trigger(str, Enum):
    CHART = "chart"
    COMPARE = "compare"
    CLEAR_COMPARISON = "clear_comparison"
    TIP = "tip"


class DependencyGate:
    """
    Decides which downstream requests a state change unlocks.

    Both calculators must have produced a result before anything fires. Every
    later submission of either form fires the chart again with the latest pair.
    The comparison additionally needs a positive offset amount; without one, a
    shown or pending comparison is cleared instead.
    """

    def __init__(self) -> None:
        self.mortgage: Optional[MortgageInput] = None
        self.savings: Optional[SavingsInput] = None
        self.has_comparison = False
        self.comparison_pending = False

    @property
    def has_mortgage(self) -> bool:
        return self.mortgage is not None

    @property
    def has_savings(self) -> bool:
        return self.savings is not None

    def mortgage_submitted(self, mortgage: MortgageInput) -> List[Trigger]:
        self.mortgage = mortgage
        return self._evaluate()

    def savings_submitted(self, savings: SavingsInput) -> List[Trigger]:
        self.savings = savings
        return self._evaluate()

    def comparison_succeeded(self) -> List[Trigger]:
        self.comparison_pending = False
        self.has_comparison = True
        return [Trigger.TIP]

    def comparison_failed(self) -> List[Trigger]:
        # a previously shown comparison (and its tip) stays on screen
        self.comparison_pending = False
        return []

    def comparison_cleared(self) -> None:
        self.has_comparison = False
        self.comparison_pending = False

    def _evaluate(self) -> List[Trigger]:
        if not (self.has_mortgage and self.has_savings):
            return []

        triggers = [Trigger.CHART]
        if self.mortgage.has_offset:
            self.comparison_pending = True
            triggers.append(Trigger.COMPARE)
        elif self.has_comparison or self.comparison_pending:
            self.comparison_cleared()
            triggers.append(Trigger.CLEAR_COMPARISON)
        return triggers
