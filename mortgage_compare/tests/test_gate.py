from __future__ import annotations

from mortgage_compare.core.gate import DependencyGate, Trigger


def test_nothing_fires_until_both_calculators_report(mortgage_with_offset, savings_input):
    gate = DependencyGate()

    assert gate.mortgage_submitted(mortgage_with_offset) == []
    assert gate.has_mortgage and not gate.has_savings
    assert gate.savings_submitted(savings_input) == [Trigger.CHART, Trigger.COMPARE]


def test_chart_only_without_offset(mortgage_without_offset, savings_input):
    gate = DependencyGate()
    gate.savings_submitted(savings_input)

    assert gate.mortgage_submitted(mortgage_without_offset) == [Trigger.CHART]


def test_resubmission_fires_chart_again(mortgage_without_offset, savings_input):
    gate = DependencyGate()
    gate.mortgage_submitted(mortgage_without_offset)
    gate.savings_submitted(savings_input)

    assert gate.savings_submitted(savings_input) == [Trigger.CHART]
    assert gate.mortgage_submitted(mortgage_without_offset) == [Trigger.CHART]


def test_dropping_offset_clears_shown_comparison(
    mortgage_with_offset, mortgage_without_offset, savings_input
):
    gate = DependencyGate()
    gate.mortgage_submitted(mortgage_with_offset)
    gate.savings_submitted(savings_input)
    assert gate.comparison_succeeded() == [Trigger.TIP]

    assert gate.mortgage_submitted(mortgage_without_offset) == [
        Trigger.CHART,
        Trigger.CLEAR_COMPARISON,
    ]
    assert not gate.has_comparison
    # already cleared; nothing more to clear
    assert gate.savings_submitted(savings_input) == [Trigger.CHART]


def test_dropping_offset_clears_pending_comparison(
    mortgage_with_offset, mortgage_without_offset, savings_input
):
    gate = DependencyGate()
    gate.mortgage_submitted(mortgage_with_offset)
    gate.savings_submitted(savings_input)
    assert gate.comparison_pending

    assert Trigger.CLEAR_COMPARISON in gate.mortgage_submitted(mortgage_without_offset)
    assert not gate.comparison_pending


def test_failed_comparison_keeps_previous_one(mortgage_with_offset, savings_input):
    gate = DependencyGate()
    gate.mortgage_submitted(mortgage_with_offset)
    gate.savings_submitted(savings_input)
    gate.comparison_succeeded()
    gate.savings_submitted(savings_input)

    assert gate.comparison_failed() == []
    assert gate.has_comparison
    assert not gate.comparison_pending
