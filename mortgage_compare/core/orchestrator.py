"""Coordinates the two calculators with the chart, comparison and tip services.

Flow per cycle:
  1) A calculator result arrives (mortgage or savings) and is recorded.
  2) The DependencyGate says which downstream requests that unlocks.
  3) Chart and comparison requests go out in the background.
  4) A comparison response is summarized locally and feeds the tip request.

Every remote request is tagged with a per-slice sequence number; only the
response to the latest request of a slice is applied, older ones are dropped.
All state writes happen under one lock so callbacks from worker threads
behave like a single thread of control.
"""

from __future__ import annotations

import functools
import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Type, TypeVar

from pydantic import BaseModel, ValidationError

from mortgage_compare.clients.downstream import (
    CHART_PATH,
    COMPARE_PATH,
    DEFAULT_ERROR_MESSAGE,
    MORTGAGE_PATH,
    SAVINGS_PATH,
    TIP_PATH,
    DownstreamError,
)
from mortgage_compare.core.assembler import (
    build_chart_request,
    build_compare_request,
    build_tip_request,
)
from mortgage_compare.core.charts import ChartPresenter
from mortgage_compare.core.gate import DependencyGate, Trigger
from mortgage_compare.core.render_cache import ChartSurface
from mortgage_compare.core.statistics import summarize
from mortgage_compare.schemas.chart import ChartSeries
from mortgage_compare.schemas.comparison import ComparisonSeries
from mortgage_compare.schemas.mortgage import MortgageInput, MortgageResult
from mortgage_compare.schemas.savings import SavingsInput, SavingsResult
from mortgage_compare.schemas.state import OrchestrationState, Slice, SliceStatus
from mortgage_compare.schemas.tip import TipResponse

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)
Listener = Callable[[Slice, OrchestrationState], None]

UNEXPECTED_RESPONSE_MESSAGE = "The service returned an unexpected response"


class Downstream(Protocol):
    def post(self, path: str, payload: BaseModel) -> Dict[str, Any]: ...

    def submit(
        self,
        path: str,
        payload: BaseModel,
        on_success: Callable[[Dict[str, Any]], None],
        on_error: Callable[[Exception], None],
    ) -> Any: ...

    def close(self) -> None: ...


class SequenceTracker:
    """Monotonic request counter per slice."""

    def __init__(self) -> None:
        self._latest: Dict[Slice, int] = {}

    def issue(self, slice_: Slice) -> int:
        seq = self._latest.get(slice_, 0) + 1
        self._latest[slice_] = seq
        return seq

    def is_current(self, slice_: Slice, seq: int) -> bool:
        return self._latest.get(slice_, 0) == seq

    def invalidate(self, slice_: Slice) -> None:
        """Make every in-flight request of the slice stale."""
        self.issue(slice_)


class Orchestrator:
    def __init__(
        self,
        client: Downstream,
        surfaces: Optional[Mapping[str, ChartSurface]] = None,
        currency: str = "CZK",
    ):
        self._client = client
        self._gate = DependencyGate()
        self._sequences = SequenceTracker()
        self._state = OrchestrationState()
        self._presenter = ChartPresenter(surfaces, currency=currency)
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    # --- consumers ---

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def snapshot(self) -> OrchestrationState:
        with self._lock:
            return self._state.model_copy(deep=True)

    def close(self) -> None:
        """Destroy every renderer this orchestrator created."""
        with self._lock:
            self._presenter.cache.release_all()

    # --- calculator entry points ---

    def submit_mortgage(self, mortgage: MortgageInput) -> MortgageResult:
        """Run the remote mortgage calculation, then feed the result into the cycle.

        The caller always gets its own result back, but only the answer to the
        latest submission is recorded.
        """
        return self._calculate(
            Slice.MORTGAGE,
            MORTGAGE_PATH,
            mortgage,
            MortgageResult,
            functools.partial(self.on_mortgage_result, mortgage),
        )

    def submit_savings(self, savings: SavingsInput) -> SavingsResult:
        return self._calculate(
            Slice.SAVINGS,
            SAVINGS_PATH,
            savings,
            SavingsResult,
            functools.partial(self.on_savings_result, savings),
        )

    def on_mortgage_result(self, mortgage: MortgageInput, result: MortgageResult) -> None:
        with self._lock:
            self._state.mortgage = mortgage
            self._state.mortgageResult = result
            self._set_status(Slice.MORTGAGE, SliceStatus())
            self._dispatch(self._gate.mortgage_submitted(mortgage))
            self._notify(Slice.MORTGAGE)

    def on_savings_result(self, savings: SavingsInput, result: SavingsResult) -> None:
        with self._lock:
            self._state.savings = savings
            self._state.savingsResult = result
            self._set_status(Slice.SAVINGS, SliceStatus())
            self._dispatch(self._gate.savings_submitted(savings))
            self._notify(Slice.SAVINGS)

    # --- comparison ---

    def on_compare_result(self, series: ComparisonSeries) -> None:
        with self._lock:
            series = series.with_recomputed_difference()
            self._state.comparison = series
            self._state.summary = summarize(series)
            self._set_status(Slice.COMPARE, SliceStatus())
            self._presenter.show_comparison(series)
            self._dispatch(self._gate.comparison_succeeded())
            self._notify(Slice.COMPARE)

    def on_compare_cleared(self) -> None:
        with self._lock:
            logger.info("Offset amount is zero; clearing comparison and tip")
            self._gate.comparison_cleared()
            self._sequences.invalidate(Slice.COMPARE)
            self._sequences.invalidate(Slice.TIP)
            self._state.comparison = None
            self._state.summary = None
            self._state.tip = None
            self._set_status(Slice.COMPARE, SliceStatus())
            self._set_status(Slice.TIP, SliceStatus())
            self._presenter.clear_comparison()
            self._notify(Slice.COMPARE)

    # --- internals ---

    def _calculate(
        self,
        slice_: Slice,
        path: str,
        payload: BaseModel,
        result_model: Type[ResultT],
        apply: Callable[[ResultT], None],
    ) -> ResultT:
        with self._lock:
            seq = self._sequences.issue(slice_)
            self._set_status(slice_, SliceStatus(busy=True))
        try:
            result = result_model.model_validate(self._client.post(path, payload))
        except ValidationError as exc:
            error = DownstreamError(UNEXPECTED_RESPONSE_MESSAGE)
            self._on_error(slice_, seq, error)
            raise error from exc
        except DownstreamError as exc:
            self._on_error(slice_, seq, exc)
            raise

        with self._lock:
            if self._sequences.is_current(slice_, seq):
                apply(result)
            else:
                logger.debug(f"Discarding stale {slice_.value} result #{seq}")
        return result

    def _dispatch(self, triggers: List[Trigger]) -> None:
        for trigger in triggers:
            if trigger is Trigger.CHART:
                self._issue(
                    Slice.CHART,
                    CHART_PATH,
                    build_chart_request(self._gate.mortgage, self._gate.savings),
                    self._apply_chart,
                )
            elif trigger is Trigger.COMPARE:
                self._issue(
                    Slice.COMPARE,
                    COMPARE_PATH,
                    build_compare_request(self._gate.mortgage, self._gate.savings),
                    self._apply_comparison,
                )
            elif trigger is Trigger.CLEAR_COMPARISON:
                self.on_compare_cleared()
            elif trigger is Trigger.TIP:
                self._issue(
                    Slice.TIP,
                    TIP_PATH,
                    build_tip_request(
                        self._gate.mortgage,
                        self._gate.savings,
                        self._state.comparison,
                        self._state.summary,
                    ),
                    self._apply_tip,
                )

    def _issue(
        self,
        slice_: Slice,
        path: str,
        payload: BaseModel,
        apply: Callable[[Dict[str, Any]], None],
    ) -> None:
        seq = self._sequences.issue(slice_)
        self._set_status(slice_, SliceStatus(busy=True))
        logger.info(f"Issuing {slice_.value} request #{seq}")
        self._client.submit(
            path,
            payload,
            on_success=functools.partial(self._on_response, slice_, seq, apply),
            on_error=functools.partial(self._on_error, slice_, seq),
        )

    def _on_response(
        self,
        slice_: Slice,
        seq: int,
        apply: Callable[[Dict[str, Any]], None],
        body: Dict[str, Any],
    ) -> None:
        with self._lock:
            if not self._sequences.is_current(slice_, seq):
                logger.debug(f"Discarding stale {slice_.value} response #{seq}")
                return
            try:
                apply(body)
            except ValidationError:
                logger.warning(f"Malformed {slice_.value} response #{seq}")
                self._record_failure(slice_, UNEXPECTED_RESPONSE_MESSAGE)

    def _on_error(self, slice_: Slice, seq: int, exc: Exception) -> None:
        with self._lock:
            if not self._sequences.is_current(slice_, seq):
                logger.debug(f"Discarding stale {slice_.value} failure #{seq}")
                return
            message = exc.message if isinstance(exc, DownstreamError) else DEFAULT_ERROR_MESSAGE
            logger.warning(f"{slice_.value} request #{seq} failed: {exc}")
            self._record_failure(slice_, message)

    def _apply_chart(self, body: Dict[str, Any]) -> None:
        series = ChartSeries.from_response(body)
        self._state.chart = series
        self._set_status(Slice.CHART, SliceStatus())
        self._presenter.show_chart(series)
        self._notify(Slice.CHART)

    def _apply_comparison(self, body: Dict[str, Any]) -> None:
        self.on_compare_result(ComparisonSeries.model_validate(body))

    def _apply_tip(self, body: Dict[str, Any]) -> None:
        self._state.tip = TipResponse.model_validate(body).tip
        self._set_status(Slice.TIP, SliceStatus())
        self._notify(Slice.TIP)

    def _record_failure(self, slice_: Slice, message: str) -> None:
        self._set_status(slice_, SliceStatus(busy=False, error=message))
        if slice_ is Slice.COMPARE:
            self._gate.comparison_failed()
        self._notify(slice_)

    def _set_status(self, slice_: Slice, status: SliceStatus) -> None:
        self._state.status[slice_.value] = status

    def _notify(self, slice_: Slice) -> None:
        if not self._listeners:
            return
        snapshot = self._state.model_copy(deep=True)
        for listener in self._listeners:
            listener(slice_, snapshot)
