from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List

import pytest
from flask.testing import FlaskClient
from pydantic import BaseModel

from mortgage_compare.app import create_app
from mortgage_compare.app.surfaces import SnapshotSurface
from mortgage_compare.clients.downstream import (
    CHART_PATH,
    COMPARE_PATH,
    MORTGAGE_PATH,
    SAVINGS_PATH,
    TIP_PATH,
)
from mortgage_compare.config import Settings
from mortgage_compare.core.charts import SURFACE_IDS
from mortgage_compare.core.orchestrator import Orchestrator
from mortgage_compare.schemas.mortgage import MortgageInput, OffsetMode
from mortgage_compare.schemas.savings import Periodicity, SavingsInput


def _chart_body(scale: float = 1.0) -> dict:
    return {
        "mortgage": {"monthlyPayment": 21000.0, "totalPaid": 7560000.0, "yearlyData": []},
        "savings": {"totalSaved": 700000.0, "yearlyData": []},
        "chartData": {
            "years": [0, 1, 2],
            "standardBalance": [4000000.0 * scale, 3900000.0 * scale, 3790000.0 * scale],
            "offsetBalance": [4000000.0 * scale, 3850000.0 * scale, 3690000.0 * scale],
            "savingsBalance": [0.0, 60000.0 * scale, 123000.0 * scale],
            "yearlyPrincipal": [0.0, 100000.0, 110000.0],
            "yearlyInterest": [0.0, 152000.0, 142000.0],
        },
    }


def _compare_body() -> dict:
    return {
        "years": [0, 1, 2, 3],
        "offsetBenefit": [500.0, 400.0, 100.0, 0.0],
        "savingsBenefit": [0.0, 100.0, 150.0, 200.0],
        "difference": [500.0, 300.0, -50.0, -200.0],
    }


TIP_TEXT = "Keep money in offset for the first year. After year 2 switch to savings."


def default_responses() -> Dict[str, Any]:
    return {
        MORTGAGE_PATH: {"monthlyPayment": 21473.64, "totalPaid": 7730510.4, "totalInterest": 3730510.4},
        SAVINGS_PATH: {
            "initialAmount": 0.0,
            "monthlyContribution": 5000.0,
            "totalContributions": 600000.0,
            "totalInterestEarned": 151000.0,
            "totalTaxPaid": 22650.0,
            "totalSaved": 728350.0,
        },
        CHART_PATH: _chart_body(),
        COMPARE_PATH: _compare_body(),
        TIP_PATH: {"tip": TIP_TEXT},
    }


@dataclass
class PendingCall:
    path: str
    payload: BaseModel
    on_success: Callable[[dict], None]
    on_error: Callable[[Exception], None]

    def succeed(self, body: dict) -> None:
        self.on_success(body)

    def fail(self, exc: Exception) -> None:
        self.on_error(exc)


class FakeDownstream:
    """
    Stand-in for ServiceClient.

    Calculator posts answer straight from ``responses``. Background calls are
    queued until the test resolves them, unless ``auto_respond`` is set.
    A response that is an exception instance is raised (or reported) instead.
    """

    def __init__(self, auto_respond: bool = False):
        self.auto_respond = auto_respond
        self.responses = default_responses()
        self.posted: List[tuple] = []
        self.calls: List[PendingCall] = []
        self.closed = False

    def post(self, path: str, payload: BaseModel) -> dict:
        self.posted.append((path, payload))
        response = self.responses[path]
        if isinstance(response, Exception):
            raise response
        return response

    def submit(self, path, payload, on_success, on_error) -> PendingCall:
        call = PendingCall(path, payload, on_success, on_error)
        self.calls.append(call)
        if self.auto_respond:
            response = self.responses[path]
            if isinstance(response, Exception):
                call.fail(response)
            else:
                call.succeed(response)
        return call

    def calls_to(self, path: str) -> List[PendingCall]:
        return [call for call in self.calls if call.path == path]

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def chart_body() -> Callable[..., dict]:
    """Factory for chart service bodies; `scale` distinguishes one response from another."""
    return _chart_body


@pytest.fixture()
def compare_body() -> Callable[[], dict]:
    return _compare_body


@pytest.fixture()
def tip_text() -> str:
    return TIP_TEXT


@pytest.fixture()
def downstream() -> FakeDownstream:
    return FakeDownstream()


@pytest.fixture()
def surfaces() -> Dict[str, SnapshotSurface]:
    return {surface_id: SnapshotSurface(surface_id) for surface_id in SURFACE_IDS}


@pytest.fixture()
def orchestrator(downstream, surfaces) -> Orchestrator:
    return Orchestrator(downstream, surfaces=surfaces)


@pytest.fixture()
def mortgage_with_offset() -> MortgageInput:
    return MortgageInput(
        principal=4_000_000,
        annualRatePercent=5.0,
        years=30,
        offsetAmount=1_000_000,
        offsetMode=OffsetMode.REDUCE_TERM,
        offsetRatePercent=5.0,
    )


@pytest.fixture()
def mortgage_without_offset() -> MortgageInput:
    return MortgageInput(principal=4_000_000, annualRatePercent=5.0, years=30)


@pytest.fixture()
def savings_input() -> SavingsInput:
    return SavingsInput(
        initialAmount=0,
        monthlyContribution=5000,
        annualInterestRatePercent=4.5,
        taxRatePercent=15,
        periodicity=Periodicity.YEARLY,
        years=10,
    )


@pytest.fixture()
def app_downstream() -> FakeDownstream:
    return FakeDownstream(auto_respond=True)


@pytest.fixture()
def client(app_downstream) -> FlaskClient:
    flask_app = create_app(settings=Settings(), client=app_downstream)
    with flask_app.test_client() as test_client:
        yield test_client
