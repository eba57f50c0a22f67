"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from mortgage_compare.clients.downstream import DownstreamError
from mortgage_compare.schemas.mortgage import MortgageInput
from mortgage_compare.schemas.ping import PingResponse
from mortgage_compare.schemas.savings import SavingsInput

api_bp = Blueprint("api", __name__)


def _services() -> Dict[str, Any]:
    return current_app.extensions["mortgage_compare"]


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(DownstreamError)
def _handle_downstream_error(exc: DownstreamError):
    return jsonify({"error": exc.message}), HTTPStatus.BAD_GATEWAY


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong", downstream=_services()["settings"].downstream_base_url)
    return jsonify(response.model_dump())


@api_bp.post("/mortgage/calculate")
def mortgage() -> Any:
    """Calculate the mortgage and start the comparison cycle."""
    payload = MortgageInput.model_validate(request.get_json(force=True, silent=False))
    result = _services()["orchestrator"].submit_mortgage(payload)
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/savings/calculate")
def savings() -> Any:
    """Calculate the savings plan and start the comparison cycle."""
    payload = SavingsInput.model_validate(request.get_json(force=True, silent=False))
    result = _services()["orchestrator"].submit_savings(payload)
    return jsonify(result.model_dump(mode="json"))


@api_bp.get("/state")
def state() -> Any:
    """Latest inputs, results, comparison summary, tip and per-slice status."""
    return jsonify(_services()["orchestrator"].snapshot().model_dump(mode="json"))


@api_bp.get("/charts/<surface_id>")
def chart(surface_id: str) -> Any:
    surface = _services()["surfaces"].get(surface_id)
    current = surface.current() if surface is not None else None
    if current is None:
        return jsonify({"error": f"nothing rendered on {surface_id}"}), HTTPStatus.NOT_FOUND
    return jsonify(current)
