"""HTTP client for the remote calculation, chart and tip services."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional

import requests
from pydantic import BaseModel

logger = logging.getLogger(__name__)

MORTGAGE_PATH = "/api/mortgage/calculate"
SAVINGS_PATH = "/api/savings/calculate"
CHART_PATH = "/api/chart/calculate"
COMPARE_PATH = "/api/chart/compare"
TIP_PATH = "/api/ai/tips"

DEFAULT_ERROR_MESSAGE = "An error occurred while calculating"

SuccessCallback = Callable[[Dict[str, Any]], None]
ErrorCallback = Callable[[Exception], None]


class DownstreamError(Exception):
    """A remote call failed; ``str(exc)`` is safe to show to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return DEFAULT_ERROR_MESSAGE
    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return DEFAULT_ERROR_MESSAGE


class ServiceClient:
    """
    Posts JSON payloads to the remote services.

    ``post`` blocks and returns the decoded body. ``submit`` runs the same call
    on a worker thread and reports back through exactly one of the callbacks.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        max_workers: int = 4,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="downstream")

    def post(self, path: str, payload: BaseModel) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self._session.post(
                url,
                data=payload.model_dump_json(),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            logger.warning(f"POST {url} timed out after {self.timeout}s")
            raise DownstreamError("The calculation service did not respond in time") from exc
        except requests.RequestException as exc:
            logger.warning(f"POST {url} failed: {type(exc).__name__}")
            raise DownstreamError("The calculation service is unavailable") from exc

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(f"POST {url} returned {response.status_code}: {message}")
            raise DownstreamError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise DownstreamError("The calculation service returned an unreadable response") from exc

    def submit(
        self,
        path: str,
        payload: BaseModel,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
    ) -> Future:
        future = self._executor.submit(self.post, path, payload)

        def _done(done: Future) -> None:
            exc = done.exception()
            if exc is None:
                on_success(done.result())
            else:
                on_error(exc)

        future.add_done_callback(_done)
        return future

    def close(self) -> None:
        self._executor.shutdown(wait=False)
        self._session.close()
