# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import asyncio
import json
from collections import defaultdict
from typing import Any, Dict, List, Optional

import pytest

from auto_centile.config import ClinicalSettings, FormSettings
from auto_centile.core import CalculationResponse, RawInput
from auto_centile.core.context import ApiErrorKind
from auto_centile.growth_api import ApiCallResult, GrowthCalculationResponse


# ============================================================================
# External growth API doubles
# ============================================================================

def calculated(centile: Optional[float] = 50.0, sds: Optional[float] = 0.0, **extra) -> ApiCallResult:
    """Successful ApiCallResult carrying the given calculated values."""
    values = {"centile": centile, "sds": sds, **extra}
    return ApiCallResult.ok(
        GrowthCalculationResponse.model_validate({"measurement_calculated_values": values})
    )


def api_failure(message: str = "API error: HTTP 500", kind: ApiErrorKind = ApiErrorKind.UPSTREAM,
                http_status: Optional[int] = 500) -> ApiCallResult:
    return ApiCallResult.failed(kind, message, http_status=http_status)


class FakeGrowthClient:
    """Stands in for GrowthAPIClient; answers per metric."""

    def __init__(self, outcomes: Optional[Dict[str, Any]] = None, default: Optional[ApiCallResult] = None):
        self.outcomes = outcomes or {}
        self.default = default or calculated()
        self.requests = []

    async def send(self, request, endpoint=None, api_key=None):
        self.requests.append(request)
        outcome = self.outcomes.get(request.metric.value, self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeResponse:
    """Minimal aiohttp response used as an async context manager."""

    def __init__(self, status: int = 200, body: Any = ""):
        self.status = status
        if isinstance(body, bytes):
            self.body = body
        elif isinstance(body, str):
            self.body = body.encode("utf-8")
        else:
            self.body = json.dumps(body).encode("utf-8")

    async def text(self, encoding: Optional[str] = None, errors: str = "strict") -> str:
        return self.body.decode(encoding or "utf-8", errors)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Records post() calls; returns a canned response or raises."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[BaseException] = None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


# ============================================================================
# Host form doubles
# ============================================================================

class FakeForm:
    """In-memory form implementing the FormFields protocol."""

    def __init__(self, values: Optional[Dict[str, str]] = None, choices: Optional[Dict[str, str]] = None):
        self.values = dict(values or {})
        self.choices = dict(choices or {})
        self.writes: List[tuple] = []
        self.changes_fired: List[str] = []
        self._change_handlers = defaultdict(list)
        self._blur_handlers = defaultdict(list)

    def read_field(self, name: str) -> str:
        return self.values.get(name, "")

    def read_checked_choice(self, group_name: str) -> str:
        return self.choices.get(group_name, "")

    def write_field(self, name: str, value: str) -> None:
        self.values[name] = value
        self.writes.append((name, value))
        self.fire_change(name)

    def on_change(self, name, handler):
        self._change_handlers[name].append(handler)

    def on_blur(self, name, handler):
        self._blur_handlers[name].append(handler)

    def has_field(self, name: str) -> bool:
        return name in self.values or name in self.choices

    # Simulated user actions
    def edit(self, name: str, value: str):
        self.values[name] = value
        self.fire_change(name)

    def choose(self, group_name: str, value: str):
        self.choices[group_name] = value
        self.fire_change(group_name)

    def fire_change(self, name: str):
        self.changes_fired.append(name)
        for handler in list(self._change_handlers[name]):
            handler(name)

    def fire_blur(self, name: str):
        for handler in list(self._blur_handlers[name]):
            handler(name)


def make_response(errors: Optional[Dict[str, str]] = None, **metrics) -> CalculationResponse:
    """
    CalculationResponse from metric=(centile, sds) pairs and metric=error pairs.

    make_response(weight=(50.0, 0.0), errors={"height": "boom"})
    """
    results = {name: {"centile": c, "sds": s} for name, (c, s) in metrics.items()}
    for name, message in (errors or {}).items():
        results[name] = {"error": message}
    return CalculationResponse.model_validate({"success": True, "results": results})


class FakeCalculator:
    """
    Stands in for the remote calculation boundary.

    Responses are consumed in call order (the last one repeats). hold(i)
    returns an event that must be set before call i answers.
    """

    def __init__(self, *responses):
        self.responses = list(responses) or [make_response(weight=(50.0, 0.0))]
        self.payloads: List[Dict[str, str]] = []
        self._gates: Dict[int, asyncio.Event] = {}

    def hold(self, call_index: int) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[call_index] = gate
        return gate

    async def calculate(self, payload):
        index = len(self.payloads)
        self.payloads.append(dict(payload))
        if index in self._gates:
            await self._gates[index].wait()
        response = self.responses[min(index, len(self.responses) - 1)]
        if isinstance(response, Exception):
            raise response
        return response


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def raw_input():
    """Complete snapshot with weight and height"""
    return RawInput(
        birth_date="2020-01-15",
        measurement_date="2024-03-05",
        weight="16.2",
        height="102.5",
        sex="1",
    )


@pytest.fixture
def clinical_settings():
    return ClinicalSettings(SEX_MALE_CODE="1", SEX_FEMALE_CODES="0,2", STRICT_SEX_CODES=False)


@pytest.fixture
def form_settings():
    return FormSettings(
        TARGET_INSTRUMENTS="growth, vitals ",
        DEBOUNCE_SECONDS=0.05,
        INITIAL_CALCULATION_DELAY=0.01,
    )


@pytest.fixture
def filled_form():
    """Form with every input present and empty result fields"""
    return FakeForm(
        values={
            "weight_kg": "16.2",
            "height_cm": "102.5",
            "date_of_birth": "15-01-2020",
            "measurement_date": "05-03-2024",
            "gestation_weeks": "",
            "gestation_days": "",
            "weight_centile": "",
            "height_centile": "",
            "bmi_centile": "",
            "weight_sds": "",
            "height_sds": "",
            "bmi_sds": "",
            "bmi_calculated": "15.42",
        },
        choices={"sex": "1"},
    )
