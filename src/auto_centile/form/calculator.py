# ============================================================================
# src/auto_centile/form/calculator.py
# ============================================================================
"""
Remote call boundary between the form and the calculation endpoint.

- HttpCentileCalculator: POSTs the snapshot to the calculation API
- LocalCentileCalculator: calls an in-process orchestrator

Both either return a successful CalculationResponse or raise
RemoteCalculationError; per-metric errors stay inside the response.
"""

import asyncio
import json
import logging
from typing import Dict, Optional, Protocol

import aiohttp
from pydantic import ValidationError

from ..config.form_config import FormSettings, form_settings
from ..core.context.measurement import RawInput
from ..core.context.outcome import CalculationResponse
from ..core.orchestrator import CentileOrchestrator
from ..utils.exceptions import CentileInputError, RemoteCalculationError


class CentileCalculator(Protocol):
    async def calculate(self, payload: Dict[str, str]) -> CalculationResponse:
        ...


class HttpCentileCalculator:
    """
    Config options:
        url: calculation endpoint (default: FormSettings.CALCULATE_URL)
        timeout: request timeout in seconds (default: FormSettings.CALCULATE_TIMEOUT)
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        settings: Optional[FormSettings] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        settings = settings or form_settings
        self.url = url or settings.CALCULATE_URL
        self.timeout = timeout or settings.CALCULATE_TIMEOUT
        self._session = session
        self._owns_session = session is None
        self.logger = logging.getLogger(self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True
        return self._session

    async def close(self):
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def calculate(self, payload: Dict[str, str]) -> CalculationResponse:
        status = None
        try:
            session = await self._get_session()
            async with session.post(self.url, json=payload) as response:
                status = response.status
                body = await response.text()
        except asyncio.TimeoutError:
            raise RemoteCalculationError(f"Calculation request timed out after {self.timeout}s")
        except aiohttp.ClientError as e:
            raise RemoteCalculationError(f"Calculation request failed: {e}")
        except UnicodeDecodeError:
            if status != 200:
                raise RemoteCalculationError(f"Calculation failed: HTTP {status}", status=status)
            raise RemoteCalculationError("Invalid calculation response", status=status)

        if status != 200:
            raise RemoteCalculationError(
                self._error_from_body(body) or f"Calculation failed: HTTP {status}",
                status=status,
            )

        try:
            result = CalculationResponse.model_validate_json(body)
        except ValidationError:
            raise RemoteCalculationError("Invalid calculation response", status=status)

        if not result.success:
            raise RemoteCalculationError(result.error or "Unknown error", status=status)
        return result

    @staticmethod
    def _error_from_body(body: str) -> Optional[str]:
        try:
            data = json.loads(body)
        except ValueError:
            return None
        if isinstance(data, dict) and isinstance(data.get("error"), str):
            return data["error"]
        return None


class LocalCentileCalculator:
    """Runs the orchestrator in-process, e.g. for a headless form."""

    def __init__(self, orchestrator: CentileOrchestrator):
        self.orchestrator = orchestrator

    async def calculate(self, payload: Dict[str, str]) -> CalculationResponse:
        try:
            result = await self.orchestrator.calculate(RawInput.model_validate(payload))
        except (CentileInputError, ValidationError) as e:
            raise RemoteCalculationError(str(e), status=400)
        return CalculationResponse.model_validate({"success": True, "results": result.to_dict()})
