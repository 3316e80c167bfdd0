# ============================================================================
# src/auto_centile/growth_api/client.py
# ============================================================================
"""
Growth Reference API Client

Sends one measurement request to the external calculator and maps the
reply into a typed result:
- success: decoded GrowthCalculationResponse
- failure: ApiError (transport, upstream, malformed)

Each call is attempted exactly once. Retries are a caller decision.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp
from pydantic import ValidationError

from .schemas import GrowthCalculationResponse
from ..config.growth_api_config import GrowthApiSettings, growth_api_settings
from ..core.context.enums import ApiErrorKind
from ..core.context.measurement import MeasurementRequest
from ..utils.exceptions import ConfigurationError


@dataclass(frozen=True)
class ApiError:
    kind: ApiErrorKind
    message: str
    http_status: Optional[int] = None


@dataclass(frozen=True)
class ApiCallResult:
    data: Optional[GrowthCalculationResponse] = None
    error: Optional[ApiError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, data: GrowthCalculationResponse) -> "ApiCallResult":
        return cls(data=data)

    @classmethod
    def failed(cls, kind: ApiErrorKind, message: str, http_status: Optional[int] = None) -> "ApiCallResult":
        return cls(error=ApiError(kind=kind, message=message, http_status=http_status))


class GrowthAPIClient:
    """
    Stateless transport to the growth-reference calculator.

    Config (explicit arguments win over GrowthApiSettings):
        endpoint: calculation URL
        api_key: bearer token, omitted when empty
        timeout: per-call timeout in seconds (default: 30)
        verify_ssl: TLS certificate verification (default: True)

    The aiohttp session is created lazily and shared by concurrent calls.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        verify_ssl: Optional[bool] = None,
        settings: Optional[GrowthApiSettings] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.settings = settings or growth_api_settings
        self.endpoint = (endpoint or self.settings.GROWTH_API_URL).strip()
        if not self.endpoint:
            raise ConfigurationError("GROWTH_API_URL is not configured")
        self.api_key = api_key if api_key is not None else self.settings.GROWTH_API_KEY
        self.timeout = timeout or self.settings.GROWTH_API_TIMEOUT
        self.verify_ssl = self.settings.GROWTH_API_VERIFY_SSL if verify_ssl is None else verify_ssl

        self._session = session
        self._owns_session = session is None

        self.logger = logging.getLogger(self.__class__.__name__)
        self.logger.info(f"Initialized growth API client: {self.endpoint}")

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "GrowthAPIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _headers(self, api_key: Optional[str]) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        return headers

    async def send(
        self,
        request: MeasurementRequest,
        endpoint: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> ApiCallResult:
        """
        POST one measurement to the calculator.

        Never raises for transport or upstream problems; they come back
        as ApiCallResult.error.
        """
        url = endpoint or self.endpoint
        key = api_key if api_key is not None else self.api_key
        metric = request.metric.value
        status = None

        try:
            session = await self._get_session()
            async with session.post(
                url,
                json=request.to_payload(),
                headers=self._headers(key),
                ssl=self.verify_ssl,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                status = response.status
                body = await response.text()
        except asyncio.TimeoutError:
            self.logger.warning(f"{metric}: growth API timed out after {self.timeout}s")
            return ApiCallResult.failed(
                ApiErrorKind.TRANSPORT,
                f"Request timed out after {self.timeout}s"
            )
        except aiohttp.ClientError as e:
            self.logger.warning(f"{metric}: growth API connection failed: {e}")
            return ApiCallResult.failed(ApiErrorKind.TRANSPORT, f"Connection error: {e}")
        except UnicodeDecodeError:
            self.logger.error(f"{metric}: growth API returned an undecodable body (HTTP {status})")
            if status != 200:
                return ApiCallResult.failed(
                    ApiErrorKind.UPSTREAM, f"API error: HTTP {status}", http_status=status
                )
            return ApiCallResult.failed(ApiErrorKind.MALFORMED, "Invalid JSON response from API")

        if status != 200:
            message = self.extract_error_message(body, status)
            self.logger.warning(f"{metric}: growth API returned HTTP {status}: {message}")
            return ApiCallResult.failed(ApiErrorKind.UPSTREAM, message, http_status=status)

        try:
            payload = json.loads(body)
        except json.JSONDecodeError:
            self.logger.error(f"{metric}: growth API returned invalid JSON")
            return ApiCallResult.failed(ApiErrorKind.MALFORMED, "Invalid JSON response from API")

        try:
            data = GrowthCalculationResponse.model_validate(payload)
        except ValidationError as e:
            self.logger.error(f"{metric}: unexpected growth API response: {e}")
            return ApiCallResult.failed(ApiErrorKind.MALFORMED, "Unexpected response structure from API")

        return ApiCallResult.ok(data)

    @staticmethod
    def extract_error_message(body: str, status: int) -> str:
        """Readable message from an error body's detail or message field."""
        fallback = f"API error: HTTP {status}"
        try:
            payload: Any = json.loads(body)
        except (TypeError, ValueError):
            return fallback
        if not isinstance(payload, dict):
            return fallback

        for key in ("detail", "message"):
            value = payload.get(key)
            if value is None:
                continue
            if isinstance(value, list):
                # FastAPI-style validation errors
                parts = [
                    str(item.get("msg", item)) if isinstance(item, dict) else str(item)
                    for item in value
                ]
                return "; ".join(parts) or fallback
            return str(value)

        return fallback
