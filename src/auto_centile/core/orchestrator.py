# ============================================================================
# src/auto_centile/core/orchestrator.py
# ============================================================================
"""
Centile Orchestrator

Main entry point for one calculation cycle.

Flow:
1. Build measurement requests from the form snapshot (all-or-nothing)
2. Send every request to the growth API concurrently
3. Map each reply to a per-metric outcome
4. Assemble the aggregate result, keyed by metric

Input errors abort the cycle with a single CentileInputError.
API errors never do: they stay attached to their own metric, so a
failed weight calculation does not hide a valid height centile.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Optional

from .context.measurement import MeasurementRequest, RawInput
from .context.outcome import (
    AggregateResult,
    CentileOutcome,
    MeasurementOutcome,
    MetricError,
)
from .request_builder import MeasurementRequestBuilder
from ..utils.logging import log_performance

if TYPE_CHECKING:
    from ..growth_api.client import ApiCallResult, GrowthAPIClient

logger = logging.getLogger(__name__)


class CentileOrchestrator:
    """
    Fans a snapshot out to the growth API, one call per metric.

    Calls share no mutable state; the orchestrator waits for all of them
    (each bounded by the client's timeout) before returning.
    """

    def __init__(
        self,
        client: "GrowthAPIClient",
        builder: Optional[MeasurementRequestBuilder] = None,
    ):
        self.client = client
        self.builder = builder or MeasurementRequestBuilder()
        self.logger = logging.getLogger(__name__)

    @log_performance(logger, "Centile calculation")
    async def calculate(self, raw: RawInput) -> AggregateResult:
        """
        Args:
            raw: Form snapshot

        Returns:
            AggregateResult with one outcome per built request

        Raises:
            CentileInputError: the snapshot cannot produce requests
        """
        requests = self.builder.build(raw)

        self.logger.info(
            f"Calculating centiles for {', '.join(r.metric.value for r in requests)}"
        )

        replies = await asyncio.gather(
            *(self.client.send(request) for request in requests),
            return_exceptions=True,
        )

        result = AggregateResult()
        for request, reply in zip(requests, replies):
            outcome = self._to_outcome(request, reply)
            if outcome.is_error:
                self.logger.warning(f"{request.metric.value} calculation failed: {outcome.error}")
            result.outcomes[request.metric] = outcome

        return result

    def _to_outcome(self, request: MeasurementRequest, reply) -> MeasurementOutcome:
        if isinstance(reply, BaseException):
            if not isinstance(reply, Exception):
                raise reply
            self.logger.exception(
                f"Unexpected error calculating {request.metric.value}", exc_info=reply
            )
            return MetricError(error=str(reply) or reply.__class__.__name__)

        if not reply.success:
            return MetricError(
                error=reply.error.message,
                kind=reply.error.kind,
                http_status=reply.error.http_status,
            )

        return self.map_calculated_values(reply)

    @staticmethod
    def map_calculated_values(reply: "ApiCallResult") -> MeasurementOutcome:
        values = reply.data.measurement_calculated_values
        if values is None:
            return CentileOutcome()
        return CentileOutcome(
            centile=values.centile,
            sds=values.sds,
            centile_band=values.centile_band,
            age_error=values.chronological_decimal_age_error,
            corrected_age=values.corrected_decimal_age,
            clinical_advice=values.clinician_comment,
        )

