# ============================================================================
# src/auto_centile/core/context/outcome.py
# ============================================================================
"""
Per-metric outcomes and the aggregate result of a cycle
- CentileOutcome / MetricError: tagged union, one per metric
- AggregateResult: metric -> outcome, never merged across cycles
- CalculationResponse: wire shape of the calculation endpoint's reply
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Union

from pydantic import BaseModel

from .enums import ApiErrorKind, Metric


@dataclass(frozen=True)
class CentileOutcome:
    """Successful calculation. None means the calculator did not report the value."""
    centile: Optional[float] = None
    sds: Optional[float] = None
    centile_band: Optional[str] = None
    age_error: Optional[str] = None
    corrected_age: Optional[float] = None
    clinical_advice: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "centile": self.centile,
            "sds": self.sds,
            "centile_band": self.centile_band,
            "age_error": self.age_error,
            "corrected_age": self.corrected_age,
            "clinical_advice": self.clinical_advice,
        }


@dataclass(frozen=True)
class MetricError:
    error: str
    kind: Optional[ApiErrorKind] = None
    http_status: Optional[int] = None

    @property
    def is_error(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error}


MeasurementOutcome = Union[CentileOutcome, MetricError]


@dataclass
class AggregateResult:
    outcomes: Dict[Metric, MeasurementOutcome] = field(default_factory=dict)

    def __getitem__(self, metric: Union[Metric, str]) -> MeasurementOutcome:
        return self.outcomes[Metric(metric)]

    def __contains__(self, metric: object) -> bool:
        try:
            return Metric(metric) in self.outcomes
        except ValueError:
            return False

    def __iter__(self) -> Iterator[Metric]:
        return iter(self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)

    @property
    def has_errors(self) -> bool:
        return any(outcome.is_error for outcome in self.outcomes.values())

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {metric.value: outcome.to_dict() for metric, outcome in self.outcomes.items()}


class MetricResult(BaseModel):
    centile: Optional[float] = None
    sds: Optional[float] = None
    centile_band: Optional[str] = None
    age_error: Optional[str] = None
    corrected_age: Optional[float] = None
    clinical_advice: Optional[str] = None
    error: Optional[str] = None


class CalculationResponse(BaseModel):
    success: bool
    results: Optional[Dict[str, MetricResult]] = None
    error: Optional[str] = None
