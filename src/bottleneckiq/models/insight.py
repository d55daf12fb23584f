"""Anomaly, forecast and recommendation models for BottleneckIQ.

These are rule-based heuristics over aggregate statistics, not learned
predictions.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from bottleneckiq.models.analysis import AggregateMetrics, BottleneckAnalysis


class AnomalyType(str, Enum):
    """Detected pattern kinds.

    SKIPPED_VALIDATION is reserved; no detector produces it yet.
    """

    IDLE_TIME = "idle_time"
    VOLUME_SPIKE = "volume_spike"
    REWORK_LOOP = "rework_loop"
    SKIPPED_VALIDATION = "skipped_validation"


class AnomalySeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class Anomaly(BaseModel):
    """A threshold-breaching pattern across the task collection."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: AnomalyType
    severity: AnomalySeverity
    task_ids: list[int] = Field(default_factory=list)
    message: str
    threshold: float = Field(..., description="Threshold value that was exceeded")
    actual_value: float = Field(..., description="Observed value behind the alert")
    detected_at: datetime = Field(
        ..., description="Wall-clock detection time (metadata only)"
    )

    @property
    def label(self) -> str:
        """Human-readable anomaly kind."""
        return _ANOMALY_LABELS[self.type]


_ANOMALY_LABELS: dict[AnomalyType, str] = {
    AnomalyType.IDLE_TIME: "Excessive Idle Time",
    AnomalyType.REWORK_LOOP: "Potential Rework Loop",
    AnomalyType.SKIPPED_VALIDATION: "Skipped Validation",
    AnomalyType.VOLUME_SPIKE: "Volume Spike",
}


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class Prediction(BaseModel):
    """Short-horizon projection for one headline metric."""

    model_config = ConfigDict(frozen=True)

    metric: str
    current_value: float
    predicted_value: float
    change: float = Field(..., description="Signed percent change")
    trend: Trend
    confidence: int = Field(..., ge=0, le=100, description="Fixed per-metric confidence %")
    timeframe: str


class Effort(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecommendationPriority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RecommendationCategory(str, Enum):
    PROCESS = "process"
    RESOURCE = "resource"
    AUTOMATION = "automation"
    CAPACITY = "capacity"


class RecommendationImpact(BaseModel):
    """Quantified benefit of a recommendation."""

    model_config = ConfigDict(frozen=True)

    sla_improvement_pct: float = Field(..., description="SLA attainment gain in percent")
    cost_savings: float = Field(..., description="Estimated savings in dollars")
    effort: Effort


class Recommendation(BaseModel):
    """A prioritized improvement action."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    impact: RecommendationImpact
    priority: RecommendationPriority
    category: RecommendationCategory


class DashboardReport(BaseModel):
    """Everything one dashboard analysis run produces."""

    model_config = ConfigDict(frozen=True)

    bottlenecks: list[BottleneckAnalysis] = Field(default_factory=list)
    metrics: AggregateMetrics
    anomalies: list[Anomaly] = Field(default_factory=list)
    predictions: list[Prediction] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(default_factory=list)
