"""Bottleneck analysis result models for BottleneckIQ."""

import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RiskLevel(str, Enum):
    """Four-tier risk classification derived from the bottleneck score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class StepPriority(str, Enum):
    """Urgency of a remediation step."""

    IMMEDIATE = "immediate"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ActionableStep(BaseModel):
    """A remediation step proposed for one task."""

    model_config = ConfigDict(frozen=True)

    action: str = Field(..., description="What to do")
    priority: StepPriority = Field(..., description="How urgently to do it")
    expected_impact: str = Field(..., description="Expected effect of the action")


class BottleneckAnalysis(BaseModel):
    """Scored analysis of a single task."""

    model_config = ConfigDict(frozen=True)

    task_id: int = Field(..., description="Id of the analyzed TaskRecord")
    total_time: float = Field(..., ge=0, description="Queue + process minutes")
    queue_wait_time: float = Field(..., ge=0)
    process_time: float = Field(..., ge=0)
    bottleneck_score: float = Field(
        ..., ge=0, description="Severity score, roughly 0-140, not clamped"
    )
    risk_level: RiskLevel
    insights: list[str] = Field(default_factory=list)
    actionable_steps: list[ActionableStep] = Field(default_factory=list)


class AggregateMetrics(BaseModel):
    """Dataset-wide averages and counts for one analysis run."""

    model_config = ConfigDict(frozen=True)

    avg_queue_time: float = Field(..., description="Mean queue minutes (1 decimal)")
    avg_process_time: float = Field(..., description="Mean process minutes (1 decimal)")
    avg_total_time: float = Field(..., description="Mean total minutes (1 decimal)")
    total_tasks: int = Field(..., ge=0)
    critical_bottlenecks: int = Field(..., ge=0)
    high_risk_tasks: int = Field(..., ge=0, description="High plus critical tasks")
    efficiency_score: int = Field(..., description="100 minus mean bottleneck score")


class AnalysisRun(BaseModel):
    """Output of the scoring stage: sorted analyses plus their metrics."""

    model_config = ConfigDict(frozen=True)

    bottlenecks: list[BottleneckAnalysis] = Field(
        default_factory=list, description="Per-task analyses, highest score first"
    )
    metrics: AggregateMetrics

    def top(self, n: int) -> list[BottleneckAnalysis]:
        """Return the n most severe bottlenecks."""
        return self.bottlenecks[:n]

    def by_risk(self, level: RiskLevel) -> list[BottleneckAnalysis]:
        """Return analyses at a given risk level, preserving score order."""
        return [b for b in self.bottlenecks if b.risk_level == level]


class Annotation(BaseModel):
    """A user note attached to an exported analysis."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str = Field(..., min_length=1)
    author: str = "You"
    created_at: datetime

    @classmethod
    def create(cls, text: str, author: str = "You") -> "Annotation":
        """Create a new annotation stamped with the current time.

        Surrounding whitespace is stripped. Callers that want to ignore blank
        notes must check before calling.

        Raises:
            pydantic.ValidationError: If the text is empty after stripping.
        """
        return cls(
            id=uuid.uuid4().hex,
            text=text.strip(),
            author=author,
            created_at=datetime.now(UTC),
        )
