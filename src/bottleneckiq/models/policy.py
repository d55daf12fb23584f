"""Tunable policy objects for BottleneckIQ.

Every threshold and reference scale used by the analytics core lives here,
so a policy can be swapped or tested without touching the algorithms.
Defaults reproduce the dashboard's calibrated behaviour.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScoringPolicy(BaseModel):
    """Bottleneck score normalization and risk tier boundaries."""

    model_config = ConfigDict(frozen=True)

    queue_reference_minutes: float = Field(
        default=35.0, gt=0, description="Queue wait treated as 100 on the normalized scale"
    )
    process_reference_minutes: float = Field(
        default=60.0, gt=0, description="Process time treated as 100 on the normalized scale"
    )
    queue_weight: float = Field(default=0.7, ge=0, le=1)
    process_weight: float = Field(default=0.3, ge=0, le=1)
    critical_score: float = Field(default=80.0, description="Lowest score classified critical")
    high_score: float = Field(default=60.0, description="Lowest score classified high")
    medium_score: float = Field(default=40.0, description="Lowest score classified medium")

    @model_validator(mode="after")
    def check_consistency(self) -> "ScoringPolicy":
        if abs(self.queue_weight + self.process_weight - 1.0) > 1e-9:
            raise ValueError(
                f"Score weights must sum to 1.0, got {self.queue_weight + self.process_weight}"
            )
        if not self.critical_score > self.high_score > self.medium_score:
            raise ValueError("Risk tiers must be strictly descending: critical > high > medium")
        return self


class ThresholdPolicy(BaseModel):
    """Multipliers and counts for insights, anomalies and recommendations.

    Multipliers are applied to dataset averages; counts gate severities.
    """

    model_config = ConfigDict(frozen=True)

    # Per-task insights and actionable steps
    queue_excess_multiplier: float = Field(default=1.5, gt=0)
    process_excess_multiplier: float = Field(default=1.3, gt=0)
    total_delay_multiplier: float = Field(default=1.4, gt=0)
    queue_savings_fraction: float = Field(
        default=0.8, ge=0, description="Share of excess queue wait recovered by parallel processing"
    )
    process_savings_fraction: float = Field(
        default=0.5, ge=0, description="Share of excess process time recovered by automation"
    )
    routing_improvement_factor: float = Field(
        default=30.0, ge=0, description="Percent improvement per 100% of queue wait above average"
    )

    # Anomaly detection
    idle_time_multiplier: float = Field(default=1.8, gt=0)
    idle_warning_count: int = Field(default=5, ge=0, description="More affected tasks than this is a warning")
    idle_critical_count: int = Field(default=10, ge=0, description="More affected tasks than this is critical")
    volume_window_size: int = Field(default=20, ge=1, description="Leading tasks checked for a volume spike")
    volume_spike_multiplier: float = Field(default=1.3, gt=0)
    rework_multiplier: float = Field(default=1.5, gt=0)
    rework_min_count: int = Field(default=2, ge=1)
    rework_critical_count: int = Field(default=8, ge=0)

    # Recommendation gates
    parallel_processing_queue_minutes: float = 18.0
    automation_critical_count: int = 5
    redesign_efficiency_below: float = 60.0
    skill_routing_process_minutes: float = 45.0


class ForecastPolicy(BaseModel):
    """Trend thresholds, growth rates and fixed confidences for predictions."""

    model_config = ConfigDict(frozen=True)

    queue_up_minutes: float = 18.0
    queue_down_minutes: float = 15.0
    process_up_minutes: float = 46.0

    queue_up_change_pct: float = 15.0
    queue_down_change_pct: float = -10.0
    queue_stable_change_pct: float = 2.0
    process_up_change_pct: float = 8.0
    process_stable_change_pct: float = 1.0

    critical_growth_factor: float = 0.5
    critical_trend_ratio: float = 0.1

    efficiency_pivot: float = 60.0
    efficiency_up_change: int = 2
    efficiency_down_change: int = -3

    queue_confidence: int = Field(default=78, ge=0, le=100)
    process_confidence: int = Field(default=82, ge=0, le=100)
    critical_confidence: int = Field(default=71, ge=0, le=100)
    efficiency_confidence: int = Field(default=75, ge=0, le=100)

    timeframe: str = "Next 7 days"


class SimulationPolicy(BaseModel):
    """Reduction caps and cost model for what-if simulations."""

    model_config = ConfigDict(frozen=True)

    max_queue_reduction: float = Field(default=50.0, ge=0)
    max_process_reduction: float = Field(default=40.0, ge=0)
    max_efficiency_gain: float = Field(default=35.0, ge=0)

    # Percentage-point contribution of each parameter point to the reductions
    queue_capacity_queue_weight: float = 0.4
    automation_queue_weight: float = 0.3
    redesign_queue_reduction: float = 15.0
    automation_process_weight: float = 0.35
    staffing_process_weight: float = 0.2
    redesign_process_reduction: float = 10.0

    # Efficiency gain blend
    efficiency_queue_weight: float = 0.4
    efficiency_process_weight: float = 0.3
    efficiency_automation_weight: float = 0.15

    critical_elimination_gain: float = Field(
        default=50.0, gt=0, description="Efficiency gain that would eliminate every critical task"
    )
    high_risk_elimination_gain: float = Field(
        default=60.0, gt=0, description="Efficiency gain that would eliminate every high-risk task"
    )

    # Risk note triggers
    risky_automation_level: float = Field(default=50.0, description="Automation above this is flagged")
    risky_staffing_cut: float = Field(default=-20.0, description="Staffing change below this is flagged")
    risky_capacity_increase: float = Field(default=40.0, description="Capacity change above this is flagged")

    queue_capacity_unit_cost: float = Field(default=500.0, ge=0, description="$ per point of capacity change")
    automation_unit_cost: float = Field(default=800.0, ge=0, description="$ per point of automation level")
    staffing_unit_cost: float = Field(default=5000.0, ge=0, description="$ per point of staffing increase")
    redesign_cost: float = Field(default=15000.0, ge=0)

    cost_per_minute: float = Field(default=2.5, ge=0, description="$ per minute of task time")
    batches_per_year: int = Field(default=52, ge=1, description="Task batch treated as weekly volume")


class AnalysisPolicy(BaseModel):
    """All policies used by one dashboard analysis run."""

    model_config = ConfigDict(frozen=True)

    scoring: ScoringPolicy = Field(default_factory=ScoringPolicy)
    thresholds: ThresholdPolicy = Field(default_factory=ThresholdPolicy)
    forecast: ForecastPolicy = Field(default_factory=ForecastPolicy)
    simulation: SimulationPolicy = Field(default_factory=SimulationPolicy)
