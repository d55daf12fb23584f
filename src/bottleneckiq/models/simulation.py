"""What-if simulation models for BottleneckIQ."""

from pydantic import BaseModel, ConfigDict, Field

from bottleneckiq.models.analysis import AggregateMetrics


class SimulationParameters(BaseModel):
    """Tunable process changes.

    Ranges are advisory only; values outside them are passed through to the
    projection formulas unchanged.
    """

    model_config = ConfigDict(frozen=True)

    queue_capacity_change: float = Field(
        default=0.0, description="Percent change in queue capacity (typically -50 to +100)"
    )
    automation_level: float = Field(
        default=0.0, description="Percent of steps automated (typically 0-100)"
    )
    staffing_change: float = Field(
        default=0.0, description="Percent change in staffing (typically -30 to +50)"
    )
    process_redesign: bool = False


class SimulationScenario(BaseModel):
    """A named parameter set fed to the simulation engine."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    parameters: SimulationParameters


class SimulationImprovements(BaseModel):
    model_config = ConfigDict(frozen=True)

    queue_time_reduction: float = Field(..., description="Percent")
    process_time_reduction: float = Field(..., description="Percent")
    efficiency_gain: float = Field(..., description="Efficiency score points")
    bottleneck_reduction: int = Field(..., description="Percent fewer critical bottlenecks")


class CostImpact(BaseModel):
    model_config = ConfigDict(frozen=True)

    implementation_cost: float
    annual_savings: int
    roi: int = Field(..., description="Annual savings over implementation cost, percent")
    payback_months: int

    @property
    def pays_back_within_year(self) -> bool:
        """Whether the investment is recovered inside twelve months."""
        return 0 < self.payback_months <= 12


class SimulationResult(BaseModel):
    """Projected outcome of applying a scenario to a baseline."""

    model_config = ConfigDict(frozen=True)

    scenario: SimulationScenario
    original_metrics: AggregateMetrics
    projected_metrics: AggregateMetrics
    improvements: SimulationImprovements
    cost_impact: CostImpact
    risks: list[str] = Field(..., min_length=1)
