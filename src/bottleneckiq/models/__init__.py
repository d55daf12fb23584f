"""BottleneckIQ domain models."""

from bottleneckiq.models.analysis import (
    ActionableStep,
    AggregateMetrics,
    AnalysisRun,
    Annotation,
    BottleneckAnalysis,
    RiskLevel,
    StepPriority,
)
from bottleneckiq.models.insight import (
    Anomaly,
    AnomalySeverity,
    AnomalyType,
    DashboardReport,
    Effort,
    Prediction,
    Recommendation,
    RecommendationCategory,
    RecommendationImpact,
    RecommendationPriority,
    Trend,
)
from bottleneckiq.models.policy import (
    AnalysisPolicy,
    ForecastPolicy,
    ScoringPolicy,
    SimulationPolicy,
    ThresholdPolicy,
)
from bottleneckiq.models.simulation import (
    CostImpact,
    SimulationImprovements,
    SimulationParameters,
    SimulationResult,
    SimulationScenario,
)
from bottleneckiq.models.task import TaskRecord

__all__ = [
    # Analysis
    "ActionableStep",
    "AggregateMetrics",
    "AnalysisPolicy",
    "AnalysisRun",
    "Annotation",
    # Insights
    "Anomaly",
    "AnomalySeverity",
    "AnomalyType",
    "BottleneckAnalysis",
    "CostImpact",
    "DashboardReport",
    "Effort",
    # Policies
    "ForecastPolicy",
    "Prediction",
    "Recommendation",
    "RecommendationCategory",
    "RecommendationImpact",
    "RecommendationPriority",
    "RiskLevel",
    "ScoringPolicy",
    "SimulationImprovements",
    # Simulation
    "SimulationParameters",
    "SimulationPolicy",
    "SimulationResult",
    "SimulationScenario",
    "StepPriority",
    # Input
    "TaskRecord",
    "ThresholdPolicy",
    "Trend",
]
