"""BottleneckIQ analysis algorithms."""

from bottleneckiq.analysis.anomalies import (
    count_by_severity,
    detect_anomalies,
    filter_anomalies,
)
from bottleneckiq.analysis.forecast import generate_predictions
from bottleneckiq.analysis.pipeline import build_report, run_dashboard_analysis
from bottleneckiq.analysis.recommendations import generate_recommendations
from bottleneckiq.analysis.rules import Rule, evaluate_rules
from bottleneckiq.analysis.scoring import (
    analyze_task,
    analyze_tasks,
    calculate_bottleneck_score,
    classify_risk,
    generate_actionable_steps,
    generate_insights,
)
from bottleneckiq.analysis.simulation import (
    PRESET_SCENARIOS,
    compare_scenarios,
    create_custom_scenario,
    get_preset_scenario,
    run_simulation,
)
from bottleneckiq.analysis.statistics import (
    DatasetAverages,
    build_aggregate_metrics,
    calculate_averages,
    round_half_up,
)

__all__ = [
    "PRESET_SCENARIOS",
    "DatasetAverages",
    "Rule",
    "analyze_task",
    "analyze_tasks",
    "build_aggregate_metrics",
    "build_report",
    "calculate_averages",
    "calculate_bottleneck_score",
    "classify_risk",
    "compare_scenarios",
    "count_by_severity",
    "create_custom_scenario",
    "detect_anomalies",
    "evaluate_rules",
    "filter_anomalies",
    "generate_actionable_steps",
    "generate_insights",
    "generate_predictions",
    "generate_recommendations",
    "get_preset_scenario",
    "round_half_up",
    "run_dashboard_analysis",
    "run_simulation",
]
