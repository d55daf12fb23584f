"""End-to-end dashboard analysis.

Two explicit stages, each consuming the previous stage's immutable output:

1. Score every task and summarize (analyze_tasks).
2. Detect anomalies, forecast and recommend from the stage 1 result.

Simulation is run separately, on demand, from the stage 1 metrics.
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from bottleneckiq.analysis.anomalies import detect_anomalies
from bottleneckiq.analysis.forecast import generate_predictions
from bottleneckiq.analysis.recommendations import generate_recommendations
from bottleneckiq.analysis.scoring import analyze_tasks
from bottleneckiq.models import AnalysisPolicy, AnalysisRun, DashboardReport, TaskRecord

logger = logging.getLogger(__name__)


def build_report(
    tasks: Sequence[TaskRecord],
    run: AnalysisRun,
    policy: AnalysisPolicy | None = None,
    detected_at: datetime | None = None,
) -> DashboardReport:
    """Run stage two over an existing scoring result."""
    policy = policy or AnalysisPolicy()

    anomalies = detect_anomalies(tasks, run.metrics, policy.thresholds, detected_at)
    predictions = generate_predictions(run.metrics, run.bottlenecks, policy.forecast)
    recommendations = generate_recommendations(run.metrics, run.bottlenecks, policy.thresholds)

    return DashboardReport(
        bottlenecks=run.bottlenecks,
        metrics=run.metrics,
        anomalies=anomalies,
        predictions=predictions,
        recommendations=recommendations,
    )


def run_dashboard_analysis(
    tasks: Sequence[TaskRecord],
    policy: AnalysisPolicy | None = None,
    detected_at: datetime | None = None,
) -> DashboardReport:
    """Analyze a task collection end to end.

    Re-running on the same tasks gives identical output apart from the
    anomaly timestamps (pin them with detected_at).

    Args:
        tasks: Non-empty task collection, in source order.
        policy: Policies for every stage. Defaults to AnalysisPolicy().
        detected_at: Timestamp stamped on anomalies.

    Returns:
        DashboardReport bundling every stage's output.

    Raises:
        InvalidInputError: If tasks is empty.
    """
    policy = policy or AnalysisPolicy()

    run = analyze_tasks(tasks, policy.scoring, policy.thresholds)
    report = build_report(tasks, run, policy, detected_at)

    logger.info(
        "Dashboard analysis complete: %d tasks, %d anomalies, %d recommendations",
        run.metrics.total_tasks,
        len(report.anomalies),
        len(report.recommendations),
    )
    return report
