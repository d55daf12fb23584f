"""CSV export functionality for BottleneckIQ analysis results."""

import csv
import io
import logging
from collections.abc import Sequence

from bottleneckiq.models import (
    Anomaly,
    BottleneckAnalysis,
    Recommendation,
    SimulationResult,
)

logger = logging.getLogger(__name__)


def export_bottlenecks_csv(bottlenecks: Sequence[BottleneckAnalysis]) -> bytes:
    """Export per-task bottleneck analyses to CSV format.

    Args:
        bottlenecks: Analyses in the order they should appear.

    Returns:
        CSV content as bytes (UTF-8 encoded).
    """
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")

    writer.writerow(
        [
            "TaskID",
            "QueueWaitTime",
            "ProcessTime",
            "TotalTime",
            "BottleneckScore",
            "RiskLevel",
        ]
    )

    for b in bottlenecks:
        writer.writerow(
            [
                b.task_id,
                b.queue_wait_time,
                b.process_time,
                b.total_time,
                f"{b.bottleneck_score:.2f}",
                b.risk_level.value,
            ]
        )

    logger.info("Exported %d bottlenecks to CSV", len(bottlenecks))
    return output.getvalue().encode("utf-8")


def export_anomalies_csv(anomalies: Sequence[Anomaly]) -> bytes:
    """Export detected anomalies to CSV format.

    Returns:
        CSV content as bytes (UTF-8 encoded).
    """
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")

    writer.writerow(
        [
            "Type",
            "Severity",
            "Message",
            "Threshold (min)",
            "Actual (min)",
            "Affected Tasks",
            "Detected At",
        ]
    )

    for a in anomalies:
        writer.writerow(
            [
                a.label,
                a.severity.value,
                a.message,
                f"{a.threshold:.1f}",
                f"{a.actual_value:.1f}",
                "; ".join(str(task_id) for task_id in a.task_ids),
                a.detected_at.isoformat(),
            ]
        )

    logger.info("Exported %d anomalies to CSV", len(anomalies))
    return output.getvalue().encode("utf-8")


def export_recommendations_csv(recommendations: Sequence[Recommendation]) -> bytes:
    """Export recommendations to CSV (project management tool compatible).

    Returns:
        CSV content as bytes (UTF-8 encoded).
    """
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")

    writer.writerow(
        [
            "Title",
            "Priority",
            "Category",
            "Description",
            "SLA Improvement (%)",
            "Cost Savings ($)",
            "Effort",
        ]
    )

    for rec in recommendations:
        writer.writerow(
            [
                rec.title,
                rec.priority.value,
                rec.category.value,
                rec.description,
                f"{rec.impact.sla_improvement_pct:.0f}",
                f"{rec.impact.cost_savings:.0f}",
                rec.impact.effort.value,
            ]
        )

    logger.info("Exported %d recommendations to CSV", len(recommendations))
    return output.getvalue().encode("utf-8")


def export_simulation_csv(results: Sequence[SimulationResult]) -> bytes:
    """Export simulation results side by side, one row per scenario.

    Returns:
        CSV content as bytes (UTF-8 encoded).
    """
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")

    writer.writerow(
        [
            "Scenario",
            "Queue Reduction (%)",
            "Process Reduction (%)",
            "Efficiency Gain",
            "Projected Efficiency",
            "Projected Critical",
            "Implementation Cost ($)",
            "Annual Savings ($)",
            "ROI (%)",
            "Payback (months)",
            "Risks",
        ]
    )

    for r in results:
        writer.writerow(
            [
                r.scenario.name,
                f"{r.improvements.queue_time_reduction:.1f}",
                f"{r.improvements.process_time_reduction:.1f}",
                f"{r.improvements.efficiency_gain:.1f}",
                r.projected_metrics.efficiency_score,
                r.projected_metrics.critical_bottlenecks,
                f"{r.cost_impact.implementation_cost:.0f}",
                r.cost_impact.annual_savings,
                r.cost_impact.roi,
                r.cost_impact.payback_months,
                "; ".join(r.risks),
            ]
        )

    logger.info("Exported %d simulation results to CSV", len(results))
    return output.getvalue().encode("utf-8")
