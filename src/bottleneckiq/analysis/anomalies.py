"""Anomaly detection over a task collection.

Stage two of the pipeline: needs the aggregate metrics produced by the
scoring stage, so it always runs after analyze_tasks().
"""

import logging
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from bottleneckiq.analysis.statistics import round_int
from bottleneckiq.models import (
    AggregateMetrics,
    Anomaly,
    AnomalySeverity,
    AnomalyType,
    TaskRecord,
    ThresholdPolicy,
)

logger = logging.getLogger(__name__)

SEVERITY_RANK: dict[AnomalySeverity, int] = {
    AnomalySeverity.CRITICAL: 0,
    AnomalySeverity.WARNING: 1,
    AnomalySeverity.INFO: 2,
}


@dataclass(frozen=True)
class DetectionContext:
    tasks: Sequence[TaskRecord]
    metrics: AggregateMetrics
    thresholds: ThresholdPolicy
    detected_at: datetime


def _detect_idle_time(ctx: DetectionContext) -> Anomaly | None:
    """Tasks that waited far longer than the average queue time."""
    threshold = ctx.metrics.avg_queue_time * ctx.thresholds.idle_time_multiplier
    idle = [t for t in ctx.tasks if t.queue_wait_time > threshold]
    if not idle:
        return None

    if len(idle) > ctx.thresholds.idle_critical_count:
        severity = AnomalySeverity.CRITICAL
    elif len(idle) > ctx.thresholds.idle_warning_count:
        severity = AnomalySeverity.WARNING
    else:
        severity = AnomalySeverity.INFO

    return Anomaly(
        id="anomaly-idle",
        type=AnomalyType.IDLE_TIME,
        severity=severity,
        task_ids=[t.task_id for t in idle],
        message=f"{len(idle)} tasks exceed idle time threshold of {round_int(threshold)}m",
        threshold=threshold,
        actual_value=max(t.queue_wait_time for t in idle),
        detected_at=ctx.detected_at,
    )


def _detect_volume_spike(ctx: DetectionContext) -> Anomaly | None:
    """Leading window of tasks running well above the average total time.

    The window is positional (first N tasks in input order), not time-based.
    """
    window = ctx.tasks[: ctx.thresholds.volume_window_size]
    if not window:
        return None

    window_avg = sum(t.total_time for t in window) / len(window)
    threshold = ctx.metrics.avg_total_time * ctx.thresholds.volume_spike_multiplier
    if window_avg <= threshold:
        return None

    excess_pct = round_int((ctx.thresholds.volume_spike_multiplier - 1) * 100)
    return Anomaly(
        id="anomaly-volume",
        type=AnomalyType.VOLUME_SPIKE,
        severity=AnomalySeverity.WARNING,
        task_ids=[t.task_id for t in window],
        message=(
            f"Volume spike detected in first {len(window)} tasks, "
            f"processing times {excess_pct}% above average"
        ),
        threshold=threshold,
        actual_value=window_avg,
        detected_at=ctx.detected_at,
    )


def _detect_rework_loop(ctx: DetectionContext) -> Anomaly | None:
    """Several tasks with unusually long process time, a sign of rework."""
    threshold = ctx.metrics.avg_process_time * ctx.thresholds.rework_multiplier
    candidates = [t for t in ctx.tasks if t.process_time > threshold]
    if len(candidates) < ctx.thresholds.rework_min_count:
        return None

    severity = (
        AnomalySeverity.CRITICAL
        if len(candidates) > ctx.thresholds.rework_critical_count
        else AnomalySeverity.WARNING
    )
    return Anomaly(
        id="anomaly-rework",
        type=AnomalyType.REWORK_LOOP,
        severity=severity,
        task_ids=[t.task_id for t in candidates],
        message=(
            f"{len(candidates)} tasks show potential rework patterns "
            f"(process time > {round_int(threshold)}m)"
        ),
        threshold=threshold,
        actual_value=max(t.process_time for t in candidates),
        detected_at=ctx.detected_at,
    )


# No detector for AnomalyType.SKIPPED_VALIDATION: the type is reserved until
# task records carry validation-step data.
DETECTORS: tuple[Callable[[DetectionContext], Anomaly | None], ...] = (
    _detect_idle_time,
    _detect_volume_spike,
    _detect_rework_loop,
)


def detect_anomalies(
    tasks: Sequence[TaskRecord],
    metrics: AggregateMetrics,
    thresholds: ThresholdPolicy | None = None,
    detected_at: datetime | None = None,
) -> list[Anomaly]:
    """Scan the task collection for threshold-breaching patterns.

    Args:
        tasks: Raw tasks in input order. Not modified.
        metrics: Aggregate metrics from the scoring stage.
        thresholds: Detection multipliers and counts.
        detected_at: Timestamp stamped on every anomaly. Defaults to now (UTC).

    Returns:
        Anomalies, most severe first; equal severities keep detection order.
    """
    ctx = DetectionContext(
        tasks=tasks,
        metrics=metrics,
        thresholds=thresholds or ThresholdPolicy(),
        detected_at=detected_at or datetime.now(UTC),
    )

    anomalies: list[Anomaly] = []
    for detector in DETECTORS:
        anomaly = detector(ctx)
        if anomaly is not None:
            logger.debug(
                "Anomaly %s (%s): %d tasks",
                anomaly.type.value,
                anomaly.severity.value,
                len(anomaly.task_ids),
            )
            anomalies.append(anomaly)

    anomalies.sort(key=lambda a: SEVERITY_RANK[a.severity])

    logger.info("Detected %d anomalies across %d tasks", len(anomalies), len(tasks))
    return anomalies


def filter_anomalies(
    anomalies: Iterable[Anomaly],
    enabled_types: Iterable[AnomalyType],
) -> list[Anomaly]:
    """Keep only anomalies whose type is enabled, preserving order."""
    enabled = set(enabled_types)
    return [a for a in anomalies if a.type in enabled]


def count_by_severity(anomalies: Iterable[Anomaly]) -> dict[AnomalySeverity, int]:
    """Count anomalies per severity. Every severity is present in the result."""
    counts = Counter(a.severity for a in anomalies)
    return {severity: counts.get(severity, 0) for severity in AnomalySeverity}
