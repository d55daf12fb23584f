"""Dataset statistics used as normalization baselines.

Pure algorithmic logic. Averages are computed once per run and handed to
every downstream stage.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from bottleneckiq.exceptions import InvalidInputError
from bottleneckiq.models import (
    AggregateMetrics,
    BottleneckAnalysis,
    RiskLevel,
    TaskRecord,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatasetAverages:
    """Unrounded means over a task collection (minutes)."""

    avg_queue_time: float
    avg_process_time: float
    task_count: int

    @property
    def avg_total_time(self) -> float:
        return self.avg_queue_time + self.avg_process_time


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with halves going towards positive infinity.

    Matches how the dashboard has always displayed figures (2.5 -> 3,
    -2.5 -> -2), unlike Python's banker's rounding.
    """
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """round_half_up to a whole number, as an int."""
    return math.floor(value + 0.5)


def calculate_averages(tasks: Sequence[TaskRecord]) -> DatasetAverages:
    """Calculate mean queue and process time over a task collection.

    Args:
        tasks: Non-empty task collection.

    Returns:
        DatasetAverages with raw (unrounded) means.

    Raises:
        InvalidInputError: If the collection is empty.
    """
    if not tasks:
        raise InvalidInputError(
            message="Cannot compute averages over an empty task collection",
            field="tasks",
            value="[]",
            user_message="No tasks to analyze. Load at least one task first.",
        )

    count = len(tasks)
    avg_queue = sum(t.queue_wait_time for t in tasks) / count
    avg_process = sum(t.process_time for t in tasks) / count

    logger.debug(
        "Averages over %d tasks: queue=%.2fm, process=%.2fm",
        count,
        avg_queue,
        avg_process,
    )

    return DatasetAverages(
        avg_queue_time=avg_queue,
        avg_process_time=avg_process,
        task_count=count,
    )


def build_aggregate_metrics(
    bottlenecks: Sequence[BottleneckAnalysis],
    averages: DatasetAverages,
) -> AggregateMetrics:
    """Summarize a scored collection into dashboard metrics.

    Order-independent: the same analyses in any order give the same metrics.

    Raises:
        InvalidInputError: If there are no analyses to summarize.
    """
    if not bottlenecks:
        raise InvalidInputError(
            message="Cannot build metrics from an empty analysis collection",
            field="bottlenecks",
            value="[]",
        )

    critical = sum(1 for b in bottlenecks if b.risk_level == RiskLevel.CRITICAL)
    high_risk = sum(
        1
        for b in bottlenecks
        if b.risk_level in (RiskLevel.HIGH, RiskLevel.CRITICAL)
    )
    mean_score = sum(b.bottleneck_score for b in bottlenecks) / len(bottlenecks)

    return AggregateMetrics(
        avg_queue_time=round_half_up(averages.avg_queue_time, 1),
        avg_process_time=round_half_up(averages.avg_process_time, 1),
        avg_total_time=round_half_up(averages.avg_total_time, 1),
        total_tasks=averages.task_count,
        critical_bottlenecks=critical,
        high_risk_tasks=high_risk,
        efficiency_score=round_int(100 - mean_score),
    )
