"""Shared fixtures for BottleneckIQ tests."""

from datetime import UTC, datetime

import pytest

from bottleneckiq.models import AggregateMetrics, TaskRecord

FIXED_TIME = datetime(2024, 3, 4, 9, 30, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Task fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def detected_at() -> datetime:
    """Pinned anomaly timestamp so runs compare equal."""
    return FIXED_TIME


@pytest.fixture
def three_tasks() -> list[TaskRecord]:
    """Canonical 3-task batch: avg queue 15, avg process 11.67."""
    return [
        TaskRecord(task_id=1, queue_wait_time=10, process_time=20),
        TaskRecord(task_id=2, queue_wait_time=30, process_time=10),
        TaskRecord(task_id=3, queue_wait_time=5, process_time=5),
    ]


@pytest.fixture
def idle_tasks() -> list[TaskRecord]:
    """All-zero batch: no waiting, no work."""
    return [TaskRecord(task_id=i, queue_wait_time=0, process_time=0) for i in range(1, 6)]


@pytest.fixture
def busy_week() -> list[TaskRecord]:
    """40-task batch with a slow first half and a handful of severe outliers.

    Tasks 1-20 run long (queue 30, process 60), tasks 21-40 are quick
    (queue 5, process 10); tasks 3 and 7 wait 90 minutes.
    """
    tasks = []
    for task_id in range(1, 41):
        if task_id in (3, 7):
            queue, process = 90, 60
        elif task_id <= 20:
            queue, process = 30, 60
        else:
            queue, process = 5, 10
        tasks.append(TaskRecord(task_id=task_id, queue_wait_time=queue, process_time=process))
    return tasks


# ---------------------------------------------------------------------------
# Metrics fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def baseline_metrics() -> AggregateMetrics:
    """Round-number baseline for simulation tests."""
    return AggregateMetrics(
        avg_queue_time=20.0,
        avg_process_time=40.0,
        avg_total_time=60.0,
        total_tasks=100,
        critical_bottlenecks=10,
        high_risk_tasks=20,
        efficiency_score=50,
    )


@pytest.fixture
def healthy_metrics() -> AggregateMetrics:
    """Metrics that trip no recommendation rule."""
    return AggregateMetrics(
        avg_queue_time=12.0,
        avg_process_time=30.0,
        avg_total_time=42.0,
        total_tasks=50,
        critical_bottlenecks=2,
        high_risk_tasks=6,
        efficiency_score=72,
    )


@pytest.fixture
def struggling_metrics() -> AggregateMetrics:
    """Metrics that trip every recommendation rule."""
    return AggregateMetrics(
        avg_queue_time=20.0,
        avg_process_time=50.0,
        avg_total_time=70.0,
        total_tasks=60,
        critical_bottlenecks=6,
        high_risk_tasks=15,
        efficiency_score=50,
    )
