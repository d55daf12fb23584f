"""Bottleneck scoring, risk classification and per-task guidance.

Pure algorithmic logic. Queue wait is weighted more heavily than process
time because waiting adds no value to the task.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from bottleneckiq.analysis.rules import Rule, evaluate_rules
from bottleneckiq.analysis.statistics import (
    build_aggregate_metrics,
    calculate_averages,
    round_int,
)
from bottleneckiq.models import (
    ActionableStep,
    AnalysisRun,
    BottleneckAnalysis,
    RiskLevel,
    ScoringPolicy,
    StepPriority,
    TaskRecord,
    ThresholdPolicy,
)

logger = logging.getLogger(__name__)

NORMAL_PERFORMANCE_INSIGHT = "Performance within normal parameters"


@dataclass(frozen=True)
class TaskContext:
    """Everything a per-task rule needs to decide and render itself."""

    task: TaskRecord
    avg_queue: float
    avg_process: float
    risk_level: RiskLevel
    thresholds: ThresholdPolicy

    @property
    def queue_well_above_average(self) -> bool:
        return self.task.queue_wait_time > self.avg_queue * self.thresholds.queue_excess_multiplier

    @property
    def process_well_above_average(self) -> bool:
        return self.task.process_time > self.avg_process * self.thresholds.process_excess_multiplier

    @property
    def queue_exceeds_process(self) -> bool:
        return self.task.queue_wait_time > self.task.process_time

    @property
    def queue_excess(self) -> float:
        return self.task.queue_wait_time - self.avg_queue

    @property
    def process_excess(self) -> float:
        return self.task.process_time - self.avg_process

    @property
    def routing_improvement(self) -> int:
        ratio = self.task.queue_wait_time / self.avg_queue - 1
        return round_int(ratio * self.thresholds.routing_improvement_factor)

    @property
    def urgent_priority(self) -> StepPriority:
        return StepPriority.IMMEDIATE if self.risk_level == RiskLevel.CRITICAL else StepPriority.HIGH


def calculate_bottleneck_score(
    queue_time: float,
    process_time: float,
    policy: ScoringPolicy | None = None,
) -> float:
    """Blend independently normalized queue and process time into one score.

    Each component is scaled against a fixed reference (not the dataset), so
    scores above 100 are possible for extreme tasks.

    Args:
        queue_time: Queue wait in minutes.
        process_time: Process step duration in minutes.
        policy: Reference scales and weights. Defaults to ScoringPolicy().

    Returns:
        Unclamped bottleneck score.
    """
    policy = policy or ScoringPolicy()
    normalized_queue = queue_time / policy.queue_reference_minutes * 100
    normalized_process = process_time / policy.process_reference_minutes * 100
    return normalized_queue * policy.queue_weight + normalized_process * policy.process_weight


def classify_risk(score: float, policy: ScoringPolicy | None = None) -> RiskLevel:
    """Map a score onto a risk tier. Boundary values take the higher tier."""
    policy = policy or ScoringPolicy()
    if score >= policy.critical_score:
        return RiskLevel.CRITICAL
    if score >= policy.high_score:
        return RiskLevel.HIGH
    if score >= policy.medium_score:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


# ---------------------------------------------------------------------------
# Insight rules
# ---------------------------------------------------------------------------

INSIGHT_RULES: tuple[Rule[TaskContext, str], ...] = (
    Rule(
        name="queue_above_average",
        applies=lambda ctx: ctx.queue_well_above_average,
        produce=lambda ctx: (
            f"Queue wait time is "
            f"{round_int((ctx.task.queue_wait_time / ctx.avg_queue - 1) * 100)}% above average"
        ),
    ),
    Rule(
        name="process_above_average",
        applies=lambda ctx: ctx.process_well_above_average,
        produce=lambda ctx: (
            f"Process duration exceeds normal by "
            f"{round_int((ctx.task.process_time / ctx.avg_process - 1) * 100)}%"
        ),
    ),
    Rule(
        name="queue_exceeds_process",
        applies=lambda ctx: ctx.queue_exceeds_process,
        produce=lambda ctx: "Queue time exceeds process time - prioritize queue optimization",
    ),
    Rule(
        name="critical_delay",
        applies=lambda ctx: ctx.task.total_time
        > (ctx.avg_queue + ctx.avg_process) * ctx.thresholds.total_delay_multiplier,
        produce=lambda ctx: "Critical delay detected - immediate intervention recommended",
    ),
)


def generate_insights(
    task: TaskRecord,
    avg_queue: float,
    avg_process: float,
    thresholds: ThresholdPolicy | None = None,
) -> list[str]:
    """Explain how a task compares with the dataset averages.

    All matching insights are returned in a fixed order. A task that trips no
    rule gets a single "within normal parameters" insight.
    """
    ctx = TaskContext(
        task=task,
        avg_queue=avg_queue,
        avg_process=avg_process,
        risk_level=RiskLevel.LOW,  # insights do not depend on the tier
        thresholds=thresholds or ThresholdPolicy(),
    )
    insights = evaluate_rules(INSIGHT_RULES, ctx)
    return insights or [NORMAL_PERFORMANCE_INSIGHT]


# ---------------------------------------------------------------------------
# Actionable step rules
# ---------------------------------------------------------------------------

_REDUCE_QUEUE: Rule[TaskContext, ActionableStep] = Rule(
    name="reduce_queue",
    applies=lambda ctx: ctx.queue_well_above_average,
    produce=lambda ctx: ActionableStep(
        action=(
            f"Reduce queue time by {round_int(ctx.queue_excess)}min "
            "through parallel processing"
        ),
        priority=ctx.urgent_priority,
        expected_impact=(
            f"Save ~{round_int(ctx.queue_excess * ctx.thresholds.queue_savings_fraction)}"
            "min per task"
        ),
    ),
)

_REVIEW_AUTOMATION: Rule[TaskContext, ActionableStep] = Rule(
    name="review_automation",
    applies=lambda ctx: ctx.process_well_above_average,
    produce=lambda ctx: ActionableStep(
        action="Review process steps for automation opportunities",
        priority=ctx.urgent_priority,
        expected_impact=(
            "Reduce processing time by up to "
            f"{round_int(ctx.process_excess * ctx.thresholds.process_savings_fraction)}min"
        ),
    ),
)

_PEAK_RESOURCES: Rule[TaskContext, ActionableStep] = Rule(
    name="peak_resources",
    applies=lambda ctx: ctx.queue_exceeds_process,
    produce=lambda ctx: ActionableStep(
        action="Increase resource allocation during peak hours",
        priority=StepPriority.HIGH,
        expected_impact="Reduce queue backlog by 30-40%",
    ),
)

_ESCALATE: Rule[TaskContext, ActionableStep] = Rule(
    name="escalate",
    applies=lambda ctx: True,
    produce=lambda ctx: ActionableStep(
        action="Escalate to operations manager for immediate review",
        priority=StepPriority.IMMEDIATE,
        expected_impact="Prevent SLA breach and customer impact",
    ),
)

_TEMPORARY_REALLOCATION: Rule[TaskContext, ActionableStep] = Rule(
    name="temporary_reallocation",
    applies=lambda ctx: True,
    produce=lambda ctx: ActionableStep(
        action="Consider temporary resource reallocation from lower-priority tasks",
        priority=StepPriority.IMMEDIATE,
        expected_impact="Address bottleneck within 2-4 hours",
    ),
)

_MONITOR_CLOSELY: Rule[TaskContext, ActionableStep] = Rule(
    name="monitor_closely",
    applies=lambda ctx: True,
    produce=lambda ctx: ActionableStep(
        action="Monitor task closely and prepare contingency plan",
        priority=StepPriority.MEDIUM,
        expected_impact="Prevent escalation to high/critical status",
    ),
)

_OPTIMIZE_ROUTING: Rule[TaskContext, ActionableStep] = Rule(
    name="optimize_routing",
    applies=lambda ctx: ctx.queue_excess > 0,
    produce=lambda ctx: ActionableStep(
        action="Optimize task routing to reduce wait time",
        priority=StepPriority.MEDIUM,
        expected_impact=f"Potential {ctx.routing_improvement}% improvement",
    ),
)

_CONTINUE_MONITORING: Rule[TaskContext, ActionableStep] = Rule(
    name="continue_monitoring",
    applies=lambda ctx: True,
    produce=lambda ctx: ActionableStep(
        action="Continue monitoring - no immediate action required",
        priority=StepPriority.LOW,
        expected_impact="Maintain current performance levels",
    ),
)

STEP_RULES: dict[RiskLevel, tuple[Rule[TaskContext, ActionableStep], ...]] = {
    RiskLevel.CRITICAL: (
        _REDUCE_QUEUE,
        _REVIEW_AUTOMATION,
        _PEAK_RESOURCES,
        _ESCALATE,
        _TEMPORARY_REALLOCATION,
    ),
    RiskLevel.HIGH: (_REDUCE_QUEUE, _REVIEW_AUTOMATION, _PEAK_RESOURCES),
    RiskLevel.MEDIUM: (_MONITOR_CLOSELY, _OPTIMIZE_ROUTING),
    RiskLevel.LOW: (_CONTINUE_MONITORING,),
}


def generate_actionable_steps(
    task: TaskRecord,
    avg_queue: float,
    avg_process: float,
    risk_level: RiskLevel,
    thresholds: ThresholdPolicy | None = None,
) -> list[ActionableStep]:
    """Propose remediation steps for a task, in priority order of discovery."""
    ctx = TaskContext(
        task=task,
        avg_queue=avg_queue,
        avg_process=avg_process,
        risk_level=risk_level,
        thresholds=thresholds or ThresholdPolicy(),
    )
    return evaluate_rules(STEP_RULES[risk_level], ctx)


# ---------------------------------------------------------------------------
# Full scoring stage
# ---------------------------------------------------------------------------


def analyze_task(
    task: TaskRecord,
    avg_queue: float,
    avg_process: float,
    scoring: ScoringPolicy | None = None,
    thresholds: ThresholdPolicy | None = None,
) -> BottleneckAnalysis:
    """Score, classify and explain a single task."""
    score = calculate_bottleneck_score(task.queue_wait_time, task.process_time, scoring)
    risk_level = classify_risk(score, scoring)

    return BottleneckAnalysis(
        task_id=task.task_id,
        total_time=task.total_time,
        queue_wait_time=task.queue_wait_time,
        process_time=task.process_time,
        bottleneck_score=score,
        risk_level=risk_level,
        insights=generate_insights(task, avg_queue, avg_process, thresholds),
        actionable_steps=generate_actionable_steps(
            task, avg_queue, avg_process, risk_level, thresholds
        ),
    )


def analyze_tasks(
    tasks: Sequence[TaskRecord],
    scoring: ScoringPolicy | None = None,
    thresholds: ThresholdPolicy | None = None,
) -> AnalysisRun:
    """Analyze every task and summarize the collection.

    This is stage one of the dashboard pipeline. Analyses are returned
    highest score first; ties keep input order.

    Args:
        tasks: Non-empty task collection. Not modified.
        scoring: Score scales and risk tiers.
        thresholds: Insight and step multipliers.

    Returns:
        AnalysisRun with sorted analyses and aggregate metrics.

    Raises:
        InvalidInputError: If tasks is empty.
    """
    logger.info("Analyzing %d tasks", len(tasks))

    averages = calculate_averages(tasks)
    analyses = [
        analyze_task(
            task,
            averages.avg_queue_time,
            averages.avg_process_time,
            scoring,
            thresholds,
        )
        for task in tasks
    ]
    analyses.sort(key=lambda a: a.bottleneck_score, reverse=True)

    metrics = build_aggregate_metrics(analyses, averages)

    logger.info(
        "Scoring complete: %d critical, %d high-risk, efficiency %d",
        metrics.critical_bottlenecks,
        metrics.high_risk_tasks,
        metrics.efficiency_score,
    )

    return AnalysisRun(bottlenecks=analyses, metrics=metrics)
