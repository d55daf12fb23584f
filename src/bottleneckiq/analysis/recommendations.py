"""Rule-based improvement recommendations.

Each rule is gated on one aggregate threshold and carries fixed, pre-
estimated impact figures; only the gate looks at the actual metrics.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from bottleneckiq.analysis.rules import Rule, evaluate_rules
from bottleneckiq.models import (
    AggregateMetrics,
    BottleneckAnalysis,
    Effort,
    Recommendation,
    RecommendationCategory,
    RecommendationImpact,
    RecommendationPriority,
    ThresholdPolicy,
)

logger = logging.getLogger(__name__)

PRIORITY_RANK: dict[RecommendationPriority, int] = {
    RecommendationPriority.CRITICAL: 0,
    RecommendationPriority.HIGH: 1,
    RecommendationPriority.MEDIUM: 2,
    RecommendationPriority.LOW: 3,
}


@dataclass(frozen=True)
class RecommendationContext:
    metrics: AggregateMetrics
    thresholds: ThresholdPolicy


PARALLEL_PROCESSING = Recommendation(
    id="rec-1",
    title="Implement Parallel Processing",
    description=(
        "Deploy additional processing lanes during peak hours (9AM-2PM) to reduce "
        "queue buildup. Analysis shows 40% of queue time occurs during these windows."
    ),
    impact=RecommendationImpact(sla_improvement_pct=25, cost_savings=15000, effort=Effort.MEDIUM),
    priority=RecommendationPriority.HIGH,
    category=RecommendationCategory.CAPACITY,
)

AUTOMATE_VALIDATION = Recommendation(
    id="rec-2",
    title="Automate Validation Steps",
    description=(
        "Replace manual validation checkpoints with automated rules engine. "
        "Currently 35% of critical bottlenecks occur at validation stages."
    ),
    impact=RecommendationImpact(sla_improvement_pct=40, cost_savings=25000, effort=Effort.HIGH),
    priority=RecommendationPriority.CRITICAL,
    category=RecommendationCategory.AUTOMATION,
)

REDESIGN_DEPENDENCIES = Recommendation(
    id="rec-3",
    title="Redesign Task Dependencies",
    description=(
        "Remove sequential dependencies where parallel execution is possible. "
        "Task dependency analysis reveals 28% could run concurrently."
    ),
    impact=RecommendationImpact(sla_improvement_pct=18, cost_savings=8000, effort=Effort.LOW),
    priority=RecommendationPriority.HIGH,
    category=RecommendationCategory.PROCESS,
)

SKILL_BASED_ROUTING = Recommendation(
    id="rec-4",
    title="Skill-Based Routing",
    description=(
        "Route complex tasks to specialized handlers. Process time variance analysis "
        "shows 22% improvement potential with expertise matching."
    ),
    impact=RecommendationImpact(sla_improvement_pct=15, cost_savings=5000, effort=Effort.LOW),
    priority=RecommendationPriority.MEDIUM,
    category=RecommendationCategory.RESOURCE,
)

CONTINUOUS_MONITORING = Recommendation(
    id="rec-5",
    title="Continuous Monitoring Enhancement",
    description=(
        "Implement real-time dashboards with automated threshold alerts to maintain "
        "current performance levels and detect early degradation."
    ),
    impact=RecommendationImpact(sla_improvement_pct=5, cost_savings=2000, effort=Effort.LOW),
    priority=RecommendationPriority.LOW,
    category=RecommendationCategory.PROCESS,
)

RECOMMENDATION_RULES: tuple[Rule[RecommendationContext, Recommendation], ...] = (
    Rule(
        name="high_queue_time",
        applies=lambda ctx: ctx.metrics.avg_queue_time
        > ctx.thresholds.parallel_processing_queue_minutes,
        produce=lambda ctx: PARALLEL_PROCESSING,
    ),
    Rule(
        name="many_critical_bottlenecks",
        applies=lambda ctx: ctx.metrics.critical_bottlenecks
        > ctx.thresholds.automation_critical_count,
        produce=lambda ctx: AUTOMATE_VALIDATION,
    ),
    Rule(
        name="low_efficiency",
        applies=lambda ctx: ctx.metrics.efficiency_score < ctx.thresholds.redesign_efficiency_below,
        produce=lambda ctx: REDESIGN_DEPENDENCIES,
    ),
    Rule(
        name="long_process_time",
        applies=lambda ctx: ctx.metrics.avg_process_time
        > ctx.thresholds.skill_routing_process_minutes,
        produce=lambda ctx: SKILL_BASED_ROUTING,
    ),
)


def generate_recommendations(
    metrics: AggregateMetrics,
    bottlenecks: Sequence[BottleneckAnalysis] | None = None,
    thresholds: ThresholdPolicy | None = None,
) -> list[Recommendation]:
    """Propose improvement actions for the current aggregate state.

    Args:
        metrics: Aggregate metrics from the scoring stage.
        bottlenecks: Accepted for interface parity; the rules only read metrics.
        thresholds: Gating thresholds.

    Returns:
        One to four recommendations, most urgent first. Equal priorities
        keep rule order. When no rule fires, a single low-priority
        monitoring recommendation is returned.
    """
    ctx = RecommendationContext(metrics=metrics, thresholds=thresholds or ThresholdPolicy())
    recommendations = evaluate_rules(RECOMMENDATION_RULES, ctx)

    if not recommendations:
        recommendations = [CONTINUOUS_MONITORING]

    recommendations.sort(key=lambda r: PRIORITY_RANK[r.priority])

    logger.info(
        "Generated %d recommendations: %s",
        len(recommendations),
        ", ".join(r.id for r in recommendations),
    )
    return recommendations
