"""What-if simulation of process changes.

Pure algorithmic logic. Projects aggregate metrics, cost impact and risks
for a scenario. Scenario parameters are not range-checked:
out-of-range values flow through the formulas, and only the combined
reductions are capped.
"""

import logging
import math
import uuid
from collections.abc import Sequence

from bottleneckiq.analysis.statistics import round_half_up, round_int
from bottleneckiq.exceptions import InvalidInputError
from bottleneckiq.models import (
    AggregateMetrics,
    CostImpact,
    SimulationImprovements,
    SimulationParameters,
    SimulationPolicy,
    SimulationResult,
    SimulationScenario,
)

logger = logging.getLogger(__name__)

RISK_HIGH_AUTOMATION = "High automation may require significant training and change management"
RISK_STAFF_REDUCTION = (
    "Significant staff reduction may impact team morale and knowledge retention"
)
RISK_CAPACITY_STRAIN = "Large capacity increases may strain existing infrastructure"
RISK_REDESIGN_TESTING = (
    "Process redesign requires thorough testing before production deployment"
)
LOW_RISK_MESSAGE = "Low-risk scenario with minimal implementation challenges"

PRESET_SCENARIOS: tuple[SimulationScenario, ...] = (
    SimulationScenario(
        id="conservative",
        name="Conservative Optimization",
        description="Low-risk improvements with minimal resource changes",
        parameters=SimulationParameters(
            queue_capacity_change=10,
            automation_level=15,
            staffing_change=0,
            process_redesign=False,
        ),
    ),
    SimulationScenario(
        id="balanced",
        name="Balanced Improvement",
        description="Moderate changes balancing cost and efficiency gains",
        parameters=SimulationParameters(
            queue_capacity_change=25,
            automation_level=35,
            staffing_change=10,
            process_redesign=True,
        ),
    ),
    SimulationScenario(
        id="aggressive",
        name="Aggressive Transformation",
        description="Maximum optimization with significant process changes",
        parameters=SimulationParameters(
            queue_capacity_change=50,
            automation_level=60,
            staffing_change=25,
            process_redesign=True,
        ),
    ),
    SimulationScenario(
        id="automation-focus",
        name="Automation First",
        description="Heavy automation investment with minimal staffing changes",
        parameters=SimulationParameters(
            queue_capacity_change=15,
            automation_level=75,
            staffing_change=-10,
            process_redesign=True,
        ),
    ),
)


def get_preset_scenario(scenario_id: str) -> SimulationScenario:
    """Look up a preset scenario by id.

    Raises:
        InvalidInputError: If no preset has that id.
    """
    for scenario in PRESET_SCENARIOS:
        if scenario.id == scenario_id:
            return scenario
    raise InvalidInputError(
        message=f"Unknown preset scenario: {scenario_id}",
        field="scenario_id",
        value=scenario_id,
        user_message=(
            f"No preset named '{scenario_id}'. Available: "
            f"{', '.join(s.id for s in PRESET_SCENARIOS)}"
        ),
    )


def create_custom_scenario(
    name: str,
    parameters: SimulationParameters,
    description: str = "Custom simulation scenario",
) -> SimulationScenario:
    """Wrap user-supplied parameters in a uniquely identified scenario."""
    return SimulationScenario(
        id=f"custom-{uuid.uuid4().hex[:12]}",
        name=name,
        description=description,
        parameters=parameters,
    )


def _queue_reduction(params: SimulationParameters, policy: SimulationPolicy) -> float:
    return min(
        policy.max_queue_reduction,
        params.queue_capacity_change * policy.queue_capacity_queue_weight
        + params.automation_level * policy.automation_queue_weight
        + (policy.redesign_queue_reduction if params.process_redesign else 0),
    )


def _process_reduction(params: SimulationParameters, policy: SimulationPolicy) -> float:
    return min(
        policy.max_process_reduction,
        params.automation_level * policy.automation_process_weight
        + params.staffing_change * policy.staffing_process_weight
        + (policy.redesign_process_reduction if params.process_redesign else 0),
    )


def _efficiency_gain(
    queue_reduction: float,
    process_reduction: float,
    params: SimulationParameters,
    policy: SimulationPolicy,
) -> float:
    return min(
        policy.max_efficiency_gain,
        queue_reduction * policy.efficiency_queue_weight
        + process_reduction * policy.efficiency_process_weight
        + params.automation_level * policy.efficiency_automation_weight,
    )


def _project_metrics(
    base: AggregateMetrics,
    queue_reduction: float,
    process_reduction: float,
    efficiency_gain: float,
    policy: SimulationPolicy,
) -> AggregateMetrics:
    """Apply the reductions to the baseline metrics."""
    critical_share = 1 - efficiency_gain / policy.critical_elimination_gain
    high_risk_share = 1 - efficiency_gain / policy.high_risk_elimination_gain
    return AggregateMetrics(
        avg_queue_time=round_half_up(base.avg_queue_time * (1 - queue_reduction / 100), 1),
        avg_process_time=round_half_up(base.avg_process_time * (1 - process_reduction / 100), 1),
        # Total time falls by the mean of the two reductions
        avg_total_time=round_half_up(
            base.avg_total_time * (1 - (queue_reduction + process_reduction) / 200), 1
        ),
        total_tasks=base.total_tasks,
        critical_bottlenecks=max(0, math.floor(base.critical_bottlenecks * critical_share)),
        high_risk_tasks=max(0, math.floor(base.high_risk_tasks * high_risk_share)),
        efficiency_score=min(100, round_int(base.efficiency_score + efficiency_gain)),
    )


def _cost_impact(
    base: AggregateMetrics,
    projected: AggregateMetrics,
    params: SimulationParameters,
    policy: SimulationPolicy,
) -> CostImpact:
    """Estimate implementation cost, annual savings, ROI and payback."""
    implementation_cost = (
        params.queue_capacity_change * policy.queue_capacity_unit_cost
        + params.automation_level * policy.automation_unit_cost
        + max(0, params.staffing_change) * policy.staffing_unit_cost
        + (policy.redesign_cost if params.process_redesign else 0)
    )

    time_saved_per_task = base.avg_total_time - projected.avg_total_time
    annual_tasks = base.total_tasks * policy.batches_per_year
    annual_savings = round_int(time_saved_per_task * policy.cost_per_minute * annual_tasks)

    roi = round_int(annual_savings / implementation_cost * 100) if implementation_cost > 0 else 0
    payback_months = (
        round_int(implementation_cost / annual_savings * 12) if annual_savings > 0 else 0
    )

    return CostImpact(
        implementation_cost=implementation_cost,
        annual_savings=annual_savings,
        roi=roi,
        payback_months=payback_months,
    )


def _identify_risks(params: SimulationParameters, policy: SimulationPolicy) -> list[str]:
    risks: list[str] = []
    if params.automation_level > policy.risky_automation_level:
        risks.append(RISK_HIGH_AUTOMATION)
    if params.staffing_change < policy.risky_staffing_cut:
        risks.append(RISK_STAFF_REDUCTION)
    if params.queue_capacity_change > policy.risky_capacity_increase:
        risks.append(RISK_CAPACITY_STRAIN)
    if params.process_redesign:
        risks.append(RISK_REDESIGN_TESTING)
    return risks or [LOW_RISK_MESSAGE]


def run_simulation(
    base_metrics: AggregateMetrics,
    scenario: SimulationScenario,
    policy: SimulationPolicy | None = None,
) -> SimulationResult:
    """Project the effect of a scenario on the baseline metrics.

    Args:
        base_metrics: Current aggregate metrics.
        scenario: Preset or custom scenario.
        policy: Reduction caps and cost model.

    Returns:
        SimulationResult with projected metrics, improvements, cost impact
        and risk notes.
    """
    policy = policy or SimulationPolicy()
    params = scenario.parameters

    logger.info("Simulating scenario '%s' (%s)", scenario.name, scenario.id)

    queue_reduction = _queue_reduction(params, policy)
    process_reduction = _process_reduction(params, policy)
    efficiency_gain = _efficiency_gain(queue_reduction, process_reduction, params, policy)

    projected = _project_metrics(
        base_metrics, queue_reduction, process_reduction, efficiency_gain, policy
    )
    cost_impact = _cost_impact(base_metrics, projected, params, policy)

    improvements = SimulationImprovements(
        queue_time_reduction=round_half_up(queue_reduction, 1),
        process_time_reduction=round_half_up(process_reduction, 1),
        efficiency_gain=round_half_up(efficiency_gain, 1),
        bottleneck_reduction=round_int(
            (1 - projected.critical_bottlenecks / max(1, base_metrics.critical_bottlenecks)) * 100
        ),
    )

    logger.debug(
        "Scenario %s: queue -%.1f%%, process -%.1f%%, efficiency +%.1f, ROI %d%%",
        scenario.id,
        queue_reduction,
        process_reduction,
        efficiency_gain,
        cost_impact.roi,
    )

    return SimulationResult(
        scenario=scenario,
        original_metrics=base_metrics,
        projected_metrics=projected,
        improvements=improvements,
        cost_impact=cost_impact,
        risks=_identify_risks(params, policy),
    )


def compare_scenarios(
    base_metrics: AggregateMetrics,
    scenarios: Sequence[SimulationScenario] | None = None,
    policy: SimulationPolicy | None = None,
) -> list[SimulationResult]:
    """Simulate several scenarios against the same baseline.

    Args:
        base_metrics: Current aggregate metrics.
        scenarios: Scenarios to run. Defaults to all presets.
        policy: Reduction caps and cost model.

    Returns:
        One result per scenario, in the order given.
    """
    scenarios = PRESET_SCENARIOS if scenarios is None else scenarios
    return [run_simulation(base_metrics, s, policy) for s in scenarios]
