"""Tests for bottleneckiq.analysis.simulation."""

import pytest

from bottleneckiq.analysis.simulation import (
    LOW_RISK_MESSAGE,
    PRESET_SCENARIOS,
    RISK_CAPACITY_STRAIN,
    RISK_HIGH_AUTOMATION,
    RISK_REDESIGN_TESTING,
    RISK_STAFF_REDUCTION,
    compare_scenarios,
    create_custom_scenario,
    get_preset_scenario,
    run_simulation,
)
from bottleneckiq.exceptions import InvalidInputError
from bottleneckiq.models import SimulationParameters, SimulationPolicy


class TestPresets:
    def test_preset_ids(self):
        assert [s.id for s in PRESET_SCENARIOS] == [
            "conservative",
            "balanced",
            "aggressive",
            "automation-focus",
        ]

    def test_lookup(self):
        scenario = get_preset_scenario("balanced")
        assert scenario.name == "Balanced Improvement"
        assert scenario.parameters.automation_level == 35
        assert scenario.parameters.process_redesign is True

    def test_unknown_preset(self):
        with pytest.raises(InvalidInputError) as exc_info:
            get_preset_scenario("moonshot")
        assert exc_info.value.value == "moonshot"
        assert "conservative" in exc_info.value.user_message


class TestCustomScenario:
    def test_unique_ids(self):
        params = SimulationParameters(automation_level=20)
        first = create_custom_scenario("Mine", params)
        second = create_custom_scenario("Mine", params)

        assert first.id.startswith("custom-")
        assert first.id != second.id
        assert first.parameters == params
        assert first.description == "Custom simulation scenario"


class TestConservativeScenario:
    @pytest.fixture
    def result(self, baseline_metrics):
        return run_simulation(baseline_metrics, get_preset_scenario("conservative"))

    def test_improvements(self, result):
        assert result.improvements.queue_time_reduction == pytest.approx(8.5)
        assert result.improvements.efficiency_gain == pytest.approx(7.2)
        assert result.improvements.bottleneck_reduction == 20

    def test_projected_metrics(self, result):
        projected = result.projected_metrics
        assert projected.avg_queue_time == pytest.approx(18.3)
        assert projected.avg_process_time == pytest.approx(37.9)
        assert projected.avg_total_time == pytest.approx(55.9)
        assert projected.total_tasks == 100
        assert projected.critical_bottlenecks == 8
        assert projected.high_risk_tasks == 17
        assert projected.efficiency_score == 57

    def test_cost_impact(self, result):
        cost = result.cost_impact
        assert cost.implementation_cost == 17000
        assert cost.annual_savings == 53300
        assert cost.roi == 314
        assert cost.payback_months == 4
        assert cost.pays_back_within_year

    def test_low_risk(self, result):
        assert result.risks == [LOW_RISK_MESSAGE]

    def test_keeps_original_metrics(self, result, baseline_metrics):
        assert result.original_metrics == baseline_metrics


class TestAggressiveScenario:
    @pytest.fixture
    def result(self, baseline_metrics):
        return run_simulation(baseline_metrics, get_preset_scenario("aggressive"))

    def test_reductions_capped(self, result):
        assert result.improvements.queue_time_reduction == 50
        assert result.improvements.process_time_reduction == 36
        assert result.improvements.efficiency_gain == 35

    def test_cost(self, result):
        assert result.cost_impact.implementation_cost == 213000

    def test_risks(self, result):
        assert result.risks == [
            RISK_HIGH_AUTOMATION,
            RISK_CAPACITY_STRAIN,
            RISK_REDESIGN_TESTING,
        ]


class TestRunSimulation:
    def test_no_change_scenario(self, baseline_metrics):
        scenario = create_custom_scenario("Nothing", SimulationParameters())
        result = run_simulation(baseline_metrics, scenario)

        assert result.projected_metrics == baseline_metrics
        assert result.cost_impact.implementation_cost == 0
        assert result.cost_impact.annual_savings == 0
        assert result.cost_impact.roi == 0
        assert result.cost_impact.payback_months == 0
        assert not result.cost_impact.pays_back_within_year
        assert result.risks == [LOW_RISK_MESSAGE]

    def test_staff_cuts_not_costed(self, baseline_metrics):
        result = run_simulation(baseline_metrics, get_preset_scenario("automation-focus"))
        assert result.cost_impact.implementation_cost == 82500
        assert result.risks == [RISK_HIGH_AUTOMATION, RISK_REDESIGN_TESTING]

    def test_deep_staff_cut_flagged(self, baseline_metrics):
        scenario = create_custom_scenario("Cut", SimulationParameters(staffing_change=-25))
        assert RISK_STAFF_REDUCTION in run_simulation(baseline_metrics, scenario).risks

    def test_out_of_range_parameters_still_capped(self, baseline_metrics):
        params = SimulationParameters(
            queue_capacity_change=500, automation_level=500, staffing_change=500
        )
        result = run_simulation(baseline_metrics, create_custom_scenario("Wild", params))

        assert result.improvements.queue_time_reduction == 50
        assert result.improvements.process_time_reduction == 40
        assert result.improvements.efficiency_gain == 35
        assert result.projected_metrics.efficiency_score <= 100
        assert result.projected_metrics.critical_bottlenecks >= 0

    def test_repeatable(self, baseline_metrics):
        scenario = get_preset_scenario("balanced")
        assert run_simulation(baseline_metrics, scenario) == run_simulation(
            baseline_metrics, scenario
        )

    def test_efficiency_gain_monotone_in_automation(self, baseline_metrics):
        gains = [
            run_simulation(
                baseline_metrics,
                create_custom_scenario("A", SimulationParameters(automation_level=level)),
            ).improvements.efficiency_gain
            for level in range(0, 101, 10)
        ]
        assert gains == sorted(gains)

    def test_efficiency_capped_at_100(self, baseline_metrics):
        metrics = baseline_metrics.model_copy(update={"efficiency_score": 90})
        result = run_simulation(metrics, get_preset_scenario("aggressive"))
        assert result.projected_metrics.efficiency_score == 100

    def test_no_critical_baseline(self, healthy_metrics):
        metrics = healthy_metrics.model_copy(update={"critical_bottlenecks": 0})
        result = run_simulation(metrics, get_preset_scenario("balanced"))
        assert result.projected_metrics.critical_bottlenecks == 0
        assert result.improvements.bottleneck_reduction == 100

    def test_custom_cost_model(self, baseline_metrics):
        policy = SimulationPolicy(automation_unit_cost=0, queue_capacity_unit_cost=0)
        result = run_simulation(baseline_metrics, get_preset_scenario("conservative"), policy)
        assert result.cost_impact.implementation_cost == 0
        assert result.cost_impact.roi == 0

    def test_custom_reduction_weight(self, baseline_metrics):
        policy = SimulationPolicy(automation_queue_weight=0.6)
        result = run_simulation(baseline_metrics, get_preset_scenario("conservative"), policy)
        # 10 capacity points at 0.4 plus 15 automation points at 0.6
        assert result.improvements.queue_time_reduction == pytest.approx(13.0)

    def test_custom_elimination_gain(self, baseline_metrics):
        policy = SimulationPolicy(critical_elimination_gain=10)
        result = run_simulation(baseline_metrics, get_preset_scenario("conservative"), policy)
        assert result.projected_metrics.critical_bottlenecks == 2
        assert result.projected_metrics.high_risk_tasks == 17

    def test_custom_risk_triggers(self, baseline_metrics):
        policy = SimulationPolicy(risky_automation_level=10, risky_capacity_increase=5)
        result = run_simulation(baseline_metrics, get_preset_scenario("conservative"), policy)
        assert result.risks == [RISK_HIGH_AUTOMATION, RISK_CAPACITY_STRAIN]


class TestCompareScenarios:
    def test_defaults_to_presets(self, baseline_metrics):
        results = compare_scenarios(baseline_metrics)
        assert [r.scenario.id for r in results] == [s.id for s in PRESET_SCENARIOS]

    def test_given_order(self, baseline_metrics):
        scenarios = [get_preset_scenario("aggressive"), get_preset_scenario("conservative")]
        results = compare_scenarios(baseline_metrics, scenarios)
        assert [r.scenario.id for r in results] == ["aggressive", "conservative"]
