"""Tests for bottleneckiq.analysis.pipeline."""

import pytest

from bottleneckiq.analysis import analyze_tasks, build_report, run_dashboard_analysis
from bottleneckiq.exceptions import InvalidInputError
from bottleneckiq.models import AnalysisPolicy, AnomalyType, ThresholdPolicy


class TestRunDashboardAnalysis:
    def test_three_tasks(self, three_tasks, detected_at):
        report = run_dashboard_analysis(three_tasks, detected_at=detected_at)

        assert [b.task_id for b in report.bottlenecks] == [2, 1, 3]
        assert report.metrics.efficiency_score == 64
        assert [a.type for a in report.anomalies] == [AnomalyType.IDLE_TIME]
        assert len(report.predictions) == 4
        assert len(report.recommendations) >= 1

    def test_matches_two_stage_run(self, busy_week, detected_at):
        run = analyze_tasks(busy_week)
        staged = build_report(busy_week, run, detected_at=detected_at)
        assert run_dashboard_analysis(busy_week, detected_at=detected_at) == staged

    def test_idempotent_with_pinned_time(self, busy_week, detected_at):
        first = run_dashboard_analysis(busy_week, detected_at=detected_at)
        second = run_dashboard_analysis(busy_week, detected_at=detected_at)
        assert first == second

    def test_policy_reaches_every_stage(self, three_tasks, detected_at):
        policy = AnalysisPolicy(thresholds=ThresholdPolicy(idle_time_multiplier=5.0))
        report = run_dashboard_analysis(three_tasks, policy, detected_at)
        assert report.anomalies == []

    def test_empty_rejected(self):
        with pytest.raises(InvalidInputError):
            run_dashboard_analysis([])
