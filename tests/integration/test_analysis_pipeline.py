"""End-to-end tests: load a task file, analyze it, simulate and export."""

import json

import pytest

from bottleneckiq.analysis import compare_scenarios, run_dashboard_analysis
from bottleneckiq.export import (
    export_analysis_json,
    export_anomalies_csv,
    export_bottlenecks_csv,
    export_simulation_csv,
)
from bottleneckiq.ingestion import load_tasks_csv
from bottleneckiq.models import AnomalySeverity, RecommendationPriority, RiskLevel


def _busy_week_csv() -> bytes:
    lines = ["Task ID,Queue Wait (min),Process Duration (min)"]
    for task_id in range(1, 41):
        if task_id in (3, 7):
            queue, process = 90, 60
        elif task_id <= 20:
            queue, process = 30, 60
        else:
            queue, process = 5, 10
        lines.append(f"{task_id},{queue},{process}")
    return ("\n".join(lines) + "\n").encode("utf-8")


@pytest.fixture
def report(detected_at):
    tasks = load_tasks_csv(_busy_week_csv(), delimiter=",")
    return run_dashboard_analysis(tasks, detected_at=detected_at)


class TestBusyWeek:
    def test_loads_every_row(self, report):
        assert report.metrics.total_tasks == 40

    def test_metrics(self, report):
        metrics = report.metrics
        assert metrics.avg_queue_time == pytest.approx(20.5)
        assert metrics.avg_process_time == pytest.approx(35.0)
        assert metrics.avg_total_time == pytest.approx(55.5)
        assert metrics.critical_bottlenecks == 20
        assert metrics.high_risk_tasks == 20
        assert metrics.efficiency_score == pytest.approx(42, abs=1)

    def test_worst_tasks_first(self, report):
        assert [b.task_id for b in report.bottlenecks[:2]] == [3, 7]
        assert report.bottlenecks[0].risk_level == RiskLevel.CRITICAL
        assert report.bottlenecks[-1].risk_level == RiskLevel.LOW

    def test_anomalies(self, report):
        assert [a.severity for a in report.anomalies] == [
            AnomalySeverity.CRITICAL,
            AnomalySeverity.WARNING,
            AnomalySeverity.INFO,
        ]

    def test_recommendations(self, report):
        assert [r.id for r in report.recommendations] == ["rec-2", "rec-1", "rec-3"]
        assert report.recommendations[0].priority == RecommendationPriority.CRITICAL

    def test_simulation_from_metrics(self, report):
        results = compare_scenarios(report.metrics)
        assert len(results) == 4
        for result in results:
            assert result.projected_metrics.critical_bottlenecks <= 20
            assert result.projected_metrics.efficiency_score >= report.metrics.efficiency_score

    def test_exports(self, report, detected_at):
        bottlenecks_csv = export_bottlenecks_csv(report.bottlenecks).decode("utf-8")
        assert bottlenecks_csv.count("\n") == 41

        anomalies_csv = export_anomalies_csv(report.anomalies).decode("utf-8")
        assert "Potential Rework Loop" in anomalies_csv

        simulation_csv = export_simulation_csv(compare_scenarios(report.metrics))
        assert b"Aggressive Transformation" in simulation_csv

        payload = json.loads(
            export_analysis_json(report.metrics, report.bottlenecks, exported_at=detected_at)
        )
        assert len(payload["bottlenecks"]) == 20
        assert payload["metrics"]["total_tasks"] == 40
