"""Short-horizon trend predictions for headline metrics.

Heuristic stand-in for a forecasting model: each prediction scales the
current value by a trend-conditioned percentage and carries a fixed
confidence. Pure function of the aggregate metrics.
"""

import logging
from collections.abc import Sequence

from bottleneckiq.analysis.statistics import round_half_up, round_int
from bottleneckiq.models import (
    AggregateMetrics,
    BottleneckAnalysis,
    ForecastPolicy,
    Prediction,
    Trend,
)

logger = logging.getLogger(__name__)


def _queue_trend(metrics: AggregateMetrics, policy: ForecastPolicy) -> Trend:
    if metrics.avg_queue_time > policy.queue_up_minutes:
        return Trend.UP
    if metrics.avg_queue_time < policy.queue_down_minutes:
        return Trend.DOWN
    return Trend.STABLE


def _process_trend(metrics: AggregateMetrics, policy: ForecastPolicy) -> Trend:
    if metrics.avg_process_time > policy.process_up_minutes:
        return Trend.UP
    return Trend.STABLE


def _predict_queue(metrics: AggregateMetrics, policy: ForecastPolicy) -> Prediction:
    trend = _queue_trend(metrics, policy)
    change = {
        Trend.UP: policy.queue_up_change_pct,
        Trend.DOWN: policy.queue_down_change_pct,
        Trend.STABLE: policy.queue_stable_change_pct,
    }[trend]
    return Prediction(
        metric="Queue Wait Time",
        current_value=metrics.avg_queue_time,
        predicted_value=round_half_up(metrics.avg_queue_time * (1 + change / 100), 1),
        change=change,
        trend=trend,
        confidence=policy.queue_confidence,
        timeframe=policy.timeframe,
    )


def _predict_process(metrics: AggregateMetrics, policy: ForecastPolicy) -> Prediction:
    trend = _process_trend(metrics, policy)
    change = (
        policy.process_up_change_pct if trend == Trend.UP else policy.process_stable_change_pct
    )
    return Prediction(
        metric="Process Duration",
        current_value=metrics.avg_process_time,
        predicted_value=round_half_up(metrics.avg_process_time * (1 + change / 100), 1),
        change=change,
        trend=trend,
        confidence=policy.process_confidence,
        timeframe=policy.timeframe,
    )


def _predict_critical(metrics: AggregateMetrics, policy: ForecastPolicy) -> Prediction:
    # An empty batch has no critical share to extrapolate from
    critical_ratio = (
        metrics.critical_bottlenecks / metrics.total_tasks if metrics.total_tasks else 0.0
    )
    return Prediction(
        metric="Critical Bottlenecks",
        current_value=metrics.critical_bottlenecks,
        predicted_value=round_int(
            metrics.critical_bottlenecks * (1 + critical_ratio * policy.critical_growth_factor)
        ),
        change=round_int(critical_ratio * policy.critical_growth_factor * 100),
        trend=Trend.UP if critical_ratio > policy.critical_trend_ratio else Trend.STABLE,
        confidence=policy.critical_confidence,
        timeframe=policy.timeframe,
    )


def _predict_efficiency(metrics: AggregateMetrics, policy: ForecastPolicy) -> Prediction:
    improving = metrics.efficiency_score > policy.efficiency_pivot
    change = policy.efficiency_up_change if improving else policy.efficiency_down_change
    return Prediction(
        metric="Efficiency Score",
        current_value=metrics.efficiency_score,
        predicted_value=max(0, min(100, metrics.efficiency_score + change)),
        change=change,
        trend=Trend.UP if improving else Trend.DOWN,
        confidence=policy.efficiency_confidence,
        timeframe=policy.timeframe,
    )


def generate_predictions(
    metrics: AggregateMetrics,
    bottlenecks: Sequence[BottleneckAnalysis] | None = None,
    policy: ForecastPolicy | None = None,
) -> list[Prediction]:
    """Forecast the four headline metrics.

    Args:
        metrics: Aggregate metrics from the scoring stage.
        bottlenecks: Accepted for interface parity with the recommendation
            engine; every input the forecast needs is already in metrics.
        policy: Trend thresholds, growth rates and confidences.

    Returns:
        Predictions for Queue Wait Time, Process Duration, Critical
        Bottlenecks and Efficiency Score, in that order.
    """
    policy = policy or ForecastPolicy()

    predictions = [
        _predict_queue(metrics, policy),
        _predict_process(metrics, policy),
        _predict_critical(metrics, policy),
        _predict_efficiency(metrics, policy),
    ]

    logger.debug(
        "Predictions: %s",
        ", ".join(f"{p.metric}={p.predicted_value} ({p.trend.value})" for p in predictions),
    )
    return predictions
