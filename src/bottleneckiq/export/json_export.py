"""JSON export of an analysis snapshot with user annotations."""

import json
import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from bottleneckiq.models import AggregateMetrics, Annotation, BottleneckAnalysis

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 20


def export_analysis_json(
    metrics: AggregateMetrics,
    bottlenecks: Sequence[BottleneckAnalysis],
    annotations: Sequence[Annotation] = (),
    top_n: int = DEFAULT_TOP_N,
    exported_at: datetime | None = None,
) -> bytes:
    """Serialize metrics, the top bottlenecks and annotations to JSON.

    Args:
        metrics: Aggregate metrics of the run.
        bottlenecks: Analyses sorted by score; only the first top_n are kept.
        annotations: User notes to include.
        top_n: Number of bottlenecks to include.
        exported_at: Export timestamp. Defaults to now (UTC).

    Returns:
        Pretty-printed JSON as bytes (UTF-8 encoded).
    """
    exported_at = exported_at or datetime.now(UTC)
    payload = {
        "export_date": exported_at.isoformat(),
        "metrics": metrics.model_dump(mode="json"),
        "bottlenecks": [b.model_dump(mode="json") for b in bottlenecks[:top_n]],
        "annotations": [a.model_dump(mode="json") for a in annotations],
    }

    logger.info(
        "Exported analysis to JSON: %d of %d bottlenecks, %d annotations",
        len(payload["bottlenecks"]),
        len(bottlenecks),
        len(annotations),
    )
    return json.dumps(payload, indent=2).encode("utf-8")
