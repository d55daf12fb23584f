"""BottleneckIQ export functionality."""

from bottleneckiq.export.csv_export import (
    export_anomalies_csv,
    export_bottlenecks_csv,
    export_recommendations_csv,
    export_simulation_csv,
)
from bottleneckiq.export.json_export import export_analysis_json

__all__ = [
    "export_analysis_json",
    "export_anomalies_csv",
    "export_bottlenecks_csv",
    "export_recommendations_csv",
    "export_simulation_csv",
]
