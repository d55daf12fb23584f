"""BottleneckIQ - workflow bottleneck analytics and what-if simulation.

Import from submodules directly:
    from bottleneckiq.analysis import run_dashboard_analysis, run_simulation
    from bottleneckiq.models import TaskRecord, AggregateMetrics
    from bottleneckiq.ingestion import load_tasks_csv
"""

__version__ = "0.1.0"
