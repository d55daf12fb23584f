"""Task data ingestion for BottleneckIQ.

Example usage:
    >>> from bottleneckiq.ingestion import load_tasks_csv, load_tasks_excel
    >>>
    >>> tasks = load_tasks_csv("tasks.csv")
    >>> tasks = load_tasks_excel("tasks.xlsx", sheet_name="Week 12")
"""

from bottleneckiq.ingestion.csv_loader import (
    load_tasks_csv,
    load_tasks_csv_from_bytes,
)
from bottleneckiq.ingestion.excel_loader import (
    load_tasks_excel,
    load_tasks_excel_from_bytes,
)

__all__ = [
    "load_tasks_csv",
    "load_tasks_csv_from_bytes",
    "load_tasks_excel",
    "load_tasks_excel_from_bytes",
]
