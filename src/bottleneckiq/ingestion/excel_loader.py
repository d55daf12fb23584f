"""Excel file loader for BottleneckIQ.

Loads task timing data from Excel files (.xlsx) into TaskRecord models.
Uses pandas with openpyxl engine.
"""

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO

import pandas as pd

from bottleneckiq.exceptions import ExtractionError

# Reuse column mapping logic from csv_loader
from bottleneckiq.ingestion.csv_loader import (
    _convert_dtypes,
    _df_to_tasks,
    _map_columns,
    _validate_required_columns,
)
from bottleneckiq.models.task import TaskRecord

logger = logging.getLogger(__name__)

HEADER_KEYWORDS = {"task", "id", "queue", "wait", "process", "duration", "time", "step"}


def _detect_header_row(df: pd.DataFrame, max_rows: int = 10) -> int:
    """Detect which row contains headers by looking for expected column patterns.

    Args:
        df: DataFrame read without headers (header=None).
        max_rows: Maximum rows to scan for headers.

    Returns:
        Row index containing headers (0-based).
    """
    for idx in range(min(max_rows, len(df))):
        row = df.iloc[idx]
        row_text = " ".join(str(v).lower() for v in row if pd.notna(v))
        matches = sum(1 for kw in HEADER_KEYWORDS if kw in row_text)
        if matches >= 2:
            logger.debug("Detected header row at index %d", idx)
            return idx

    return 0


def _to_excel_source(source: str | Path | BinaryIO | bytes) -> str | Path | BytesIO:
    if isinstance(source, str | Path):
        path = Path(source)
        if not path.exists():
            raise ExtractionError(
                message=f"File not found: {path}",
                source=str(path),
                user_message=f"The file '{path.name}' was not found.",
            )
        return path
    if isinstance(source, bytes):
        return BytesIO(source)

    content = source.read()
    source.seek(0)
    return BytesIO(bytes(content))


def load_tasks_excel(
    source: str | Path | BinaryIO | bytes,
    sheet_name: str | int = 0,
    header_row: int | None = None,
) -> list[TaskRecord]:
    """Load task records from an Excel workbook.

    Args:
        source: File path, file object, or raw Excel bytes.
        sheet_name: Sheet name or index to read (default: first sheet).
        header_row: Row index containing headers (0-based). If None, auto-detect.

    Returns:
        Validated tasks in sheet order.

    Raises:
        ExtractionError: If file cannot be read or parsed.
        ValidationError: If data validation fails.
    """
    logger.info("Loading Excel from %s", type(source).__name__)

    excel_source = _to_excel_source(source)

    try:
        if header_row is None:
            preview_df = pd.read_excel(
                excel_source,
                sheet_name=sheet_name,
                header=None,
                nrows=15,
                engine="openpyxl",
            )
            header_row = _detect_header_row(preview_df)
            if isinstance(excel_source, BytesIO):
                excel_source.seek(0)

        df = pd.read_excel(
            excel_source,
            sheet_name=sheet_name,
            header=header_row,
            engine="openpyxl",
            dtype=str,  # Read as string first, convert later
        )

        logger.debug("Read Excel with %d rows, %d columns", len(df), len(df.columns))

    except ValueError as e:
        # Sheet not found, invalid file, etc.
        raise ExtractionError(
            message=f"Failed to read Excel: {e}",
            source="excel",
            user_message=f"Could not read the Excel file: {e}",
        ) from e
    except Exception as e:
        # openpyxl raises its own error types for corrupt workbooks
        raise ExtractionError(
            message=f"Excel parsing error: {e}",
            source="excel",
            user_message="The Excel file could not be parsed. Ensure it's a valid .xlsx file.",
        ) from e

    if df.empty:
        raise ExtractionError(
            message="Excel sheet has no data rows",
            source="excel",
            user_message="The Excel sheet has headers but no data rows.",
        )

    df.columns = [str(c).strip() for c in df.columns]
    df = df.dropna(how="all")
    df = df.dropna(axis=1, how="all")

    df = _map_columns(df)
    _validate_required_columns(df)
    df = _convert_dtypes(df)
    # Data starts on the sheet row below the 0-based header row
    tasks = _df_to_tasks(df, first_row=header_row + 2)

    logger.info("Successfully loaded %d tasks from Excel", len(tasks))
    return tasks


def load_tasks_excel_from_bytes(data: bytes, sheet_name: str | int = 0) -> list[TaskRecord]:
    """Convenience function for loading Excel from bytes (e.g., an upload widget)."""
    return load_tasks_excel(BytesIO(data), sheet_name=sheet_name)
