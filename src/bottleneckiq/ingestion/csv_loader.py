"""CSV file loader for BottleneckIQ.

Loads task timing data from CSV files into TaskRecord models.
Handles common issues: encoding, delimiters, column naming, unit suffixes.
"""

import logging
import re
from io import BytesIO, StringIO
from pathlib import Path
from typing import BinaryIO

import pandas as pd
from pydantic import ValidationError as PydanticValidationError

from bottleneckiq.exceptions import ExtractionError, ValidationError
from bottleneckiq.models.task import TaskRecord

logger = logging.getLogger(__name__)

# All columns are required (match TaskRecord fields)
REQUIRED_COLUMNS = {"task_id", "queue_wait_time", "process_time"}

# Common column name variations for auto-mapping
COLUMN_ALIASES: dict[str, list[str]] = {
    "task_id": [
        "task_id",
        "id",
        "task",
        "task_no",
        "task_number",
        "ticket_id",
        "case_id",
    ],
    "queue_wait_time": [
        "queue_wait_time",
        "queue_wait",
        "queue_time",
        "wait_time",
        "queue",
        "wait",
        "idle_time",
        "queue_minutes",
    ],
    "process_time": [
        "process_time",
        "process_step_duration",
        "process_duration",
        "processing_time",
        "step_duration",
        "duration",
        "handle_time",
        "process_minutes",
    ],
}


def _normalize_column_name(col: str) -> str:
    """Normalize column name for matching.

    Splits CamelCase (QueueWaitTime -> queue_wait_time), lowercases, strips
    parenthetical unit suffixes like (min) and replaces spaces and hyphens.
    """
    normalized = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", col.strip())
    normalized = normalized.lower()
    # Remove parenthetical suffixes like (min), (minutes)
    normalized = re.sub(r"\s*\([^)]*\)\s*$", "", normalized)
    normalized = re.sub(r"[\s\-]+", "_", normalized)
    normalized = normalized.strip("_")
    return normalized


def _map_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Map common column name variations to expected names.

    Args:
        df: DataFrame with potentially non-standard column names.

    Returns:
        DataFrame with standardized column names.
    """
    column_mapping: dict[str, str] = {}
    normalized_cols = {_normalize_column_name(str(c)): c for c in df.columns}

    for standard_name, aliases in COLUMN_ALIASES.items():
        if standard_name in df.columns:
            continue

        for alias in aliases:
            if alias in normalized_cols:
                original_col = normalized_cols[alias]
                if original_col in column_mapping:
                    continue
                column_mapping[original_col] = standard_name
                logger.debug("Mapped column '%s' -> '%s'", original_col, standard_name)
                break

    if column_mapping:
        df = df.rename(columns=column_mapping)
        logger.info("Mapped %d columns to standard names", len(column_mapping))

    return df


def _validate_required_columns(df: pd.DataFrame) -> None:
    """Check that all required columns are present.

    Raises:
        ValidationError: If required columns are missing.
    """
    missing = REQUIRED_COLUMNS - set(df.columns)

    if missing:
        raise ValidationError(
            message=f"Missing required columns: {missing}",
            field="columns",
            value=str(list(df.columns)),
            user_message=f"The file is missing required columns: {', '.join(sorted(missing))}. "
            f"Expected columns: {', '.join(sorted(REQUIRED_COLUMNS))}",
        )


def _parse_csv_content(
    content: str | bytes,
    delimiter: str | None = None,
    encoding: str = "utf-8",
) -> pd.DataFrame:
    """Parse CSV content into DataFrame with error handling.

    Raises:
        ExtractionError: If parsing fails.
    """
    try:
        if isinstance(content, bytes):
            content = content.decode(encoding)

        df = pd.read_csv(
            StringIO(content),
            sep=delimiter,  # None = auto-detect
            engine="python" if delimiter is None else "c",
            on_bad_lines="warn",
            skip_blank_lines=True,
            dtype=str,  # Read everything as string first, convert later
        )

        logger.debug("Parsed CSV with %d rows, %d columns", len(df), len(df.columns))
        return df

    except pd.errors.EmptyDataError as e:
        raise ExtractionError(
            message=f"CSV file is empty: {e}",
            source="csv",
            user_message="The CSV file is empty. Please provide a file with task data.",
        ) from e
    except pd.errors.ParserError as e:
        raise ExtractionError(
            message=f"Failed to parse CSV: {e}",
            source="csv",
            user_message="The CSV file could not be parsed. Check that it's properly formatted "
            "with consistent delimiters and no corrupted rows.",
        ) from e
    except UnicodeDecodeError as e:
        raise ExtractionError(
            message=f"Encoding error: {e}",
            source="csv",
            user_message=f"The file encoding is not {encoding}. Try saving the file as UTF-8.",
        ) from e


def _convert_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    """Convert string columns to numbers.

    Unparseable cells become NaN; the row is then rejected by model
    validation rather than silently defaulted.
    """
    for col in REQUIRED_COLUMNS:
        if col not in df.columns:
            continue

        series = df[col].astype(str)
        series = series.str.replace(",", "", regex=False)
        # Remove unit words like "12 min" or "12 minutes"
        series = series.str.replace(
            r"\s*(mins?|minutes?|m)\s*$",
            "",
            regex=True,
            case=False,
        )
        series = series.str.strip()
        # float64 throughout; integral ids validate into TaskRecord.task_id
        df[col] = pd.to_numeric(series, errors="coerce").astype(float)

    return df


def _df_to_tasks(df: pd.DataFrame, first_row: int = 2) -> list[TaskRecord]:
    """Convert DataFrame rows to TaskRecord models, preserving row order.

    Args:
        df: Frame with standardized columns and a 0-based row index.
        first_row: 1-based file row of the first data row, used in messages.

    Raises:
        ValidationError: If every row fails validation.
    """
    tasks: list[TaskRecord] = []
    errors: list[str] = []

    for idx, row in df.iterrows():
        try:
            row_data = {
                str(k): v
                for k, v in row.to_dict().items()
                if k in REQUIRED_COLUMNS and pd.notna(v)
            }
            tasks.append(TaskRecord(**row_data))
        except PydanticValidationError as e:
            row_num = int(idx) + first_row if pd.api.types.is_integer(idx) else idx
            errors.append(f"Row {row_num}: {e.error_count()} validation error(s)")
            logger.warning("Validation error in row %s: %s", row_num, e)

    if errors and not tasks:
        raise ValidationError(
            message=f"All rows failed validation: {errors}",
            field="rows",
            user_message="All rows failed validation. Check that ids are integers and "
            "times are non-negative minutes.",
        )

    if errors:
        logger.warning("Skipped %d invalid rows out of %d total", len(errors), len(df))

    return tasks


def load_tasks_csv(
    source: str | Path | BinaryIO | bytes,
    delimiter: str | None = None,
    encoding: str = "utf-8",
) -> list[TaskRecord]:
    """Load task records from a CSV file or content.

    Args:
        source: File path, file object, or raw CSV bytes.
        delimiter: CSV delimiter (auto-detect if None).
        encoding: Character encoding (default: utf-8).

    Returns:
        Validated tasks in file order.

    Raises:
        ExtractionError: If file cannot be read or parsed.
        ValidationError: If data validation fails.

    Example:
        >>> tasks = load_tasks_csv("tasks.csv")
        >>> print(f"Loaded {len(tasks)} tasks")
    """
    logger.info("Loading CSV from %s", type(source).__name__)

    if isinstance(source, str | Path):
        path = Path(source)
        if not path.exists():
            raise ExtractionError(
                message=f"File not found: {path}",
                source=str(path),
                user_message=f"The file '{path.name}' was not found.",
            )
        content = path.read_bytes()
    elif isinstance(source, bytes):
        content = source
    else:
        file_obj: BinaryIO = source
        content = file_obj.read()
        file_obj.seek(0)  # Reset for potential re-read
        if not isinstance(content, bytes):
            content = (
                bytes(content)
                if isinstance(content, bytearray | memoryview)
                else content.encode("utf-8")
            )

    df = _parse_csv_content(content, delimiter=delimiter, encoding=encoding)

    if df.empty:
        raise ExtractionError(
            message="CSV has no data rows",
            source="csv",
            user_message="The CSV file has headers but no data rows.",
        )

    df = _map_columns(df)
    _validate_required_columns(df)
    df = _convert_dtypes(df)
    tasks = _df_to_tasks(df)

    logger.info("Successfully loaded %d tasks", len(tasks))
    return tasks


def load_tasks_csv_from_bytes(data: bytes, encoding: str = "utf-8") -> list[TaskRecord]:
    """Convenience function for loading CSV from bytes (e.g., an upload widget)."""
    return load_tasks_csv(BytesIO(data), encoding=encoding)
