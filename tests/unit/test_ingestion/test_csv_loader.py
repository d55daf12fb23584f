"""Tests for bottleneckiq.ingestion.csv_loader."""

from io import BytesIO

import pandas as pd
import pytest

from bottleneckiq.exceptions import ExtractionError, ValidationError
from bottleneckiq.ingestion.csv_loader import (
    _map_columns,
    _normalize_column_name,
    _validate_required_columns,
    load_tasks_csv,
    load_tasks_csv_from_bytes,
)

VALID_CSV = b"task_id,queue_wait_time,process_time\n1,10,20\n2,30,10\n3,5,5\n"

# ---------------------------------------------------------------------------
# Column name normalization
# ---------------------------------------------------------------------------


class TestNormalizeColumnName:
    def test_lowercase(self):
        assert _normalize_column_name("Task_ID") == "task_id"

    def test_splits_camel_case(self):
        assert _normalize_column_name("QueueWaitTime") == "queue_wait_time"
        assert _normalize_column_name("TaskID") == "task_id"

    def test_strips_whitespace(self):
        assert _normalize_column_name("  process_time  ") == "process_time"

    def test_strips_parenthetical_suffix(self):
        assert _normalize_column_name("Wait (min)") == "wait"

    def test_replaces_spaces_and_hyphens(self):
        assert _normalize_column_name("queue wait-time") == "queue_wait_time"


# ---------------------------------------------------------------------------
# Column mapping
# ---------------------------------------------------------------------------


class TestMapColumns:
    def test_standard_names_unchanged(self):
        df = pd.DataFrame(columns=["task_id", "queue_wait_time", "process_time"])
        assert list(_map_columns(df).columns) == ["task_id", "queue_wait_time", "process_time"]

    def test_aliases_mapped(self):
        df = pd.DataFrame(columns=["Ticket ID", "Wait (min)", "Duration (min)"])
        mapped = _map_columns(df)
        assert set(mapped.columns) == {"task_id", "queue_wait_time", "process_time"}


class TestValidateRequiredColumns:
    def test_all_present(self):
        df = pd.DataFrame(columns=["task_id", "queue_wait_time", "process_time"])
        _validate_required_columns(df)

    def test_missing_column(self):
        df = pd.DataFrame(columns=["task_id", "queue_wait_time"])
        with pytest.raises(ValidationError) as exc_info:
            _validate_required_columns(df)
        assert "process_time" in exc_info.value.user_message


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class TestLoadTasksCsv:
    def test_load_from_bytes(self):
        tasks = load_tasks_csv(VALID_CSV)
        assert [t.task_id for t in tasks] == [1, 2, 3]
        assert tasks[1].queue_wait_time == 30
        assert tasks[1].process_time == 10

    def test_load_from_path(self, tmp_path):
        path = tmp_path / "tasks.csv"
        path.write_bytes(VALID_CSV)
        assert len(load_tasks_csv(path)) == 3
        assert len(load_tasks_csv(str(path))) == 3

    def test_load_from_file_object(self):
        buffer = BytesIO(VALID_CSV)
        assert len(load_tasks_csv(buffer)) == 3
        assert buffer.tell() == 0

    def test_load_from_bytes_helper(self):
        assert len(load_tasks_csv_from_bytes(VALID_CSV)) == 3

    def test_camel_case_headers(self):
        content = b"TaskID,QueueWaitTime,ProcessTime\n7,12,30\n"
        (task,) = load_tasks_csv(content)
        assert task.task_id == 7
        assert task.queue_wait_time == 12

    def test_unit_suffixes_and_thousands(self):
        content = b'id,wait,duration\n1,12 min,"1,200"\n2,5m,30 minutes\n'
        tasks = load_tasks_csv(content, delimiter=",")
        assert tasks[0].queue_wait_time == 12
        assert tasks[0].process_time == 1200
        assert tasks[1].process_time == 30

    def test_explicit_delimiter(self):
        content = b"task_id;queue_wait_time;process_time\n1;10;20\n2;5;5\n"
        assert len(load_tasks_csv(content, delimiter=";")) == 2

    def test_invalid_rows_skipped(self):
        content = b"task_id,queue_wait_time,process_time\n1,10,20\n2,-5,10\n3,abc,5\n4,1,1\n"
        tasks = load_tasks_csv(content, delimiter=",")
        assert [t.task_id for t in tasks] == [1, 4]

    def test_all_rows_invalid(self):
        content = b"task_id,queue_wait_time,process_time\n1,-1,20\n2,-5,10\n"
        with pytest.raises(ValidationError) as exc_info:
            load_tasks_csv(content, delimiter=",")
        # Line 1 is the header
        assert "Row 2" in str(exc_info.value)
        assert "Row 3" in str(exc_info.value)

    def test_missing_required_column(self):
        with pytest.raises(ValidationError):
            load_tasks_csv(b"task_id,queue_wait_time\n1,10\n", delimiter=",")

    def test_file_not_found(self, tmp_path):
        with pytest.raises(ExtractionError) as exc_info:
            load_tasks_csv(tmp_path / "missing.csv")
        assert "missing.csv" in exc_info.value.user_message

    def test_empty_content(self):
        with pytest.raises(ExtractionError):
            load_tasks_csv(b"")

    def test_headers_only(self):
        with pytest.raises(ExtractionError) as exc_info:
            load_tasks_csv(b"task_id,queue_wait_time,process_time\n", delimiter=",")
        assert "no data rows" in exc_info.value.user_message

    def test_bad_encoding(self):
        content = "task_id,queue_wait_time,process_time\n1,10,20\n".encode("utf-16")
        with pytest.raises(ExtractionError):
            load_tasks_csv(content)
