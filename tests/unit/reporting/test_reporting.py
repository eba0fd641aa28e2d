# tests/unit/reporting/test_reporting.py
import csv
import io
import json

import pytest

from backend.core.isocheck import RowOutcome
from backend.core.isocheck.comparator import ValidationResult, FieldOutcome, ValidationStatus
from backend.core.isocheck.reporting import (
    ReportingOrchestrator, ReportAggregator, ReportingError, ROW_ERROR_STATUS
)


@pytest.fixture
def row_outcomes():
    result = ValidationResult(row_index=1)
    result.record(FieldOutcome(
        "3", ValidationStatus.PASSED, "000000", "000000", "000000", ["transaction.processingCode"]
    ))
    result.record(FieldOutcome(
        "4", ValidationStatus.FAILED, "000000001000", "999", "999",
        ["transaction.amounts.transactionAmount.amount"]
    ))
    result.record(FieldOutcome("0", ValidationStatus.SKIPPED, "0100", "Field is not canonicalized"))

    return [
        RowOutcome(row_index=1, case_id="A", result=result),
        RowOutcome(row_index=2, case_id="B", error="HTTP 503: down")
    ]


def test_report_entries_and_metrics(row_outcomes):
    report = ReportAggregator.create_report(row_outcomes, source="cases.csv")

    assert [(e.row_index, e.field_id, e.status) for e in report.entries] == [
        (1, "0", "SKIPPED"),
        (1, "3", "PASSED"),
        (1, "4", "FAILED"),
        (2, None, ROW_ERROR_STATUS)
    ]
    metrics = report.metrics
    assert metrics.total_rows == 2
    assert metrics.rows_with_errors == 1
    assert (metrics.total_fields, metrics.total_passed, metrics.total_failed, metrics.total_skipped) == (3, 1, 1, 1)
    assert metrics.failure_counts == {"4": 1}
    assert "DE 4 (1)" in report.summary


def test_clean_report_summary():
    result = ValidationResult()
    result.add_passed("3", "000000", "000000")

    report = ReportAggregator.create_report([RowOutcome(row_index=1, case_id="A", result=result)])

    assert report.summary.startswith("✅")


def test_csv_export_to_string(row_outcomes):
    orchestrator = ReportingOrchestrator()
    report = orchestrator.generate_report(row_outcomes)

    rows = list(csv.reader(io.StringIO(orchestrator.export_to_string(report, "csv"))))

    assert rows[0] == ["Row #", "DE", "Status", "ISO Value", "Canonical Value", "Mapping", "Details"]
    assert rows[3] == [
        "1", "4", "FAILED", "000000001000", "999",
        "transaction.amounts.transactionAmount.amount", "999"
    ]
    assert rows[4][2] == "ERROR"


def test_json_export_to_string(row_outcomes):
    orchestrator = ReportingOrchestrator()
    report = orchestrator.generate_report(row_outcomes, source="cases.csv")

    data = json.loads(orchestrator.export_to_string(report))

    assert data["source"] == "cases.csv"
    assert data["metrics"]["total_failed"] == 1
    assert len(data["entries"]) == 4


def test_unknown_format_raises(row_outcomes):
    orchestrator = ReportingOrchestrator()
    report = orchestrator.generate_report(row_outcomes)

    with pytest.raises(ReportingError) as exc_info:
        orchestrator.export_to_string(report, "xml")
    assert exc_info.value.code == "INVALID_FORMAT"

    with pytest.raises(ReportingError):
        orchestrator.export_report(report, "unused", formats=["xml"])


def test_export_report_writes_files(tmp_path, row_outcomes):
    orchestrator = ReportingOrchestrator()
    report = orchestrator.generate_report(row_outcomes)

    files = orchestrator.export_report(report, str(tmp_path / "out"), base_filename="run")

    assert set(files) == {"json", "csv"}
    for path in files.values():
        assert path.startswith(str(tmp_path / "out" / "run_"))
        with open(path, encoding="utf-8") as f:
            assert f.read()


def test_report_requires_rows():
    with pytest.raises(ReportingError) as exc_info:
        ReportAggregator.create_report([])

    assert exc_info.value.code == "NO_ROWS"


def test_json_groups_entries_by_row(row_outcomes):
    orchestrator = ReportingOrchestrator()
    report = orchestrator.generate_report(row_outcomes)

    rows = json.loads(orchestrator.export_to_string(report, "json"))["rows"]

    assert rows == [
        {"row_index": 1, "case_id": "A", "fields": {"0": "SKIPPED", "3": "PASSED", "4": "FAILED"}, "error": None},
        {"row_index": 2, "case_id": "B", "fields": {}, "error": "HTTP 503: down"}
    ]
