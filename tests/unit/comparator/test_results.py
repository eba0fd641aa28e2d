# tests/unit/comparator/test_results.py
from backend.core.isocheck.comparator import (
    ValidationResult, AggregatedResults, FieldOutcome, ValidationStatus, field_sort_key
)


def _result(row_index, passed=(), failed=(), skipped=()):
    result = ValidationResult(row_index=row_index)
    for field_id in passed:
        result.add_passed(field_id, "x", "x")
    for field_id in failed:
        result.add_failed(field_id, "x", f"DE {field_id} broke")
    for field_id in skipped:
        result.add_skipped(field_id, "x", "not canonicalized")
    return result


def test_field_sort_key_orders_numerically():
    assert sorted(["11", "2", "0", "102", "x"], key=field_sort_key) == ["0", "2", "11", "102", "x"]


def test_later_write_replaces_earlier():
    result = ValidationResult()
    result.add_failed("4", "100", "mismatch")
    result.record(FieldOutcome("4", ValidationStatus.PASSED, "100", "100", "100"))

    assert len(result) == 1
    assert result.passed_fields == ["4"]
    assert result.all_passed


def test_row_summary_text():
    result = _result(3, passed=["2", "3"], failed=["11", "4"], skipped=["0"])

    assert str(result.summary()) == (
        "Row 3 - Total Fields: 5, Passed: 2, Failed: 2 (DE 4, 11), Skipped: 1 (DE 0)"
    )


def test_row_summary_without_failures():
    assert str(_result(1, passed=["2"]).summary()) == (
        "Row 1 - Total Fields: 1, Passed: 1, Failed: 0, Skipped: 0"
    )


def test_print_results(capsys):
    _result(1, passed=["2"], failed=["4"]).print_results()

    output = capsys.readouterr().out
    assert "=== Validation Results ===" in output
    assert "Total Fields: 2" in output
    assert "Failed: 1" in output


def test_aggregation_counts_and_rates():
    aggregated = AggregatedResults()
    aggregated.add(_result(1, passed=["2", "3"], failed=["4"]), 1)
    aggregated.add(_result(2, passed=["2", "4"], skipped=["3"]), 2)

    assert aggregated.total_messages == 2
    assert aggregated.total_fields == 6
    assert aggregated.total_passed == 4
    assert aggregated.total_failed == 1
    assert aggregated.total_skipped == 1
    assert aggregated.success_rate("2") == 1.0
    assert aggregated.success_rate("4") == 0.5
    assert aggregated.success_rate("99") == 0.0
    assert aggregated.statistics["4"].failure_reasons == ["Row 1: DE 4 broke"]


def test_failure_ranking_breaks_ties_by_field_number():
    aggregated = AggregatedResults()
    aggregated.add(_result(1, passed=["2"], failed=["11", "4"]), 1)

    ranking = [stats.field_id for stats in aggregated.failure_ranking()]

    assert ranking == ["4", "11", "2"]


def test_to_text():
    aggregated = AggregatedResults()
    aggregated.add(_result(1, passed=["2"], failed=["4"]), 1)

    text = aggregated.to_text()

    assert "Total ISO Messages: 1" in text
    assert "Passed: 1 (50.00%)" in text
    assert "DE 4:" in text
    assert "    - Row 1: DE 4 broke" in text


def test_to_text_without_data():
    assert "No Data Elements were processed." in AggregatedResults().to_text()
