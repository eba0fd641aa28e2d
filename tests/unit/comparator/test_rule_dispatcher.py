# tests/unit/comparator/test_rule_dispatcher.py
import json

import pytest

from backend.core.isocheck.catalog import RuleKind
from backend.core.isocheck.comparator import (
    RuleDispatcher, RuleRegistry, ValidationStatus, DEFAULT_SKIP_REASON
)
from backend.core.isocheck.message import MessageBuilder


@pytest.fixture
def message_builder(catalog, sample_fields):
    builder = MessageBuilder(catalog)
    for field_id, value in sample_fields.items():
        builder.set_field(field_id, value)
    return builder


def test_consistent_message_passes(catalog, canonical, message_builder):
    result = RuleDispatcher(catalog).validate_message(message_builder.message, canonical)

    assert result.passed_fields == ["2", "3", "4", "11", "49"]
    assert result.skipped_fields == ["0"]
    assert result.all_passed
    assert result.get("4").detail == "1000"
    assert result.get("4").mapping == ["transaction.amounts.transactionAmount.amount"]


def test_canonical_json_text_is_accepted(catalog, canonical, message_builder):
    result = RuleDispatcher(catalog).validate_message(message_builder.message, json.dumps(canonical))

    assert result.all_passed


def test_invalid_canonical_json_raises(catalog, message_builder):
    with pytest.raises(json.JSONDecodeError):
        RuleDispatcher(catalog).validate_message(message_builder.message, "{oops")


def test_skip_uses_configured_reason(catalog, canonical, message_builder):
    result = RuleDispatcher(catalog).validate_message(message_builder.message, canonical, field_ids=["0"])

    assert result.get("0").status is ValidationStatus.SKIPPED
    assert result.get("0").detail == "MTI is translated by the canonical service"


def test_skip_without_reason_uses_default(catalog_data, canonical):
    from backend.core.isocheck.catalog import FieldCatalog

    catalog_data["3"]["validation"] = {"skip": True}
    catalog = FieldCatalog.from_dict(catalog_data)
    builder = MessageBuilder(catalog)
    builder.set_field("3", "000000")

    result = RuleDispatcher(catalog).validate_message(builder.message, canonical)

    assert result.get("3").detail == DEFAULT_SKIP_REASON


def test_required_mti_mismatch_is_skipped(catalog, canonical, message_builder):
    message_builder.set_field("90", "0" * 42)

    result = RuleDispatcher(catalog).validate_message(message_builder.message, canonical, field_ids=[90])

    outcome = result.get("90")
    assert outcome.status is ValidationStatus.SKIPPED
    assert outcome.detail == "DE 90 validation only applicable for MTI 0400"


def test_undefined_field_fails(catalog, canonical, message_builder):
    message_builder.set_field("5", "X")

    result = RuleDispatcher(catalog).validate_message(message_builder.message, canonical, field_ids=[5])

    assert result.get("5").status is ValidationStatus.FAILED
    assert result.get("5").detail == "DE 5 is not defined in the field catalog"


def test_field_without_usable_path_fails(catalog, canonical, message_builder):
    message_builder.set_field("37", "ABC123456789")

    result = RuleDispatcher(catalog).validate_message(message_builder.message, canonical, field_ids=[37])

    assert result.get("37").detail == "No canonical mapping found for DE 37"


def test_equality_mismatch_and_missing(catalog, canonical, message_builder):
    message_builder.set_field("3", "999999")
    del canonical["transaction"]["systemTraceAuditNumber"]

    result = RuleDispatcher(catalog).validate_message(message_builder.message, canonical, field_ids=[3, 11])

    assert result.get("3").detail == "processingCode mismatch; "
    assert result.get("3").actual == "000000"
    assert result.get("11").detail == "systemTraceAuditNumber missing; "
    assert result.failed_fields == ["3", "11"]


def test_comparator_exception_becomes_failed_outcome(catalog, canonical, message_builder):
    message_builder.set_field("4", "ABC")

    result = RuleDispatcher(catalog).validate_message(message_builder.message, canonical, field_ids=[4])

    assert result.get("4").status is ValidationStatus.FAILED
    assert result.get("4").detail == "Validation error: Non-numeric value: 'ABC'"


def test_disabled_rule_is_skipped(catalog, canonical, message_builder):
    registry = RuleRegistry()
    registry.configure_rule(RuleKind.AMOUNT, enabled=False)

    result = RuleDispatcher(catalog, registry=registry).validate_message(
        message_builder.message, canonical, field_ids=[4]
    )

    assert result.get("4").status is ValidationStatus.SKIPPED
    assert result.get("4").detail == "Rule 'amount' is disabled"


def test_fields_absent_from_message_are_ignored(catalog, canonical, message_builder):
    result = RuleDispatcher(catalog).validate_message(message_builder.message, canonical, field_ids=[3, 43])

    assert "43" not in result
    assert len(result) == 1


def test_mti_is_not_validated_without_definition(catalog_data, canonical):
    from backend.core.isocheck.catalog import FieldCatalog

    del catalog_data["MTI"]
    catalog = FieldCatalog.from_dict(catalog_data)
    builder = MessageBuilder(catalog)
    builder.set_field("MTI", "0100")
    builder.set_field("3", "000000")

    result = RuleDispatcher(catalog).validate_message(builder.message, canonical)

    assert "0" not in result
    assert result.passed_fields == ["3"]


def test_row_index_is_kept(catalog, canonical, message_builder):
    result = RuleDispatcher(catalog).validate_message(message_builder.message, canonical, row_index=7)

    assert result.row_index == 7
    assert result.summary().row_index == 7
