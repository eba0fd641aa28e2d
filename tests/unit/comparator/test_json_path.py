# tests/unit/comparator/test_json_path.py
import pytest

from backend.core.isocheck.comparator import JsonPathResolver, MISSING

DOCUMENT = {
    "transaction": {
        "Amount": {"value": " 1000 "},
        "fees": [{"type": "A"}, {"type": "B"}],
        "flag": True,
        "empty": None,
        "nested": {"a": 1}
    }
}


@pytest.fixture
def resolver():
    return JsonPathResolver()


def test_resolves_nested_value_trimmed(resolver):
    assert resolver.resolve(DOCUMENT, "transaction.Amount.value") == "1000"


def test_falls_back_to_case_insensitive_keys(resolver):
    assert resolver.resolve(DOCUMENT, "TRANSACTION.amount.VALUE") == "1000"


def test_indexed_segments(resolver):
    assert resolver.resolve(DOCUMENT, "transaction.fees[1].type") == "B"
    assert resolver.resolve(DOCUMENT, "transaction.fees[2].type") is None
    assert resolver.resolve(DOCUMENT, "transaction.nested[0]") is None


def test_missing_segment_is_absent(resolver):
    assert resolver.resolve(DOCUMENT, "transaction.unknown.value") is None
    assert resolver.resolve(DOCUMENT, "transaction.Amount.value.deeper") is None
    assert resolver.resolve_node(DOCUMENT, "nope") is MISSING


def test_null_resolves_to_empty_string(resolver):
    assert resolver.resolve(DOCUMENT, "transaction.empty") == ""


def test_non_scalar_text(resolver):
    assert resolver.resolve(DOCUMENT, "transaction.flag") == "true"
    assert resolver.resolve(DOCUMENT, "transaction.nested") == '{"a":1}'
