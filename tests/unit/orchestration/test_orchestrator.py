# tests/unit/orchestration/test_orchestrator.py
import json

import pytest

from backend.core.isocheck import ValidationOrchestrator
from backend.core.isocheck.test_data import TestCase, TestDataEntry
from backend.core.isocheck.transport import TransportErrors


class FakeCanonicalService:
    """Devuelve respuestas predefinidas en orden y registra los mensajes recibidos."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.received = []

    def send_for_canonicalization(self, wire_message):
        self.received.append(wire_message)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _case(case_id, *entries):
    return TestCase(case_id=case_id, entries=[TestDataEntry(*entry) for entry in entries])


@pytest.fixture
def case_a():
    return _case(
        "A",
        ("MTI", "0100", None),
        ("processingCode", "000000", "n"),
        ("transactionAmount", "000000001000", "n"),
        ("primaryAccountNumber", "4111111111111111", "an")
    )


def test_process_case_validates_manual_fields_only(catalog, canonical, generator, case_a):
    service = FakeCanonicalService(json.dumps(canonical))
    orchestrator = ValidationOrchestrator(catalog, service, generator=generator)

    outcome = orchestrator.process_case(case_a, row_index=1)

    assert outcome.succeeded
    assert service.received == [outcome.wire_message]
    assert outcome.wire_message.startswith("0100")
    assert outcome.debug_view["Field_2"] == "164111111111111111"
    assert "Field_11" in outcome.debug_view
    assert set(outcome.result.entries) == {"0", "2", "3", "4"}
    assert outcome.result.passed_fields == ["2", "3", "4"]
    assert [w.code for w in outcome.warnings] == ["TYPE_MISMATCH"]


def test_transport_error_marks_row(catalog, generator, case_a):
    service = FakeCanonicalService(TransportErrors.bad_request("Invalid bitmap"))
    orchestrator = ValidationOrchestrator(catalog, service, generator=generator)

    outcome = orchestrator.process_case(case_a, row_index=4)

    assert not outcome.succeeded
    assert outcome.result is None
    assert outcome.error == "Error: Invalid bitmap"
    assert outcome.to_dict()["fields"] == []


def test_invalid_canonical_json_marks_row(catalog, generator, case_a):
    orchestrator = ValidationOrchestrator(catalog, FakeCanonicalService("<html>"), generator=generator)

    outcome = orchestrator.process_case(case_a, row_index=1)

    assert outcome.error.startswith("Invalid canonical JSON")


def test_process_cases_continues_after_errors(catalog, canonical, generator, case_a, capsys):
    case_b = _case("B", ("processingCode", "999999", "n"))
    service = FakeCanonicalService(
        TransportErrors.http_error(503, "down"),
        json.dumps(canonical),
        json.dumps(canonical)
    )
    orchestrator = ValidationOrchestrator(catalog, service, generator=generator)

    outcomes, aggregated = orchestrator.process_cases([case_a, case_b, case_a])

    assert [o.row_index for o in outcomes] == [1, 2, 3]
    assert outcomes[0].error == "HTTP 503: down"
    assert outcomes[1].result.failed_fields == ["3"]
    assert aggregated.total_messages == 2
    assert aggregated.statistics["3"].failed == 1
    assert aggregated.statistics["3"].passed == 1
    assert "Filas procesadas: 3, con error: 1" in capsys.readouterr().out


def test_row_outcome_to_dict(catalog, canonical, generator, case_a):
    orchestrator = ValidationOrchestrator(catalog, FakeCanonicalService(json.dumps(canonical)), generator=generator)

    data = orchestrator.process_case(case_a, row_index=2).to_dict()

    assert data["row_index"] == 2
    assert data["case_id"] == "A"
    assert data["summary"] == "Row 2 - Total Fields: 4, Passed: 3, Failed: 0, Skipped: 1 (DE 0)"
    assert data["fields"][0]["field_id"] == "0"
    assert data["warnings"][0]["code"] == "TYPE_MISMATCH"
    assert data["error"] is None


class FakeParserService:

    def __init__(self, response):
        self.response = response
        self.received = []

    def send_to_parser(self, wire_message):
        self.received.append(wire_message)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def test_issuer_response_is_recorded(catalog, canonical, generator, case_a):
    parser = FakeParserService(json.dumps([
        {"dataElementId": "MTI", "value": "0110"},
        {"dataElementId": "39", "value": "00"}
    ]))
    orchestrator = ValidationOrchestrator(
        catalog, FakeCanonicalService(json.dumps(canonical)), generator=generator, parser_service=parser
    )

    outcome = orchestrator.process_case(case_a, row_index=1)

    assert parser.received == [outcome.wire_message]
    assert outcome.succeeded
    assert outcome.response.mti_valid
    assert outcome.response.code == "00"
    assert outcome.to_dict()["response"]["description"] == "00 - Approved"


def test_parser_failure_does_not_fail_row(catalog, canonical, generator, case_a):
    parser = FakeParserService(TransportErrors.http_error(500, "boom"))
    orchestrator = ValidationOrchestrator(
        catalog, FakeCanonicalService(json.dumps(canonical)), generator=generator, parser_service=parser
    )

    outcome = orchestrator.process_case(case_a, row_index=1)

    assert outcome.succeeded
    assert outcome.response.error == "HTTP 500: boom"
    assert outcome.response.expected_mti == "0110"
    assert not outcome.response.mti_valid


def test_no_parser_leaves_response_empty(catalog, canonical, generator, case_a):
    orchestrator = ValidationOrchestrator(catalog, FakeCanonicalService(json.dumps(canonical)), generator=generator)

    outcome = orchestrator.process_case(case_a, row_index=1)

    assert outcome.response is None
    assert outcome.to_dict()["response"] is None


def test_default_mti_used_when_case_has_none(catalog, canonical, generator):
    case = _case("C", ("processingCode", "000000", "n"))
    orchestrator = ValidationOrchestrator(
        catalog, FakeCanonicalService(json.dumps(canonical)), generator=generator, default_mti="0200"
    )

    outcome = orchestrator.process_case(case, row_index=1)

    assert outcome.wire_message.startswith("0200")
