# tests/unit/app/test_api.py
import json

import pytest
from fastapi.testclient import TestClient

from backend.app.main import app
from backend.app.api.v1.endpoints import validation as validation_endpoints
from backend.app.services.validation_service import ValidationService, get_field_catalog, get_canonical_service
from backend.core.isocheck.transport import TransportErrors


class StaticCanonicalService:

    def __init__(self, response):
        self.response = response

    def send_for_canonicalization(self, wire_message):
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class StaticIssuerService(StaticCanonicalService):
    """Además de canonicalizar, devuelve la respuesta del emisor parseada."""

    def __init__(self, response, parsed):
        super().__init__(response)
        self.parsed = parsed

    def send_to_parser(self, wire_message):
        return self.parsed


@pytest.fixture
def client(catalog, canonical):
    app.dependency_overrides[get_field_catalog] = lambda: catalog
    app.dependency_overrides[get_canonical_service] = lambda: StaticCanonicalService(json.dumps(canonical))
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use_service(response):
    app.dependency_overrides[get_canonical_service] = lambda: StaticCanonicalService(response)


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"

    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["service"] == "IsoSentinel"


def test_build_message(client):
    response = client.post("/api/v1/messages/build", json={
        "mti": "0100",
        "fields": {"2": "4111111111111111", "3": "000000"},
        "apply_defaults": False
    })

    assert response.status_code == 200
    body = response.json()
    assert body["wire_message"] == "0100" "6000000000000000" "164111111111111111" "000000"
    assert body["debug_view"]["Field_3"] == "000000"
    assert body["warnings"] == []


def test_build_message_reports_warnings(client):
    response = client.post("/api/v1/messages/build", json={
        "entries": [
            {"field": "processingCode", "value": "12345678", "type": "n"},
            {"field": "unknownName", "value": "1"}
        ]
    })

    body = response.json()
    assert response.status_code == 200
    assert body["wire_message"].startswith("0100")
    assert [w["code"] for w in body["warnings"]] == ["VALUE_TRUNCATED", "UNKNOWN_FIELD"]
    assert body["debug_view"]["Field_3"] == "123456"


def test_build_message_rejects_bad_mti(client):
    response = client.post("/api/v1/messages/build", json={"mti": "01"})

    assert response.status_code == 422


def test_validate(client, canonical, sample_fields):
    response = client.post("/api/v1/validation/validate", json={
        "fields": sample_fields,
        "canonical": canonical
    })

    body = response.json()
    assert response.status_code == 200
    assert body["all_passed"] is True
    assert [f["field_id"] for f in body["fields"]] == ["0", "2", "3", "4", "11", "49"]
    assert body["summary"] == "Row 1 - Total Fields: 6, Passed: 5, Failed: 0, Skipped: 1 (DE 0)"


def test_validate_with_selected_fields_and_text_canonical(client, canonical):
    canonical["transaction"]["processingCode"] = "200000"

    response = client.post("/api/v1/validation/validate", json={
        "fields": {"3": "000000", "11": "123456"},
        "canonical": json.dumps(canonical),
        "field_ids": ["3"]
    })

    body = response.json()
    assert body["all_passed"] is False
    assert body["fields"] == [{
        "field_id": "3",
        "status": "FAILED",
        "expected": "000000",
        "actual": "200000",
        "detail": "processingCode mismatch; ",
        "mapping": ["transaction.processingCode"]
    }]


def test_validate_rejects_invalid_canonical_json(client):
    response = client.post("/api/v1/validation/validate", json={"fields": {"3": "000000"}, "canonical": "{oops"})

    assert response.status_code == 400


def test_run_case(client):
    response = client.post("/api/v1/validation/run", json={
        "case_id": "api-1",
        "entries": [{"field": "processingCode", "value": "000000", "type": "n"}]
    })

    body = response.json()
    assert response.status_code == 200
    assert body["case_id"] == "api-1"
    assert body["error"] is None
    assert [f["status"] for f in body["fields"]] == ["PASSED"]


def test_run_case_transport_failure(client):
    _use_service(TransportErrors.connection_failed("http://canonical", "refused"))

    response = client.post("/api/v1/validation/run", json={
        "entries": [{"field": "processingCode", "value": "000000"}]
    })

    assert response.status_code == 502
    assert "refused" in response.json()["detail"]


def test_batch_upload(client):
    content = (
        "case_id,field,value,type\n"
        "A,processingCode,000000,n\n"
        "B,processingCode,999999,n\n"
    ).encode("utf-8")

    response = client.post(
        "/api/v1/validation/batch",
        files={"file": ("cases.csv", content, "text/csv")}
    )

    body = response.json()
    assert response.status_code == 200
    assert [row["case_id"] for row in body["rows"]] == ["A", "B"]
    assert "Total ISO Messages: 2" in body["aggregated"]
    assert "DE 3 (1)" in body["report_summary"]
    assert body["exported_files"] == {}


def test_batch_rejects_non_csv(client):
    response = client.post("/api/v1/validation/batch", files={"file": ("cases.txt", b"x", "text/plain")})

    assert response.status_code == 400


def test_batch_rejects_invalid_header(client):
    response = client.post(
        "/api/v1/validation/batch",
        files={"file": ("cases.csv", b"id,name,val\nA,3,1\n", "text/csv")}
    )

    assert response.status_code == 400
    assert "Encabezado" in response.json()["detail"]


def test_run_case_reports_issuer_response(client, canonical):
    parsed = json.dumps([{"dataElementId": "MTI", "value": "0110"}, {"dataElementId": "39", "value": "05"}])
    app.dependency_overrides[get_canonical_service] = lambda: StaticIssuerService(json.dumps(canonical), parsed)

    response = client.post("/api/v1/validation/run", json={
        "entries": [{"field": "processingCode", "value": "000000", "type": "n"}]
    })

    body = response.json()
    assert response.status_code == 200
    assert body["response"] == {
        "expected_mti": "0110",
        "mti": "0110",
        "mti_valid": True,
        "code": "05",
        "description": "05 - Do not honor",
        "error": None
    }


def test_run_case_without_parser_has_no_response(client):
    response = client.post("/api/v1/validation/run", json={
        "entries": [{"field": "processingCode", "value": "000000", "type": "n"}]
    })

    assert response.json()["response"] is None


def test_batch_runs_in_threadpool(client, monkeypatch):
    calls = []

    async def recording_threadpool(func, *args, **kwargs):
        calls.append(func)
        return func(*args, **kwargs)

    monkeypatch.setattr(validation_endpoints, "run_in_threadpool", recording_threadpool)

    response = client.post(
        "/api/v1/validation/batch",
        files={"file": ("cases.csv", b"case_id,field,value,type\nA,processingCode,000000,n\n", "text/csv")}
    )

    assert response.status_code == 200
    assert calls == [ValidationService.run_batch]
