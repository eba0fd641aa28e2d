# tests/unit/message/test_response.py
import json

from backend.core.isocheck.catalog import FieldCatalog
from backend.core.isocheck.message import (
    expected_response_mti, describe_response_code, extract_response_code, format_response_code,
    extract_response_mti, check_response
)


def test_expected_response_mti():
    assert expected_response_mti("0100") == "0110"
    assert expected_response_mti("0420") == "0430"
    assert expected_response_mti("0600") == "0610"


def test_describe_response_code():
    assert describe_response_code("51") == "Insufficient funds"
    assert describe_response_code("ZZ") == "Unknown response code"


def test_extract_response_code():
    payload = json.dumps([
        {"dataElementId": "11", "value": "123456"},
        {"dataElementId": 39, "value": "05"}
    ])

    assert extract_response_code(payload) == "05"
    assert extract_response_code([{"dataElementId": "11", "value": "1"}]) is None
    assert extract_response_code({"not": "a list"}) is None


def test_format_response_code_uses_catalog_mapping():
    catalog = FieldCatalog.from_dict({
        "39": {
            "length": 2,
            "validation": {"rules": {"mapping": {"00": {"description": "Approved", "domain": "APPROVAL"}}}}
        }
    })

    assert format_response_code("00", catalog) == "00 - Approved (APPROVAL)"
    assert format_response_code("05", catalog) == "05 - Do not honor"
    assert format_response_code("91") == "91 - Issuer or switch is inoperative"


def test_extract_response_mti_accepts_mti_or_zero_id():
    assert extract_response_mti([{"dataElementId": "MTI", "value": "0110"}]) == "0110"
    assert extract_response_mti('[{"dataElementId": "0", "value": "0210"}]') == "0210"
    assert extract_response_mti([]) is None


def test_check_response_against_request_mti():
    parsed = [
        {"dataElementId": "MTI", "value": "0110"},
        {"dataElementId": "39", "value": "51"}
    ]

    check = check_response("0100", json.dumps(parsed))

    assert check.mti_valid
    assert check.code == "51"
    assert check.to_dict() == {
        "expected_mti": "0110",
        "mti": "0110",
        "mti_valid": True,
        "code": "51",
        "description": "51 - Insufficient funds",
        "error": None
    }


def test_check_response_without_response_code():
    check = check_response("0200", [{"dataElementId": "MTI", "value": "0110"}])

    assert not check.mti_valid
    assert check.expected_mti == "0210"
    assert check.code is None
    assert check.description == "No response code"
