# message/response.py
"""
Utilidades sobre la respuesta del emisor (MTI esperado y código DE 39).
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from ..catalog import FieldCatalog

RESPONSE_MTI = {
    "0100": "0110",
    "0200": "0210",
    "0400": "0410",
    "0420": "0430",
    "0800": "0810",
}

RESPONSE_CODES = {
    "00": "Approved",
    "01": "Refer to card issuer",
    "05": "Do not honor",
    "13": "Invalid amount",
    "14": "Invalid card number",
    "51": "Insufficient funds",
    "54": "Expired card",
    "55": "Invalid PIN",
    "75": "Allowable number of PIN tries exceeded",
    "91": "Issuer or switch is inoperative",
}


def expected_response_mti(mti: str) -> str:
    if mti in RESPONSE_MTI:
        return RESPONSE_MTI[mti]
    return mti[:2] + "10"


def describe_response_code(code: str) -> str:
    return RESPONSE_CODES.get(code, "Unknown response code")


def _parsed_elements(parser_response: Union[str, Any]) -> List[Any]:
    data = json.loads(parser_response) if isinstance(parser_response, str) else parser_response
    return data if isinstance(data, list) else []


def _element_value(elements: List[Any], *ids: str) -> Optional[str]:
    for element in elements:
        if isinstance(element, dict) and str(element.get("dataElementId")) in ids:
            value = element.get("value")
            return None if value is None else str(value)
    return None


def extract_response_code(parser_response: Union[str, Any]) -> Optional[str]:
    """
    Extrae el DE 39 de la respuesta del parser.

    Args:
        parser_response: JSON (texto o ya decodificado) con elementos
            {dataElementId, value}

    Returns:
        Código de respuesta o None si no existe
    """
    return _element_value(_parsed_elements(parser_response), "39")


def extract_response_mti(parser_response: Union[str, Any]) -> Optional[str]:
    return _element_value(_parsed_elements(parser_response), "MTI", "0")


def format_response_code(code: str, catalog: Optional[FieldCatalog] = None) -> str:
    """Describe el código usando el mapeo del DE 39 en el catálogo si existe."""
    definition = catalog.get("39") if catalog is not None else None
    if definition is not None and definition.validation is not None:
        mapping = definition.validation.rules.get("mapping", {})
        entry = mapping.get(code) if isinstance(mapping, dict) else None
        if isinstance(entry, dict) and "description" in entry:
            return f"{code} - {entry['description']} ({entry.get('domain', '')})"
    return f"{code} - {describe_response_code(code)}"


@dataclass
class ResponseCheck:
    """MTI y DE 39 de la respuesta del emisor frente a lo esperado para la solicitud."""
    expected_mti: str
    mti: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    error: Optional[str] = None

    @property
    def mti_valid(self) -> bool:
        return self.mti == self.expected_mti

    def to_dict(self) -> Dict[str, Any]:
        return {
            "expected_mti": self.expected_mti,
            "mti": self.mti,
            "mti_valid": self.mti_valid,
            "code": self.code,
            "description": self.description,
            "error": self.error
        }


def check_response(
    request_mti: str,
    parser_response: Union[str, Any],
    catalog: Optional[FieldCatalog] = None
) -> ResponseCheck:
    """
    Compara la respuesta parseada con la solicitud enviada.

    Raises:
        ValueError: Si la respuesta del parser no es JSON válido
    """
    elements = _parsed_elements(parser_response)
    code = _element_value(elements, "39")
    return ResponseCheck(
        expected_mti=expected_response_mti(request_mti),
        mti=_element_value(elements, "MTI", "0"),
        code=code,
        description=format_response_code(code, catalog) if code is not None else "No response code"
    )
