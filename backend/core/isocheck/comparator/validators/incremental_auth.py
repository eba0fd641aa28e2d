# comparator/validators/incremental_auth.py
"""
Regla de autorización incremental: TLV con tags CN (contador) y SN (secuencia).
"""

from typing import Dict, List

from ...catalog import RuleKind
from ..models import ComparisonContext, FieldOutcome
from ..errors import ComparatorError
from .base_rule import BaseRule, DetailCollector, section

BASE_PATH = "transaction.incrementalAuthorization"
RECORD_LENGTH = 12


def parse_tlv(value: str) -> Dict[str, str]:
    """
    Descompone una cadena TLV (tag de 2 caracteres, longitud de 2 dígitos).

    Raises:
        ComparatorError: Si la longitud no es numérica o excede el valor
    """
    parsed = {}
    position = 0
    while position < len(value):
        tag = value[position:position + 2]
        length_text = value[position + 2:position + 4]
        if len(tag) < 2 or not length_text.isdigit():
            raise ComparatorError(f"Malformed TLV at position {position}")
        length = int(length_text)
        start = position + 4
        if start + length > len(value):
            raise ComparatorError(f"TLV value for tag {tag} exceeds data")
        parsed[tag] = value[start:start + length]
        position = start + length
    return parsed


class IncrementalAuthDataRule(BaseRule):

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.INCREMENTAL_AUTH_DATA,
            description="Datos de autorización incremental"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        value = context.expected
        if len(value) != RECORD_LENGTH:
            return [self.failed(context, "Invalid incremental authorization data length")]

        values = parse_tlv(value)
        for tag in ("CN", "SN"):
            if tag not in values:
                raise ComparatorError(f"Missing TLV tag {tag}")

        authorization_type = section(context.rules, "authorizationType", "mapping", "default")

        details = DetailCollector()
        details.expect("Count", values["CN"], context.value_at(f"{BASE_PATH}.count"))
        details.expect("Sequence", values["SN"], context.value_at(f"{BASE_PATH}.sequence"))
        details.expect(
            "Authorization type", str(authorization_type),
            context.value_at(f"{BASE_PATH}.incrementalAuthorizationType")
        )

        if details.all_valid:
            return [self.passed(context, value)]
        return [self.failed(context, details.render())]
