# comparator/validators/amount.py
"""
Reglas de importes y códigos de moneda.
"""

from typing import List

from ...catalog import RuleKind
from ..models import ComparisonContext, FieldOutcome
from ..errors import ComparatorError
from .base_rule import BaseRule, strip_zeros, map_code

# DEs cuyo primer carácter es indicador débito/crédito
INDICATOR_FIELDS = {"28", "29", "30", "31"}


class AmountRule(BaseRule):
    """Importe numérico sin ceros a la izquierda, con indicador D/C opcional."""

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.AMOUNT,
            description="Importe normalizado e indicador débito/crédito"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        expected = context.expected
        indicator = ""
        numeric = expected

        if context.field_id in INDICATOR_FIELDS:
            if not expected:
                raise ComparatorError("Empty amount value")
            indicator, numeric = expected[0], expected[1:]

        normalized = strip_zeros(numeric)
        path = self.canonical_path(context, 0)
        actual = context.value_at(path)

        if actual is None:
            return [self.failed(context, f"Amount missing at {path}")]
        if normalized != actual:
            return [self.failed(context, actual, actual)]

        indicator_map = context.rules.get("debitCreditIndicator")
        if indicator and isinstance(indicator_map, dict):
            expected_type = map_code(indicator_map, indicator)
            actual_type = context.value_at(self.canonical_path(context, 1))
            if expected_type == actual_type:
                return [self.passed(
                    context, f"{actual} (Amount: {actual}, Type: {actual_type})", actual
                )]
            return [self.failed(
                context,
                f"{actual} (Amount matches but expected type {expected_type}, got {actual_type})",
                actual
            )]

        return [self.passed(context, actual, actual)]


class CurrencyRule(BaseRule):
    """Código de moneda numérico comparado sin ceros a la izquierda."""

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.CURRENCY,
            description="Código de moneda normalizado"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        normalized = context.expected.lstrip("0")
        path = self.canonical_path(context, 0)
        actual = context.value_at(path)
        if actual is None:
            return [self.failed(context, f"Currency missing at {path}")]
        return self.verdict(context, normalized == actual, actual, actual)
