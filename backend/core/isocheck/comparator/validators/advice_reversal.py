# comparator/validators/advice_reversal.py
"""
Regla del código de aviso/reverso: indicador[0:2] y motivo[2:4].
"""

from typing import List

from ...catalog import RuleKind
from ..models import ComparisonContext, FieldOutcome
from .base_rule import BaseRule, section

# indicador -> (sección de motivos, ruta canónica, etiqueta)
INDICATORS = {
    "80": ("reversalReasons", "transaction.reversalReason", "reversal"),
    "40": ("adviceReasons", "transaction.adviceReason", "advice"),
}


class AdviceReversalCodeRule(BaseRule):

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.ADVICE_REVERSAL_CODE,
            description="Código de aviso o reverso"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        value = context.expected
        if len(value) != 4:
            return [self.failed(context, "Invalid advice/reversal code length")]

        indicator, reason_code = value[0:2], value[2:4]
        if indicator not in INDICATORS:
            return [self.failed(context, f"Invalid message type indicator: {indicator} (must be 40 or 80)")]

        reasons_key, path, label = INDICATORS[indicator]
        reasons = section(context.rules, "positions", reasons_key)
        if reason_code not in reasons:
            return [self.failed(context, f"Invalid {label} reason code: {reason_code}")]

        expected = str(reasons[reason_code])
        actual = context.value_at(path)
        if actual is None:
            return [self.failed(context, f"Missing {label} reason code in response")]
        if expected != actual:
            return [self.failed(
                context, f"{label.capitalize()} reason mismatch: expected {expected}, got {actual}", actual
            )]
        return [self.passed(context, actual, actual)]
