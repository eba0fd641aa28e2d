# comparator/validators/equality.py
"""
Regla por defecto: igualdad exacta contra la primera ruta canónica.
"""

from typing import List

from ...catalog import RuleKind
from ..models import ComparisonContext, FieldOutcome
from ..errors import ComparatorErrors
from .base_rule import BaseRule


def element_name(path: str) -> str:
    """Último segmento de la ruta sin sufijo de índice."""
    name = path[path.rfind(".") + 1:]
    if "[" in name:
        name = name[:name.index("[")]
    return name


class EqualityRule(BaseRule):
    """Compara byte a byte el valor del DE con la primera ruta utilizable."""

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.EQUALITY,
            description="Igualdad exacta contra ruta canónica"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        paths = context.paths
        if not paths:
            return [ComparatorErrors.no_canonical_mapping(context.field_id, context.expected)]

        path = paths[0]
        actual = context.value_at(path)
        if actual is None:
            return [self.failed(context, f"{element_name(path)} missing; ")]
        if actual != context.expected:
            return [self.failed(context, f"{element_name(path)} mismatch; ", actual)]
        return [self.passed(context, actual, actual)]
