# comparator/validators/datetime_rule.py
"""
Regla de fecha/hora MMDDhhmmss, simple o emparejada entre dos DEs.
"""

from typing import List, Optional

from ...catalog import RuleKind, PairedField
from ..models import ComparisonContext, FieldOutcome, ValidationStatus
from ..errors import ComparatorError
from .base_rule import BaseRule, YearProvider, current_year, expected_datetime


class DateTimeRule(BaseRule):
    """
    Reconstruye YYYY-MM-DDThh:mm:ss con el año en curso y exige que el
    valor canónico empiece por esa cadena (se ignora la zona horaria).

    Con pairedField, el DE actual (fecha MMDD u hora hhmmss) se combina
    con el otro DE del mensaje y el mismo resultado se registra en ambos.
    """

    uses_calendar_year = True

    def __init__(self, year_provider: Optional[YearProvider] = None):
        super().__init__(
            rule_id=RuleKind.DATETIME,
            description="Fecha/hora con prefijo canónico"
        )
        self._year_provider = year_provider or current_year

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        path = self.canonical_path(context, 0)
        actual = context.value_at(path)
        year = self._year_provider()

        rule = context.definition.validation
        if rule is not None and rule.paired_field is not None:
            return self._validate_paired(context, rule.paired_field, actual, year)

        expected = expected_datetime(context.expected, year)
        if actual is not None and actual.startswith(expected):
            return [self.passed(context, actual, actual)]
        return [self.failed(context, f"{actual} (Expected format: {expected})", actual)]

    def _validate_paired(
        self,
        context: ComparisonContext,
        paired: PairedField,
        actual: Optional[str],
        year: int
    ) -> List[FieldOutcome]:
        if paired.pair_type not in ("date", "time"):
            raise ComparatorError(f"Invalid pairedField type '{paired.pair_type}' for DE {context.field_id}")

        this_id = context.field_id
        other_id = paired.field_id
        try:
            other_value = context.message.get(int(other_id))
        except ValueError:
            raise ComparatorError(f"Invalid paired field id '{other_id}'")

        if other_value is None:
            return [self.failed(
                context,
                f"Paired field DE {other_id} not found - both DE {this_id} and DE {other_id} "
                f"are needed for datetime validation"
            )]

        date_value = context.expected if paired.pair_type == "date" else other_value
        time_value = context.expected if paired.pair_type == "time" else other_value
        combined = date_value + time_value
        expected = expected_datetime(combined, year)

        if actual is not None and actual.startswith(expected):
            status = ValidationStatus.PASSED
            detail = f"{actual} (Validated with DE {this_id} and DE {other_id})"
        else:
            status = ValidationStatus.FAILED
            detail = f"{actual} (Expected format: {expected} from DE {this_id} and DE {other_id})"

        return [
            FieldOutcome(
                field_id=field_id,
                status=status,
                expected=combined,
                detail=detail,
                actual=actual,
                mapping=context.paths
            )
            for field_id in (this_id, other_id)
        ]
