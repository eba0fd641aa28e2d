# comparator/validators/original_data.py
"""
Regla DE 90: datos de la transacción original.
"""

from typing import List, Optional

from ...catalog import RuleKind
from ..models import ComparisonContext, FieldOutcome
from .base_rule import (
    BaseRule, DetailCollector, YearProvider, current_year,
    require_length, section, map_code, expected_datetime
)

BASE_PATH = "transaction.originalTransaction"


class OriginalDataRule(BaseRule):
    """
    Posiciones: tipo de mensaje[0:4], STAN[4:10], fecha/hora[10:20],
    adquirente[20:31], institución reenviadora[31:42].

    STAN e identificadores de institución se comparan sin ceros a la izquierda.
    """

    uses_calendar_year = True

    def __init__(self, year_provider: Optional[YearProvider] = None):
        super().__init__(
            rule_id=RuleKind.ORIGINAL_DATA,
            description="Datos de la transacción original"
        )
        self._year_provider = year_provider or current_year

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        value = context.expected
        require_length(value, 42, "original data elements")

        mapping = section(context.rules, "positions", "messageType", "mapping")
        details = DetailCollector(separator=", ")

        message_type = value[0:4]
        mapped_type = map_code(mapping, message_type)
        details.mark(
            "Message Type", f"{message_type}->{mapped_type}",
            context.value_at(f"{BASE_PATH}.transactionType") == mapped_type
        )

        stan = value[4:10].lstrip("0")
        details.mark(
            "STAN", stan,
            context.value_at(f"{BASE_PATH}.systemTraceAuditNumber") == stan
        )

        raw_datetime = value[10:20]
        formatted = expected_datetime(raw_datetime, self._year_provider())
        actual_datetime = context.value_at(f"{BASE_PATH}.transmissionDateTime")
        details.mark(
            "DateTime", f"{raw_datetime}->{actual_datetime}",
            actual_datetime is not None and actual_datetime.startswith(formatted)
        )

        acquirer = value[20:31].lstrip("0")
        details.mark(
            "AcquirerID", acquirer,
            context.value_at(f"{BASE_PATH}.acquirer.acquirerId") == acquirer
        )

        forwarding = value[31:42].lstrip("0")
        details.mark(
            "ForwardingID", forwarding,
            context.value_at(f"{BASE_PATH}.forwardingInstitution.forwardingInstitutionId") == forwarding
        )

        return self.verdict(context, details.all_valid, details.render())
