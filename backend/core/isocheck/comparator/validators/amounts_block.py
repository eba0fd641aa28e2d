# comparator/validators/amounts_block.py
"""
Reglas de bloques de importes posicionales: comisiones adicionales (DE 46),
importes adicionales (DE 54) e importes de reemplazo (DE 95).

Cada importe lleva un indicador débito/crédito de un carácter seguido de
una cola numérica con ceros a la izquierda.
"""

from typing import Any, Dict, List, Optional

from ...catalog import RuleKind
from ..models import ComparisonContext, FieldOutcome
from ..json_path import MISSING
from .base_rule import BaseRule, DetailCollector, require_length, section, map_code, strip_zeros


def _first_element(context: ComparisonContext, path: str) -> Optional[Any]:
    node = context.node_at(path)
    if node is MISSING or not isinstance(node, list) or not node:
        return None
    return node[0]


def _indicator_mapping(positions: Dict[str, Any], name: str, component: str = "debitCreditIndicator") -> Dict[str, Any]:
    return section(positions, name, "components", component, "mapping")


class _PositionalAmountRule(BaseRule):
    """Helpers compartidos para comparar sub-campos contra un nodo canónico."""

    @staticmethod
    def _mapped(
        context: ComparisonContext,
        details: DetailCollector,
        label: str,
        code: str,
        mapping: Dict[str, Any],
        node: Any,
        path: str
    ):
        expected = map_code(mapping, code)
        actual = context.resolver.resolve(node, path)
        details.mark(label, f"{code}->{expected}", expected == actual)

    @staticmethod
    def _plain(context: ComparisonContext, details: DetailCollector, label: str, value: str, node: Any, path: str):
        details.mark(label, value, value == context.resolver.resolve(node, path))

    @staticmethod
    def _amount(context: ComparisonContext, details: DetailCollector, label: str, raw: str, node: Any, path: str):
        normalized = strip_zeros(raw)
        actual = context.resolver.resolve(node, path)
        details.mark(label, f"{raw}->{normalized}", normalized == actual)


class AdditionalFeesRule(_PositionalAmountRule):
    """
    DE 46 contra el primer elemento de transaction.fees.additionalFees:
    tipo[0:2], memo[2], decimalización[3], comisión (D/C[4] + importe[5:13])
    y liquidación (D/C[13] + importe[14:22]).
    """

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.ADDITIONAL_FEES,
            description="Comisiones adicionales"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        value = context.expected
        require_length(value, 22, "additional fees")

        fee = _first_element(context, "transaction.fees.additionalFees")
        if fee is None:
            return [self.failed(context, "No additional fees found in canonical response")]

        positions = section(context.rules, "positions")
        details = DetailCollector(separator=", ")

        self._mapped(context, details, "Fee Type", value[0:2],
                     section(positions, "feeType", "mapping"), fee, "feeType")
        self._mapped(context, details, "Settle Memo", value[2:3],
                     section(positions, "settleMemoIndicator", "mapping"), fee, "settleMemoIndicator")
        self._mapped(context, details, "Decimalization", value[3:4],
                     section(positions, "decimalizationIndicator", "mapping"), fee, "decimalizationIndicator")

        self._mapped(context, details, "Fee Indicator", value[4:5],
                     _indicator_mapping(positions, "feeAmount"), fee, "fee.amount.debitCreditIndicatorType")
        self._amount(context, details, "Fee Amount", value[5:13], fee, "fee.amount.amount")

        self._mapped(context, details, "Settlement Indicator", value[13:14],
                     _indicator_mapping(positions, "settlementAmount"), fee,
                     "settlement.settlementAmount.debitCreditIndicatorType")
        self._amount(context, details, "Settlement Amount", value[14:22], fee, "settlement.settlementAmount.amount")

        return self.verdict(context, details.all_valid, details.render())


class AdditionalAmountsRule(_PositionalAmountRule):
    """
    DE 54 contra el primer elemento de transaction.additionalAmounts:
    cuenta[0:2], tipo[2:4], moneda[4:7], D/C[7] e importe[8:20].
    """

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.ADDITIONAL_AMOUNTS,
            description="Importes adicionales"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        value = context.expected
        require_length(value, 20, "additional amounts")

        entry = _first_element(context, "transaction.additionalAmounts")
        if entry is None:
            return [self.failed(context, "No additional amounts found in canonical response")]

        positions = section(context.rules, "positions")
        details = DetailCollector(separator=", ")

        self._mapped(context, details, "Account Type", value[0:2],
                     section(positions, "accountType", "mapping"), entry, "accountType")
        self._mapped(context, details, "Amount Type", value[2:4],
                     section(positions, "amountType", "mapping"), entry, "amountType")
        self._plain(context, details, "Currency Code", value[4:7], entry, "amount.currencyCode")
        self._mapped(context, details, "D/C Indicator", value[7:8],
                     _indicator_mapping(positions, "amount", "debitCreditIndicatorType"), entry,
                     "amount.debitCreditIndicatorType")
        self._amount(context, details, "Amount", value[8:20], entry, "amount.amount")

        return self.verdict(context, details.all_valid, details.render())


class ReplacementAmountsRule(_PositionalAmountRule):
    """
    DE 95 de longitud exacta 42: importe de transacción[0:12],
    importe de liquidación[12:24], comisiones de transacción (D/C[24] +
    importe[25:33]) y comisiones de liquidación (D/C[33] + importe[34:42]).
    """

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.REPLACEMENT_AMOUNTS,
            description="Importes de reemplazo"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        value = context.expected
        if len(value) != 42:
            return [self.failed(context, "Invalid replacement amounts length")]

        replacement = context.node_at("transaction.replacementAmount")
        if replacement is MISSING:
            replacement = {}

        positions = section(context.rules, "positions")
        details = DetailCollector(separator=", ")

        self._amount(context, details, "Transaction Amount", value[0:12], replacement, "transactionAmount.amount")
        self._amount(context, details, "Settlement Amount", value[12:24], replacement, "settlementAmount.amount")

        self._mapped(context, details, "Transaction Fees D/C", value[24:25],
                     _indicator_mapping(positions, "transactionFees"), replacement,
                     "transactionFees.transactionFees.debitCreditIndicatorType")
        self._amount(context, details, "Transaction Fees Amount", value[25:33], replacement,
                     "transactionFees.transactionFees.amount")

        self._mapped(context, details, "Settlement Fees D/C", value[33:34],
                     _indicator_mapping(positions, "settlementFees"), replacement,
                     "settlementFees.settlementFees.debitCreditIndicatorType")
        self._amount(context, details, "Settlement Fees Amount", value[34:42], replacement,
                     "settlementFees.settlementFees.amount")

        return self.verdict(context, details.all_valid, details.render())
