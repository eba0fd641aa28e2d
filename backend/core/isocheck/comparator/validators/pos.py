# comparator/validators/pos.py
"""
Reglas de punto de venta: modo de entrada (DE 22) y condición (DE 58).
"""

from typing import Any, Dict, List

from ...catalog import RuleKind
from ..models import ComparisonContext, FieldOutcome
from ..errors import ComparatorError
from .base_rule import BaseRule, DetailCollector, section, map_code

CHANNEL_PATH = "transaction.channel.channelType"

# Modo de entrada ISO -> canal canónico
ENTRY_MODE_CHANNELS = {
    "020": "POS",
    "022": "POS",
    "029": "POS",
    "060": "POS",
    "010": "ONLINE",
    "012": "ONLINE",
    "090": "ONLINE",
    "091": "ONLINE",
}

CONDITION_BASE_PATH = "transaction.nationalPOSConditionCode"


class PosEntryModeRule(BaseRule):
    """Traduce el modo de entrada a POS/ONLINE; códigos no listados se comparan tal cual."""

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.POS_ENTRY_MODE,
            description="Modo de entrada POS a canal canónico"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        expected_channel = ENTRY_MODE_CHANNELS.get(context.expected, context.expected)
        actual = context.value_at(CHANNEL_PATH)
        return self.verdict(context, expected_channel == actual, actual, actual)


class PosConditionCodeRule(BaseRule):
    """Descompone el DE 58 en componentes posicionales mapeados por tabla."""

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.POS_CONDITION_CODE,
            description="Código de condición POS por posiciones"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        positions = section(context.rules, "positions")
        expected = context.expected
        details = DetailCollector(separator=", ")

        for group_name in ("terminalClass", "presentationType"):
            group = section(positions, group_name)
            start = int(section(group, "start"))
            end = int(section(group, "end"))
            group_value = self._slice(expected, start - 1, end)

            for component_name, component in section(group, "components").items():
                relative = int(section(component, "position")) - start
                if not 0 <= relative < len(group_value):
                    raise ComparatorError(f"Position out of range for {group_name}.{component_name}")
                value = group_value[relative]
                self._check(
                    context, details, component_name, value, component,
                    f"{CONDITION_BASE_PATH}.{group_name}.{component_name}"
                )

        security = section(positions, "securityCondition")
        position = int(section(security, "position"))
        self._check(
            context, details, "Security", self._slice(expected, position - 1, position),
            security, f"{CONDITION_BASE_PATH}.SecurityCondition"
        )

        terminal_type = section(positions, "terminalType")
        self._check(
            context, details, "TerminalType",
            self._slice(expected, int(section(terminal_type, "start")) - 1, int(section(terminal_type, "end"))),
            terminal_type, f"{CONDITION_BASE_PATH}.terminalType"
        )

        capability = section(positions, "cardDataInputCapability")
        position = int(section(capability, "position"))
        self._check(
            context, details, "InputCapability", self._slice(expected, position - 1, position),
            capability, f"{CONDITION_BASE_PATH}.cardDataInputCapability"
        )

        return self.verdict(context, details.all_valid, details.render())

    @staticmethod
    def _slice(value: str, start: int, end: int) -> str:
        if start < 0 or end > len(value) or start >= end:
            raise ComparatorError(f"Invalid POS condition code length: positions {start + 1}-{end}")
        return value[start:end]

    @staticmethod
    def _check(
        context: ComparisonContext,
        details: DetailCollector,
        label: str,
        value: str,
        component: Dict[str, Any],
        path: str
    ):
        expected_value = map_code(component.get("mapping", {}), value, strict=False)
        actual = context.value_at(path)
        details.mark(label, f"{value}->{expected_value}", expected_value == actual)
