# comparator/validators/base_rule.py
"""
Contrato base para todas las reglas de comparación.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ...catalog import RuleKind
from ..models import ComparisonContext, FieldOutcome, ValidationStatus
from ..errors import ComparatorError

CHECK = "✓"
CROSS = "✗"

YearProvider = Callable[[], int]


class BaseRule(ABC):
    """Interfaz base para comparadores por tipo de regla."""

    # Las reglas que reconstruyen fechas MMDD reciben year_provider del registro
    uses_calendar_year = False

    def __init__(self, rule_id: RuleKind, description: str):
        self.rule_id = rule_id
        self.description = description
        self.enabled = True

    @abstractmethod
    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        """
        Compara el valor esperado del DE con la respuesta canónica.

        Args:
            context: Contexto de comparación del DE

        Returns:
            Lista de resultados (normalmente uno; las reglas emparejadas
            devuelven uno por cada DE involucrado)

        Raises:
            ComparatorError o cualquier excepción de parseo; el
            dispatcher las convierte en resultados FAILED
        """
        pass

    def passed(self, context: ComparisonContext, detail: Optional[str], actual: Optional[str] = None) -> FieldOutcome:
        return FieldOutcome(
            field_id=context.field_id,
            status=ValidationStatus.PASSED,
            expected=context.expected,
            detail=detail,
            actual=actual,
            mapping=context.paths
        )

    def failed(self, context: ComparisonContext, detail: Optional[str], actual: Optional[str] = None) -> FieldOutcome:
        return FieldOutcome(
            field_id=context.field_id,
            status=ValidationStatus.FAILED,
            expected=context.expected,
            detail=detail,
            actual=actual,
            mapping=context.paths
        )

    def verdict(self, context: ComparisonContext, ok: bool, detail: Optional[str], actual: Optional[str] = None) -> List[FieldOutcome]:
        if ok:
            return [self.passed(context, detail, actual)]
        return [self.failed(context, detail, actual)]

    @staticmethod
    def canonical_path(context: ComparisonContext, index: int = 0) -> str:
        paths = context.paths
        if index >= len(paths):
            raise ComparatorError(f"No canonical path #{index + 1} configured for DE {context.field_id}")
        return paths[index]

    def __repr__(self) -> str:
        return f"<Rule {self.rule_id.value}: {self.description}>"


def strip_zeros(value: str) -> str:
    """Normaliza un importe numérico eliminando ceros a la izquierda."""
    text = value.strip()
    if not text.isdigit():
        raise ComparatorError(f"Non-numeric value: '{value}'")
    return str(int(text))


def require_length(value: str, minimum: int, label: str, exact: bool = False):
    if value is None or (len(value) != minimum if exact else len(value) < minimum):
        raise ComparatorError(f"Invalid {label} length")


def section(rules: Dict[str, Any], *keys: str) -> Dict[str, Any]:
    """Navega por la configuración de reglas; error si falta una clave."""
    current: Any = rules
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            raise ComparatorError(f"Missing rule configuration: {'.'.join(keys)}")
        current = current[key]
    return current


def map_code(mapping: Dict[str, Any], code: str, strict: bool = True) -> str:
    """Traduce un código por tabla; sin estricto devuelve el propio código."""
    if isinstance(mapping, dict) and code in mapping:
        return str(mapping[code])
    if strict:
        raise ComparatorError(f"No mapping for code '{code}'")
    return code


def current_year() -> int:
    return datetime.now().year


def expected_datetime(mmddhhmmss: str, year: int) -> str:
    """Reconstruye YYYY-MM-DDThh:mm:ss a partir de MMDDhhmmss."""
    if len(mmddhhmmss) < 10:
        raise ComparatorError(f"Invalid datetime value: '{mmddhhmmss}'")
    month, day = mmddhhmmss[0:2], mmddhhmmss[2:4]
    hour, minute, second = mmddhhmmss[4:6], mmddhhmmss[6:8], mmddhhmmss[8:10]
    return f"{year}-{month}-{day}T{hour}:{minute}:{second}"


class DetailCollector:
    """Acumula sub-comparaciones; el resultado global es todo o nada."""

    def __init__(self, separator: str = "; "):
        self.separator = separator
        self.parts: List[str] = []
        self.all_valid = True

    def expect(self, label: str, expected: Optional[str], actual: Optional[str], case_sensitive: bool = True) -> bool:
        """Estilo 'X mismatch: expected a, got b'."""
        if case_sensitive:
            ok = actual is not None and expected == actual
        else:
            ok = actual is not None and expected is not None and expected.lower() == actual.lower()
        if not ok:
            self.parts.append(f"{label} mismatch: expected {expected}, got {actual}")
            self.all_valid = False
        return ok

    def mark(self, label: str, shown: str, ok: bool) -> bool:
        """Estilo 'X: a->b (✓)'."""
        self.parts.append(f"{label}: {shown} ({CHECK if ok else CROSS})")
        self.all_valid = self.all_valid and ok
        return ok

    def error(self, text: str):
        self.parts.append(text)
        self.all_valid = False

    def render(self) -> str:
        return self.separator.join(self.parts)
