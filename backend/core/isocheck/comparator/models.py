# comparator/models.py
"""
Modelos de datos del comparator.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum

from ..catalog import FieldDefinition
from ..message import IsoMessage


class ValidationStatus(Enum):
    PASSED = "PASSED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


@dataclass
class FieldOutcome:
    """Resultado de validación de un DE."""
    field_id: str
    status: ValidationStatus
    expected: Optional[str]
    detail: Optional[str] = None             # Valor real, detalle de fallo o motivo de omisión
    actual: Optional[str] = None             # Valor canónico cuando aplica
    mapping: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.status is ValidationStatus.PASSED

    @property
    def failed(self) -> bool:
        return self.status is ValidationStatus.FAILED

    @property
    def skipped(self) -> bool:
        return self.status is ValidationStatus.SKIPPED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field_id": self.field_id,
            "status": self.status.value,
            "expected": self.expected,
            "actual": self.actual,
            "detail": self.detail,
            "mapping": list(self.mapping)
        }


@dataclass
class ComparisonContext:
    """Entrada de un comparador: un DE del mensaje frente a la respuesta canónica."""
    field_id: str
    expected: str
    definition: FieldDefinition
    canonical: Any                           # Árbol JSON ya decodificado
    message: IsoMessage
    resolver: Any = None                     # JsonPathResolver

    @property
    def rules(self) -> Dict[str, Any]:
        if self.definition.validation is None:
            return {}
        return self.definition.validation.rules

    @property
    def paths(self) -> List[str]:
        return self.definition.usable_paths

    def value_at(self, path: str) -> Optional[str]:
        return self.resolver.resolve(self.canonical, path)

    def node_at(self, path: str) -> Any:
        return self.resolver.resolve_node(self.canonical, path)



@dataclass
class RuleConfiguration:
    """Configuración en tiempo de ejecución de un comparador."""
    rule_id: str
    enabled: bool = True
