# test_data/models.py
"""
Modelos de datos de los casos de prueba.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum


class ErrorSeverity(Enum):
    FATAL = "FATAL"
    ERROR = "ERROR"
    WARNING = "WARNING"


@dataclass
class NormalizedError:
    """Error normalizado de carga."""
    code: str
    severity: ErrorSeverity
    message: str
    row_index: Optional[int] = None
    value: Optional[str] = None


@dataclass
class TestDataEntry:
    """Terna (nombre canónico, valor, tipo declarado)."""
    __test__ = False

    field_name: str
    value: str
    data_type: Optional[str] = None


@dataclass
class TestCase:
    """Un caso de prueba: una fila lógica que produce un mensaje."""
    __test__ = False

    case_id: str
    entries: List[TestDataEntry] = field(default_factory=list)
    source_row: Optional[int] = None         # Primera fila del CSV donde aparece
