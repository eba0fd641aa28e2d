# reporting/models.py

"""
Modelos de datos para reporting.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from datetime import datetime
from enum import Enum


class ReportFormat(Enum):
    JSON = "json"
    CSV = "csv"


# Estado de una fila que no llegó a validarse (fallo de transporte o JSON)
ROW_ERROR_STATUS = "ERROR"


@dataclass
class ReportEntry:
    """Entrada individual del reporte: un DE de una fila."""
    row_index: int
    case_id: Optional[str]
    field_id: Optional[str]
    status: str
    iso_value: Optional[str] = None
    canonical_value: Optional[str] = None
    mapping: List[str] = field(default_factory=list)
    details: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para serialización."""
        return {
            "row_index": self.row_index,
            "case_id": self.case_id,
            "field_id": self.field_id,
            "status": self.status,
            "iso_value": self.iso_value,
            "canonical_value": self.canonical_value,
            "mapping": list(self.mapping),
            "details": self.details
        }


@dataclass
class ValidationMetrics:
    """Métricas de validación."""
    total_rows: int = 0
    rows_with_errors: int = 0
    total_fields: int = 0
    total_passed: int = 0
    total_failed: int = 0
    total_skipped: int = 0

    # Conteo de fallos por DE
    failure_counts: Dict[str, int] = field(default_factory=dict)

    # Conteo por estado
    status_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario."""
        return {
            "total_rows": self.total_rows,
            "rows_with_errors": self.rows_with_errors,
            "total_fields": self.total_fields,
            "total_passed": self.total_passed,
            "total_failed": self.total_failed,
            "total_skipped": self.total_skipped,
            "failure_counts": self.failure_counts,
            "status_counts": self.status_counts
        }


@dataclass
class ValidationReport:
    """Reporte completo de validación."""
    report_id: str
    timestamp: datetime
    source: str = ""
    entries: List[ReportEntry] = field(default_factory=list)
    metrics: ValidationMetrics = field(default_factory=ValidationMetrics)
    summary: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convierte reporte completo a diccionario."""
        return {
            "report_id": self.report_id,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
            "summary": self.summary,
            "entries": [entry.to_dict() for entry in self.entries],
            "metrics": self.metrics.to_dict()
        }
