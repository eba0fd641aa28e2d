# reporting/errors.py
"""
Errores del módulo reporting.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(eq=False)
class ReportingError(Exception):
    """Fallo al construir o exportar un reporte de validación ISO."""
    code: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class ReportingErrors:
    """Factory de errores de reporting."""

    @staticmethod
    def no_rows() -> ReportingError:
        return ReportingError(
            code="NO_ROWS",
            message="No hay filas procesadas para generar el reporte"
        )

    @staticmethod
    def unsupported_format(requested: str, available) -> ReportingError:
        return ReportingError(
            code="INVALID_FORMAT",
            message=f"Formato de reporte no soportado: {requested}",
            details={"requested": requested, "available": sorted(available)}
        )

    @staticmethod
    def write_failed(filepath: str, reason: str) -> ReportingError:
        return ReportingError(
            code="FILE_WRITE_FAILED",
            message=f"No se pudo escribir el reporte en {filepath}",
            details={"filepath": filepath, "reason": reason}
        )
