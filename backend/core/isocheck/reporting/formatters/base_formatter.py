# reporting/formatters/base_formatter.py
"""
Contrato de los formateadores de reportes de validación ISO.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models import ValidationReport, ReportEntry

COLUMNS = ["Row #", "DE", "Status", "ISO Value", "Canonical Value", "Mapping", "Details"]


class BaseFormatter(ABC):
    """Convierte un ValidationReport a texto en un formato concreto."""

    format_name: str = ""
    file_extension: str = ""

    @abstractmethod
    def format(self, report: ValidationReport) -> str:
        pass

    @staticmethod
    def entry_row(entry: ReportEntry) -> List[str]:
        """Valores de una entrada en el orden de COLUMNS."""
        return [
            str(entry.row_index),
            entry.field_id or "",
            entry.status,
            entry.iso_value or "",
            entry.canonical_value or "",
            "; ".join(entry.mapping),
            entry.details or ""
        ]
