# reporting/formatters/json_formatter.py
"""
Formateador JSON: reporte completo más una vista agrupada por fila.
"""

import json
from typing import Any, Dict, List

from .base_formatter import BaseFormatter
from ..models import ValidationReport, ROW_ERROR_STATUS


class JSONFormatter(BaseFormatter):

    format_name = "json"
    file_extension = ".json"

    def __init__(self, indent: int = 2):
        self.indent = indent

    def format(self, report: ValidationReport) -> str:
        data = report.to_dict()
        data["rows"] = self._group_by_row(report)
        return json.dumps(data, indent=self.indent, ensure_ascii=False)

    @staticmethod
    def _group_by_row(report: ValidationReport) -> List[Dict[str, Any]]:
        """Estado por DE de cada fila; las filas abortadas llevan su error."""
        rows: Dict[int, Dict[str, Any]] = {}
        for entry in report.entries:
            row = rows.setdefault(entry.row_index, {
                "row_index": entry.row_index,
                "case_id": entry.case_id,
                "fields": {},
                "error": None
            })
            if entry.status == ROW_ERROR_STATUS:
                row["error"] = entry.details
            else:
                row["fields"][entry.field_id] = entry.status
        return list(rows.values())
