# reporting/formatters/csv_formatter.py
"""
Formateador CSV para reportes; una fila por DE validado.
"""

import csv
import io

from .base_formatter import BaseFormatter, COLUMNS
from ..models import ValidationReport


class CSVFormatter(BaseFormatter):
    """Mismas columnas que la tabla de resultados por consola."""

    format_name = "csv"
    file_extension = ".csv"

    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter

    def format(self, report: ValidationReport) -> str:
        output = io.StringIO()
        writer = csv.writer(output, delimiter=self.delimiter, quoting=csv.QUOTE_MINIMAL)

        writer.writerow(COLUMNS)
        writer.writerows(self.entry_row(entry) for entry in report.entries)

        return output.getvalue()
