# reporting/orchestrator.py
"""
Orquestador principal del módulo reporting.
"""

from typing import Any, Dict, List, Optional

from .models import ValidationReport, ReportFormat
from .aggregator import ReportAggregator
from .formatters import BaseFormatter, JSONFormatter, CSVFormatter
from .exporters import FileExporter
from .errors import ReportingErrors

DEFAULT_BASE_FILENAME = "iso_validation_report"


class ReportingOrchestrator:
    """Genera el reporte de un lote de filas y lo exporta a texto o archivos."""

    def __init__(self):
        self.formatters: Dict[str, BaseFormatter] = {
            formatter.format_name: formatter
            for formatter in (JSONFormatter(), CSVFormatter())
        }

    def generate_report(self, row_outcomes: List[Any], source: str = "") -> ValidationReport:
        """
        Genera un reporte de validación.

        Args:
            row_outcomes: Resultados por fila
            source: Origen de los datos de prueba

        Returns:
            Reporte de validación
        """
        print("📊 Generando reporte de validación...")

        report = ReportAggregator.create_report(row_outcomes=row_outcomes, source=source)
        metrics = report.metrics

        print(f"   ✓ Reporte ID: {report.report_id}")
        print(f"   ✓ Filas: {metrics.total_rows} ({metrics.rows_with_errors} con error)")
        print(f"   ✓ DEs validados: {metrics.total_fields}, fallidos: {metrics.total_failed}")
        print(f"   📋 Resumen: {report.summary}")

        return report

    def export_report(
        self,
        report: ValidationReport,
        output_dir: str,
        base_filename: Optional[str] = None,
        formats: Optional[List[str]] = None
    ) -> Dict[str, str]:
        """Escribe el reporte en output_dir; devuelve formato -> ruta."""
        selected = [self._formatter(name) for name in (formats or [f.value for f in ReportFormat])]

        print(f"💾 Exportando reporte a {output_dir}...")
        results = FileExporter.export_multiple_formats(
            report=report,
            formatters=selected,
            output_dir=output_dir,
            base_filename=base_filename or DEFAULT_BASE_FILENAME
        )

        for format_name, filepath in results.items():
            marker = "❌" if filepath.startswith("ERROR:") else "✓"
            print(f"   {marker} {format_name}: {filepath}")

        return results

    def export_to_string(self, report: ValidationReport, format_name: str = ReportFormat.JSON.value) -> str:
        return self._formatter(format_name).format(report)

    def _formatter(self, format_name: str) -> BaseFormatter:
        if format_name not in self.formatters:
            raise ReportingErrors.unsupported_format(format_name, self.formatters)
        return self.formatters[format_name]
