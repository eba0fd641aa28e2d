# reporting/aggregator.py

"""
Agregador de resultados por fila en un reporte estructurado.
"""

from typing import List, Any
from datetime import datetime

from ..comparator import ValidationStatus
from .errors import ReportingErrors
from .models import (
    ValidationReport, ReportEntry, ValidationMetrics, ROW_ERROR_STATUS
)


class ReportAggregator:
    """Agrega resultados de validación en un reporte estructurado."""

    @staticmethod
    def create_report(row_outcomes: List[Any], source: str = "") -> ValidationReport:
        """
        Crea un reporte a partir de los resultados por fila.

        Args:
            row_outcomes: Resultados por fila (RowOutcome o equivalente con
                row_index, case_id, result y error)
            source: Ruta o nombre de los datos de prueba

        Returns:
            Reporte de validación estructurado

        Raises:
            ReportingError: Si no hay filas
        """
        if not row_outcomes:
            raise ReportingErrors.no_rows()

        report = ValidationReport(
            report_id=f"validation_{datetime.now().strftime('%Y%m%d_%H%M%S')}",
            timestamp=datetime.now(),
            source=source
        )

        report.entries = ReportAggregator._convert_rows_to_entries(row_outcomes)
        report.metrics = ReportAggregator._calculate_metrics(row_outcomes, report.entries)
        report.summary = ReportAggregator._generate_summary(report.metrics)

        return report

    @staticmethod
    def _convert_rows_to_entries(row_outcomes: List[Any]) -> List[ReportEntry]:
        """Una entrada por DE validado; una entrada de error por fila abortada."""
        entries = []

        for row in row_outcomes:
            row_index = getattr(row, 'row_index', 0)
            case_id = getattr(row, 'case_id', None)
            error = getattr(row, 'error', None)
            result = getattr(row, 'result', None)

            if error or result is None:
                entries.append(ReportEntry(
                    row_index=row_index,
                    case_id=case_id,
                    field_id=None,
                    status=ROW_ERROR_STATUS,
                    details=error or "Sin resultado de validación"
                ))
                continue

            for field_id, outcome in result.sorted_items():
                canonical_value = outcome.actual
                if canonical_value is None and outcome.status is ValidationStatus.PASSED:
                    canonical_value = outcome.detail

                entries.append(ReportEntry(
                    row_index=row_index,
                    case_id=case_id,
                    field_id=field_id,
                    status=outcome.status.value,
                    iso_value=outcome.expected,
                    canonical_value=canonical_value,
                    mapping=list(outcome.mapping),
                    details=outcome.detail
                ))

        return entries

    @staticmethod
    def _calculate_metrics(row_outcomes: List[Any], entries: List[ReportEntry]) -> ValidationMetrics:
        """Calcula métricas de validación."""
        metrics = ValidationMetrics(total_rows=len(row_outcomes))

        for entry in entries:
            metrics.status_counts[entry.status] = metrics.status_counts.get(entry.status, 0) + 1

            if entry.status == ROW_ERROR_STATUS:
                metrics.rows_with_errors += 1
                continue

            metrics.total_fields += 1
            if entry.status == ValidationStatus.PASSED.value:
                metrics.total_passed += 1
            elif entry.status == ValidationStatus.FAILED.value:
                metrics.total_failed += 1
                metrics.failure_counts[entry.field_id] = metrics.failure_counts.get(entry.field_id, 0) + 1
            else:
                metrics.total_skipped += 1

        return metrics

    @staticmethod
    def _generate_summary(metrics: ValidationMetrics) -> str:
        """Genera un resumen textual de las métricas."""
        if metrics.total_failed == 0 and metrics.rows_with_errors == 0:
            return f"✅ Validación completada sin fallos ({metrics.total_passed} DEs correctos)."

        summary_parts = []

        if metrics.total_failed > 0:
            summary_parts.append(f"❌ {metrics.total_failed} DEs fallidos")

        if metrics.rows_with_errors > 0:
            summary_parts.append(f"⚠️ {metrics.rows_with_errors} filas con error")

        summary = f"Validación completada con {' y '.join(summary_parts)}."

        # DEs con más fallos
        if metrics.failure_counts:
            top_fields = sorted(
                metrics.failure_counts.items(),
                key=lambda x: x[1],
                reverse=True
            )[:3]

            summary += f" DEs con más fallos: {', '.join([f'DE {de} ({count})' for de, count in top_fields])}."

        return summary
