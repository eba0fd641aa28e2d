# comparator/results.py
"""
Acumuladores de resultados: por mensaje y agregados entre filas.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .models import FieldOutcome, ValidationStatus


def field_sort_key(field_id: str) -> Tuple[int, str]:
    """Orden numérico de DEs; MTI ("0") primero y claves no numéricas al final."""
    if field_id.isdigit():
        return int(field_id), ""
    return 10_000, field_id


def _truncate_or_pad(text: Optional[str], length: int) -> str:
    if text is None:
        text = "null"
    if len(text) > length:
        return text[:length - 3] + "..."
    return text.ljust(length)


class ValidationResult:
    """
    Resultados de validación de un mensaje, uno por DE.

    Una escritura posterior sobre el mismo DE reemplaza la anterior.
    """

    def __init__(self, row_index: Optional[int] = None):
        self.row_index = row_index
        self._entries: Dict[str, FieldOutcome] = {}

    def record(self, outcome: FieldOutcome):
        self._entries[outcome.field_id] = outcome

    def add_passed(self, field_id: str, expected: Optional[str], actual: Optional[str]):
        self.record(FieldOutcome(field_id, ValidationStatus.PASSED, expected, actual, actual))

    def add_failed(self, field_id: str, expected: Optional[str], detail: Optional[str]):
        self.record(FieldOutcome(field_id, ValidationStatus.FAILED, expected, detail))

    def add_skipped(self, field_id: str, expected: Optional[str], reason: Optional[str]):
        self.record(FieldOutcome(field_id, ValidationStatus.SKIPPED, expected, reason))

    def get(self, field_id: str) -> Optional[FieldOutcome]:
        return self._entries.get(str(field_id))

    @property
    def entries(self) -> Dict[str, FieldOutcome]:
        return dict(self._entries)

    def _ids_with(self, status: ValidationStatus) -> List[str]:
        return [fid for fid, outcome in self.sorted_items() if outcome.status is status]

    @property
    def passed_fields(self) -> List[str]:
        return self._ids_with(ValidationStatus.PASSED)

    @property
    def failed_fields(self) -> List[str]:
        return self._ids_with(ValidationStatus.FAILED)

    @property
    def skipped_fields(self) -> List[str]:
        return self._ids_with(ValidationStatus.SKIPPED)

    @property
    def all_passed(self) -> bool:
        return not self.failed_fields

    def sorted_items(self) -> List[Tuple[str, FieldOutcome]]:
        return sorted(self._entries.items(), key=lambda item: field_sort_key(item[0]))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, field_id) -> bool:
        return str(field_id) in self._entries

    def print_results(self):
        """Imprime la tabla de resultados por consola."""
        print("\n=== Validation Results ===")
        print(f"{'DE':<6} | {'Status':<10} | {'Expected Value':<30} | {'Actual Value':<30} | Canonical Path")
        print("-" * 100)

        for field_id, outcome in self.sorted_items():
            print(
                f"{field_id:<6} | {outcome.status.value:<10} | "
                f"{_truncate_or_pad(outcome.expected, 30)} | "
                f"{_truncate_or_pad(outcome.detail, 30)} | "
                f"{', '.join(outcome.mapping)}"
            )

        print("\nSummary:")
        print(f"Total Fields: {len(self)}")
        print(f"Passed: {len(self.passed_fields)}")
        print(f"Failed: {len(self.failed_fields)}")
        print(f"Skipped: {len(self.skipped_fields)}")

    def summary(self, row_index: Optional[int] = None) -> "RowSummary":
        row = row_index if row_index is not None else (self.row_index or 0)
        return RowSummary(
            row_index=row,
            total_fields=len(self),
            passed=self.passed_fields,
            failed=self.failed_fields,
            skipped=self.skipped_fields
        )


@dataclass
class RowSummary:
    """Resumen de una fila procesada."""
    row_index: int
    total_fields: int
    passed: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        failed_part = f" (DE {', '.join(self.failed)})" if self.failed else ""
        skipped_part = f" (DE {', '.join(self.skipped)})" if self.skipped else ""
        return (
            f"Row {self.row_index} - Total Fields: {self.total_fields}, "
            f"Passed: {len(self.passed)}, Failed: {len(self.failed)}{failed_part}, "
            f"Skipped: {len(self.skipped)}{skipped_part}"
        )


@dataclass
class FieldStatistics:
    """Contadores por DE acumulados entre filas."""
    field_id: str
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    failure_reasons: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.skipped

    @property
    def success_rate(self) -> float:
        return self.passed / self.total if self.total else 0.0

    @property
    def failure_rate(self) -> float:
        return self.failed / self.total if self.total else 0.0


class AggregatedResults:
    """Agregación de resultados de varias filas; solo aritmética."""

    def __init__(self):
        self.statistics: Dict[str, FieldStatistics] = {}
        self.row_summaries: List[RowSummary] = []

    def add(self, result: ValidationResult, row_index: int):
        for field_id, outcome in result.sorted_items():
            stats = self.statistics.setdefault(field_id, FieldStatistics(field_id=field_id))
            if outcome.status is ValidationStatus.PASSED:
                stats.passed += 1
            elif outcome.status is ValidationStatus.FAILED:
                stats.failed += 1
                stats.failure_reasons.append(f"Row {row_index}: {outcome.detail}")
            else:
                stats.skipped += 1
        self.row_summaries.append(result.summary(row_index))

    @property
    def total_messages(self) -> int:
        return len(self.row_summaries)

    @property
    def total_fields(self) -> int:
        return sum(stats.total for stats in self.statistics.values())

    @property
    def total_passed(self) -> int:
        return sum(stats.passed for stats in self.statistics.values())

    @property
    def total_failed(self) -> int:
        return sum(stats.failed for stats in self.statistics.values())

    @property
    def total_skipped(self) -> int:
        return sum(stats.skipped for stats in self.statistics.values())

    def success_rate(self, field_id: str) -> float:
        stats = self.statistics.get(str(field_id))
        return stats.success_rate if stats else 0.0

    def failure_ranking(self) -> List[FieldStatistics]:
        """DEs por tasa de fallo descendente; empate por número de DE."""
        return sorted(
            self.statistics.values(),
            key=lambda stats: (-stats.failure_rate, field_sort_key(stats.field_id))
        )

    def to_text(self) -> str:
        lines = ["", "=== Aggregated Validation Results ==="]
        lines.append(f"Total ISO Messages: {self.total_messages}")
        lines.append(f"Total Fields Validated: {self.total_fields}")

        total = self.total_fields
        if total:
            lines.append("")
            lines.append("Overall Results:")
            lines.append(f"Passed: {self.total_passed} ({self.total_passed / total * 100:.2f}%)")
            lines.append(f"Failed: {self.total_failed} ({self.total_failed / total * 100:.2f}%)")
            lines.append(f"Skipped: {self.total_skipped} ({self.total_skipped / total * 100:.2f}%)")

        if not self.statistics:
            lines.append("")
            lines.append("No Data Elements were processed.")
            return "\n".join(lines)

        lines.append("")
        lines.append("Results by Data Element:")
        for field_id in sorted(self.statistics, key=field_sort_key):
            stats = self.statistics[field_id]
            lines.append("")
            lines.append(f"DE {field_id}:")
            lines.append(f"  Total: {stats.total}")
            lines.append(f"  Success Rate: {stats.success_rate * 100:.2f}%")
            lines.append(f"  Passed: {stats.passed}")
            lines.append(f"  Failed: {stats.failed}")
            lines.append(f"  Skipped: {stats.skipped}")
            if stats.failure_reasons:
                lines.append("  Failure Reasons:")
                lines.extend(f"    - {reason}" for reason in stats.failure_reasons)

        return "\n".join(lines)
