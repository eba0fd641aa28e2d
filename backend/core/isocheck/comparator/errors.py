# comparator/errors.py
"""
Errores normalizados del comparator.
"""

from typing import Optional

from .models import FieldOutcome, ValidationStatus

DEFAULT_SKIP_REASON = "Field is not canonicalized"


class ComparatorError(Exception):
    """Entrada malformada dentro de un comparador (longitud, número, tag)."""


class ComparatorErrors:
    """Factory de resultados de error del comparator."""

    @staticmethod
    def rule_execution_failed(field_id: str, expected: Optional[str], details: str = "") -> FieldOutcome:
        return FieldOutcome(
            field_id=field_id,
            status=ValidationStatus.FAILED,
            expected=expected,
            detail=f"Validation error: {details}"
        )

    @staticmethod
    def no_canonical_mapping(field_id: str, expected: Optional[str]) -> FieldOutcome:
        return FieldOutcome(
            field_id=field_id,
            status=ValidationStatus.FAILED,
            expected=expected,
            detail=f"No canonical mapping found for DE {field_id}"
        )

    @staticmethod
    def missing_definition(field_id: str, expected: Optional[str]) -> FieldOutcome:
        return FieldOutcome(
            field_id=field_id,
            status=ValidationStatus.FAILED,
            expected=expected,
            detail=f"DE {field_id} is not defined in the field catalog"
        )

    @staticmethod
    def invalid_length(field_id: str, expected: Optional[str], label: str) -> FieldOutcome:
        return FieldOutcome(
            field_id=field_id,
            status=ValidationStatus.FAILED,
            expected=expected,
            detail=f"Invalid {label} length"
        )

    @staticmethod
    def skipped(field_id: str, expected: Optional[str], reason: Optional[str] = None) -> FieldOutcome:
        return FieldOutcome(
            field_id=field_id,
            status=ValidationStatus.SKIPPED,
            expected=expected,
            detail=reason or DEFAULT_SKIP_REASON
        )

    @staticmethod
    def rule_disabled(field_id: str, expected: Optional[str], rule_id: str) -> FieldOutcome:
        return FieldOutcome(
            field_id=field_id,
            status=ValidationStatus.SKIPPED,
            expected=expected,
            detail=f"Rule '{rule_id}' is disabled"
        )
