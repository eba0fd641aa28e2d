# test_data/errors.py
"""
Errores normalizados de la carga de datos de prueba.
"""

from .models import ErrorSeverity, NormalizedError


class TestDataErrors:
    """Factory de errores de carga."""
    __test__ = False

    @staticmethod
    def empty_file() -> NormalizedError:
        return NormalizedError(
            code="EMPTY_FILE",
            severity=ErrorSeverity.FATAL,
            message="Archivo de datos de prueba vacío"
        )

    @staticmethod
    def missing_header_row(expected: str) -> NormalizedError:
        return NormalizedError(
            code="MISSING_HEADER_ROW",
            severity=ErrorSeverity.FATAL,
            message=f"Encabezado inválido, se esperaba: {expected}"
        )

    @staticmethod
    def row_column_mismatch(row_index: int, expected: int, actual: int) -> NormalizedError:
        return NormalizedError(
            code="ROW_COLUMN_COUNT_MISMATCH",
            severity=ErrorSeverity.ERROR,
            message=f"Fila tiene {actual} columnas, se esperaban {expected}",
            row_index=row_index
        )

    @staticmethod
    def encoding_detection_failed() -> NormalizedError:
        return NormalizedError(
            code="ENCODING_DETECTION_FAILED",
            severity=ErrorSeverity.FATAL,
            message="No se pudo detectar la codificación del archivo"
        )

    @staticmethod
    def file_io_error(details: str) -> NormalizedError:
        return NormalizedError(
            code="FILE_IO_ERROR",
            severity=ErrorSeverity.FATAL,
            message=f"Error de E/S al leer archivo: {details}"
        )
