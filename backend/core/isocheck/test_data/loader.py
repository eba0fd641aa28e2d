# test_data/loader.py
"""
Carga de casos de prueba desde CSV en formato largo.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Tuple, Union

from .models import TestCase, TestDataEntry, NormalizedError
from .errors import TestDataErrors
from .encoding import EncodingResolver

logger = logging.getLogger(__name__)


class TestDataLoader:
    """Lee CSV con encabezado case_id,field,value,type y agrupa por caso."""
    __test__ = False

    HEADER = ["case_id", "field", "value", "type"]
    DETECTION_BYTES = 10000

    @classmethod
    def load_csv(cls, file_path: Union[str, Path]) -> Tuple[List[TestCase], List[NormalizedError]]:
        """
        Carga los casos de prueba de un archivo.

        Args:
            file_path: Ruta al CSV

        Returns:
            Tupla (casos, errores)
        """
        try:
            with open(file_path, 'rb') as f:
                raw = f.read()
        except IOError as e:
            return [], [TestDataErrors.file_io_error(str(e))]

        return cls.load_bytes(raw)

    @classmethod
    def load_bytes(cls, raw: bytes) -> Tuple[List[TestCase], List[NormalizedError]]:
        encoding, error = EncodingResolver.detect_encoding(raw[:cls.DETECTION_BYTES])
        if error:
            return [], [error]
        return cls.load_text(raw.decode(encoding, errors='replace'))

    @classmethod
    def load_text(cls, text: str) -> Tuple[List[TestCase], List[NormalizedError]]:
        errors: List[NormalizedError] = []
        reader = csv.reader(io.StringIO(text))

        header = next(reader, None)
        if header is None:
            return [], [TestDataErrors.empty_file()]

        normalized_header = [h.strip().lower() for h in header]
        if normalized_header[:3] != cls.HEADER[:3]:
            return [], [TestDataErrors.missing_header_row(",".join(cls.HEADER))]

        has_type = len(normalized_header) >= 4 and normalized_header[3] == cls.HEADER[3]
        expected_columns = len(normalized_header)

        cases: Dict[str, TestCase] = {}

        # La fila 1 es el encabezado
        for row_index, row in enumerate(reader, start=2):
            if not row or all(not cell.strip() for cell in row):
                continue

            if len(row) != expected_columns:
                errors.append(TestDataErrors.row_column_mismatch(row_index, expected_columns, len(row)))
                continue

            case_id = row[0].strip()
            field_name = row[1].strip()
            if not case_id or not field_name:
                continue

            entry = TestDataEntry(
                field_name=field_name,
                value=row[2].strip(),
                data_type=(row[3].strip() or None) if has_type else None
            )

            if case_id not in cases:
                cases[case_id] = TestCase(case_id=case_id, source_row=row_index)
            cases[case_id].entries.append(entry)

        logger.info(f"Loaded {len(cases)} test cases ({len(errors)} row errors)")
        return list(cases.values()), errors
