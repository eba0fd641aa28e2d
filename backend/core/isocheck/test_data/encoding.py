# test_data/encoding.py
"""
Detección de codificación de archivos de datos de prueba.
"""

import chardet
from typing import Tuple, Optional
from .models import NormalizedError
from .errors import TestDataErrors


class EncodingResolver:
    """Detecta la codificación del archivo."""

    ENCODING_PRIORITY = ['utf-8-sig', 'utf-8', 'latin-1', 'cp1252']

    # Normalización de nombres devueltos por chardet
    ENCODING_MAP = {
        'ascii': 'utf-8',
        'windows-1252': 'cp1252',
        'iso-8859-1': 'latin-1'
    }

    @classmethod
    def detect_encoding(cls, raw_data: bytes) -> Tuple[Optional[str], Optional[NormalizedError]]:
        """
        Detecta la codificación de un bloque de bytes.

        Args:
            raw_data: Primeros bytes del archivo

        Returns:
            Tupla (encoding, error)
        """
        if not raw_data:
            return None, TestDataErrors.empty_file()

        if raw_data.startswith(b'\xef\xbb\xbf'):
            return 'utf-8-sig', None

        result = chardet.detect(raw_data)
        detected = (result.get('encoding') or '').lower()
        confidence = result.get('confidence') or 0

        if confidence > 0.7 and detected:
            normalized = cls.ENCODING_MAP.get(detected, detected)
            try:
                raw_data.decode(normalized, errors='strict')
                return normalized, None
            except (UnicodeDecodeError, LookupError):
                pass

        for encoding in cls.ENCODING_PRIORITY:
            try:
                raw_data.decode(encoding, errors='strict')
                return encoding, None
            except (UnicodeDecodeError, LookupError):
                continue

        return None, TestDataErrors.encoding_detection_failed()
