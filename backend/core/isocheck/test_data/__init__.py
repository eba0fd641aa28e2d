# test_data/__init__.py
"""
Micromódulo de carga de datos de prueba.
"""

from .models import TestCase, TestDataEntry, NormalizedError, ErrorSeverity
from .errors import TestDataErrors
from .encoding import EncodingResolver
from .loader import TestDataLoader

__all__ = [
    'TestCase',
    'TestDataEntry',
    'NormalizedError',
    'ErrorSeverity',
    'TestDataErrors',
    'EncodingResolver',
    'TestDataLoader'
]
