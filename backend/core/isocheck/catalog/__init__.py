# catalog/__init__.py
"""
Micromódulo del catálogo de campos ISO 8583.
"""

from .models import (
    FieldDefinition,
    FieldFormat,
    ValidationRule,
    PairedField,
    RuleKind,
    is_usable_path
)
from .errors import ConfigError, CatalogErrors
from .loader import FieldCatalog

__all__ = [
    'FieldDefinition',
    'FieldFormat',
    'ValidationRule',
    'PairedField',
    'RuleKind',
    'is_usable_path',
    'ConfigError',
    'CatalogErrors',
    'FieldCatalog'
]
