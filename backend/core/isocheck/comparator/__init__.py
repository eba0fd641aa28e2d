# comparator/__init__.py
"""
Micromódulo de comparación de DEs contra la respuesta canónica.
"""

from .models import (
    ValidationStatus,
    FieldOutcome,
    ComparisonContext,
    RuleConfiguration
)
from .errors import ComparatorError, ComparatorErrors, DEFAULT_SKIP_REASON
from .json_path import JsonPathResolver, MISSING
from .validators import ALL_RULES, BaseRule
from .rule_registry import RuleRegistry
from .rule_dispatcher import RuleDispatcher
from .results import (
    ValidationResult,
    RowSummary,
    FieldStatistics,
    AggregatedResults,
    field_sort_key
)

__all__ = [
    'ValidationStatus',
    'FieldOutcome',
    'ComparisonContext',
    'RuleConfiguration',
    'ComparatorError',
    'ComparatorErrors',
    'DEFAULT_SKIP_REASON',
    'JsonPathResolver',
    'MISSING',
    'ALL_RULES',
    'BaseRule',
    'RuleRegistry',
    'RuleDispatcher',
    'ValidationResult',
    'RowSummary',
    'FieldStatistics',
    'AggregatedResults',
    'field_sort_key'
]
