# reporting/formatters/__init__.py
"""
Formateadores de reportes.
"""

from .base_formatter import BaseFormatter
from .json_formatter import JSONFormatter
from .csv_formatter import CSVFormatter

__all__ = [
    'BaseFormatter',
    'JSONFormatter',
    'CSVFormatter'
]
