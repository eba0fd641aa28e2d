# reporting/__init__.py
"""
Módulo de reporting de validación ISO.
"""

from .orchestrator import ReportingOrchestrator
from .models import (
    ValidationReport, ReportEntry, ValidationMetrics, ReportFormat, ROW_ERROR_STATUS
)
from .errors import ReportingError, ReportingErrors
from .aggregator import ReportAggregator
from .formatters import BaseFormatter, JSONFormatter, CSVFormatter
from .exporters import FileExporter

__all__ = [
    'ReportingOrchestrator',
    'ValidationReport',
    'ReportEntry',
    'ValidationMetrics',
    'ReportFormat',
    'ROW_ERROR_STATUS',
    'ReportingError',
    'ReportingErrors',
    'ReportAggregator',
    'BaseFormatter',
    'JSONFormatter',
    'CSVFormatter',
    'FileExporter'
]
