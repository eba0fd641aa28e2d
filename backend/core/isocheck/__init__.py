# isocheck/__init__.py
"""
Constructor de mensajes ISO 8583 y validador contra respuestas canónicas.
"""

from .orchestrator import ValidationOrchestrator, RowOutcome
from .catalog import FieldCatalog
from .message import MessageBuilder, IsoMessage
from .test_data import TestDataLoader
from .comparator import RuleDispatcher, AggregatedResults
from .transport import CanonicalClient
from .reporting import ReportingOrchestrator

__all__ = [
    'ValidationOrchestrator',
    'RowOutcome',
    'FieldCatalog',
    'MessageBuilder',
    'IsoMessage',
    'TestDataLoader',
    'RuleDispatcher',
    'AggregatedResults',
    'CanonicalClient',
    'ReportingOrchestrator'
]
