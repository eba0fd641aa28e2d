# transport/__init__.py
"""
Micromódulo de transporte hacia servicios externos.
"""

from .client import CanonicalClient, CanonicalService, ParserService, DEFAULT_TIMEOUT
from .errors import TransportError, TransportErrors

__all__ = [
    'CanonicalClient',
    'CanonicalService',
    'ParserService',
    'DEFAULT_TIMEOUT',
    'TransportError',
    'TransportErrors'
]
