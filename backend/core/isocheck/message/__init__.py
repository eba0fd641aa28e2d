# message/__init__.py
"""
Micromódulo de construcción de mensajes ISO 8583.
"""

from .models import IsoMessage, FormatWarning, DEFAULT_MTI, MTI_FIELD
from .bitmap import bits_to_hex, hex_to_bits, fields_from_bitmap, bitmap_from_fields
from .generator import RandomValueGenerator
from .builder import MessageBuilder
from .response import (
    expected_response_mti,
    describe_response_code,
    extract_response_code,
    extract_response_mti,
    format_response_code,
    check_response,
    ResponseCheck
)

__all__ = [
    'IsoMessage',
    'FormatWarning',
    'DEFAULT_MTI',
    'MTI_FIELD',
    'bits_to_hex',
    'hex_to_bits',
    'fields_from_bitmap',
    'bitmap_from_fields',
    'RandomValueGenerator',
    'MessageBuilder',
    'expected_response_mti',
    'describe_response_code',
    'extract_response_code',
    'extract_response_mti',
    'format_response_code',
    'check_response',
    'ResponseCheck'
]
