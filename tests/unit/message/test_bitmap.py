# tests/unit/message/test_bitmap.py
import pytest

from backend.core.isocheck.message import (
    bits_to_hex, hex_to_bits, fields_from_bitmap, bitmap_from_fields
)


def _bits(*numbers, size=64):
    bits = [False] * size
    for n in numbers:
        bits[n - 1] = True
    return bits


def test_bits_to_hex_most_significant_bit_first():
    assert bits_to_hex(_bits(2, 3, 4, 11)) == "7020000000000000"


def test_bits_to_hex_empty_bitmap():
    assert bits_to_hex(_bits()) == "0" * 16


def test_bits_to_hex_rejects_partial_nibble():
    with pytest.raises(ValueError):
        bits_to_hex([True, False, True])


def test_hex_to_bits_inverts_encoding():
    assert hex_to_bits("7020000000000000") == _bits(2, 3, 4, 11)


def test_fields_from_bitmap():
    assert fields_from_bitmap("7020000000000000") == {2, 3, 4, 11}
    assert fields_from_bitmap("8000000004000000", first_field=65) == {65, 102}


def test_bitmap_from_fields_ignores_out_of_block_numbers():
    assert bitmap_from_fields([65, 102, 3], first_field=65) == "8000000004000000"
