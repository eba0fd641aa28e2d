# message/bitmap.py
"""
Codificación de bitmaps de presencia a hexadecimal.
"""

from typing import Iterable, List, Set


def bits_to_hex(bits: List[bool]) -> str:
    """
    Convierte un vector de 64 bits a 16 dígitos hexadecimales.

    El bit i (base 1) corresponde al DE i del bloque; el bit más
    significativo de cada nibble va primero.

    Args:
        bits: Vector de presencia de 64 posiciones

    Returns:
        Cadena hexadecimal en mayúsculas
    """
    if len(bits) % 4 != 0:
        raise ValueError(f"Longitud de bitmap inválida: {len(bits)}")

    digits = []
    for start in range(0, len(bits), 4):
        value = 0
        for offset in range(4):
            if bits[start + offset]:
                value |= 8 >> offset
        digits.append(format(value, "X"))
    return "".join(digits)


def hex_to_bits(hex_string: str) -> List[bool]:
    """Operación inversa de bits_to_hex."""
    bits = []
    for char in hex_string:
        value = int(char, 16)
        bits.extend(bool(value & (8 >> offset)) for offset in range(4))
    return bits


def fields_from_bitmap(hex_string: str, first_field: int = 1) -> Set[int]:
    """Devuelve los números de DE marcados en un bitmap hexadecimal."""
    return {
        first_field + index
        for index, present in enumerate(hex_to_bits(hex_string))
        if present
    }


def bitmap_from_fields(fields: Iterable[int], first_field: int = 1, size: int = 64) -> str:
    bits = [False] * size
    for n in fields:
        if first_field <= n < first_field + size:
            bits[n - first_field] = True
    return bits_to_hex(bits)
