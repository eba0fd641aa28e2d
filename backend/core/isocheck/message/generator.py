# message/generator.py
"""
Generación de valores aleatorios para campos activos.
"""

import random
import string
from typing import Optional

NUMERIC_TYPES = {"n", "numeric", "number"}
ALPHA_TYPES = {"a", "alpha"}
HEX_TYPES = {"b", "hex", "binary"}


class RandomValueGenerator:
    """Genera valores del tipo y longitud configurados."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def generate(self, data_type: str, length: int) -> str:
        if length is None or length <= 0:
            return ""
        alphabet = self._alphabet_for(data_type)
        return "".join(self._random.choice(alphabet) for _ in range(length))

    @staticmethod
    def _alphabet_for(data_type: str) -> str:
        normalized = (data_type or "").strip().lower()
        if normalized in NUMERIC_TYPES:
            return string.digits
        if normalized in ALPHA_TYPES:
            return string.ascii_uppercase
        if normalized in HEX_TYPES:
            return "0123456789ABCDEF"
        return string.ascii_uppercase + string.digits
