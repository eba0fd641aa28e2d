# message/models.py
"""
Modelos del mensaje ISO 8583 en memoria.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Set, Optional

MTI_FIELD = 0
SECONDARY_BITMAP_FIELD = 1
MAX_FIELD = 128
PRIMARY_LAST_FIELD = 64
DEFAULT_MTI = "0100"


@dataclass
class FormatWarning:
    """Advertencia de formato; nunca bloquea la construcción del mensaje."""
    code: str                                # VALUE_TRUNCATED, TYPE_MISMATCH, UNKNOWN_FIELD, INVALID_FIELD_KEY
    message: str
    field_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"code": self.code, "message": self.message, "field_id": self.field_id}


@dataclass
class IsoMessage:
    """Mensaje de un caso de prueba. Los bitmaps se derivan de los campos."""
    fields: Dict[int, str] = field(default_factory=dict)    # 0 = MTI, 1-128 = DE
    manually_updated: Set[int] = field(default_factory=set)
    warnings: List[FormatWarning] = field(default_factory=list)

    @property
    def mti(self) -> Optional[str]:
        return self.fields.get(MTI_FIELD)

    def data_fields(self) -> List[int]:
        """Números de DE poblados (sin MTI), en orden ascendente."""
        return sorted(n for n in self.fields if n != MTI_FIELD)

    def has_primary_fields(self) -> bool:
        return any(1 <= n <= PRIMARY_LAST_FIELD for n in self.fields)

    def has_secondary_fields(self) -> bool:
        return any(n > PRIMARY_LAST_FIELD for n in self.fields)

    @property
    def primary_bitmap(self) -> List[bool]:
        bits = [False] * 64
        for n in self.fields:
            if 1 <= n <= PRIMARY_LAST_FIELD:
                bits[n - 1] = True
        if self.has_secondary_fields():
            bits[0] = True
        return bits

    @property
    def secondary_bitmap(self) -> List[bool]:
        bits = [False] * 64
        for n in self.fields:
            if PRIMARY_LAST_FIELD < n <= MAX_FIELD:
                bits[n - PRIMARY_LAST_FIELD - 1] = True
        return bits

    def get(self, field_number: int) -> Optional[str]:
        return self.fields.get(field_number)

    def reset(self):
        """Limpia el estado entre filas."""
        self.fields.clear()
        self.manually_updated.clear()
        self.warnings.clear()
