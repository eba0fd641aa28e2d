# catalog/models.py
"""
Modelos de datos del catálogo de campos ISO 8583.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from enum import Enum


class FieldFormat(Enum):
    FIXED = "fixed"
    LLVAR = "llvar"      # Prefijo de longitud de 2 dígitos
    LLLVAR = "lllvar"    # Prefijo de longitud de 3 dígitos

    @classmethod
    def from_config(cls, value: Optional[str]) -> "FieldFormat":
        """Cualquier valor distinto de llvar/lllvar se trata como fijo."""
        if not value:
            return cls.FIXED
        normalized = str(value).strip().lower()
        if normalized == cls.LLVAR.value:
            return cls.LLVAR
        if normalized == cls.LLLVAR.value:
            return cls.LLLVAR
        return cls.FIXED

    @property
    def prefix_length(self) -> int:
        if self is FieldFormat.LLVAR:
            return 2
        if self is FieldFormat.LLLVAR:
            return 3
        return 0

    @property
    def max_value_length(self) -> Optional[int]:
        """Longitud máxima representable por el prefijo (None en campos fijos)."""
        if not self.prefix_length:
            return None
        return 10 ** self.prefix_length - 1


class RuleKind(Enum):
    """Tipos de regla soportados. Conjunto cerrado."""
    EQUALITY = "equality"
    AMOUNT = "amount"
    CURRENCY = "currency"
    DATETIME = "datetime"
    MERCHANT_LOCATION = "merchant_location"
    POS_ENTRY_MODE = "pos_entry_mode"
    POS_CONDITION_CODE = "pos_condition_code"
    ORIGINAL_DATA = "original_data"
    ADDITIONAL_FEES = "additional_fees"
    ADDITIONAL_AMOUNTS = "additional_amounts"
    REPLACEMENT_AMOUNTS = "replacement_amounts"
    NATIONAL_POS_GEOGRAPHIC_DATA = "national_pos_geographic_data"
    NETWORK_DATA = "network_data"
    AVS_DATA = "avs_data"
    ACQUIRER_TRACE_DATA = "acquirer_trace_data"
    ISSUER_TRACE_DATA = "issuer_trace_data"
    INCREMENTAL_AUTH_DATA = "incremental_auth_data"
    ADVICE_REVERSAL_CODE = "advice_reversal_code"
    ADDITIONAL_DATA = "additional_data"


# Marcadores de comentario que invalidan una ruta canónica
COMMENT_MARKERS = ("-->", "Need to discuss", "not canonicalize")
COMMENT_PREFIX = "Tag :"


def is_usable_path(path: str) -> bool:
    """Indica si una ruta canónica es utilizable (no es un comentario)."""
    if not path or not path.strip():
        return False
    if path.startswith(COMMENT_PREFIX):
        return False
    return not any(marker in path for marker in COMMENT_MARKERS)


@dataclass
class PairedField:
    """Emparejamiento fecha/hora entre dos DEs."""
    field_id: str
    pair_type: str                           # "date" o "time": rol del DE actual


@dataclass
class ValidationRule:
    """Descriptor de regla de validación de un DE."""
    kind: RuleKind = RuleKind.EQUALITY
    skip: bool = False
    skip_reason: Optional[str] = None
    required_mti: Optional[str] = None
    paired_field: Optional[PairedField] = None
    format: Dict[str, Any] = field(default_factory=dict)
    rules: Dict[str, Any] = field(default_factory=dict)


@dataclass
class FieldDefinition:
    """Configuración inmutable de un DE."""
    field_id: str                            # "0" = MTI
    name: Optional[str] = None               # Nombre canónico para búsqueda inversa
    format: FieldFormat = FieldFormat.FIXED
    length: Optional[int] = None
    max_length: Optional[int] = None
    data_type: str = "ans"
    active: bool = False
    canonical_paths: List[str] = field(default_factory=list)
    validation: Optional[ValidationRule] = None

    @property
    def effective_max_length(self) -> Optional[int]:
        return self.max_length if self.max_length is not None else self.length

    @property
    def wire_max_length(self) -> Optional[int]:
        """Máximo configurado, acotado por lo que admite el prefijo LLVAR/LLLVAR."""
        limits = [n for n in (self.effective_max_length, self.format.max_value_length) if n is not None]
        return min(limits) if limits else None

    @property
    def usable_paths(self) -> List[str]:
        return [p.strip() for p in self.canonical_paths if is_usable_path(p)]

    @property
    def is_mti(self) -> bool:
        return self.field_id == "0"
