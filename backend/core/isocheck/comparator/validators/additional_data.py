# comparator/validators/additional_data.py
"""
Regla DE 111: datos adicionales con bitmap propio.

Estructura: identificador de formato[0:2], longitud[2:5], bitmap
primario de 8 dígitos hex[5:13] y, si el bit 32 está activo, un bitmap
secundario de 8 dígitos hex tras los campos primarios (campos 33-64).
"""

from typing import Any, Dict, List, Optional

from ...catalog import RuleKind
from ...message.bitmap import hex_to_bits
from ..models import ComparisonContext, FieldOutcome
from ..json_path import MISSING
from ..errors import ComparatorError
from .base_rule import BaseRule, DetailCollector, section

FORMAT_PATH = "transaction.additionalData.formatIdentifier"
CNP_PATH = "transaction.additionalData.isCnp"

# formato -> bit que transporta el indicador de tarjeta no presente
CNP_BITS = {"MD": 5, "MC": 7}

SECONDARY_BITMAP_BIT = 32
BLOCK_SIZE = 32


class AdditionalDataRule(BaseRule):

    def __init__(self):
        super().__init__(
            rule_id=RuleKind.ADDITIONAL_DATA,
            description="Datos adicionales con bitmap"
        )

    def validate(self, context: ComparisonContext) -> List[FieldOutcome]:
        value = context.expected
        if len(value) < 14:
            return [self.failed(context, "Invalid DE 111 length")]

        format_id = value[0:2]
        actual_format = context.value_at(FORMAT_PATH)
        if format_id != actual_format:
            return [self.failed(context, actual_format, actual_format)]

        identifiers = section(context.rules, "formatIdentifiers")
        format_config = identifiers.get(format_id)
        if not isinstance(format_config, dict):
            return [self.failed(context, f"Unsupported format identifier: {format_id}")]

        paths = format_config.get("paths")
        if not isinstance(paths, list):
            return [self.failed(context, "Invalid format configuration - missing paths array")]
        field_paths = {path[path.rfind(".") + 1:]: path for path in paths}

        details = DetailCollector(separator="; ")
        primary_bits = hex_to_bits(value[5:13])
        position = self._process_block(
            context, details, format_id, value, 13, primary_bits,
            format_config.get("primaryBitmap", {}).get("fields", {}), field_paths, first_bit=1
        )

        if primary_bits[SECONDARY_BITMAP_BIT - 1]:
            secondary_hex = value[position:position + 8]
            if len(secondary_hex) < 8:
                raise ComparatorError("Secondary bitmap exceeds DE 111 data")
            self._process_block(
                context, details, format_id, value, position + 8, hex_to_bits(secondary_hex),
                format_config.get("secondaryBitmap", {}).get("fields", {}), field_paths,
                first_bit=BLOCK_SIZE + 1
            )

        if details.all_valid:
            return [self.passed(context, value)]
        return [self.failed(context, details.render())]

    def _process_block(
        self,
        context: ComparisonContext,
        details: DetailCollector,
        format_id: str,
        value: str,
        position: int,
        bits: List[bool],
        fields: Dict[str, Any],
        field_paths: Dict[str, str],
        first_bit: int
    ) -> int:
        """
        Recorre un bloque de 32 bits y compara los campos presentes.

        Solo los bits con configuración avanzan la posición; el bit 32
        del bloque primario indica bitmap secundario y no consume datos.

        Returns:
            Posición tras el último campo leído
        """
        for offset in range(BLOCK_SIZE):
            bit = first_bit + offset
            bit_config = fields.get(str(bit))
            if not bit_config or not bits[offset]:
                continue

            length = int(bit_config.get("length", 0))
            name = str(bit_config.get("name", ""))
            field_value = value[position:position + length]
            if len(field_value) < length:
                raise ComparatorError(f"Field {bit} ({name}) exceeds DE 111 data")

            path = field_paths.get(name)
            if path is not None:
                if bit == CNP_BITS.get(format_id) and path == CNP_PATH:
                    self._check_cnp(context, details, bit, field_value)
                else:
                    actual = context.value_at(path)
                    if field_value != actual:
                        details.error(
                            f"Field {bit} ({name}) mismatch: expected={field_value}, actual={actual}"
                        )

            if bit != SECONDARY_BITMAP_BIT:
                position += length
        return position

    @staticmethod
    def _check_cnp(context: ComparisonContext, details: DetailCollector, bit: int, field_value: str):
        """0 exige isCnp = true; 1 exige que isCnp no esté presente."""
        if field_value == "0":
            actual: Optional[str] = context.value_at(CNP_PATH)
            if actual != "true":
                details.error(f"Field {bit} (isCnp) mismatch: expected=true, actual={actual}")
        elif field_value == "1":
            node = context.node_at(CNP_PATH)
            if node is not MISSING and node is not None:
                details.error(f"Field {bit} (isCnp) error: should not be present when value is 1")
        else:
            details.error(f"Field {bit} (isCnp) invalid value: {field_value}")
