# message/builder.py
"""
Construcción del mensaje ISO 8583 en formato de cable.
"""

import logging
from typing import Dict, Optional, Union

from ..catalog import FieldCatalog, FieldDefinition, FieldFormat
from .models import (
    IsoMessage, FormatWarning,
    MTI_FIELD, SECONDARY_BITMAP_FIELD, MAX_FIELD, DEFAULT_MTI
)
from .bitmap import bits_to_hex
from .generator import RandomValueGenerator

logger = logging.getLogger(__name__)

# Claves derivadas que nunca se asignan directamente
DERIVED_KEYS = {"primarybitmap", "secondarybitmap"}


class MessageBuilder:
    """Acumula valores de DE y serializa MTI + bitmaps + campos."""

    def __init__(
        self,
        catalog: FieldCatalog,
        message: Optional[IsoMessage] = None,
        generator: Optional[RandomValueGenerator] = None,
        default_mti: str = DEFAULT_MTI
    ):
        self.catalog = catalog
        self.message = message if message is not None else IsoMessage()
        self.generator = generator or RandomValueGenerator()
        self.default_mti = default_mti

    def set_field(self, field_id: Union[str, int], value: str, manual: bool = True) -> Optional[int]:
        """
        Asigna el valor de un DE.

        Args:
            field_id: Número de DE, "MTI" o nombre de bitmap (ignorado)
            value: Valor en texto
            manual: Marca el DE como actualizado por el autor del caso

        Returns:
            Número de campo asignado o None si la clave fue ignorada
        """
        key = str(field_id).strip()

        if key.upper() == "MTI":
            number = MTI_FIELD
        elif key.lower() in DERIVED_KEYS:
            return None
        else:
            try:
                number = int(key)
            except ValueError:
                self._warn("INVALID_FIELD_KEY", f"Clave de campo no numérica ignorada: '{key}'", key)
                return None
            if number == SECONDARY_BITMAP_FIELD:
                # El bit 1 se deriva de la presencia de campos 65-128
                return None
            if number != MTI_FIELD and not 2 <= number <= MAX_FIELD:
                self._warn("INVALID_FIELD_KEY", f"Número de campo fuera de rango ignorado: {number}", key)
                return None

        value = "" if value is None else str(value)
        if number != MTI_FIELD:
            value = self._clip(number, value)

        self.message.fields[number] = value
        if manual:
            self.message.manually_updated.add(number)
        return number

    def apply_test_data(self, field_name: str, value: str, data_type: Optional[str] = None) -> Optional[int]:
        """Aplica una fila de datos de prueba resolviendo el DE por nombre canónico."""
        definition = self._resolve(field_name)
        if definition is None:
            key = str(field_name).strip()
            if key.upper() == "MTI" or key.isdigit():
                return self.set_field(key, value)
            self._warn("UNKNOWN_FIELD", f"No se encontró campo para '{field_name}'", str(field_name))
            return None

        if data_type and definition.data_type.lower() != str(data_type).strip().lower():
            self._warn(
                "TYPE_MISMATCH",
                f"Tipo de dato distinto para DE {definition.field_id}: "
                f"esperado {definition.data_type}, recibido {data_type}",
                definition.field_id
            )

        if definition.is_mti:
            return self.set_field("MTI", value)
        return self.set_field(definition.field_id, value)

    def apply_defaults(self):
        """Genera valores para los DE activos no actualizados manualmente."""
        message = self.message
        if MTI_FIELD not in message.fields and MTI_FIELD not in message.manually_updated:
            message.fields[MTI_FIELD] = self.default_mti

        for definition in self.catalog.active_fields():
            try:
                number = int(definition.field_id)
            except ValueError:
                continue
            if number in message.manually_updated:
                continue
            length = definition.effective_max_length or 0
            value = self.generator.generate(definition.data_type, length)
            self.set_field(number, value, manual=False)

    def build(self) -> str:
        """Serializa el mensaje al formato de cable ISO 8583."""
        message = self.message
        parts = [message.mti or self.default_mti]

        has_secondary = message.has_secondary_fields()
        if message.has_primary_fields() or has_secondary:
            parts.append(bits_to_hex(message.primary_bitmap))
        if has_secondary:
            parts.append(bits_to_hex(message.secondary_bitmap))

        for number in message.data_fields():
            parts.append(self._encode_field(number, message.fields[number]))

        return "".join(parts)

    def build_debug_view(self) -> Dict[str, str]:
        """Vista JSON equivalente: MTI, bitmaps y Field_<n> con prefijo de longitud."""
        message = self.message
        view = {"MTI": message.mti or self.default_mti}

        has_secondary = message.has_secondary_fields()
        if message.has_primary_fields() or has_secondary:
            view["PrimaryBitmap"] = bits_to_hex(message.primary_bitmap)
        if has_secondary:
            view["SecondaryBitmap"] = bits_to_hex(message.secondary_bitmap)

        for number in message.data_fields():
            view[f"Field_{number}"] = self._encode_field(number, message.fields[number])

        return view

    def reset(self):
        self.message.reset()

    def _encode_field(self, number: int, value: str) -> str:
        definition = self.catalog.get(number)
        field_format = definition.format if definition else FieldFormat.FIXED
        if field_format.prefix_length:
            return str(len(value)).zfill(field_format.prefix_length) + value
        return value

    def _clip(self, number: int, value: str) -> str:
        definition = self.catalog.get(number)
        if definition is None:
            return value
        max_length = definition.wire_max_length
        if max_length is not None and len(value) > max_length:
            self._warn(
                "VALUE_TRUNCATED",
                f"Valor de DE {number} excede longitud máxima {max_length} (truncado)",
                str(number)
            )
            return value[:max_length]
        return value

    def _resolve(self, field_name: str) -> Optional[FieldDefinition]:
        key = str(field_name).strip()
        if key.upper() == "MTI":
            return self.catalog.get("0")
        if key.isdigit():
            return self.catalog.get(key)
        return self.catalog.find_by_name(key)

    def _warn(self, code: str, text: str, field_id: Optional[str] = None):
        logger.warning(text)
        self.message.warnings.append(FormatWarning(code=code, message=text, field_id=field_id))
