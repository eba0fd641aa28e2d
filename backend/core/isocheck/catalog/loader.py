# catalog/loader.py
"""
Carga del catálogo de campos desde JSON.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

from .models import (
    FieldDefinition, FieldFormat, ValidationRule, PairedField, RuleKind
)
from .errors import ConfigError, CatalogErrors

logger = logging.getLogger(__name__)


class FieldCatalog:
    """Catálogo inmutable de definiciones por DE, cargado una sola vez."""

    def __init__(self, definitions: Dict[str, FieldDefinition], errors: Optional[List[ConfigError]] = None):
        self._definitions = dict(definitions)
        self._by_name = {
            d.name.strip().lower(): d for d in self._definitions.values() if d.name
        }
        self.errors: List[ConfigError] = list(errors or [])

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "FieldCatalog":
        """
        Carga el catálogo desde un archivo JSON.

        Args:
            path: Ruta al archivo de configuración

        Returns:
            Catálogo cargado

        Raises:
            ConfigError si el archivo no existe o no es JSON válido
        """
        file_path = Path(path)
        if not file_path.exists():
            raise CatalogErrors.file_not_found(str(file_path))

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogErrors.invalid_json(str(file_path), str(e)) from e

        catalog = cls.from_dict(data)
        logger.info(f"Field catalog loaded from {file_path}: {len(catalog)} fields, {len(catalog.errors)} errors")
        return catalog

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldCatalog":
        """Construye el catálogo; las entradas malformadas se registran y se omiten."""
        if not isinstance(data, dict):
            raise CatalogErrors.not_an_object()

        definitions = {}
        errors = []

        for raw_id, entry in data.items():
            field_id = cls._normalize_id(str(raw_id))
            try:
                definitions[field_id] = cls._parse_entry(field_id, entry)
            except ConfigError as e:
                logger.warning(f"Skipping DE {field_id}: {e.message}")
                errors.append(e)

        return cls(definitions, errors)

    @staticmethod
    def _normalize_id(raw_id: str) -> str:
        raw_id = raw_id.strip()
        if raw_id.upper() == "MTI":
            return "0"
        if raw_id.isdigit():
            return str(int(raw_id))
        return raw_id

    @classmethod
    def _parse_entry(cls, field_id: str, entry: Any) -> FieldDefinition:
        if not isinstance(entry, dict):
            raise CatalogErrors.malformed_entry(field_id, "se esperaba un objeto")

        canonical = entry.get("canonical", [])
        if isinstance(canonical, str):
            canonical = [canonical]
        elif not isinstance(canonical, list):
            raise CatalogErrors.malformed_entry(field_id, "'canonical' debe ser texto o lista")

        return FieldDefinition(
            field_id=field_id,
            name=entry.get("name"),
            format=FieldFormat.from_config(entry.get("format")),
            length=cls._parse_length(field_id, entry.get("length")),
            max_length=cls._parse_length(field_id, entry.get("max_length")),
            data_type=str(entry.get("type", "ans")),
            active=bool(entry.get("active", False)),
            canonical_paths=[str(p) for p in canonical],
            validation=cls._parse_validation(field_id, entry.get("validation"))
        )

    @staticmethod
    def _parse_length(field_id: str, value: Any) -> Optional[int]:
        if value is None:
            return None
        try:
            length = int(value)
        except (TypeError, ValueError):
            raise CatalogErrors.invalid_length(field_id, value)
        if length < 0:
            raise CatalogErrors.invalid_length(field_id, value)
        return length

    @staticmethod
    def _parse_validation(field_id: str, raw: Any) -> Optional[ValidationRule]:
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise CatalogErrors.malformed_entry(field_id, "'validation' debe ser un objeto")

        kind_value = raw.get("kind", raw.get("type"))
        if kind_value is None or kind_value == "":
            kind = RuleKind.EQUALITY
        else:
            try:
                kind = RuleKind(str(kind_value).strip().lower())
            except ValueError:
                raise CatalogErrors.unknown_rule_kind(field_id, str(kind_value))

        format_spec = raw.get("format") or {}
        if not isinstance(format_spec, dict):
            format_spec = {}

        paired = None
        paired_raw = format_spec.get("pairedField")
        if isinstance(paired_raw, dict) and paired_raw.get("field"):
            paired = PairedField(
                field_id=str(paired_raw["field"]).strip(),
                pair_type=str(paired_raw.get("type", "")).strip().lower()
            )

        rules = raw.get("rules") or {}
        if not isinstance(rules, dict):
            raise CatalogErrors.malformed_entry(field_id, "'rules' debe ser un objeto")

        required_mti = raw.get("requiredMti")

        return ValidationRule(
            kind=kind,
            skip=bool(raw.get("skip", False)),
            skip_reason=raw.get("skipReason", raw.get("reason")),
            required_mti=str(required_mti) if required_mti is not None else None,
            paired_field=paired,
            format=format_spec,
            rules=rules
        )

    def get(self, field_id: Union[str, int]) -> Optional[FieldDefinition]:
        return self._definitions.get(self._normalize_id(str(field_id)))

    def find_by_name(self, name: str) -> Optional[FieldDefinition]:
        """Búsqueda inversa nombre canónico -> definición (sin distinguir mayúsculas)."""
        if not name:
            return None
        return self._by_name.get(name.strip().lower())

    def active_fields(self) -> List[FieldDefinition]:
        return [d for d in self._definitions.values() if d.active and not d.is_mti]

    def field_ids(self) -> List[str]:
        return list(self._definitions.keys())

    def __contains__(self, field_id) -> bool:
        return self.get(field_id) is not None

    def __len__(self) -> int:
        return len(self._definitions)
