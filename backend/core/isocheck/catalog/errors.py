# catalog/errors.py
"""
Errores de configuración del catálogo de campos.
"""

from typing import Optional


class ConfigError(Exception):
    """Catálogo malformado o entrada de DE inválida."""

    def __init__(self, code: str, message: str, field_id: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.field_id = field_id

    def __repr__(self) -> str:
        return f"<ConfigError {self.code}: {self.message}>"


class CatalogErrors:
    """Factory de errores del catálogo."""

    @staticmethod
    def file_not_found(path: str) -> ConfigError:
        return ConfigError(
            code="CONFIG_FILE_NOT_FOUND",
            message=f"Archivo de configuración no encontrado: {path}"
        )

    @staticmethod
    def invalid_json(path: str, details: str = "") -> ConfigError:
        return ConfigError(
            code="CONFIG_INVALID_JSON",
            message=f"JSON inválido en {path}: {details}"
        )

    @staticmethod
    def not_an_object() -> ConfigError:
        return ConfigError(
            code="CONFIG_NOT_AN_OBJECT",
            message="La configuración debe ser un objeto JSON indexado por DE"
        )

    @staticmethod
    def malformed_entry(field_id: str, details: str = "") -> ConfigError:
        return ConfigError(
            code="CONFIG_MALFORMED_ENTRY",
            message=f"Entrada malformada para DE {field_id}: {details}",
            field_id=field_id
        )

    @staticmethod
    def unknown_rule_kind(field_id: str, kind: str) -> ConfigError:
        return ConfigError(
            code="CONFIG_UNKNOWN_RULE_KIND",
            message=f"Tipo de regla desconocido para DE {field_id}: '{kind}'",
            field_id=field_id
        )

    @staticmethod
    def invalid_length(field_id: str, value) -> ConfigError:
        return ConfigError(
            code="CONFIG_INVALID_LENGTH",
            message=f"Longitud inválida para DE {field_id}: {value!r}",
            field_id=field_id
        )
