# comparator/rule_dispatcher.py
"""
Despacho de DEs a su comparador según el tipo de regla.
"""

import json
import logging
from typing import Any, Iterable, List, Optional, Union

from ..catalog import FieldCatalog, RuleKind
from ..message import IsoMessage, MTI_FIELD
from .models import ComparisonContext, FieldOutcome
from .errors import ComparatorErrors
from .json_path import JsonPathResolver
from .results import ValidationResult
from .rule_registry import RuleRegistry

logger = logging.getLogger(__name__)


class RuleDispatcher:
    """Valida los DEs de un mensaje contra una respuesta canónica."""

    def __init__(
        self,
        catalog: FieldCatalog,
        registry: Optional[RuleRegistry] = None,
        resolver: Optional[JsonPathResolver] = None
    ):
        self.catalog = catalog
        self.registry = registry or RuleRegistry()
        self.resolver = resolver or JsonPathResolver()

    def validate_message(
        self,
        message: IsoMessage,
        canonical_json: Union[str, Any],
        field_ids: Optional[Iterable[Union[int, str]]] = None,
        row_index: Optional[int] = None
    ) -> ValidationResult:
        """
        Valida DEs del mensaje.

        Args:
            message: Mensaje ISO construido
            canonical_json: Respuesta canónica (texto JSON o árbol ya decodificado)
            field_ids: DEs a validar; por defecto todos los DEs 1-128 presentes
            row_index: Fila de origen para correlación en reportes

        Returns:
            ValidationResult con un resultado por DE

        Raises:
            json.JSONDecodeError: Si canonical_json es texto no parseable
        """
        canonical = json.loads(canonical_json) if isinstance(canonical_json, str) else canonical_json
        result = ValidationResult(row_index=row_index)

        for field_number in self._target_fields(message, field_ids):
            expected = message.get(field_number)
            if expected is None:
                logger.debug("DE %s no presente en el mensaje, se omite", field_number)
                continue

            for outcome in self.validate_field(message, canonical, str(field_number), expected):
                result.record(outcome)

        return result

    def validate_field(
        self,
        message: IsoMessage,
        canonical: Any,
        field_id: str,
        expected: str
    ) -> List[FieldOutcome]:
        """Aplica omisión, selección de comparador y ejecución para un DE."""
        definition = self.catalog.get(field_id)
        if definition is None:
            return [ComparatorErrors.missing_definition(field_id, expected)]

        rule = definition.validation
        if rule is not None:
            if rule.skip:
                return [ComparatorErrors.skipped(field_id, expected, rule.skip_reason)]
            if rule.required_mti and rule.required_mti != message.mti:
                return [ComparatorErrors.skipped(
                    field_id, expected,
                    rule.skip_reason or f"DE {field_id} validation only applicable for MTI {rule.required_mti}"
                )]

        kind = rule.kind if rule is not None else RuleKind.EQUALITY
        comparator = self.registry.get_rule(kind)
        if comparator is None:
            return [ComparatorErrors.rule_execution_failed(
                field_id, expected, f"No comparator registered for '{kind.value}'"
            )]
        if not comparator.enabled:
            return [ComparatorErrors.rule_disabled(field_id, expected, kind.value)]

        context = ComparisonContext(
            field_id=field_id,
            expected=expected,
            definition=definition,
            canonical=canonical,
            message=message,
            resolver=self.resolver
        )

        try:
            return comparator.validate(context)
        except Exception as e:
            logger.warning("Error validando DE %s con %s: %s", field_id, kind.value, e)
            return [ComparatorErrors.rule_execution_failed(field_id, expected, str(e))]

    def _target_fields(self, message: IsoMessage, field_ids: Optional[Iterable[Union[int, str]]]) -> List[int]:
        if field_ids is None:
            targets = list(message.data_fields())
            if MTI_FIELD in message.fields:
                targets.insert(0, MTI_FIELD)
        else:
            targets = sorted({int(fid) for fid in field_ids})

        # La MTI solo se valida si el catálogo la define
        return [n for n in targets if n != MTI_FIELD or str(MTI_FIELD) in self.catalog]
