# isocheck/orchestrator.py
"""
Orquestador principal: construye, canonicaliza y valida cada caso de prueba.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .catalog import FieldCatalog
from .message import IsoMessage, MessageBuilder, RandomValueGenerator, FormatWarning, DEFAULT_MTI
from .message import ResponseCheck, check_response, expected_response_mti
from .test_data import TestCase
from .comparator import RuleDispatcher, RuleRegistry, ValidationResult, AggregatedResults
from .transport import CanonicalService, ParserService, TransportError

logger = logging.getLogger(__name__)


@dataclass
class RowOutcome:
    """Resultado del procesamiento de una fila."""
    row_index: int
    case_id: Optional[str]
    wire_message: str = ""
    debug_view: Dict[str, str] = field(default_factory=dict)
    result: Optional[ValidationResult] = None
    warnings: List[FormatWarning] = field(default_factory=list)
    error: Optional[str] = None
    response: Optional[ResponseCheck] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.result is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "row_index": self.row_index,
            "case_id": self.case_id,
            "wire_message": self.wire_message,
            "debug_view": self.debug_view,
            "fields": [outcome.to_dict() for _, outcome in self.result.sorted_items()] if self.result else [],
            "summary": str(self.result.summary(self.row_index)) if self.result else None,
            "warnings": [warning.to_dict() for warning in self.warnings],
            "error": self.error,
            "response": self.response.to_dict() if self.response else None
        }


class ValidationOrchestrator:
    """
    Coordina mensaje, transporte y comparación para cada caso de prueba.

    Los fallos de transporte o de JSON canónico marcan la fila como
    errónea sin validación parcial; el resto de filas continúa. Si hay
    servicio de parseo, la respuesta del emisor (MTI y DE 39) se registra
    en la fila sin afectar la validación.
    """

    def __init__(
        self,
        catalog: FieldCatalog,
        canonical_service: CanonicalService,
        generator: Optional[RandomValueGenerator] = None,
        registry: Optional[RuleRegistry] = None,
        parser_service: Optional[ParserService] = None,
        default_mti: str = DEFAULT_MTI
    ):
        self.catalog = catalog
        self.canonical_service = canonical_service
        self.generator = generator or RandomValueGenerator()
        self.dispatcher = RuleDispatcher(catalog, registry=registry)
        self.parser_service = parser_service
        self.default_mti = default_mti

    def process_case(self, test_case: TestCase, row_index: int) -> RowOutcome:
        """
        Procesa un caso de prueba completo.

        Args:
            test_case: Caso con sus ternas (campo, valor, tipo)
            row_index: Número de fila para correlación en reportes

        Returns:
            RowOutcome con el mensaje, el resultado y las advertencias
        """
        message = IsoMessage()
        builder = MessageBuilder(
            self.catalog, message=message, generator=self.generator, default_mti=self.default_mti
        )

        for entry in test_case.entries:
            builder.apply_test_data(entry.field_name, entry.value, entry.data_type)
        builder.apply_defaults()

        outcome = RowOutcome(
            row_index=row_index,
            case_id=test_case.case_id,
            wire_message=builder.build(),
            debug_view=builder.build_debug_view(),
            warnings=list(message.warnings)
        )

        try:
            canonical_text = self.canonical_service.send_for_canonicalization(outcome.wire_message)
        except TransportError as e:
            logger.error(f"Fila {row_index}: fallo de transporte ({e.code}): {e.message}")
            outcome.error = e.message
            return outcome

        try:
            canonical = json.loads(canonical_text)
        except ValueError as e:
            logger.error(f"Fila {row_index}: respuesta canónica no es JSON válido: {e}")
            outcome.error = f"Invalid canonical JSON: {e}"
            return outcome

        outcome.result = self.dispatcher.validate_message(
            message,
            canonical,
            field_ids=sorted(message.manually_updated),
            row_index=row_index
        )

        if self.parser_service is not None:
            outcome.response = self._check_response(message.mti or self.default_mti, outcome.wire_message, row_index)
        return outcome

    def _check_response(self, request_mti: str, wire_message: str, row_index: int) -> ResponseCheck:
        try:
            parsed = self.parser_service.send_to_parser(wire_message)
            return check_response(request_mti, parsed, self.catalog)
        except TransportError as e:
            logger.warning(f"Fila {row_index}: sin respuesta del parser ({e.code}): {e.message}")
            error = e.message
        except ValueError as e:
            logger.warning(f"Fila {row_index}: respuesta del parser no es JSON válido: {e}")
            error = f"Invalid parser JSON: {e}"
        return ResponseCheck(expected_mti=expected_response_mti(request_mti), error=error)

    def process_cases(
        self,
        cases: List[TestCase],
        start_index: int = 1
    ) -> Tuple[List[RowOutcome], AggregatedResults]:
        """Procesa todos los casos y agrega los resultados."""
        print(f"\n{'='*80}")
        print(f"🚀 INICIANDO VALIDACIÓN ISO 8583")
        print(f"   Casos: {len(cases)}")
        print(f"{'='*80}")

        outcomes: List[RowOutcome] = []
        aggregated = AggregatedResults()

        for offset, test_case in enumerate(cases):
            row_index = start_index + offset
            print(f"\n📥 Fila {row_index}: caso {test_case.case_id}")

            outcome = self.process_case(test_case, row_index)
            outcomes.append(outcome)

            if outcome.warnings:
                print(f"   ⚠ Advertencias de formato: {len(outcome.warnings)}")

            if outcome.error:
                print(f"   ❌ {outcome.error}")
                continue

            aggregated.add(outcome.result, row_index)
            print(f"   ✓ {outcome.result.summary(row_index)}")
            if outcome.response is not None:
                response = outcome.response
                print(f"   ↩ Respuesta: MTI {response.mti} (esperado {response.expected_mti}), DE 39: {response.description or response.error}")

        errored = sum(1 for outcome in outcomes if outcome.error)
        print(f"\n📊 Filas procesadas: {len(outcomes)}, con error: {errored}")

        return outcomes, aggregated
