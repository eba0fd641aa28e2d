"""
Servicio de construcción y validación de mensajes ISO 8583.
"""

import json
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from ..core.config import get_settings
from ..models.message import BuildMessageRequest, TestDataEntryModel
from ...core.isocheck import ValidationOrchestrator, RowOutcome
from ...core.isocheck.catalog import FieldCatalog
from ...core.isocheck.message import IsoMessage, MessageBuilder
from ...core.isocheck.test_data import TestCase, TestDataEntry, TestDataLoader
from ...core.isocheck.comparator import RuleDispatcher, ValidationResult
from ...core.isocheck.transport import CanonicalClient, CanonicalService, ParserService
from ...core.isocheck.reporting import ReportingOrchestrator

logger = logging.getLogger(__name__)


@lru_cache()
def get_field_catalog() -> FieldCatalog:
    """Catálogo de campos cargado una sola vez desde FIELD_CONFIG_PATH."""
    settings = get_settings()
    return FieldCatalog.from_file(settings.FIELD_CONFIG_PATH)


def get_canonical_service() -> CanonicalService:
    return CanonicalClient.from_settings(get_settings())


def _orchestrator(catalog: FieldCatalog, canonical_service: CanonicalService) -> ValidationOrchestrator:
    """El servicio de parseo se usa solo si el colaborador lo implementa."""
    settings = get_settings()
    parser_service = None
    if settings.CHECK_RESPONSE and isinstance(canonical_service, ParserService):
        parser_service = canonical_service
    return ValidationOrchestrator(
        catalog,
        canonical_service,
        parser_service=parser_service,
        default_mti=settings.DEFAULT_MTI
    )


class ValidationService:

    @staticmethod
    def build_message(request: BuildMessageRequest, catalog: FieldCatalog) -> MessageBuilder:
        """Construye el mensaje a partir de valores por DE y ternas de prueba."""
        builder = MessageBuilder(catalog, default_mti=get_settings().DEFAULT_MTI)

        if request.mti:
            builder.set_field("MTI", request.mti)
        for field_id, value in request.fields.items():
            builder.set_field(field_id, value)
        for entry in request.entries:
            builder.apply_test_data(entry.field, entry.value, entry.type)

        if request.apply_defaults:
            builder.apply_defaults()

        logger.info(f"Mensaje construido con {len(builder.message.data_fields())} DEs")
        return builder

    @staticmethod
    def validate_fields(
        fields: Dict[str, str],
        canonical: Any,
        catalog: FieldCatalog,
        field_ids: Optional[List[str]] = None
    ) -> Tuple[IsoMessage, ValidationResult]:
        """
        Valida un mensaje conocido contra una respuesta canónica.

        Raises:
            ValueError: Si la respuesta canónica no es JSON válido
        """
        builder = MessageBuilder(catalog, default_mti=get_settings().DEFAULT_MTI)
        for field_id, value in fields.items():
            builder.set_field(field_id, value)

        if isinstance(canonical, str):
            canonical = json.loads(canonical)

        result = RuleDispatcher(catalog).validate_message(builder.message, canonical, field_ids=field_ids)
        return builder.message, result

    @staticmethod
    def run_case(
        case_id: str,
        entries: List[TestDataEntryModel],
        catalog: FieldCatalog,
        canonical_service: CanonicalService
    ) -> RowOutcome:
        """Construye, canonicaliza y valida un único caso."""
        test_case = TestCase(
            case_id=case_id,
            entries=[TestDataEntry(entry.field, entry.value, entry.type) for entry in entries]
        )
        orchestrator = _orchestrator(catalog, canonical_service)
        return orchestrator.process_case(test_case, row_index=1)

    @staticmethod
    def run_batch(
        raw_csv: bytes,
        catalog: FieldCatalog,
        canonical_service: CanonicalService,
        export: bool = False
    ) -> Dict[str, Any]:
        """
        Procesa un CSV de casos de prueba completo.

        Raises:
            ValueError: Si el CSV no contiene casos utilizables
        """
        cases, load_errors = TestDataLoader.load_bytes(raw_csv)
        if not cases:
            messages = "; ".join(error.message for error in load_errors) or "Sin casos de prueba"
            raise ValueError(messages)

        orchestrator = _orchestrator(catalog, canonical_service)
        outcomes, aggregated = orchestrator.process_cases(cases)

        reporter = ReportingOrchestrator()
        report = reporter.generate_report(outcomes, source="upload")

        exported = {}
        if export:
            exported = reporter.export_report(report, str(get_settings().OUTPUT_DIR))

        return {
            "outcomes": outcomes,
            "aggregated": aggregated,
            "report": report,
            "exported_files": exported,
            "load_errors": [
                {"code": e.code, "message": e.message, "row_index": e.row_index}
                for e in load_errors
            ]
        }

