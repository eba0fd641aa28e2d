# backend/app/api/v1/endpoints/validation.py
from fastapi import APIRouter, HTTPException, Depends, UploadFile, File
from fastapi.concurrency import run_in_threadpool
from ....models.message import FormatWarningModel
from ....models.validation import (
    ValidateRequest, ValidateResponse, RunRequest, RowOutcomeModel,
    BatchResponse, FieldOutcomeModel
)
from ....services.validation_service import (
    ValidationService, get_field_catalog, get_canonical_service
)
from ....core.config import get_settings
from .....core.isocheck.catalog import FieldCatalog
from .....core.isocheck.transport import CanonicalService
import logging

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)


@router.post("/validate", response_model=ValidateResponse)
def validate_message(
        request: ValidateRequest,
        catalog: FieldCatalog = Depends(get_field_catalog)
):
    """Valida un mensaje contra una respuesta canónica proporcionada (sin transporte)."""
    try:
        message, result = ValidationService.validate_fields(
            request.fields, request.canonical, catalog, request.field_ids
        )
    except ValueError as e:
        logger.error(f"Validation input error: {str(e)}")
        raise HTTPException(
            status_code=400,
            detail=f"Entrada inválida: {str(e)}"
        )

    return ValidateResponse(
        fields=[FieldOutcomeModel(**outcome.to_dict()) for _, outcome in result.sorted_items()],
        summary=str(result.summary(1)),
        all_passed=result.all_passed,
        warnings=[FormatWarningModel(**w.to_dict()) for w in message.warnings]
    )


@router.post("/run", response_model=RowOutcomeModel)
def run_case(
        request: RunRequest,
        catalog: FieldCatalog = Depends(get_field_catalog),
        canonical_service: CanonicalService = Depends(get_canonical_service)
):
    """
    Construye el mensaje, lo envía al servicio de canonicalización y valida
    los DEs informados. Un fallo de transporte devuelve 502.
    """
    outcome = ValidationService.run_case(request.case_id, request.entries, catalog, canonical_service)

    if outcome.error:
        raise HTTPException(
            status_code=502,
            detail=outcome.error
        )

    return RowOutcomeModel(**outcome.to_dict())


@router.post("/batch", response_model=BatchResponse)
async def run_batch(
        file: UploadFile = File(...),
        export: bool = False,
        catalog: FieldCatalog = Depends(get_field_catalog),
        canonical_service: CanonicalService = Depends(get_canonical_service)
):
    """
    Procesa un CSV de casos (case_id,field,value,type) y devuelve resultados agregados.
    El procesamiento es bloqueante (un POST por caso) y corre en el threadpool.
    """
    if not file.filename.lower().endswith(".csv"):
        raise HTTPException(
            status_code=400,
            detail="Solo se permiten archivos CSV"
        )

    content = await file.read()

    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=413,
            detail=f"Archivo demasiado grande. Máximo: {settings.MAX_UPLOAD_SIZE / (1024 * 1024):.0f}MB"
        )

    try:
        batch = await run_in_threadpool(
            ValidationService.run_batch, content, catalog, canonical_service, export=export
        )
    except ValueError as e:
        raise HTTPException(
            status_code=400,
            detail=f"CSV inválido: {str(e)}"
        )

    return BatchResponse(
        rows=[RowOutcomeModel(**outcome.to_dict()) for outcome in batch["outcomes"]],
        aggregated=batch["aggregated"].to_text(),
        report_summary=batch["report"].summary,
        exported_files=batch["exported_files"],
        load_errors=batch["load_errors"]
    )
