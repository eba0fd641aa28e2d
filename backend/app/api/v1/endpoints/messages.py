# backend/app/api/v1/endpoints/messages.py
from fastapi import APIRouter, Depends
from ....models.message import BuildMessageRequest, BuildMessageResponse, FormatWarningModel
from ....services.validation_service import ValidationService, get_field_catalog
from .....core.isocheck.catalog import FieldCatalog
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/build", response_model=BuildMessageResponse)
def build_message(
        request: BuildMessageRequest,
        catalog: FieldCatalog = Depends(get_field_catalog)
):
    """
    Construye un mensaje ISO 8583 a partir de valores por DE y ternas de prueba.
    Las advertencias de formato (truncado, tipo distinto) no bloquean la construcción.
    """
    builder = ValidationService.build_message(request, catalog)

    return BuildMessageResponse(
        wire_message=builder.build(),
        debug_view=builder.build_debug_view(),
        warnings=[FormatWarningModel(**w.to_dict()) for w in builder.message.warnings]
    )
