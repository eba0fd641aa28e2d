from pydantic import BaseModel, Field, validator
from typing import Any, Dict, List, Optional

from .message import TestDataEntryModel, FormatWarningModel


class FieldOutcomeModel(BaseModel):
    field_id: str
    status: str
    expected: Optional[str] = None
    actual: Optional[str] = None
    detail: Optional[str] = None
    mapping: List[str] = Field(default_factory=list)


class ValidateRequest(BaseModel):
    """Valida un mensaje ya conocido contra una respuesta canónica, sin transporte"""

    fields: Dict[str, str] = Field(
        ...,
        description="Valores por número de DE; 'MTI' o '0' para el MTI"
    )
    canonical: Any = Field(
        ...,
        description="Respuesta canónica (objeto JSON o texto JSON)"
    )
    field_ids: Optional[List[str]] = Field(
        None,
        description="DEs a validar; por defecto todos los DEs presentes"
    )

    @validator('fields')
    def validate_fields(cls, v):
        if not v:
            raise ValueError("fields no puede estar vacío")
        return v


class ValidateResponse(BaseModel):
    fields: List[FieldOutcomeModel]
    summary: str
    all_passed: bool
    warnings: List[FormatWarningModel] = Field(default_factory=list)


class RunRequest(BaseModel):
    """Caso de prueba completo: construir, canonicalizar y validar"""

    case_id: str = Field("api", description="Identificador del caso")
    entries: List[TestDataEntryModel] = Field(..., description="Ternas de datos de prueba")

    @validator('entries')
    def validate_entries(cls, v):
        if not v:
            raise ValueError("entries no puede estar vacío")
        return v


class ResponseCheckModel(BaseModel):
    """MTI y DE 39 de la respuesta del emisor"""

    expected_mti: str
    mti: Optional[str] = None
    mti_valid: bool = False
    code: Optional[str] = None
    description: Optional[str] = None
    error: Optional[str] = None


class RowOutcomeModel(BaseModel):
    row_index: int
    case_id: Optional[str] = None
    wire_message: str
    debug_view: Dict[str, str] = Field(default_factory=dict)
    fields: List[FieldOutcomeModel] = Field(default_factory=list)
    summary: Optional[str] = None
    warnings: List[FormatWarningModel] = Field(default_factory=list)
    error: Optional[str] = None
    response: Optional[ResponseCheckModel] = None


class BatchResponse(BaseModel):
    """Resultado de un lote de casos cargado desde CSV"""

    rows: List[RowOutcomeModel]
    aggregated: str
    report_summary: str
    exported_files: Dict[str, str] = Field(default_factory=dict)
    load_errors: List[Dict[str, Any]] = Field(default_factory=list)
