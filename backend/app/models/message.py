from pydantic import BaseModel, Field, validator
from typing import Dict, List, Optional


class TestDataEntryModel(BaseModel):
    """Terna de datos de prueba: nombre canónico o número de DE, valor y tipo"""
    __test__ = False

    field: str = Field(..., description="Nombre canónico, número de DE o 'MTI'")
    value: str = Field(..., description="Valor del campo")
    type: Optional[str] = Field(None, description="Tipo declarado (n, an, ans...)")

    @validator('field')
    def validate_field(cls, v):
        if not v or not v.strip():
            raise ValueError("field no puede estar vacío")
        return v.strip()


class BuildMessageRequest(BaseModel):
    """Solicitud de construcción de mensaje ISO 8583"""

    mti: Optional[str] = Field(None, description="MTI de 4 dígitos")
    fields: Dict[str, str] = Field(
        default_factory=dict,
        description="Valores por número de DE. Ej: {'2': '4111111111111111'}"
    )
    entries: List[TestDataEntryModel] = Field(
        default_factory=list,
        description="Ternas de datos de prueba resueltas por nombre canónico"
    )
    apply_defaults: bool = Field(
        True,
        description="Generar valores para los DEs activos no informados"
    )

    @validator('mti')
    def validate_mti(cls, v):
        if v is None:
            return v
        if len(v) != 4 or not v.isdigit():
            raise ValueError("mti debe tener 4 dígitos")
        return v


class FormatWarningModel(BaseModel):
    code: str
    message: str
    field_id: Optional[str] = None


class BuildMessageResponse(BaseModel):
    """Mensaje construido"""

    wire_message: str
    debug_view: Dict[str, str]
    warnings: List[FormatWarningModel] = Field(default_factory=list)
