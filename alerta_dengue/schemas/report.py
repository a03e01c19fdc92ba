from datetime import datetime
from typing import Any, List
from pydantic import BaseModel, ConfigDict, Field, field_validator

from alerta_dengue.models.report import ReportStatus

class ReportCreate(BaseModel):
    """
    Rascunho de denúncia. As coordenadas podem vir da geocodificação do
    endereço ou de um ponto marcado diretamente no mapa.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1, max_length=500)
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def reject_bool(cls, value: Any) -> Any:
        # bool é subclasse de int e passaria como 1.0 ou 0.0
        if isinstance(value, bool):
            raise ValueError("Coordenada deve ser um número")
        return value

class ReportResponse(BaseModel):
    """Schema para resposta com dados da denúncia."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    description: str
    address: str
    latitude: float
    longitude: float
    status: ReportStatus
    created_at: datetime
    updated_at: datetime

class StatusUpdate(BaseModel):
    # str livre: valores fora da enumeração viram InvalidStatus no serviço
    status: str = Field(..., min_length=1)

class StatusOption(BaseModel):
    value: ReportStatus
    label: str

class StatusList(BaseModel):
    initial: ReportStatus
    items: List[StatusOption]
