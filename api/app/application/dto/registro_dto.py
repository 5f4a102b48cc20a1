"""
DTOs de la pantalla de asesoramientos.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class RegistroResponseDTO(BaseModel):
    id: str = Field(..., description="ID del registro de Airtable")
    contrato: Optional[int] = None
    nombre: Optional[str] = None
    telefono: Optional[str] = None
    direccion: Optional[str] = None
    email: Optional[str] = None
    estado: Optional[str] = None
    fecha: Optional[datetime] = None
    asesor: Optional[str] = None
    cita: Optional[datetime] = None
    cita_texto: str = Field("", description="Cita en hora local (DD/MM/YYYY hh:mm) para el campo de edicion")
    comentarios: Optional[str] = None
    informe: Optional[str] = None
    expediente: Optional[str] = None
    tramitado: bool = False
    ipartner: Optional[str] = None
    fecha_ipartner: Optional[datetime] = None
    pdf: List[Dict[str, Any]] = Field(default_factory=list, description="Adjuntos del informe")

    class Config:
        from_attributes = True


class RegistrosListResponseDTO(BaseModel):
    total: int
    items: List[RegistroResponseDTO] = Field(default_factory=list)


class EstadoUpdateDTO(BaseModel):
    estado: str = Field(..., min_length=1)


class CitaUpdateDTO(BaseModel):
    cita: str = Field(..., description="Fecha y hora local en formato DD/MM/YYYY hh:mm")


class ComentariosUpdateDTO(BaseModel):
    comentarios: str = ""


class IpartnerUpdateDTO(BaseModel):
    ipartner: str = Field(..., min_length=1)


class AlertaCitaResponseDTO(BaseModel):
    """Cita en curso (o null si no hay ninguna)."""
    alerta: Optional[RegistroResponseDTO] = None
