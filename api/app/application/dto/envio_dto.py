"""
DTOs de la pantalla de envios.
"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from app.shared.constants.sla_constants import SlaBucket


class EnvioResponseDTO(BaseModel):
    """Envio tal como se muestra en la tabla."""
    id: str = Field(..., description="ID del registro de Airtable")
    numero: Optional[str] = Field(None, description="Numero del envio (clave de recogidas)")
    numero_recogida: Optional[int] = None
    estado: Optional[str] = None
    seguimiento: Optional[str] = None
    fecha_envio: Optional[datetime] = None
    fecha_estado: Optional[datetime] = None
    fecha_seguimiento: Optional[datetime] = None
    producto: Optional[str] = None
    creacion: Optional[datetime] = None
    servicio: Optional[str] = None
    material: Optional[str] = None
    transporte: Optional[str] = None
    catalogo: Optional[str] = None
    comentarios: Optional[str] = None
    cliente: Optional[str] = None
    direccion: Optional[str] = None
    poblacion: Optional[str] = None
    codigo_postal: Optional[str] = None
    provincia: Optional[str] = None
    telefono: Optional[str] = None
    referencia: Optional[str] = None

    class Config:
        from_attributes = True


class EnviosListResponseDTO(BaseModel):
    """Listado de una pestaña SLA."""
    tab: SlaBucket = Field(..., description="Pestaña listada")
    total: int = Field(..., description="Envios en la pestaña tras la busqueda")
    counts: Dict[str, int] = Field(default_factory=dict, description="Envios por pestaña, sin busqueda")
    items: List[EnvioResponseDTO] = Field(default_factory=list)


class EnvioUpdateDTO(BaseModel):
    """
    Cambio parcial de un envio.
    Solo se envian a Airtable los campos presentes en el body; un null
    explicito vacia el campo.
    """
    numero: Optional[str] = None
    numero_recogida: Optional[int] = None
    servicio: Optional[str] = None
    estado: Optional[str] = None
    seguimiento: Optional[str] = None
    fecha_envio: Optional[datetime] = None
    material: Optional[str] = None
    transporte: Optional[str] = None
    catalogo: Optional[str] = None
    comentarios: Optional[str] = None
    cliente: Optional[str] = None
    direccion: Optional[str] = None
    poblacion: Optional[str] = None
    codigo_postal: Optional[str] = None
    provincia: Optional[str] = None
    telefono: Optional[str] = None


class EnvioCreateDTO(BaseModel):
    """Alta de envio. Estado y transporte toman valor por defecto si faltan."""
    servicio: str = Field(..., description="ID del servicio (linked record)")
    estado: Optional[str] = None
    fecha_envio: Optional[datetime] = None
    material: Optional[str] = Field(None, description="ID del inventario (linked record)")
    transporte: Optional[str] = None
    catalogo: Optional[str] = None
    comentarios: Optional[str] = None
    cliente: Optional[str] = None
    direccion: Optional[str] = None
    poblacion: Optional[str] = None
    codigo_postal: Optional[str] = None
    provincia: Optional[str] = None
    telefono: Optional[str] = None
    tecnicos: Optional[List[str]] = Field(None, description="IDs de tecnicos (linked records)")


class OperationResultDTO(BaseModel):
    """Resultado de un cambio en el almacen principal."""
    success: bool
    id: Optional[str] = None
    message: Optional[str] = None
