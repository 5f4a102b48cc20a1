"""
Entidad Envio: envio de material con seguimiento SLA.

El registro vive en Airtable (fuente de verdad). El campo `numero` es la
clave con la que se enlaza la fila de recogidas en Supabase.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Any, Dict, Optional


def is_numeric_identifier(value: Any) -> bool:
    """
    Indica si un numero de envio puede usarse como clave en Supabase.
    Solo se aceptan cadenas de digitos (se ignoran espacios alrededor).
    """
    if value is None or isinstance(value, bool):
        return False
    text = str(value).strip()
    return text.isdigit() and text.isascii()


@dataclass
class Envio:
    """Envio tal como lo usa el portal (campos ya mapeados desde Airtable)."""

    id: str
    numero: Optional[str] = None
    estado: Optional[str] = None
    seguimiento: Optional[str] = None
    fecha_envio: Optional[datetime] = None
    producto: Optional[str] = None
    creacion: Optional[datetime] = None
    numero_recogida: Optional[int] = None
    servicio: Optional[str] = None
    fecha_estado: Optional[datetime] = None
    fecha_seguimiento: Optional[datetime] = None
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

    @property
    def clave_seguimiento(self) -> Optional[str]:
        """Numero normalizado si es una clave valida para Supabase."""
        if is_numeric_identifier(self.numero):
            return str(self.numero).strip()
        return None

    def merge(self, patch: Dict[str, Any]) -> "Envio":
        """Merge superficial del patch (solo atributos conocidos, sin id)."""
        known = {f.name for f in fields(self)} - {"id"}
        return replace(self, **{k: v for k, v in patch.items() if k in known})
