"""
Entidad Registro: asesoramiento telefonico pendiente de tramitar.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class Registro:
    """Registro de la tabla de asesoramientos."""

    id: str
    contrato: Optional[int] = None
    nombre: Optional[str] = None
    telefono: Optional[str] = None
    direccion: Optional[str] = None
    email: Optional[str] = None
    estado: Optional[str] = None
    fecha: Optional[datetime] = None
    asesor: Optional[str] = None
    cita: Optional[datetime] = None
    comentarios: Optional[str] = None
    informe: Optional[str] = None
    expediente: Optional[str] = None
    tramitado: bool = False
    ipartner: Optional[str] = None
    fecha_ipartner: Optional[datetime] = None
    pdf: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def tiene_pdf(self) -> bool:
        return bool(self.pdf)

    def merge(self, patch: Dict[str, Any]) -> "Registro":
        """Merge superficial del patch (solo atributos conocidos, sin id)."""
        known = {f.name for f in fields(self)} - {"id"}
        return replace(self, **{k: v for k, v in patch.items() if k in known})


@dataclass(frozen=True)
class Reparacion:
    """Reparacion asignada a un tecnico (solo lo necesario para el dashboard)."""

    id: str
    estado: Optional[str] = None
    fecha_estado: Optional[datetime] = None
    cita: Optional[datetime] = None
