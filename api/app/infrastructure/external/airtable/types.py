"""
Tipos y utilidades puras para el acceso a Airtable.

Se mantienen libres de I/O para poder testearlos fácilmente.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Tuple


def ensure_utc(dt: datetime) -> datetime:
    """
    Normaliza datetime a UTC (aware).

    Airtable suele devolver ISO8601 con zona; aun así, normalizamos para
    comparar de forma consistente con `now`.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@dataclass(frozen=True)
class AirtableRecord:
    """Registro Airtable tal como lo devuelve la API."""

    record_id: str
    fields: dict[str, Any]
    created_time: Optional[datetime] = None


Transform = Callable[[Any], Any]


@dataclass(frozen=True)
class FieldMapping:
    """
    Define el mapeo de un campo Airtable a un atributo de la entidad.

    - airtable_field: nombre canonico del field en Airtable (el que se escribe)
    - attribute: nombre del atributo en la entidad
    - aliases: nombres alternativos que se aceptan al leer (tablas antiguas)
    - transform: función opcional para transformar el valor leido
    - writable: si False, el campo es de solo lectura (lookups, fórmulas)
    """

    airtable_field: str
    attribute: str
    aliases: Tuple[str, ...] = ()
    transform: Optional[Transform] = None
    writable: bool = True

    def read(self, fields: dict[str, Any]) -> Any:
        """Lee el valor usando el nombre canonico o el primer alias presente."""
        for name in (self.airtable_field, *self.aliases):
            if name in fields and fields[name] is not None:
                raw = fields[name]
                return self.transform(raw) if self.transform else raw
        return None
