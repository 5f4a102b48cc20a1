"""
Resultados de las escrituras contra los dos almacenes.

La asimetria es explicita en el tipo:
- PrimaryResult: cambio en Airtable. El llamador DEBE revisarlo; si falla,
  el mensaje se muestra al usuario.
- SideEffectResult: escritura en Supabase. Se registra en el log y se
  descarta; nunca bloquea ni revierte el cambio principal.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PrimaryResult:
    """Resultado de un cambio en el almacen principal."""

    ok: bool
    record_id: str
    message: Optional[str] = None
    record: Optional[Dict[str, Any]] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, record_id: str, record: Optional[Dict[str, Any]] = None) -> "PrimaryResult":
        return cls(ok=True, record_id=record_id, record=record)

    @classmethod
    def failure(cls, record_id: str, message: str) -> "PrimaryResult":
        return cls(ok=False, record_id=record_id, message=message)


@dataclass(frozen=True)
class SideEffectResult:
    """Resultado best-effort de una escritura en el almacen secundario."""

    operation: str
    ok: bool
    identifiers: tuple = ()
    error: Optional[str] = None
