"""
Sincronizacion best-effort de envios con la tabla de recogidas en Supabase.

Supabase es un almacen secundario: ningun fallo aqui debe bloquear ni
revertir el cambio ya hecho en Airtable. Los errores se registran y se
devuelven como SideEffectResult.
"""
from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List

from loguru import logger

from app.application.services.sla_bucketer import SlaPolicy, filtrar_por_bucket
from app.domain.entities.envio import Envio, is_numeric_identifier
from app.domain.entities.results import SideEffectResult
from app.shared.constants.sla_constants import (
    ESTADO_COMPLETA_TRACKING,
    ESTADOS_COMPLETAN_RECOGIDA,
    SlaBucket,
)


def completa_recogida(patch: Dict[str, Any]) -> bool:
    """El cambio cierra la recogida: estado de recogida o seguimiento relleno."""
    if patch.get("estado") in ESTADOS_COMPLETAN_RECOGIDA:
        return True
    seguimiento = patch.get("seguimiento")
    return bool(seguimiento and str(seguimiento).strip())


def completa_tracking(patch: Dict[str, Any]) -> bool:
    return patch.get("estado") == ESTADO_COMPLETA_TRACKING


class TrackingSync:
    """
    Traduce listados y cambios de envios en escrituras de recogidas.

    Attributes:
        store: SupabaseTrackingStore (o cualquier objeto con la misma interfaz)
        policy: Politica SLA con la que se calcula "Requiere accion"
    """

    def __init__(self, store, policy: SlaPolicy = SlaPolicy()):
        self.store = store
        self.policy = policy

    async def sincronizar_requiere_accion(
        self, envios: Iterable[Envio], now: datetime
    ) -> SideEffectResult:
        """
        Garantiza una fila de recogida para cada envio que requiere accion.

        Solo se envian numeros numericos, sin duplicados, en una unica
        llamada. Sin numeros validos no se llama al store.
        """
        pendientes = filtrar_por_bucket(envios, SlaBucket.REQUIERE_ACCION, now, self.policy)
        numeros = list(dict.fromkeys(
            e.clave_seguimiento for e in pendientes if e.clave_seguimiento
        ))
        if not numeros:
            return SideEffectResult(operation="ensure_recogidas", ok=True)

        return await self._run("ensure_recogidas", self.store.ensure_recogidas, numeros)

    async def registrar_cambio(self, numero: Any, patch: Dict[str, Any]) -> List[SideEffectResult]:
        """
        Cierra recogida y/o tracking segun los valores nuevos del patch.

        Un numero ausente o no numerico no genera ninguna escritura.
        """
        if not is_numeric_identifier(numero):
            if patch:
                logger.debug(f"Cambio sin numero valido ({numero!r}), no se actualiza Supabase")
            return []

        numero = str(numero).strip()
        results: List[SideEffectResult] = []
        if completa_recogida(patch):
            results.append(await self._run("complete_recogida", self.store.complete_recogida, numero))
        if completa_tracking(patch):
            results.append(await self._run("complete_tracking", self.store.complete_tracking, numero))
        return results

    async def _run(self, operation: str, fn: Callable[..., Any], arg: Any) -> SideEffectResult:
        identifiers = tuple(arg) if isinstance(arg, list) else (arg,)
        try:
            await asyncio.to_thread(fn, arg)
        except Exception as e:
            logger.warning(f"Supabase {operation} fallo para {', '.join(identifiers)}: {e}")
            return SideEffectResult(
                operation=operation, ok=False, identifiers=identifiers, error=str(e)
            )
        return SideEffectResult(operation=operation, ok=True, identifiers=identifiers)
