"""
Filtros del listado de asesoramientos y del conteo de reparaciones pendientes.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, List

from app.domain.entities.registro import Registro, Reparacion
from app.shared.constants.sla_constants import (
    ESTADO_CITADO,
    IPARTNER_EXCLUIDOS,
    REPARACIONES_ESTADOS_PENDIENTES,
    REPARACIONES_PENDIENTE_HORAS,
)


def registro_visible(registro: Registro) -> bool:
    """
    Indica si un asesoramiento sigue pendiente de gestion en el listado.

    Se ocultan los ya tramitados, los cerrados en iPartner y los que esperan
    el PDF del informe (citados o con informe sin PDF adjunto).
    """
    if registro.tramitado:
        return False
    if registro.ipartner and registro.ipartner in IPARTNER_EXCLUIDOS:
        return False
    # Cubre tambien "Informe" con iPartner citado en los ultimos dias sin PDF
    if registro.estado in (ESTADO_CITADO, "Informe") and not registro.tiene_pdf:
        return False
    return True


def registro_coincide(registro: Registro, search_term: str) -> bool:
    if not search_term:
        return True
    needle = search_term.lower()
    return (
        needle in (registro.nombre or "").lower()
        or search_term in (registro.telefono or "")
        or needle in (registro.email or "").lower()
        or needle in (registro.direccion or "").lower()
        or (registro.contrato is not None and search_term in str(registro.contrato))
    )


def filtrar_registros(registros: Iterable[Registro], search_term: str = "") -> List[Registro]:
    return [
        r for r in registros
        if registro_coincide(r, search_term) and registro_visible(r)
    ]


def contar_reparaciones_pendientes(reparaciones: Iterable[Reparacion], now: datetime) -> int:
    """
    Reparaciones en estado abierto, sin cita futura y con mas de 48 horas
    de reloj (no laborables) desde el ultimo cambio de estado.
    """
    limite = timedelta(hours=REPARACIONES_PENDIENTE_HORAS)
    count = 0
    for r in reparaciones:
        if not r.estado or r.estado not in REPARACIONES_ESTADOS_PENDIENTES:
            continue
        if r.cita is not None and r.cita > now:
            continue
        if r.fecha_estado is None:
            continue
        if now - r.fecha_estado > limite:
            count += 1
    return count
