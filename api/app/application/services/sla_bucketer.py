"""
Clasificacion SLA de envios en "Requiere accion" / "En espera".

Reglas, en orden:
1. Estado terminal (Entregado, Devuelto, Recogida hecha) -> fuera de ambas pestañas.
2. Seguimiento "Email enviado" -> en espera, sin importar el tiempo transcurrido.
3. Sin fecha de envio -> en espera (no hay nada que medir).
4. Horas laborables desde la fecha de envio > umbral -> requiere accion;
   en otro caso en espera.

Tras clasificar se aplica la busqueda libre y el orden natural por numero.
"""
from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, FrozenSet, Iterable, List, Optional, Tuple

from app.domain.entities.envio import Envio
from app.shared.constants.sla_constants import (
    ESTADOS_TERMINALES_ENVIO,
    SLA_BUSINESS_HOURS_THRESHOLD,
    TRACKING_ACK_VALUE,
    SlaBucket,
)
from app.shared.utils.business_hours import calculate_business_hours

_NATURAL_CHUNK_RE = re.compile(r"(\d+)")


@dataclass(frozen=True)
class SlaPolicy:
    """
    Parametros del SLA compartidos por todos los clasificadores.

    Attributes:
        threshold_hours: Horas laborables a partir de las cuales (estricto >)
            un envio requiere accion
        tracking_ack_value: Valor de seguimiento que pone el envio en espera
        terminal_states: Estados que excluyen el envio de ambas pestañas
        tz: Zona en la que se evalua el dia de la semana
    """

    threshold_hours: int = SLA_BUSINESS_HOURS_THRESHOLD
    tracking_ack_value: str = TRACKING_ACK_VALUE
    terminal_states: FrozenSet[str] = field(default=ESTADOS_TERMINALES_ENVIO)
    tz: Optional[tzinfo] = None

    @classmethod
    def from_settings(cls, settings) -> "SlaPolicy":
        return cls(
            threshold_hours=settings.SLA_BUSINESS_HOURS_THRESHOLD,
            tracking_ack_value=settings.SLA_TRACKING_ACK_VALUE,
            tz=settings.timezone,
        )


def clasificar_envio(envio: Envio, now: datetime, policy: SlaPolicy = SlaPolicy()) -> SlaBucket:
    """Clasifica un envio en su pestaña SLA."""
    if envio.estado and envio.estado in policy.terminal_states:
        return SlaBucket.NINGUNO

    if envio.seguimiento == policy.tracking_ack_value:
        return SlaBucket.EN_ESPERA

    if envio.fecha_envio is None:
        return SlaBucket.EN_ESPERA

    hours = calculate_business_hours(envio.fecha_envio, now, policy.tz)
    if hours > policy.threshold_hours:
        return SlaBucket.REQUIERE_ACCION
    return SlaBucket.EN_ESPERA


def filtrar_por_bucket(
    envios: Iterable[Envio],
    bucket: SlaBucket,
    now: datetime,
    policy: SlaPolicy = SlaPolicy(),
) -> List[Envio]:
    return [e for e in envios if clasificar_envio(e, now, policy) == bucket]


def _normalize(value: Any) -> str:
    return ("" if value is None else str(value)).lower()


def filtrar_por_busqueda(envios: Iterable[Envio], search_term: str) -> List[Envio]:
    """
    Busqueda libre sobre seguimiento, numero y producto.
    Un termino vacio devuelve la lista sin cambios.
    """
    envios = list(envios)
    if not search_term:
        return envios

    needle = search_term.lower()
    return [
        e for e in envios
        if needle in _normalize(e.seguimiento)
        or needle in _normalize(e.numero)
        or needle in _normalize(e.producto)
    ]


def natural_sort_key(value: Any) -> Tuple[Tuple[int, Any], ...]:
    """
    Clave de orden natural, sin distinguir mayusculas ni acentos ("9" < "10").
    """
    text = unicodedata.normalize("NFKD", _normalize(value))
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    key = []
    for chunk in _NATURAL_CHUNK_RE.split(text):
        if not chunk:
            continue
        if chunk.isdigit():
            key.append((0, int(chunk)))
        else:
            key.append((1, chunk))
    return tuple(key)


def ordenar_por_numero(envios: Iterable[Envio]) -> List[Envio]:
    return sorted(envios, key=lambda e: natural_sort_key(e.numero))


def listar_bucket(
    envios: Iterable[Envio],
    bucket: SlaBucket,
    now: datetime,
    search_term: str = "",
    policy: SlaPolicy = SlaPolicy(),
) -> List[Envio]:
    """Listado final de una pestaña: clasificar, buscar y ordenar."""
    in_bucket = filtrar_por_bucket(envios, bucket, now, policy)
    return ordenar_por_numero(filtrar_por_busqueda(in_bucket, search_term))


def contar_requiere_accion(
    envios: Iterable[Envio],
    now: datetime,
    policy: SlaPolicy = SlaPolicy(),
) -> int:
    """Envios pendientes para el dashboard de administracion."""
    return len(filtrar_por_bucket(envios, SlaBucket.REQUIERE_ACCION, now, policy))
