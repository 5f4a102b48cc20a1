"""
Alerta de cita inminente para los asesoramientos citados.
"""
from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Any, Callable, Iterable, Optional

from app.shared.constants.sla_constants import CITA_ALERTA_VENTANA_MINUTOS, ESTADO_CITADO
from app.shared.utils.datetime_utils import DateTimeUtils


def cita_es_ahora(item: Any, now: datetime, tz: Optional[tzinfo] = None) -> bool:
    """
    Un elemento citado esta "ahora" si la cita es del mismo dia local y
    esta a 10 minutos o menos (antes o despues).
    """
    cita = getattr(item, "cita", None)
    if cita is None or getattr(item, "estado", None) != ESTADO_CITADO:
        return False

    if tz is not None and cita.tzinfo and now.tzinfo:
        same_day = cita.astimezone(tz).date() == now.astimezone(tz).date()
    else:
        same_day = cita.date() == now.date()

    return same_day and abs(cita - now) <= timedelta(minutes=CITA_ALERTA_VENTANA_MINUTOS)


class AppointmentAlertMonitor:
    """
    Busca el elemento que tiene la cita en curso.

    Mantiene como mucho una alerta: el primer elemento que cumple la
    condicion y que no es el descartado por el usuario. La reevaluacion
    periodica la hace el cliente consultando el endpoint de alerta.
    """

    def __init__(
        self,
        items_provider: Callable[[], Iterable[Any]],
        clock: Callable[[], datetime] = DateTimeUtils.now_utc,
        tz: Optional[tzinfo] = None,
    ):
        self._items_provider = items_provider
        self._clock = clock
        self._tz = tz
        self.current: Optional[Any] = None
        self.dismissed_id: Optional[str] = None

    def evaluate(self) -> Optional[Any]:
        now = self._clock()
        self.current = next(
            (
                item for item in self._items_provider()
                if cita_es_ahora(item, now, self._tz) and item.id != self.dismissed_id
            ),
            None,
        )
        return self.current

    def dismiss(self, item_id: str) -> None:
        self.dismissed_id = item_id
        self.current = None
