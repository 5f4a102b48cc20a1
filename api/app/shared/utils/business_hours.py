"""
Calculo de horas laborables entre dos instantes.

Solo excluye sabados y domingos: las 24 horas de cada dia laborable cuentan,
sin noches ni festivos. Los umbrales SLA existentes dependen de este conteo.
"""
from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Optional

_ONE_HOUR = timedelta(hours=1)
_SATURDAY = 5


def calculate_business_hours(
    start: datetime,
    end: datetime,
    tz: Optional[tzinfo] = None,
) -> int:
    """
    Cuenta las horas de lunes a viernes entre start y end.

    Avanza desde start en pasos de una hora mientras el instante actual sea
    anterior a end; cada paso suma 1 si el dia de la semana del instante actual
    es laborable. Los pasos de fin de semana avanzan el reloj sin sumar.

    Args:
        start: Instante inicial (el minuto de start fija la fase de los pasos)
        end: Instante final
        tz: Zona en la que evaluar el dia de la semana cuando los datetimes
            son aware. Con datetimes naive se usan tal cual.

    Returns:
        int: Horas laborables (0 si start >= end)
    """
    hours = 0
    current = start

    while current < end:
        local = current.astimezone(tz) if tz is not None and current.tzinfo else current
        if local.weekday() < _SATURDAY:
            hours += 1
        current += _ONE_HOUR

    return hours
