"""
Agregaciones puras sobre filas de Supabase (sin I/O).

Se mantienen separadas del store para poder testearlas con filas en memoria.
"""
from __future__ import annotations

from collections import OrderedDict
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Dict, Iterable, List, Optional


# Primera semana completa del informe de casos gestionados (lunes)
CASOS_24H_PRIMER_LUNES = date(2026, 1, 5)

# Duraciones de recogida por encima de 30 dias se consideran datos corruptos
RECOGIDA_MAX_HORAS = 720


def _parse(value: Any, tz: Optional[tzinfo]) -> Optional[datetime]:
    """
    Las marcas de Supabase se guardan en hora local sin offset; se
    interpretan en tz. Las que traen offset se respetan.
    """
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None and tz is not None:
        dt = dt.replace(tzinfo=tz)
    return dt


def week_start(day: date) -> date:
    """Lunes de la semana de `day`."""
    return day - timedelta(days=day.weekday())


def casos_gestionados_24h(
    rows: Iterable[Dict[str, Any]],
    now: datetime,
    tz: Optional[tzinfo] = None,
    first_monday: date = CASOS_24H_PRIMER_LUNES,
) -> List[Dict[str, Any]]:
    """
    Porcentaje semanal de casos resueltos en 24 horas o menos.

    Cada semana desde first_monday hasta now aparece en el resultado, con 0
    cuando no tiene casos. Solo cuentan filas con número, creación y
    resolución.
    """
    local_now = now.astimezone(tz) if tz is not None and now.tzinfo else now
    weeks: "OrderedDict[date, Dict[str, int]]" = OrderedDict()
    current = first_monday
    while current <= local_now.date():
        weeks[current] = {"within24h": 0, "total": 0}
        current += timedelta(days=7)

    for row in rows:
        creacion = _parse(row.get("creación"), tz)
        resolucion = _parse(row.get("resolución"), tz)
        if not creacion or not resolucion or not row.get("número"):
            continue

        local_creacion = creacion.astimezone(tz) if tz is not None else creacion
        if local_creacion.date() < first_monday:
            continue

        bucket = weeks.get(week_start(local_creacion.date()))
        if bucket is None:
            continue

        bucket["total"] += 1
        hours = (resolucion - creacion).total_seconds() / 3600
        if hours <= 24:
            bucket["within24h"] += 1

    return [
        {
            "week": monday.isoformat(),
            "percentage24h": round(data["within24h"] / data["total"] * 100) if data["total"] else 0,
            "totalCases": data["total"],
        }
        for monday, data in weeks.items()
    ]


def recogidas_por_dia(
    rows: Iterable[Dict[str, Any]],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> List[Dict[str, Any]]:
    """
    Media diaria de horas de recogida (duracion_decimal) del mes en curso.
    Se descartan duraciones no positivas o de 720 horas o mas.
    """
    local_now = now.astimezone(tz) if tz is not None and now.tzinfo else now
    grouped: Dict[str, Dict[str, float]] = {}

    for row in rows:
        creacion = _parse(row.get("creación"), tz)
        duracion = row.get("duracion_decimal")
        if creacion is None or duracion is None:
            continue
        try:
            duracion = float(duracion)
        except (TypeError, ValueError):
            continue
        if tz is not None:
            creacion = creacion.astimezone(tz)

        if creacion.year != local_now.year or creacion.month != local_now.month:
            continue
        if not 0 < duracion < RECOGIDA_MAX_HORAS:
            continue

        day_key = creacion.date().isoformat()
        data = grouped.setdefault(day_key, {"total": 0.0, "count": 0})
        data["total"] += duracion
        data["count"] += 1

    return [
        {
            "date": day_key,
            "avgHours": round(data["total"] / data["count"], 1),
            "count": int(data["count"]),
        }
        for day_key, data in sorted(grouped.items())
    ]
