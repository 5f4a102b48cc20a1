from datetime import datetime, tzinfo
from typing import Optional
import re

from loguru import logger

_CITA_INPUT_RE = re.compile(r"(\d{2})/(\d{2})/(\d{4})\s(\d{2}):(\d{2})")


def parse_cita_input(value: str, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """
    Parsea una cita escrita como DD/MM/YYYY hh:mm.
    Retorna None si el formato o la fecha no son validos (31/02, 25:00, ...).
    Con tz la fecha resultante es aware en esa zona.
    """
    if not value:
        return None

    match = _CITA_INPUT_RE.search(value)
    if not match:
        return None

    day, month, year, hours, minutes = (int(g) for g in match.groups())
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    if not 0 <= hours <= 23 or not 0 <= minutes <= 59:
        return None

    try:
        return datetime(year, month, day, hours, minutes, tzinfo=tz)
    except ValueError:
        logger.debug(f"Cita con fecha inexistente descartada: {value}")
        return None


def format_local_timestamp(dt: datetime, tz: tzinfo) -> str:
    """
    Formatea un instante como 'YYYY-MM-DDTHH:MM:SS' en hora local, sin offset.
    Es el formato en que se guardan las marcas de tiempo en Supabase.
    """
    return dt.astimezone(tz).strftime("%Y-%m-%dT%H:%M:%S")


def format_cita_for_input(dt: Optional[datetime], tz: tzinfo) -> str:
    """Formatea un datetime a DD/MM/YYYY hh:mm en la zona indicada."""
    if not dt:
        return ""
    local = dt.astimezone(tz) if dt.tzinfo else dt
    return local.strftime("%d/%m/%Y %H:%M")
