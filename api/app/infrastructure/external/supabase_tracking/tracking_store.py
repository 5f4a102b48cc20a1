"""
Store de seguimiento de recogidas en Supabase.

Tabla `recogidas`:
- "número": numero del envio (clave de enlace con Airtable, solo digitos)
- "creación": cuando el envio paso a requerir accion (default now() en la BD)
- tramitado: cuando se envio/hizo la recogida o se comunico el tracking
- entregado: cuando el envio se marco como entregado
- duracion_decimal: columna calculada por la BD para las metricas

Todas las escrituras son idempotentes:
- ensure_recogidas solo inserta los números sin fila pendiente (tramitado
  vacio). La tabla admite varias filas por número: una nueva recogida se
  abre cuando la anterior ya esta tramitada.
- complete_* solo rellenan la marca si aun esta vacia; una segunda
  llamada no encuentra fila pendiente y no hace nada.
"""
from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Any, Callable, Dict, Iterable, List, Optional

from loguru import logger
from supabase import create_client

from app.shared.utils.date_utils import format_local_timestamp
from app.shared.utils.datetime_utils import DateTimeUtils

from .stats import CASOS_24H_PRIMER_LUNES, casos_gestionados_24h, recogidas_por_dia

RECOGIDAS_TABLE = "recogidas"
RESOLUCIONES_TABLE = "resoluciones_remotas"

COL_NUMERO = "número"
COL_CREACION = "creación"
COL_RECOGIDA_COMPLETADA = "tramitado"
COL_TRACKING_COMPLETADO = "entregado"


class SupabaseTrackingStore:
    """
    Acceso a las tablas de seguimiento SLA en Supabase.

    Importante:
    - Los errores de Supabase se propagan: quien decide silenciarlos es
      TrackingSync (efecto secundario best-effort).
    - Sin cliente (Supabase no configurado) todas las operaciones son no-op.
    """

    def __init__(
        self,
        client: Any,
        *,
        tz: Optional[tzinfo] = None,
        clock: Callable[[], datetime] = DateTimeUtils.now_utc,
    ) -> None:
        self._client = client
        self._tz = tz
        self._clock = clock

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def _now_local(self) -> str:
        return format_local_timestamp(self._clock(), self._tz or timezone.utc)

    def ensure_recogidas(self, numeros: Iterable[str]) -> List[str]:
        """
        Garantiza que cada numero tiene una fila de recogida pendiente.

        Returns:
            List[str]: Numeros para los que se creo fila en esta llamada
        """
        if not self.enabled:
            return []

        unique = list(dict.fromkeys(str(n).strip() for n in numeros if n))
        if not unique:
            return []

        existing = (
            self._client.table(RECOGIDAS_TABLE)
            .select(COL_NUMERO)
            .in_(COL_NUMERO, unique)
            .is_(COL_RECOGIDA_COMPLETADA, "null")
            .execute()
        )
        existing_numeros = {str(row.get(COL_NUMERO)) for row in (existing.data or [])}
        nuevos = [n for n in unique if n not in existing_numeros]

        if nuevos:
            (
                self._client.table(RECOGIDAS_TABLE)
                .insert([{COL_NUMERO: n, COL_RECOGIDA_COMPLETADA: None} for n in nuevos])
                .execute()
            )
            logger.info(f"Recogidas creadas en Supabase: {len(nuevos)} ({', '.join(nuevos)})")

        return nuevos

    def complete_recogida(self, numero: str) -> bool:
        """Marca la recogida como tramitada. Retorna False si no habia nada pendiente."""
        return self._complete(numero, COL_RECOGIDA_COMPLETADA)

    def complete_tracking(self, numero: str) -> bool:
        """Marca el envio como entregado. Retorna False si no habia nada pendiente."""
        return self._complete(numero, COL_TRACKING_COMPLETADO)

    def _complete(self, numero: str, column: str) -> bool:
        if not self.enabled:
            return False

        numero = str(numero).strip()
        pending = (
            self._client.table(RECOGIDAS_TABLE)
            .select("id")
            .eq(COL_NUMERO, numero)
            .is_(column, "null")
            .order(COL_CREACION, desc=True)
            .limit(1)
            .execute()
        )
        rows = pending.data or []
        if not rows:
            logger.debug(f"Sin recogida pendiente de '{column}' para número {numero}")
            return False

        # El filtro IS NULL en el update evita pisar una marca ya escrita
        (
            self._client.table(RECOGIDAS_TABLE)
            .update({column: self._now_local()})
            .eq("id", rows[0]["id"])
            .is_(column, "null")
            .execute()
        )
        logger.info(f"Recogida {numero}: '{column}' completado")
        return True

    def get_casos_gestionados_24h(self, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """Porcentaje semanal de casos resueltos en menos de 24 horas."""
        if not self.enabled:
            return []

        response = (
            self._client.table(RESOLUCIONES_TABLE)
            .select("*")
            .gte(COL_CREACION, CASOS_24H_PRIMER_LUNES.isoformat())
            .order(COL_CREACION)
            .execute()
        )
        return casos_gestionados_24h(response.data or [], now or self._clock(), self._tz)

    def get_recogida_stats(self, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """Media diaria de horas de recogida del mes en curso."""
        if not self.enabled:
            return []

        response = (
            self._client.table(RECOGIDAS_TABLE)
            .select(f"{COL_CREACION}, duracion_decimal")
            .not_.is_("duracion_decimal", "null")
            .order(COL_CREACION)
            .execute()
        )
        return recogidas_por_dia(response.data or [], now or self._clock(), self._tz)


def build_tracking_store(settings) -> SupabaseTrackingStore:
    """
    Construye el store desde la configuracion.
    Sin SUPABASE_URL/SUPABASE_KEY el store queda desactivado.
    """
    if not settings.supabase_enabled:
        logger.warning("Supabase no configurado: seguimiento de recogidas desactivado")
        return SupabaseTrackingStore(None, tz=settings.timezone)

    client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    return SupabaseTrackingStore(client, tz=settings.timezone)
