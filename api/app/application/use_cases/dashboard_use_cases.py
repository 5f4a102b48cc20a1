"""
Casos de uso del dashboard: contadores de administracion y metricas de Supabase.
"""
import asyncio
from datetime import datetime
from typing import Any, Callable, Dict, List

from loguru import logger

from app.application.services.registro_filters import contar_reparaciones_pendientes, filtrar_registros
from app.application.services.sla_bucketer import SlaPolicy, contar_requiere_accion
from app.infrastructure.external.airtable.airtable_client import AirtableApiError, AirtableClient
from app.infrastructure.external.airtable.table_mappings import (
    record_to_envio,
    record_to_registro,
    record_to_reparacion,
)
from app.infrastructure.external.supabase_tracking.tracking_store import SupabaseTrackingStore
from app.shared.exceptions.domain import ExternalServiceException
from app.shared.utils.datetime_utils import DateTimeUtils


class DashboardUseCases:
    """
    Agrega datos de Airtable y Supabase para el dashboard.

    El numero de envios pendientes usa la misma politica SLA que la
    pestaña "Requiere accion", de modo que ambos nunca divergen.
    """

    def __init__(
        self,
        airtable: AirtableClient,
        registros_airtable: AirtableClient,
        tracking_store: SupabaseTrackingStore,
        *,
        tables: Dict[str, str],
        envios_view: str = None,
        policy: SlaPolicy = SlaPolicy(),
        clock: Callable[[], datetime] = DateTimeUtils.now_utc,
    ):
        self.airtable = airtable
        self.registros_airtable = registros_airtable
        self.tracking_store = tracking_store
        self.tables = tables
        self.envios_view = envios_view
        self.policy = policy
        self._clock = clock

    async def get_admin_stats(self) -> Dict[str, int]:
        """
        Contadores del dashboard de administracion.

        Returns:
            Dict con envios_pendientes, reparaciones_pendientes y
            registros_pendientes
        """
        try:
            envios, reparaciones, registros = await asyncio.gather(
                asyncio.to_thread(
                    self.airtable.list_records, table_name=self.tables["envios"], view=self.envios_view
                ),
                asyncio.to_thread(self.airtable.list_records, table_name=self.tables["reparaciones"]),
                asyncio.to_thread(self.registros_airtable.list_records, table_name=self.tables["registros"]),
            )
        except AirtableApiError as e:
            logger.error(f"Error calculando estadisticas de administracion: {e}")
            raise ExternalServiceException("Airtable", "No se pudieron calcular las estadísticas") from e

        now = self._clock()
        return {
            "envios_pendientes": contar_requiere_accion(
                [record_to_envio(r) for r in envios], now, self.policy
            ),
            "reparaciones_pendientes": contar_reparaciones_pendientes(
                [record_to_reparacion(r) for r in reparaciones], now
            ),
            "registros_pendientes": len(filtrar_registros([record_to_registro(r) for r in registros])),
        }

    async def get_casos_gestionados_24h(self) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self.tracking_store.get_casos_gestionados_24h, self._clock())

    async def get_recogida_stats(self) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self.tracking_store.get_recogida_stats, self._clock())
