"""
Casos de uso de la pantalla de envios.

El controlador mantiene la lista de envios en memoria (compartida por las
peticiones y el poller del servidor), la clasifica en pestañas SLA y coordina los dos
almacenes: Airtable (principal) y Supabase (seguimiento de recogidas).
"""
import asyncio
from dataclasses import asdict
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from app.application.services.poller import Poller
from app.application.services.record_update_gateway import RecordUpdateGateway
from app.application.services.sla_bucketer import SlaPolicy, filtrar_por_bucket, listar_bucket
from app.application.services.tracking_sync import TrackingSync
from app.domain.entities.envio import Envio
from app.domain.entities.results import PrimaryResult
from app.infrastructure.external.airtable.airtable_client import AirtableApiError, AirtableClient
from app.infrastructure.external.airtable.table_mappings import (
    envio_create_fields,
    envio_patch_to_fields,
    record_to_envio,
)
from app.shared.constants.sla_constants import POLL_INTERVAL_SECONDS, SlaBucket
from app.shared.exceptions.domain import ExternalServiceException
from app.shared.utils.datetime_utils import DateTimeUtils

CREATE_ERROR_MESSAGE = "Error al crear el envío."


class EnviosController:
    """
    Estado y operaciones de la pantalla de envios.

    Importante:
    - refresh() tras close() no modifica el estado (la pantalla ya no existe).
    - actualizar() solo mezcla el patch en memoria si Airtable acepta el cambio;
      el seguimiento en Supabase se lanza despues y nunca hace fallar la
      operacion.
    """

    def __init__(
        self,
        airtable: AirtableClient,
        tracking_sync: TrackingSync,
        *,
        table_name: str,
        view: Optional[str] = None,
        policy: SlaPolicy = SlaPolicy(),
        clock: Callable[[], datetime] = DateTimeUtils.now_utc,
    ):
        self.airtable = airtable
        self.tracking_sync = tracking_sync
        self.table_name = table_name
        self.view = view
        self.policy = policy
        self._clock = clock

        self.envios: List[Envio] = []
        self.loading = False
        self._mounted = True
        self._gateway = RecordUpdateGateway(self._patch_remote, self.envios)
        self._poller: Optional[Poller] = None

    @property
    def saving(self) -> bool:
        return self._gateway.saving

    async def refresh(self) -> List[Envio]:
        """
        Carga todos los envios de Airtable y garantiza las recogidas de los
        que requieren accion.

        Raises:
            ExternalServiceException: Si Airtable no responde
        """
        self.loading = True
        try:
            records = await asyncio.to_thread(
                self.airtable.list_records, table_name=self.table_name, view=self.view
            )
        except AirtableApiError as e:
            logger.error(f"Error cargando envios: {e}")
            raise ExternalServiceException("Airtable", "No se pudieron cargar los envíos") from e
        finally:
            self.loading = False

        envios = [record_to_envio(r) for r in records]
        if not self._mounted:
            logger.debug("Refresco de envios descartado: controlador cerrado")
            return envios

        self.envios[:] = envios
        logger.info(f"Envios cargados: {len(envios)}")
        await self.tracking_sync.sincronizar_requiere_accion(envios, self._clock())
        return envios

    def listar(self, tab: SlaBucket, search_term: str = "") -> List[Envio]:
        """Envios de la pestaña, filtrados por busqueda y en orden natural."""
        return listar_bucket(self.envios, tab, self._clock(), search_term, self.policy)

    def contar(self) -> Dict[str, int]:
        """Numero de envios por pestaña (sin busqueda)."""
        now = self._clock()
        return {
            bucket.value: len(filtrar_por_bucket(self.envios, bucket, now, self.policy))
            for bucket in (SlaBucket.REQUIERE_ACCION, SlaBucket.EN_ESPERA)
        }

    def _find(self, envio_id: str) -> Optional[Envio]:
        return next((e for e in self.envios if e.id == envio_id), None)

    def _patch_remote(self, envio_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        record = self.airtable.update_record(
            table_name=self.table_name,
            record_id=envio_id,
            fields=envio_patch_to_fields(patch),
        )
        return asdict(record_to_envio(record))

    async def actualizar(self, envio_id: str, patch: Dict[str, Any]) -> PrimaryResult:
        """
        Aplica un cambio parcial a un envio.

        Solo los valores que cambian respecto al envio en memoria disparan el
        cierre de recogida/tracking, para no repetirlo en cada guardado.
        """
        current = self._find(envio_id)
        result = await self._gateway.update(envio_id, patch)
        if not result:
            return result

        if current is not None:
            changes = {k: v for k, v in patch.items() if getattr(current, k, None) != v}
        else:
            changes = dict(patch)

        numero = (
            patch.get("numero")
            or (current.numero if current else None)
            or (result.record or {}).get("numero")
        )
        await self.tracking_sync.registrar_cambio(numero, changes)
        return result

    async def crear(self, data: Dict[str, Any]) -> PrimaryResult:
        """Crea un envio en Airtable y recarga la lista."""
        try:
            record = await asyncio.to_thread(
                self.airtable.create_record,
                table_name=self.table_name,
                fields=envio_create_fields(data),
            )
        except AirtableApiError as e:
            logger.error(f"Error creando envio: {e}")
            return PrimaryResult.failure("", CREATE_ERROR_MESSAGE)

        logger.info(f"Envio creado: {record.record_id}")
        await self.refresh()
        return PrimaryResult.success(record.record_id, asdict(record_to_envio(record)))

    def start_polling(self, interval: float = POLL_INTERVAL_SECONDS) -> None:
        if self._poller is None:
            self._poller = Poller(self.refresh, interval=interval, name="envios-poller")
        self._poller.start()

    async def close(self) -> None:
        """Detiene el polling y descarta cualquier refresco posterior."""
        self._mounted = False
        if self._poller is not None:
            await self._poller.stop()
