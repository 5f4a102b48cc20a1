"""
Casos de uso de la pantalla de asesoramientos (tabla Registros).
"""
import asyncio
from dataclasses import asdict
from datetime import tzinfo
from typing import Any, Dict, List, Optional

from loguru import logger

from app.application.services.record_update_gateway import RecordUpdateGateway
from app.application.services.registro_filters import filtrar_registros
from app.domain.entities.registro import Registro
from app.domain.entities.results import PrimaryResult
from app.infrastructure.external.airtable.airtable_client import AirtableApiError, AirtableClient
from app.infrastructure.external.airtable.table_mappings import (
    record_to_registro,
    registro_patch_to_fields,
)
from app.shared.exceptions.domain import ExternalServiceException
from app.shared.utils.date_utils import parse_cita_input

INVALID_CITA_MESSAGE = "Fecha y hora inválidas"


class RegistrosController:
    """
    Estado y operaciones de la pantalla de asesoramientos.

    La instancia la comparten todas las peticiones: los guardados
    concurrentes no se bloquean entre si (cada uno llega a Airtable y solo
    se mezcla en memoria si tiene exito). Deshabilitar la edicion mientras
    `saving` es cierto queda del lado del cliente.
    """

    def __init__(self, airtable: AirtableClient, *, table_name: str, tz: Optional[tzinfo] = None):
        self.airtable = airtable
        self.table_name = table_name
        self.tz = tz
        self.registros: List[Registro] = []
        self.loading = False
        self._gateway = RecordUpdateGateway(self._patch_remote, self.registros)

    @property
    def saving(self) -> bool:
        return self._gateway.saving

    async def refresh(self) -> List[Registro]:
        self.loading = True
        try:
            records = await asyncio.to_thread(self.airtable.list_records, table_name=self.table_name)
        except AirtableApiError as e:
            logger.error(f"Error cargando registros: {e}")
            raise ExternalServiceException("Airtable", "No se pudieron cargar los registros") from e
        finally:
            self.loading = False

        self.registros[:] = [record_to_registro(r) for r in records]
        logger.info(f"Registros cargados: {len(self.registros)}")
        return self.registros

    def listar(self, search_term: str = "") -> List[Registro]:
        """Asesoramientos pendientes de gestion que coinciden con la busqueda."""
        return filtrar_registros(self.registros, search_term)

    def _patch_remote(self, registro_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        record = self.airtable.update_record(
            table_name=self.table_name,
            record_id=registro_id,
            fields=registro_patch_to_fields(patch),
        )
        return asdict(record_to_registro(record))

    async def actualizar_estado(self, registro_id: str, estado: str) -> PrimaryResult:
        return await self._gateway.update(registro_id, {"estado": estado})

    async def actualizar_cita(self, registro_id: str, cita: str) -> PrimaryResult:
        """
        Guarda la cita escrita como DD/MM/YYYY hh:mm (hora local).
        Un valor invalido se rechaza antes de llamar a Airtable.
        """
        fecha = parse_cita_input(cita, self.tz)
        if fecha is None:
            return PrimaryResult.failure(registro_id, INVALID_CITA_MESSAGE)
        return await self._gateway.update(registro_id, {"cita": fecha})

    async def actualizar_comentarios(self, registro_id: str, comentarios: str) -> PrimaryResult:
        return await self._gateway.update(registro_id, {"comentarios": comentarios})

    async def marcar_tramitado(self, registro_id: str) -> PrimaryResult:
        """Marca el registro como tramitado y lo quita de la lista."""
        result = await self._gateway.update(registro_id, {"tramitado": True})
        if result:
            self.registros[:] = [r for r in self.registros if r.id != registro_id]
        return result

    async def actualizar_ipartner(self, registro_id: str, ipartner: str) -> PrimaryResult:
        """Guarda el estado de iPartner; en local el registro queda tramitado."""
        result = await self._gateway.update(registro_id, {"ipartner": ipartner})
        if result:
            self.registros[:] = [
                r.merge({"tramitado": True}) if r.id == registro_id else r
                for r in self.registros
            ]
        return result
