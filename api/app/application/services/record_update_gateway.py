"""
Actualizacion de registros en Airtable con merge optimista en memoria.
"""
from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from app.domain.entities.results import PrimaryResult

DEFAULT_ERROR_MESSAGE = "Error al actualizar el registro"

UpdateFn = Callable[[str, Dict[str, Any]], Optional[Dict[str, Any]]]


class RecordUpdateGateway:
    """
    Envia un patch al almacen principal y, solo si tiene exito, lo mezcla
    sobre el elemento en memoria con el mismo id (sin volver a leer).

    No hay reintentos ni rollback: un fallo deja la lista intacta y devuelve
    un PrimaryResult con el mensaje a mostrar al usuario.
    """

    def __init__(self, update_fn: UpdateFn, items: List[Any]):
        self._update_fn = update_fn
        self._items = items
        self._in_flight = 0
        self.error: Optional[str] = None

    @property
    def saving(self) -> bool:
        """True mientras haya alguna actualizacion en curso."""
        return self._in_flight > 0

    async def update(self, record_id: str, patch: Dict[str, Any]) -> PrimaryResult:
        self._in_flight += 1
        self.error = None
        try:
            record = await asyncio.to_thread(self._update_fn, record_id, patch)
        except Exception as e:
            message = str(e) or DEFAULT_ERROR_MESSAGE
            logger.error(f"Error actualizando {record_id}: {message}")
            self.error = message
            return PrimaryResult.failure(record_id, message)
        finally:
            self._in_flight -= 1

        self._merge(record_id, patch)
        return PrimaryResult.success(record_id, record)

    def _merge(self, record_id: str, patch: Dict[str, Any]) -> None:
        for index, item in enumerate(self._items):
            if item.id == record_id:
                self._items[index] = item.merge(patch)
                return
        logger.debug(f"Registro {record_id} actualizado pero no estaba en memoria")
