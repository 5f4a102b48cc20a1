"""
Tarea periodica en el event loop.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from loguru import logger

from app.shared.constants.sla_constants import POLL_INTERVAL_SECONDS


class Poller:
    """
    Llama a un callback async cada `interval` segundos hasta que se detiene.

    - start() es idempotente: con una tarea viva no crea otra.
    - stop() cancela la tarea y espera a que termine; despues de stop()
      el callback no se vuelve a ejecutar.
    - Un error en el callback se registra y no detiene el polling.
    """

    def __init__(
        self,
        callback: Callable[[], Awaitable[None]],
        interval: float = POLL_INTERVAL_SECONDS,
        name: str = "poller",
    ):
        self._callback = callback
        self.interval = interval
        self.name = name
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name=self.name)
        logger.debug(f"{self.name}: iniciado (cada {self.interval}s)")

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug(f"{self.name}: detenido")

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self._callback()
            except Exception as e:
                logger.error(f"{self.name}: error en el ciclo de polling: {e}")
