"""Периодические фоновые задачи процесса.

Использование:
    task = PeriodicTask("reaper", 600, reaper.sweep)
    task.start()          # на старте приложения (нужен запущенный event loop)
    await task.shutdown() # при остановке
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    def __init__(self, name: str, interval: float, action: Callable[[], Awaitable[object]]) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.name = name
        self.interval = interval
        self.action = action
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name=f"periodic:{self.name}")
        logger.info("%s: started interval=%ss", self.name, self.interval)

    async def shutdown(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("%s: stopped", self.name)

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.action()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                # одна неудачная итерация не должна останавливать расписание
                logger.exception("%s: run failed: %s", self.name, e)
