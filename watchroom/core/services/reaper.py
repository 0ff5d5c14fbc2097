from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from ..ports.services import Clock
from .room_registry import RoomRegistry

logger = logging.getLogger(__name__)

DEFAULT_IDLE_AFTER = timedelta(minutes=10)


class InactivityReaper:
    """Удаляет простаивающие комнаты.

    Комната считается простаивающей, если в ней нет участников, кто-то хоть раз
    заходил и последний join был раньше чем `idle_after` назад. Комнаты, в
    которые никто не заходил, не удаляются, пока не задан `unclaimed_ttl`.
    """

    def __init__(
        self,
        registry: RoomRegistry,
        clock: Clock,
        idle_after: timedelta = DEFAULT_IDLE_AFTER,
        unclaimed_ttl: Optional[timedelta] = None,
    ) -> None:
        self.registry = registry
        self.clock = clock
        self.idle_after = idle_after
        self.unclaimed_ttl = unclaimed_ttl

    async def sweep(self) -> list[str]:
        async with self.registry.lock:
            candidates = [room.id for room in self.registry.snapshot() if not room.users]
        logger.debug("reaper: sweep candidates=%s", len(candidates))
        reaped: list[str] = []
        for room_id in candidates:
            try:
                if await self._reap_if_idle(room_id):
                    reaped.append(room_id)
            except Exception:
                logger.exception("reaper: failed to evaluate room=%s", room_id)
        if reaped:
            logger.info("reaper: removed rooms=%s", reaped)
        return reaped

    async def _reap_if_idle(self, room_id: str) -> bool:
        async with self.registry.lock:
            room = self.registry.lookup(room_id)
            if room is None:
                return False
            now = self.clock.now()
            idle = room.is_idle(now, self.idle_after)
            unclaimed = self.unclaimed_ttl is not None and room.is_unclaimed(now, self.unclaimed_ttl)
            logger.debug(
                "reaper: room=%s users=%s last_joined=%s idle=%s unclaimed=%s",
                room_id, len(room.users), room.last_joined, idle, unclaimed,
            )
            if not (idle or unclaimed):
                return False
            if self.registry.video_busy(room_id):
                logger.debug("reaper: skip room=%s (add_video in flight)", room_id)
                return False
            self.registry.remove(room_id)
        logger.info("reaper: room is inactive id=%s", room_id)
        return True
