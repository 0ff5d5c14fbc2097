from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..domain.models import Owner, Room
from ..errors import ConflictError, RoomNotFound
from ..ports.services import Clock, RoomIdGenerator

logger = logging.getLogger(__name__)


class RoomRegistry:
    """Единственный владелец всех комнат процесса.

    Мутации выполняются под `lock`; методы без `async` (lookup/require/remove/
    snapshot) рассчитаны на вызов уже под захваченным локом из
    MembershipManager / VideoQueueManager / InactivityReaper.
    """

    def __init__(self, ids: RoomIdGenerator, clock: Clock, max_id_attempts: int = 16) -> None:
        self.ids = ids
        self.clock = clock
        self.max_id_attempts = max_id_attempts
        self.lock = asyncio.Lock()
        self._rooms: dict[str, Room] = {}
        self._video_locks: dict[str, asyncio.Lock] = {}

    async def create(self, owner: Owner) -> Room:
        async with self.lock:
            room_id = self._fresh_id()
            room = Room.create(room_id, owner, self.clock.now())
            self._rooms[room_id] = room
        logger.info("room created id=%s owner=%s", room.id, owner.slug)
        return room

    async def list(self) -> list[Room]:
        async with self.lock:
            return self.snapshot()

    async def get(self, room_id: str) -> Room:
        async with self.lock:
            return self.require(room_id)

    async def delete(self, room_id: str) -> None:
        async with self.lock:
            self.remove(room_id)

    async def clear(self) -> None:
        async with self.lock:
            count = len(self._rooms)
            self._rooms.clear()
            self._video_locks.clear()
        logger.info("registry cleared rooms=%s", count)

    # --- helpers for callers already holding `lock` ---

    def lookup(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def require(self, room_id: str) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFound(room_id)
        return room

    def remove(self, room_id: str) -> Optional[Room]:
        self._video_locks.pop(room_id, None)
        return self._rooms.pop(room_id, None)

    def snapshot(self) -> list[Room]:
        return list(self._rooms.values())

    def video_lock(self, room_id: str) -> asyncio.Lock:
        lock = self._video_locks.get(room_id)
        if lock is None:
            lock = self._video_locks[room_id] = asyncio.Lock()
        return lock

    def video_busy(self, room_id: str) -> bool:
        lock = self._video_locks.get(room_id)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._rooms)

    def _fresh_id(self) -> str:
        for attempt in range(self.max_id_attempts):
            candidate = self.ids.generate()
            if candidate not in self._rooms:
                return candidate
            logger.warning("room id collision id=%s attempt=%s", candidate, attempt + 1)
        raise ConflictError(f"Could not allocate a unique room id after {self.max_id_attempts} attempts")
