from __future__ import annotations

import logging
from typing import Optional

from ..domain.models import Departure, Room, User
from ..errors import MembershipNotFound
from ..ports.services import Clock
from .room_registry import RoomRegistry

logger = logging.getLogger(__name__)


class MembershipManager:
    def __init__(self, registry: RoomRegistry, clock: Clock) -> None:
        self.registry = registry
        self.clock = clock

    async def join(self, room_id: str, user: User) -> Room:
        async with self.registry.lock:
            room = self.registry.require(room_id)
            # user id глобально уникален: пользователь находится максимум в одной комнате
            for other in self.registry.snapshot():
                if other.id != room_id and other.users.pop(user.id, None) is not None:
                    logger.info("user moved user=%s from=%s to=%s", user.id, other.id, room_id)
            room.users[user.id] = user
            # обновляем на каждый join, не только на первый: на это смотрит reaper
            room.last_joined = self.clock.now()
        logger.debug("user joined user=%s room=%s users=%s", user.id, room_id, len(room.users))
        return room

    async def leave(self, user_id: str, room_id: Optional[str] = None) -> Departure:
        async with self.registry.lock:
            if room_id is not None:
                candidates = [self.registry.require(room_id)]
            else:
                candidates = self.registry.snapshot()
            for room in candidates:
                user = room.users.pop(user_id, None)
                if user is not None:
                    break
            else:
                raise MembershipNotFound(user_id)
        logger.debug("user left user=%s room=%s users=%s", user_id, room.id, len(room.users))
        return Departure(room=room, user=user)

    async def is_member(self, room_id: str, user_id: str) -> bool:
        async with self.registry.lock:
            room = self.registry.lookup(room_id)
            return room is not None and user_id in room.users
