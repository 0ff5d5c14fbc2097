from __future__ import annotations

import asyncio
import logging

from ..domain.models import Room
from ..errors import ProviderTimeout, RoomNotFound, VideoNotFound
from ..ports.services import VideoMetadataProvider
from .room_registry import RoomRegistry

logger = logging.getLogger(__name__)


class VideoQueueManager:
    """Очередь видео комнаты и выбор текущего видео.

    add_video — единственная операция с точкой ожидания (запрос метаданных).
    Параллельные add_video одной комнаты сериализуются через
    `registry.video_lock(room_id)`; разные комнаты друг друга не ждут.
    """

    def __init__(self, registry: RoomRegistry, provider: VideoMetadataProvider, timeout: float = 10.0) -> None:
        self.registry = registry
        self.provider = provider
        self.timeout = timeout

    async def add_video(self, room_id: str, url: str) -> Room:
        async with self.registry.lock:
            self.registry.require(room_id)
            video_lock = self.registry.video_lock(room_id)
        async with video_lock:
            async with self.registry.lock:
                room = self.registry.require(room_id)
            # store lock не держим на время внешнего вызова
            try:
                video = await asyncio.wait_for(self.provider.resolve(url), timeout=self.timeout)
            except asyncio.TimeoutError:
                logger.warning("video metadata timeout room=%s url=%s timeout=%s", room_id, url, self.timeout)
                raise ProviderTimeout(f"Video metadata lookup timed out after {self.timeout}s") from None
            async with self.registry.lock:
                # комнату могли удалить (reaper) пока ждали провайдера
                if self.registry.lookup(room_id) is not room:
                    raise RoomNotFound(room_id)
                if not room.videos:
                    room.current_url = url
                room.videos[url] = video
        logger.debug("video added room=%s url=%s total=%s", room_id, url, len(room.videos))
        return room

    async def remove_video(self, room_id: str, url: str) -> Room:
        async with self.registry.lock:
            room = self.registry.require(room_id)
            if room.current_url == url:
                room.current_url = None
            room.videos.pop(url, None)
        return room

    async def change_current_video(self, room_id: str, url: str) -> Room:
        async with self.registry.lock:
            room = self.registry.require(room_id)
            if url not in room.videos:
                raise VideoNotFound(room_id, url)
            room.current_url = url
        return room
