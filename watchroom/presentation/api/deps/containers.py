from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from fastapi import Depends

from ....core.ports.services import Clock, VideoMetadataProvider
from ....core.services.membership import MembershipManager
from ....core.services.reaper import InactivityReaper
from ....core.services.room_registry import RoomRegistry
from ....core.services.video_queue import VideoQueueManager
from ....infrastructure.clock import SystemClock
from ....infrastructure.config import get_settings
from ....infrastructure.ids import make_room_id_generator
from ....infrastructure.services.video_metadata import YoutubeOEmbedProvider


# Process-wide singletons: комнаты живут в памяти одного процесса
@lru_cache(maxsize=1)
def _get_clock_singleton() -> Clock:
    return SystemClock()


@lru_cache(maxsize=1)
def _get_registry_singleton() -> RoomRegistry:
    s = get_settings()
    return RoomRegistry(
        ids=make_room_id_generator(s.ROOM_ID_SCHEME, s.ROOM_ID_LENGTH),
        clock=_get_clock_singleton(),
        max_id_attempts=s.ROOM_ID_MAX_ATTEMPTS,
    )


@lru_cache(maxsize=1)
def _get_video_provider_singleton() -> VideoMetadataProvider:
    s = get_settings()
    return YoutubeOEmbedProvider(endpoint=s.VIDEO_OEMBED_URL, timeout=s.VIDEO_METADATA_TIMEOUT_SEC)


def get_clock() -> Clock:
    return _get_clock_singleton()


def get_room_registry() -> RoomRegistry:
    return _get_registry_singleton()


def get_video_metadata_provider() -> VideoMetadataProvider:
    return _get_video_provider_singleton()


# Managers are stateless wrappers over the registry, built per request
def get_membership_manager(
    registry: RoomRegistry = Depends(get_room_registry),
    clock: Clock = Depends(get_clock),
) -> MembershipManager:
    return MembershipManager(registry, clock)


def get_video_queue(
    registry: RoomRegistry = Depends(get_room_registry),
    provider: VideoMetadataProvider = Depends(get_video_metadata_provider),
) -> VideoQueueManager:
    return VideoQueueManager(registry, provider, timeout=get_settings().VIDEO_METADATA_TIMEOUT_SEC)


def build_reaper(registry: RoomRegistry, clock: Clock) -> InactivityReaper:
    s = get_settings()
    ttl = s.UNCLAIMED_ROOM_TTL_SEC
    return InactivityReaper(
        registry,
        clock,
        idle_after=timedelta(seconds=s.ROOM_IDLE_AFTER_SEC),
        unclaimed_ttl=timedelta(seconds=ttl) if ttl else None,
    )
