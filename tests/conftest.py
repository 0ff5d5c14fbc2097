"""Общие тестовые заглушки.

 - FakeClock: управляемое время для reaper / last_joined
 - FakeVideoProvider: метаданные без сети, с возможностью "подвесить" запрос
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient, ASGITransport

from watchroom.core.domain.models import VideoMetadata
from watchroom.core.ports.services import Clock, VideoMetadataProvider
from watchroom.core.services.membership import MembershipManager
from watchroom.core.services.reaper import InactivityReaper
from watchroom.core.services.room_registry import RoomRegistry
from watchroom.core.services.video_queue import VideoQueueManager
from watchroom.infrastructure.ids import UuidRoomIdGenerator


class FakeClock(Clock):
    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class FakeVideoProvider(VideoMetadataProvider):
    def __init__(self) -> None:
        self.calls: list[str] = []
        self.failures: dict[str, Exception] = {}
        # url -> Event: resolve ждёт, пока тест не отпустит
        self.gates: dict[str, asyncio.Event] = {}

    async def resolve(self, url: str) -> VideoMetadata:  # type: ignore[override]
        self.calls.append(url)
        gate = self.gates.get(url)
        if gate is not None:
            await gate.wait()
        if url in self.failures:
            raise self.failures[url]
        return VideoMetadata(url=url, title=f"title of {url}", author_name="author")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def registry(clock: FakeClock) -> RoomRegistry:
    return RoomRegistry(ids=UuidRoomIdGenerator(), clock=clock)


@pytest.fixture()
def provider() -> FakeVideoProvider:
    return FakeVideoProvider()


@pytest.fixture()
def members(registry: RoomRegistry, clock: FakeClock) -> MembershipManager:
    return MembershipManager(registry, clock)


@pytest.fixture()
def queue(registry: RoomRegistry, provider: FakeVideoProvider) -> VideoQueueManager:
    return VideoQueueManager(registry, provider, timeout=1.0)


@pytest.fixture()
def reaper(registry: RoomRegistry, clock: FakeClock) -> InactivityReaper:
    return InactivityReaper(registry, clock)


@pytest.fixture()
def app(registry: RoomRegistry, clock: FakeClock, provider: FakeVideoProvider):
    from watchroom.bootstrap.main import create_app
    from watchroom.presentation.api.deps.containers import get_clock, get_room_registry, get_video_metadata_provider

    application = create_app()
    application.dependency_overrides[get_room_registry] = lambda: registry
    application.dependency_overrides[get_clock] = lambda: clock
    application.dependency_overrides[get_video_metadata_provider] = lambda: provider
    return application


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
