from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ..domain.models import VideoMetadata


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        raise NotImplementedError


class RoomIdGenerator(ABC):
    """Источник идентификаторов комнат.

    Уникальность относительно уже зарегистрированных комнат обеспечивает
    RoomRegistry (повтор при коллизии), генератор лишь выдаёт кандидатов.
    """

    @abstractmethod
    def generate(self) -> str:
        raise NotImplementedError


class VideoMetadataProvider(ABC):
    @abstractmethod
    async def resolve(self, url: str) -> VideoMetadata:
        """Resolve a video url into metadata; raises ProviderError on failure."""
        raise NotImplementedError
