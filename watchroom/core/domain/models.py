from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from .values import OwnerName, Slug, UserId, slugify


@dataclass(frozen=True, slots=True)
class Owner:
    name: str
    slug: str

    @staticmethod
    def create(name: str, slug: str | None = None) -> "Owner":
        owner_name = OwnerName(name)
        # без явного slug выводим его из имени владельца
        owner_slug = Slug(slug if slug is not None else slugify(owner_name.value))
        return Owner(name=owner_name.value, slug=owner_slug.value)


@dataclass(frozen=True, slots=True)
class User:
    id: str
    name: str

    @staticmethod
    def create(id: str, name: str) -> "User":
        return User(id=UserId(id).value, name=name.strip())


@dataclass(frozen=True, slots=True)
class VideoMetadata:
    url: str
    title: str
    author_name: Optional[str] = None
    thumbnail_url: Optional[str] = None
    video_id: Optional[str] = None


@dataclass(slots=True)
class Room:
    """Shared watching session.

    The current selection is stored by url, so `current_video` can only ever
    point at an entry that is still in `videos`.
    """
    id: str
    owner: Owner
    created_at: datetime
    users: dict[str, User] = field(default_factory=dict)
    videos: dict[str, VideoMetadata] = field(default_factory=dict)
    current_url: Optional[str] = None
    last_joined: Optional[datetime] = None

    @staticmethod
    def create(room_id: str, owner: Owner, now: datetime) -> "Room":
        return Room(id=room_id, owner=owner, created_at=now)

    @property
    def current_video(self) -> Optional[VideoMetadata]:
        if self.current_url is None:
            return None
        return self.videos.get(self.current_url)

    def is_idle(self, now: datetime, idle_after: timedelta) -> bool:
        if self.users or self.last_joined is None:
            return False
        return self.last_joined < now - idle_after

    def is_unclaimed(self, now: datetime, ttl: timedelta) -> bool:
        """Nobody has ever joined and the room outlived `ttl`."""
        if self.users or self.last_joined is not None:
            return False
        return self.created_at < now - ttl


@dataclass(slots=True)
class Departure:
    room: Room
    user: User
