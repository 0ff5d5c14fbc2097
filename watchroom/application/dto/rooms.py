from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ...core.domain.models import Departure, Owner, Room, User, VideoMetadata
from ...core.domain.values import VideoUrl


class CreateRoomInput(BaseModel):
    owner: str = Field(min_length=1, max_length=100)
    slug: Optional[str] = Field(default=None, max_length=100)


class JoinRoomInput(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(default="", max_length=100)


class VideoInput(BaseModel):
    url: str = Field(min_length=1, max_length=2048)


class OwnerDTO(BaseModel):
    name: str
    slug: str


class UserDTO(BaseModel):
    id: str
    name: str


class VideoDTO(BaseModel):
    url: str
    title: str
    author_name: Optional[str] = None
    thumbnail_url: Optional[str] = None
    video_id: Optional[str] = None


class RoomDTO(BaseModel):
    id: str
    owner: OwnerDTO
    created_at: datetime
    users: list[UserDTO]
    videos: list[VideoDTO]
    current_video: Optional[VideoDTO] = None
    last_joined: Optional[datetime] = None


class DepartureDTO(BaseModel):
    room: RoomDTO
    user: UserDTO


def owner_from_input(data: CreateRoomInput) -> Owner:
    """Pure mapping of the create-room payload to the Owner value (raises ValidationError)."""
    return Owner.create(name=data.owner, slug=data.slug)


def user_from_input(data: JoinRoomInput) -> User:
    return User.create(id=data.id, name=data.name)


def video_url_from_input(data: VideoInput) -> str:
    return VideoUrl(data.url).value


def video_key(url: str) -> str:
    """Queue key for lookups; same normalization VideoUrl applies on add, without validation."""
    return url.strip()


def video_to_dto(video: VideoMetadata) -> VideoDTO:
    return VideoDTO(
        url=video.url,
        title=video.title,
        author_name=video.author_name,
        thumbnail_url=video.thumbnail_url,
        video_id=video.video_id,
    )


def room_to_dto(room: Room) -> RoomDTO:
    current = room.current_video
    return RoomDTO(
        id=room.id,
        owner=OwnerDTO(name=room.owner.name, slug=room.owner.slug),
        created_at=room.created_at,
        users=[UserDTO(id=u.id, name=u.name) for u in room.users.values()],
        videos=[video_to_dto(v) for v in room.videos.values()],
        current_video=video_to_dto(current) if current else None,
        last_joined=room.last_joined,
    )


def departure_to_dto(departure: Departure) -> DepartureDTO:
    return DepartureDTO(
        room=room_to_dto(departure.room),
        user=UserDTO(id=departure.user.id, name=departure.user.name),
    )
