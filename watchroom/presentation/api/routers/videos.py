from __future__ import annotations

from fastapi import APIRouter, Depends

from ....application.dto.rooms import RoomDTO, VideoInput, room_to_dto, video_key, video_url_from_input
from ....core.services.video_queue import VideoQueueManager
from ..deps.containers import get_video_queue

router = APIRouter(prefix="/rooms", tags=["videos"])


@router.post("/{room_id}/videos", response_model=RoomDTO)
async def add_video(
    room_id: str,
    data: VideoInput,
    queue: VideoQueueManager = Depends(get_video_queue),
) -> RoomDTO:  # type: ignore[override]
    room = await queue.add_video(room_id, video_url_from_input(data))
    return room_to_dto(room)


@router.delete("/{room_id}/videos", response_model=RoomDTO)
async def remove_video(
    room_id: str,
    url: str,
    queue: VideoQueueManager = Depends(get_video_queue),
) -> RoomDTO:  # type: ignore[override]
    # удаление не валидирует url: отсутствующее видео — no-op
    room = await queue.remove_video(room_id, video_key(url))
    return room_to_dto(room)


@router.put("/{room_id}/videos/current", response_model=RoomDTO)
async def change_current_video(
    room_id: str,
    data: VideoInput,
    queue: VideoQueueManager = Depends(get_video_queue),
) -> RoomDTO:  # type: ignore[override]
    room = await queue.change_current_video(room_id, video_key(data.url))
    return room_to_dto(room)
