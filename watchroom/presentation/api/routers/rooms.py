from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ....application.dto.rooms import CreateRoomInput, RoomDTO, owner_from_input, room_to_dto
from ....core.services.room_registry import RoomRegistry
from ..deps.containers import get_room_registry

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.post("", response_model=RoomDTO, status_code=status.HTTP_201_CREATED)
async def create_room(
    data: CreateRoomInput,
    rooms: RoomRegistry = Depends(get_room_registry),
) -> RoomDTO:  # type: ignore[override]
    room = await rooms.create(owner_from_input(data))
    return room_to_dto(room)


@router.get("", response_model=list[RoomDTO])
async def list_rooms(rooms: RoomRegistry = Depends(get_room_registry)):  # type: ignore[override]
    return [room_to_dto(r) for r in await rooms.list()]


@router.get("/{room_id}", response_model=RoomDTO)
async def get_room(
    room_id: str,
    rooms: RoomRegistry = Depends(get_room_registry),
) -> RoomDTO:  # type: ignore[override]
    room = await rooms.get(room_id)
    return room_to_dto(room)
