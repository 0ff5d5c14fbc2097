from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from ....application.dto.rooms import DepartureDTO, JoinRoomInput, RoomDTO, departure_to_dto, room_to_dto, user_from_input
from ....core.services.membership import MembershipManager
from ..deps.containers import get_membership_manager

router = APIRouter(prefix="/rooms", tags=["participants"])


@router.post("/{room_id}/members", response_model=RoomDTO)
async def join_room(
    room_id: str,
    data: JoinRoomInput,
    members: MembershipManager = Depends(get_membership_manager),
) -> RoomDTO:  # type: ignore[override]
    room = await members.join(room_id, user_from_input(data))
    return room_to_dto(room)


@router.delete("/members/{user_id}", response_model=DepartureDTO)
async def leave_room(
    user_id: str,
    room_id: Optional[str] = None,
    members: MembershipManager = Depends(get_membership_manager),
) -> DepartureDTO:  # type: ignore[override]
    departure = await members.leave(user_id, room_id=room_id)
    return departure_to_dto(departure)
