from __future__ import annotations

import contextlib
import json
import logging
from collections import defaultdict
from typing import Any

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from ...application.dto.rooms import room_to_dto, video_key
from ...core.domain.models import Room, User
from ...core.domain.values import VideoUrl
from ...core.errors import DomainError, NotFoundError, ValidationError
from ...core.services.membership import MembershipManager
from ...core.services.video_queue import VideoQueueManager
from ..api.deps.containers import get_membership_manager, get_video_queue

logger = logging.getLogger(__name__)

router = APIRouter()

# In-process registry of room connections for broadcast
_room_clients: dict[str, set[WebSocket]] = defaultdict(set)
_ws_user: dict[WebSocket, str] = {}


async def broadcast_room(room: Room) -> None:
    payload = {"type": "room", "room": room_to_dto(room).model_dump(mode="json")}
    for ws in list(_room_clients.get(room.id, set())):
        # сокет пользователя, перешедшего в другую комнату, обновления не получает
        if _ws_user.get(ws) not in room.users:
            continue
        # отвалившийся клиент не должен мешать остальным
        with contextlib.suppress(Exception):
            await ws.send_json(payload)


def _user_still_connected(room_id: str, user_id: str) -> bool:
    return any(_ws_user.get(ws) == user_id for ws in _room_clients.get(room_id, set()))


@router.websocket("/ws/rooms/{room_id}")
async def ws_room(
    websocket: WebSocket,
    room_id: str,
    members: MembershipManager = Depends(get_membership_manager),
    queue: VideoQueueManager = Depends(get_video_queue),
):  # type: ignore[override]
    # Принимаем соединение сразу, чтобы клиент получил корректный close frame с кодом ошибки
    await websocket.accept()
    try:
        user = User.create(
            id=websocket.query_params.get("user_id") or "",
            name=websocket.query_params.get("name") or "",
        )
    except ValidationError:
        await websocket.close(code=4400, reason="Invalid user")
        return
    try:
        room = await members.join(room_id, user)
    except NotFoundError:
        await websocket.close(code=4404, reason="Room not found")
        return

    _room_clients[room_id].add(websocket)
    _ws_user[websocket] = user.id
    await broadcast_room(room)

    try:
        while True:
            msg = await websocket.receive_text()
            try:
                data: dict[str, Any] = json.loads(msg)
            except ValueError:
                await websocket.send_json({"type": "error", "detail": "Invalid JSON"})
                continue
            kind = data.get("type")
            if kind == "ping":
                await websocket.send_json({"type": "pong"})
                continue
            if not await members.is_member(room_id, user.id):
                # пользователь перешёл в другую комнату: этот сокет больше не управляет очередью
                await websocket.send_json({"type": "error", "detail": "Not a member of this room"})
                await websocket.close(code=4409, reason="Not a member")
                break
            try:
                url = video_key(str(data.get("url") or ""))
                if kind == "add_video":
                    room = await queue.add_video(room_id, VideoUrl(url).value)
                elif kind == "remove_video":
                    room = await queue.remove_video(room_id, url)
                elif kind == "change_video":
                    room = await queue.change_current_video(room_id, url)
                else:
                    await websocket.send_json({"type": "error", "detail": "Unknown message"})
                    continue
            except DomainError as e:
                await websocket.send_json({"type": "error", "detail": str(e)})
                continue
            await broadcast_room(room)
    except WebSocketDisconnect:
        pass
    finally:
        with contextlib.suppress(KeyError):
            _room_clients[room_id].remove(websocket)
        if not _room_clients.get(room_id):
            _room_clients.pop(room_id, None)
        _ws_user.pop(websocket, None)
        if not _user_still_connected(room_id, user.id):
            try:
                departure = await members.leave(user.id, room_id=room_id)
            except NotFoundError:
                # комнату уже удалили или пользователь перешёл в другую комнату
                logger.debug("ws: leave skipped user=%s room=%s", user.id, room_id)
            else:
                await broadcast_room(departure.room)
