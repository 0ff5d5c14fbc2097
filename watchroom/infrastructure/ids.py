from __future__ import annotations

import secrets
import string
from uuid import uuid4

from ..core.ports.services import RoomIdGenerator

BASE36 = string.digits + string.ascii_lowercase


class ShortRoomIdGenerator(RoomIdGenerator):
    """Короткие base36 id, удобные для ссылок (по умолчанию 9 символов).

    Коллизии возможны, их отсекает RoomRegistry повторной генерацией.
    """

    def __init__(self, length: int = 9) -> None:
        if length < 4:
            raise ValueError("room id length must be >= 4")
        self.length = length

    def generate(self) -> str:
        return "".join(secrets.choice(BASE36) for _ in range(self.length))


class UuidRoomIdGenerator(RoomIdGenerator):
    def generate(self) -> str:
        return uuid4().hex


def make_room_id_generator(scheme: str, length: int = 9) -> RoomIdGenerator:
    scheme = scheme.lower()
    if scheme == "uuid":
        return UuidRoomIdGenerator()
    if scheme == "short":
        return ShortRoomIdGenerator(length)
    raise ValueError(f"Unknown room id scheme: {scheme}")
