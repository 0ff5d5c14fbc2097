class DomainError(Exception):
    """Базовая доменная ошибка."""


class ValidationError(DomainError):
    pass


class NotFoundError(DomainError):
    pass


class RoomNotFound(NotFoundError):
    def __init__(self, room_id: str) -> None:
        self.room_id = room_id
        super().__init__(f"Room with id {room_id} not found")


class MembershipNotFound(NotFoundError):
    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"User {user_id} is not in any room")


class VideoNotFound(NotFoundError):
    def __init__(self, room_id: str, url: str) -> None:
        self.room_id = room_id
        self.url = url
        super().__init__(f"Video {url} is not queued in room {room_id}")


class ConflictError(DomainError):
    pass


class ProviderError(DomainError):
    """Сбой внешнего сервиса метаданных видео."""


class ProviderTimeout(ProviderError):
    pass
