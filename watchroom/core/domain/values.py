from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from ..errors import ValidationError


@dataclass(frozen=True, slots=True)
class OwnerName:
    value: str

    def __post_init__(self) -> None:
        v = self.value.strip()
        if not (1 <= len(v) <= 100):
            raise ValidationError("Owner name must be 1..100 chars")
        object.__setattr__(self, "value", v)

    def __str__(self) -> str:
        return self.value


# буквы любого алфавита и цифры, без "_"
SLUG_RE = re.compile(r"^[^\W_]+(?:-[^\W_]+)*$")
_SLUG_STRIP_RE = re.compile(r"[\W_]+")

FALLBACK_SLUG = "owner"


def slugify(text: str) -> str:
    """Lowercase, non-alphanumeric runs collapsed to "-"; "owner" when nothing is left."""
    return _SLUG_STRIP_RE.sub("-", text.strip().lower()).strip("-") or FALLBACK_SLUG


@dataclass(frozen=True, slots=True)
class Slug:
    value: str

    def __post_init__(self) -> None:
        v = self.value.strip().lower()
        if not (1 <= len(v) <= 100) or not SLUG_RE.match(v):
            raise ValidationError("Slug must be 1..100 chars of letters, digits and '-'")
        object.__setattr__(self, "value", v)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class UserId:
    value: str

    def __post_init__(self) -> None:
        v = self.value.strip()
        if not (1 <= len(v) <= 64):
            raise ValidationError("User id must be 1..64 chars")
        object.__setattr__(self, "value", v)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class VideoUrl:
    value: str

    def __post_init__(self) -> None:
        v = self.value.strip()
        parts = urlsplit(v)
        if parts.scheme not in {"http", "https"} or not parts.netloc:
            raise ValidationError("Video url must be an absolute http(s) url")
        object.__setattr__(self, "value", v)

    def __str__(self) -> str:
        return self.value
