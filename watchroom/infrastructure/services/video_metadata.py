"""Провайдер метаданных видео через YouTube oEmbed.

GET {endpoint}?url=<video url>&format=json -> {title, author_name, thumbnail_url, ...}
Таймаут всей операции ограничивает VideoQueueManager; здесь только таймаут HTTP клиента.
"""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import parse_qs, urlsplit

import httpx

from ...core.domain.models import VideoMetadata
from ...core.errors import ProviderError
from ...core.ports.services import VideoMetadataProvider

logger = logging.getLogger(__name__)

_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")


def extract_video_id(url: str) -> Optional[str]:
    """Return the YouTube video id for watch/youtu.be/embed/shorts urls, else None."""
    parts = urlsplit(url)
    host = (parts.hostname or "").lower()
    candidate: Optional[str] = None
    if host == "youtu.be":
        candidate = parts.path.lstrip("/").split("/", 1)[0]
    elif host.endswith("youtube.com"):
        if parts.path == "/watch":
            candidate = (parse_qs(parts.query).get("v") or [None])[0]
        else:
            segments = [s for s in parts.path.split("/") if s]
            if len(segments) >= 2 and segments[0] in {"embed", "shorts", "live"}:
                candidate = segments[1]
    if candidate and _ID_RE.match(candidate):
        return candidate
    return None


class YoutubeOEmbedProvider(VideoMetadataProvider):
    def __init__(self, endpoint: str, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport

    async def resolve(self, url: str) -> VideoMetadata:  # type: ignore[override]
        params = {"url": url, "format": "json"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.get(self.endpoint, params=params)
        except httpx.HTTPError as e:
            logger.warning("oembed: transport error url=%s err=%s", url, e)
            raise ProviderError(f"Video metadata request failed: {e.__class__.__name__}") from e
        if r.status_code != 200:
            logger.info("oembed: HTTP %s url=%s", r.status_code, url)
            raise ProviderError(f"Video metadata lookup failed: HTTP {r.status_code}")
        try:
            data = r.json()
            title = data["title"]
        except (ValueError, KeyError, TypeError) as e:
            raise ProviderError("Video metadata response is malformed") from e
        return VideoMetadata(
            url=url,
            title=str(title),
            author_name=data.get("author_name"),
            thumbnail_url=data.get("thumbnail_url"),
            video_id=extract_video_id(url),
        )
