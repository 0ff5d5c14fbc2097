from __future__ import annotations

import httpx
import pytest

from watchroom.core.errors import ProviderError
from watchroom.infrastructure.services.video_metadata import YoutubeOEmbedProvider, extract_video_id

ENDPOINT = "https://www.youtube.com/oembed"


def _provider(handler) -> YoutubeOEmbedProvider:
    return YoutubeOEmbedProvider(ENDPOINT, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_resolve_maps_oembed_payload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url.params.get("url")
        seen["format"] = request.url.params.get("format")
        return httpx.Response(200, json={
            "title": "Never Gonna Give You Up",
            "author_name": "Rick Astley",
            "thumbnail_url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg",
        })

    url = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    video = await _provider(handler).resolve(url)
    assert seen == {"url": url, "format": "json"}
    assert video.url == url
    assert video.title == "Never Gonna Give You Up"
    assert video.author_name == "Rick Astley"
    assert video.video_id == "dQw4w9WgXcQ"


@pytest.mark.asyncio
async def test_resolve_http_error_status():
    provider = _provider(lambda request: httpx.Response(404, text="Not Found"))
    with pytest.raises(ProviderError, match="HTTP 404"):
        await provider.resolve("https://www.youtube.com/watch?v=xxxxxxxxxxx")


@pytest.mark.asyncio
async def test_resolve_malformed_body():
    provider = _provider(lambda request: httpx.Response(200, json={"author_name": "no title"}))
    with pytest.raises(ProviderError, match="malformed"):
        await provider.resolve("https://youtu.be/dQw4w9WgXcQ")


@pytest.mark.asyncio
async def test_resolve_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderError):
        await _provider(handler).resolve("https://youtu.be/dQw4w9WgXcQ")


@pytest.mark.parametrize("url, expected", [
    ("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42", "dQw4w9WgXcQ"),
    ("https://youtu.be/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
    ("https://www.youtube.com/embed/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
    ("https://m.youtube.com/shorts/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
    ("https://vimeo.com/123456", None),
    ("https://www.youtube.com/watch?v=short", None),
])
def test_extract_video_id(url, expected):
    assert extract_video_id(url) == expected


def test_module_docstring_is_set():
    from watchroom.infrastructure.services import video_metadata

    assert video_metadata.__doc__ and "oEmbed" in video_metadata.__doc__
