from __future__ import annotations

import logging
from typing import Any, Protocol

from yt_dlp import YoutubeDL
from yt_dlp.utils import YoutubeDLError

from .errors import RetrievalError
from .models import AudioFormat

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v={identifier}"
DIRECT_PROTOCOLS = ("http", "https")


class StreamResolver(Protocol):
    def get_formats(self, identifier: str) -> list[AudioFormat]: ...

    def get_download_url(self, fmt: AudioFormat) -> str: ...


def _to_audio_format(item: dict[str, Any]) -> AudioFormat:
    vcodec = item.get("vcodec")
    abr = item.get("abr")
    return AudioFormat(
        audio_bitrate=int(abr) if isinstance(abr, (int, float)) else 0,
        has_video_encoding=vcodec not in (None, "none"),
        extension=item.get("ext") or "m4a",
        format_id=item.get("format_id"),
        url=item.get("url"),
        http_headers=dict(item.get("http_headers") or {}),
    )


class YtDlpStreamResolver:
    def __init__(self, options: dict[str, Any] | None = None):
        self.options = {"quiet": True, "no_warnings": True, "skip_download": True}
        self.options.update(options or {})

    def get_formats(self, identifier: str) -> list[AudioFormat]:
        try:
            with YoutubeDL(self.options) as ydl:
                info = ydl.extract_info(WATCH_URL.format(identifier=identifier), download=False)
        except YoutubeDLError as exc:
            raise RetrievalError("RETRIEVAL_INFO_FAILED", f"Unable to fetch video info: {exc}") from exc

        # manifest protocols (m3u8, dash) cannot be fetched with a plain GET
        formats = [
            _to_audio_format(item)
            for item in (info or {}).get("formats") or []
            if (item.get("protocol") or "https") in DIRECT_PROTOCOLS
        ]
        logger.debug("%s: %d formats available", identifier, len(formats))
        return formats

    def get_download_url(self, fmt: AudioFormat) -> str:
        if not fmt.url:
            raise RetrievalError(
                "RETRIEVAL_URL_FAILED", f"Unable to get download url for format {fmt.format_id or fmt.extension}"
            )
        return fmt.url
