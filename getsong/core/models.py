from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .errors import SearchError


class Candidate(BaseModel):
    title: str
    identifier: str
    duration_sec: int


class SearchQuery(BaseModel):
    title: str
    artist: str | None = None
    expected_duration_sec: int | None = None

    @classmethod
    def build(cls, title: str, artist: str | None = None, expected_duration_sec: int | None = None) -> "SearchQuery":
        if not title or not title.strip():
            raise SearchError("SEARCH_TITLE_REQUIRED", "must enter title")
        return cls(title=title, artist=artist or None, expected_duration_sec=expected_duration_sec)

    @property
    def title_and_artist(self) -> str:
        if self.artist:
            return f"{self.title} {self.artist}"
        return self.title


class AudioFormat(BaseModel):
    audio_bitrate: int = 0
    has_video_encoding: bool = False
    extension: str
    format_id: str | None = None
    url: str | None = None
    http_headers: dict[str, str] = Field(default_factory=dict)


class BinaryLocation(BaseModel):
    path: str
    source: Literal["path", "cache", "download"]


class DownloadResult(BaseModel):
    identifier: str
    path: str
    format: AudioFormat
    bytes_written: int = 0


class SongRequest(BaseModel):
    title: str
    artist: str | None = None
    duration_sec: int | None = None
    do_not_download: bool = False


class SongResult(BaseModel):
    identifier: str
    filename: str
    downloaded_path: str | None = None
    output_path: str | None = None
