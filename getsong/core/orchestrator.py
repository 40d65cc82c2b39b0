from __future__ import annotations

import logging
from pathlib import Path

from .bootstrap import get_ffmpeg_binary
from .errors import BootstrapError, GetSongError, RetrievalError, SearchError, UnsupportedPlatformError
from .fetcher import download_audio, find_video_id
from .models import SearchQuery, SongRequest, SongResult
from .settings import GetSongConfig
from .streams import StreamResolver
from .text import sanitize_filename_part
from .transcode import convert_to_mp3

logger = logging.getLogger(__name__)


def output_stem(request: SongRequest) -> str:
    title = sanitize_filename_part(request.title)
    if request.artist:
        return f"{sanitize_filename_part(request.artist)} - {title}"
    return title


def get_song(
    request: SongRequest,
    config: GetSongConfig,
    resolver: StreamResolver | None = None,
) -> SongResult:
    """Find ``request`` on YouTube and, unless told not to, save it as ``<stem>.mp3``."""
    query = SearchQuery.build(request.title, request.artist, request.duration_sec)
    stem = output_stem(request)

    try:
        identifier = find_video_id(query, config)
    except SearchError as exc:
        raise SearchError(exc.code, f"could not get youtube ID: {exc.message}") from exc
    logger.info("found %s for '%s'", identifier, query.title_and_artist)

    result = SongResult(identifier=identifier, filename=f"{stem}.mp3")
    if request.do_not_download:
        return result

    try:
        downloaded = download_audio(identifier, stem, config, resolver=resolver)
    except RetrievalError as exc:
        raise RetrievalError(exc.code, f"could not download video: {exc.message}") from exc
    result.downloaded_path = downloaded.path

    try:
        binary = get_ffmpeg_binary(config)
    except BootstrapError as exc:
        raise BootstrapError(exc.code, f"could not locate ffmpeg: {exc.message}") from exc
    except UnsupportedPlatformError as exc:
        raise UnsupportedPlatformError(exc.platform, "could not locate ffmpeg") from exc

    try:
        result.output_path = convert_to_mp3(binary, downloaded.path)
    except GetSongError as exc:
        raise type(exc)(exc.code, f"could not convert video: {exc.message}") from exc

    logger.info("saved %s", Path(result.output_path).name)
    return result
