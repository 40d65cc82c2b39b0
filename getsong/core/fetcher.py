from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import quote_plus

import requests

from .download import download_to_file
from .errors import RetrievalError, SearchError
from .models import AudioFormat, DownloadResult, SearchQuery
from .scraper import scrape_candidates
from .selection import select_identifier
from .settings import GetSongConfig
from .streams import StreamResolver, YtDlpStreamResolver

logger = logging.getLogger(__name__)


def build_search_url(query: SearchQuery, config: GetSongConfig) -> str:
    terms = "+".join(quote_plus(token) for token in query.title_and_artist.split())
    phrase = "+".join(quote_plus(token) for token in config.search_phrase.split())
    return f'{config.search_url}?search_query="{phrase}"+{terms}'


def search_markup(query: SearchQuery, config: GetSongConfig) -> str:
    url = build_search_url(query, config)
    logger.debug("searching url: %s", url)
    try:
        with requests.get(url, timeout=config.http_timeout_sec) as resp:
            if not 200 <= resp.status_code < 300:
                raise SearchError("SEARCH_HTTP_FAILED", f"search returned status code {resp.status_code}")
            return resp.text
    except requests.RequestException as exc:
        raise SearchError("SEARCH_HTTP_FAILED", f"search request failed: {exc}") from exc


def find_video_id(query: SearchQuery, config: GetSongConfig) -> str:
    candidates = scrape_candidates(search_markup(query, config))
    return select_identifier(candidates, query.title, query.title_and_artist, query.expected_duration_sec)


def pick_audio_format(formats: list[AudioFormat]) -> AudioFormat:
    best: AudioFormat | None = None
    for fmt in formats:
        if fmt.has_video_encoding:
            continue
        if fmt.audio_bitrate > (best.audio_bitrate if best else 0):
            best = fmt
    if best is None:
        raise RetrievalError("RETRIEVAL_NO_AUDIO", "No audio available")
    return best


def download_audio(
    identifier: str,
    stem: str,
    config: GetSongConfig,
    resolver: StreamResolver | None = None,
) -> DownloadResult:
    """Download the best audio-only stream of ``identifier`` to ``<stem>.<ext>``.

    ``stem`` is used as given, relative to ``config.output_dir``.
    """
    resolver = resolver or YtDlpStreamResolver()
    fmt = pick_audio_format(resolver.get_formats(identifier))
    url = resolver.get_download_url(fmt)

    target = Path(config.output_dir) / f"{stem}.{fmt.extension}"
    target.parent.mkdir(parents=True, exist_ok=True)
    written = download_to_file(
        url,
        target,
        error_cls=RetrievalError,
        code="RETRIEVAL_HTTP_FAILED",
        timeout=config.http_timeout_sec,
        show_progress=config.show_progress,
        description=stem,
        headers=fmt.http_headers or None,
    )
    return DownloadResult(identifier=identifier, path=str(target), format=fmt, bytes_written=written)
