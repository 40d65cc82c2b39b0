from __future__ import annotations

import logging
import sys
from pathlib import Path

import requests
from tqdm import tqdm

from .errors import GetSongError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def _content_length(resp: requests.Response) -> int | None:
    raw = (resp.headers or {}).get("Content-Length")
    try:
        length = int(raw) if raw else 0
    except ValueError:
        length = 0
    return length or None


def download_to_file(
    url: str,
    target: Path,
    *,
    error_cls: type[GetSongError],
    code: str,
    timeout: float | None = None,
    show_progress: bool = False,
    description: str | None = None,
    headers: dict[str, str] | None = None,
) -> int:
    """Stream ``url`` into ``target`` and return the number of bytes written.

    Non-2xx statuses and transport errors raise ``error_cls(code, ...)``. A
    partially written ``target`` stays on disk.
    """
    logger.debug("downloading %s to %s", url, target)
    try:
        with requests.get(url, headers=headers, stream=True, timeout=timeout) as resp:
            if not 200 <= resp.status_code < 300:
                raise error_cls(code, f"Unable to start download: received status code {resp.status_code}")

            written = 0
            with target.open("wb") as fh, tqdm(
                total=_content_length(resp),
                unit="B",
                unit_scale=True,
                unit_divisor=1024,
                desc=description,
                disable=not show_progress,
                file=sys.stderr,
            ) as progress:
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if not chunk:
                        continue
                    fh.write(chunk)
                    written += len(chunk)
                    progress.update(len(chunk))
    except requests.RequestException as exc:
        raise error_cls(code, f"Unable to download {url}: {exc}") from exc

    return written
