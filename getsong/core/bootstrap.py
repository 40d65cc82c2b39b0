from __future__ import annotations

import logging
import os
import subprocess
import sys
import time
from pathlib import Path

from .archive import extract_zip
from .download import download_to_file
from .errors import ArchiveError, BootstrapError, UnsupportedPlatformError
from .models import BinaryLocation
from .settings import GetSongConfig

logger = logging.getLogger(__name__)

FFMPEG_DOWNLOADS = {
    "win32": "https://ffmpeg.zeranoe.com/builds/win64/static/ffmpeg-4.1-win64-static.zip",
}
FFMPEG_VERSION_MARKER = "ffmpeg version"
EXECUTABLE_EXTENSIONS = ("", ".exe")
ARCHIVE_NAME = "ffmpeg.zip"

_RESOLVED: dict[tuple[str, str], BinaryLocation] = {}


class DependencyResolver:
    """Find a runnable encoder binary, downloading it into the cache dir if needed.

    Lookup order is PATH, then the cache directory, then the platform download.
    Resolution work happens at most once per resolver instance.
    """

    def __init__(
        self,
        config: GetSongConfig,
        binary_name: str | None = None,
        version_marker: str = FFMPEG_VERSION_MARKER,
        downloads: dict[str, str] | None = None,
        platform: str | None = None,
    ):
        self.config = config
        self.binary_name = binary_name or config.ffmpeg_binary
        self.version_marker = version_marker
        self.downloads = FFMPEG_DOWNLOADS if downloads is None else downloads
        self.platform = platform or sys.platform
        self.cache_dir = config.resolved_cache_dir()
        self._location: BinaryLocation | None = None

    def check_path(self) -> BinaryLocation | None:
        try:
            proc = subprocess.run(
                [self.binary_name, "-version"],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError:
            return None
        output = (proc.stdout or "") + (proc.stderr or "")
        if proc.returncode == 0 and self.version_marker in output:
            return BinaryLocation(path=self.binary_name, source="path")
        return None

    def _matches(self, filename: str) -> bool:
        stem, ext = os.path.splitext(filename)
        return stem == self.binary_name and ext.lower() in EXECUTABLE_EXTENSIONS

    def check_cache(self) -> BinaryLocation | None:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        for root, dirs, files in os.walk(self.cache_dir):
            dirs.sort()
            for filename in sorted(files):
                if self._matches(filename):
                    return BinaryLocation(path=os.path.join(root, filename), source="cache")
        return None

    def download_url(self) -> str:
        url = self.downloads.get(self.platform)
        if not url:
            raise UnsupportedPlatformError(self.platform)
        return url

    def download(self) -> Path:
        url = self.download_url()
        archive_path = self.cache_dir / ARCHIVE_NAME
        logger.info("Downloading %s...", self.binary_name)
        download_to_file(
            url,
            archive_path,
            error_cls=BootstrapError,
            code="BOOTSTRAP_HTTP_FAILED",
            timeout=self.config.http_timeout_sec,
            show_progress=self.config.show_progress,
            description=self.binary_name,
        )
        return archive_path

    def extract(self, archive_path: Path) -> list[str]:
        try:
            extracted = extract_zip(archive_path, self.cache_dir)
        except ArchiveError as exc:
            raise BootstrapError(
                "BOOTSTRAP_EXTRACT_FAILED", f"could not extract {archive_path}: {exc.message}"
            ) from exc
        archive_path.unlink()
        return extracted

    def resolve(self) -> BinaryLocation:
        if self._location is not None:
            return self._location

        started = time.monotonic()
        try:
            location = self.check_path() or self.check_cache()
            if location is None:
                self.extract(self.download())
                found = self.check_cache()
                if found is None:
                    raise BootstrapError(
                        "BOOTSTRAP_NOT_FOUND",
                        f"{self.binary_name} not found in {self.cache_dir} after extraction",
                    )
                location = BinaryLocation(path=found.path, source="download")
        finally:
            logger.debug("time taken: %.3fs", time.monotonic() - started)

        self._location = location
        return location


def get_ffmpeg_binary(config: GetSongConfig) -> BinaryLocation:
    """Resolve the encoder once per process for a given binary name and cache dir."""
    key = (config.ffmpeg_binary, str(config.resolved_cache_dir()))
    location = _RESOLVED.get(key)
    if location is None:
        location = DependencyResolver(config).resolve()
        _RESOLVED[key] = location
    return location
