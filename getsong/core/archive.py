from __future__ import annotations

import logging
import os
import shutil
import zipfile
from pathlib import Path

from .errors import ArchiveError

logger = logging.getLogger(__name__)


def _safe_target(dest_root: str, name: str) -> str:
    target = os.path.normpath(os.path.join(dest_root, name))
    if not target.startswith(dest_root + os.sep):
        raise ArchiveError("ARCHIVE_ILLEGAL_PATH", f"{target}: illegal file path")
    return target


def _entry_mode(info: zipfile.ZipInfo) -> int:
    return (info.external_attr >> 16) & 0o7777


def extract_zip(src: str | Path, dest: str | Path) -> list[str]:
    """Extract every entry of ``src`` into ``dest`` and return the written paths.

    An entry resolving outside ``dest`` aborts extraction before anything is
    written for it. Entries extracted earlier in the same call are kept.
    """
    dest_root = os.path.normpath(os.path.abspath(dest))
    extracted: list[str] = []

    try:
        archive = zipfile.ZipFile(src)
    except (zipfile.BadZipFile, OSError) as exc:
        raise ArchiveError("ARCHIVE_CORRUPT", f"cannot open archive {src}: {exc}") from exc

    with archive:
        for info in archive.infolist():
            target = _safe_target(dest_root, info.filename)
            extracted.append(target)

            try:
                if info.is_dir():
                    os.makedirs(target, exist_ok=True)
                    continue

                os.makedirs(os.path.dirname(target), exist_ok=True)
                with archive.open(info) as source, open(target, "wb") as sink:
                    shutil.copyfileobj(source, sink)
            except (zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
                raise ArchiveError("ARCHIVE_CORRUPT", f"cannot read {info.filename}: {exc}") from exc
            except OSError as exc:
                raise ArchiveError("ARCHIVE_WRITE_FAILED", f"cannot write {target}: {exc}") from exc

            mode = _entry_mode(info)
            if mode and os.name == "posix":
                os.chmod(target, mode)

    logger.debug("extracted %d entries from %s into %s", len(extracted), src, dest_root)
    return extracted
