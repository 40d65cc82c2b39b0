from __future__ import annotations

import zipfile
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from getsong.core.bootstrap import DependencyResolver, get_ffmpeg_binary
from getsong.core.errors import BootstrapError, UnsupportedPlatformError
from getsong.core.settings import GetSongConfig


class _Resp:
    def __init__(self, status_code: int = 200, text: str = "", chunks: list[bytes] | None = None, headers: dict | None = None) -> None:
        self.status_code = status_code
        self.text = text
        self.headers = headers or {}
        self._chunks = chunks or []

    def iter_content(self, chunk_size: int = 65536):
        yield from self._chunks

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        return None


def _missing_binary(*args, **kwargs):
    raise FileNotFoundError("ffmpeg")


def _fake_download(entries: list[tuple[str, bytes]]):
    def fake(url, target, **kwargs):
        with zipfile.ZipFile(target, "w") as zf:
            for name, data in entries:
                zf.writestr(name, data)
        return target.stat().st_size

    return fake


def test_binary_on_path(monkeypatch: pytest.MonkeyPatch, config: GetSongConfig) -> None:
    monkeypatch.setattr(
        "getsong.core.bootstrap.subprocess.run",
        lambda *args, **kwargs: CompletedProcess(args=args, returncode=0, stdout="ffmpeg version 6.1 Copyright", stderr=""),
    )
    out = DependencyResolver(config).resolve()
    assert out.path == "ffmpeg"
    assert out.source == "path"


def test_path_binary_without_version_marker_falls_back_to_cache(
    monkeypatch: pytest.MonkeyPatch, config: GetSongConfig
) -> None:
    monkeypatch.setattr(
        "getsong.core.bootstrap.subprocess.run",
        lambda *args, **kwargs: CompletedProcess(args=args, returncode=0, stdout="something else", stderr=""),
    )
    cached = Path(config.cache_dir) / "ffmpeg-4.1" / "bin" / "ffmpeg"
    cached.parent.mkdir(parents=True)
    cached.write_bytes(b"x")

    out = DependencyResolver(config, platform="linux").resolve()
    assert out.path == str(cached)
    assert out.source == "cache"


def test_cache_match_ignores_other_extensions(monkeypatch: pytest.MonkeyPatch, config: GetSongConfig) -> None:
    monkeypatch.setattr("getsong.core.bootstrap.subprocess.run", _missing_binary)
    cache = Path(config.cache_dir)
    cache.mkdir(parents=True)
    (cache / "ffmpeg.txt").write_text("doc")
    (cache / "ffprobe.exe").write_bytes(b"x")

    with pytest.raises(UnsupportedPlatformError):
        DependencyResolver(config, platform="linux").resolve()

    (cache / "ffmpeg.exe").write_bytes(b"x")
    assert DependencyResolver(config, platform="linux").resolve().path == str(cache / "ffmpeg.exe")


def test_unsupported_platform_is_not_a_regular_error(monkeypatch: pytest.MonkeyPatch, config: GetSongConfig) -> None:
    monkeypatch.setattr("getsong.core.bootstrap.subprocess.run", _missing_binary)
    with pytest.raises(UnsupportedPlatformError) as exc:
        DependencyResolver(config, platform="darwin").resolve()
    assert exc.value.platform == "darwin"
    assert not isinstance(exc.value, BootstrapError)
    assert Path(config.cache_dir).is_dir()


def test_download_extracts_and_removes_archive(monkeypatch: pytest.MonkeyPatch, config: GetSongConfig) -> None:
    monkeypatch.setattr("getsong.core.bootstrap.subprocess.run", _missing_binary)
    monkeypatch.setattr(
        "getsong.core.bootstrap.download_to_file",
        _fake_download([("ffmpeg-4.1-win64-static/bin/ffmpeg.exe", b"MZ")]),
    )

    out = DependencyResolver(config, platform="win32").resolve()
    cache = Path(config.cache_dir)
    assert out.source == "download"
    assert out.path == str(cache / "ffmpeg-4.1-win64-static" / "bin" / "ffmpeg.exe")
    assert not (cache / "ffmpeg.zip").exists()


def test_download_with_traversal_entry_fails_and_keeps_archive(
    monkeypatch: pytest.MonkeyPatch, config: GetSongConfig
) -> None:
    monkeypatch.setattr("getsong.core.bootstrap.subprocess.run", _missing_binary)
    monkeypatch.setattr(
        "getsong.core.bootstrap.download_to_file",
        _fake_download([("../ffmpeg.exe", b"MZ")]),
    )

    with pytest.raises(BootstrapError) as exc:
        DependencyResolver(config, platform="win32").resolve()
    assert exc.value.code == "BOOTSTRAP_EXTRACT_FAILED"
    assert (Path(config.cache_dir) / "ffmpeg.zip").exists()


def test_download_without_binary_reports_not_found(monkeypatch: pytest.MonkeyPatch, config: GetSongConfig) -> None:
    monkeypatch.setattr("getsong.core.bootstrap.subprocess.run", _missing_binary)
    monkeypatch.setattr("getsong.core.bootstrap.download_to_file", _fake_download([("README.txt", b"no binary")]))

    with pytest.raises(BootstrapError) as exc:
        DependencyResolver(config, platform="win32").resolve()
    assert exc.value.code == "BOOTSTRAP_NOT_FOUND"


def test_download_http_failure_propagates(monkeypatch: pytest.MonkeyPatch, config: GetSongConfig) -> None:
    monkeypatch.setattr("getsong.core.bootstrap.subprocess.run", _missing_binary)
    monkeypatch.setattr("getsong.core.download.requests.get", lambda *args, **kwargs: _Resp(status_code=404))

    with pytest.raises(BootstrapError) as exc:
        DependencyResolver(config, platform="win32").resolve()
    assert exc.value.code == "BOOTSTRAP_HTTP_FAILED"


def test_resolve_runs_once_per_resolver(monkeypatch: pytest.MonkeyPatch, config: GetSongConfig) -> None:
    calls: list[object] = []

    def fake_run(*args, **kwargs):
        calls.append(args)
        return CompletedProcess(args=args, returncode=0, stdout="ffmpeg version 6.1", stderr="")

    monkeypatch.setattr("getsong.core.bootstrap.subprocess.run", fake_run)
    resolver = DependencyResolver(config)
    assert resolver.resolve() == resolver.resolve()
    assert len(calls) == 1


def test_get_ffmpeg_binary_is_cached_for_process(monkeypatch: pytest.MonkeyPatch, config: GetSongConfig) -> None:
    calls: list[object] = []

    def fake_run(*args, **kwargs):
        calls.append(args)
        return CompletedProcess(args=args, returncode=0, stdout="ffmpeg version 6.1", stderr="")

    monkeypatch.setattr("getsong.core.bootstrap._RESOLVED", {})
    monkeypatch.setattr("getsong.core.bootstrap.subprocess.run", fake_run)
    first = get_ffmpeg_binary(config)
    second = get_ffmpeg_binary(config)
    assert first == second
    assert len(calls) == 1
