from __future__ import annotations

from pathlib import Path

import pytest

from getsong.core.settings import GetSongConfig


@pytest.fixture
def config(tmp_path: Path) -> GetSongConfig:
    return GetSongConfig(cache_dir=str(tmp_path / "cache"), output_dir=str(tmp_path / "out"))
