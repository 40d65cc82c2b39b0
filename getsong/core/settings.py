from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict


class GetSongConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    debug: bool = False
    show_progress: bool = False
    cache_dir: str | None = None
    output_dir: str = "."
    search_url: str = "https://www.youtube.com/results"
    search_phrase: str = "Provided to YouTube"
    ffmpeg_binary: str = "ffmpeg"
    http_timeout_sec: float | None = None

    def resolved_cache_dir(self) -> Path:
        if self.cache_dir:
            return Path(self.cache_dir).expanduser()
        return Path.home() / ".getsong"


def load_settings(path: str | None = None) -> dict[str, Any]:
    config_path = Path(path or os.getenv("GETSONG_SETTINGS_PATH", "config/settings.example.yaml"))
    if not config_path.exists():
        return {}
    return yaml.safe_load(config_path.read_text()) or {}


def load_config(path: str | None = None, **overrides: Any) -> GetSongConfig:
    settings = load_settings(path)
    values = dict(settings.get("getsong") or {})
    values.update({key: value for key, value in overrides.items() if value is not None})
    return GetSongConfig.model_validate(values)


def configure_logging(config: GetSongConfig) -> None:
    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
