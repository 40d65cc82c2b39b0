from __future__ import annotations

import json
import sys
from typing import Any

from getsong.core.errors import GetSongError, UnsupportedPlatformError
from getsong.core.settings import GetSongConfig, configure_logging, load_config


def get_config(**overrides: Any) -> GetSongConfig:
    config = load_config(**overrides)
    configure_logging(config)
    return config


def print_json(data: Any) -> None:
    if hasattr(data, "model_dump"):
        print(json.dumps(data.model_dump(), indent=2))
        return
    print(json.dumps(data, indent=2))


def fail(exc: GetSongError | UnsupportedPlatformError) -> None:
    print_json({"error": {"code": exc.code, "message": exc.message}})
    sys.exit(2 if isinstance(exc, UnsupportedPlatformError) else 1)
