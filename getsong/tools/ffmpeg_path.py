#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def main() -> None:
    parser = argparse.ArgumentParser(description="Locate ffmpeg, downloading it into the cache dir if missing")
    parser.add_argument("--show-progress", action="store_true", default=None, help="Show download progress")
    parser.add_argument("--debug", action="store_true", default=None, help="Enable debug logging")
    args = parser.parse_args()

    from getsong.core.bootstrap import get_ffmpeg_binary
    from getsong.core.errors import GetSongError, UnsupportedPlatformError
    from getsong.tools._common import fail, get_config, print_json

    config = get_config(debug=args.debug, show_progress=args.show_progress)
    try:
        print_json(get_ffmpeg_binary(config))
    except (GetSongError, UnsupportedPlatformError) as exc:
        fail(exc)


if __name__ == "__main__":
    main()
