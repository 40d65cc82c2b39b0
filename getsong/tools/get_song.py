#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def main() -> None:
    parser = argparse.ArgumentParser(description="Find a song on YouTube and save it as mp3")
    parser.add_argument("title", help="Song title")
    parser.add_argument("--artist", help="Song artist")
    parser.add_argument("--duration", type=int, help="Expected duration in seconds")
    parser.add_argument("--output-dir", help="Directory for the downloaded file")
    parser.add_argument("--show-progress", action="store_true", default=None, help="Show download progress")
    parser.add_argument("--debug", action="store_true", default=None, help="Enable debug logging")
    parser.add_argument("--do-not-download", action="store_true", help="Only look up the video ID")
    args = parser.parse_args()

    from getsong.core.errors import GetSongError, UnsupportedPlatformError
    from getsong.core.models import SongRequest
    from getsong.core.orchestrator import get_song
    from getsong.tools._common import fail, get_config, print_json

    config = get_config(debug=args.debug, show_progress=args.show_progress, output_dir=args.output_dir)
    request = SongRequest(
        title=args.title,
        artist=args.artist,
        duration_sec=args.duration,
        do_not_download=args.do_not_download,
    )
    try:
        result = get_song(request, config)
    except (GetSongError, UnsupportedPlatformError) as exc:
        fail(exc)
        return
    print_json(result)


if __name__ == "__main__":
    main()
