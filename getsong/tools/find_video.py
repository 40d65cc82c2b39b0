#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def main() -> None:
    parser = argparse.ArgumentParser(description="Print the YouTube ID that best matches a song")
    parser.add_argument("title", help="Song title")
    parser.add_argument("--artist", help="Song artist")
    parser.add_argument("--duration", type=int, help="Expected duration in seconds")
    parser.add_argument("--debug", action="store_true", default=None, help="Enable debug logging")
    args = parser.parse_args()

    from getsong.core.errors import GetSongError
    from getsong.core.fetcher import find_video_id
    from getsong.core.models import SearchQuery
    from getsong.tools._common import fail, get_config

    config = get_config(debug=args.debug)
    try:
        query = SearchQuery.build(args.title, args.artist, args.duration)
        print(find_video_id(query, config))
    except GetSongError as exc:
        fail(exc)


if __name__ == "__main__":
    main()
