from __future__ import annotations

import logging
from collections.abc import Iterable

from .models import Candidate
from .text import text_between

logger = logging.getLogger(__name__)

PROVIDED_MARKER = "Provided to YouTube"
TITLE_LINK_MARKER = "yt-lockup-title"


def parse_duration(text: str) -> int | None:
    """Parse ``MM:SS`` into seconds; anything else is ``None``."""
    parts = text.split(":")
    if len(parts) != 2:
        return None
    minutes, seconds = parts
    if not (minutes.isdigit() and seconds.isdigit()):
        return None
    return int(minutes) * 60 + int(seconds)


def parse_result_line(line: str) -> Candidate | None:
    line = line.strip()
    if PROVIDED_MARKER not in line or TITLE_LINK_MARKER not in line:
        return None

    raw_duration = text_between(line, "Duration: ", ".")
    duration_sec = parse_duration(raw_duration)
    if duration_sec is None:
        logger.debug("skipping result with malformed duration %r", raw_duration)
        return None

    return Candidate(
        title=text_between(line, 'title="', '"'),
        identifier=text_between(line, "/watch?v=", '"'),
        duration_sec=duration_sec,
    )


def scrape_candidates(markup: str | Iterable[str]) -> list[Candidate]:
    lines = markup.split("\n") if isinstance(markup, str) else markup
    candidates: list[Candidate] = []
    for line in lines:
        candidate = parse_result_line(line)
        if candidate is None:
            continue
        logger.debug(
            "possible track: %s (%s): %ds", candidate.title, candidate.identifier, candidate.duration_sec
        )
        candidates.append(candidate)
    return candidates
