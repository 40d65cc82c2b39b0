from __future__ import annotations

import logging

from rapidfuzz.distance import JaroWinkler

from .errors import SearchError
from .models import Candidate

logger = logging.getLogger(__name__)

DURATION_TOLERANCE_SEC = 20


def filter_by_duration(candidates: list[Candidate], expected_duration_sec: int | None) -> list[Candidate]:
    if expected_duration_sec is None:
        return list(candidates)
    kept: list[Candidate] = []
    for candidate in candidates:
        if abs(candidate.duration_sec - expected_duration_sec) > DURATION_TOLERANCE_SEC:
            logger.debug(
                "'%s' duration (%ds) is different than expected (%ds)",
                candidate.title,
                candidate.duration_sec,
                expected_duration_sec,
            )
            continue
        kept.append(candidate)
    return kept


def similarity(reference: str, title: str) -> float:
    # rapidfuzz boosts only above 0.7 similarity and over at most 4 prefix chars
    return JaroWinkler.similarity(reference, title, prefix_weight=0.1)


def score_candidate(candidate: Candidate, title: str, title_and_artist: str) -> float:
    return max(similarity(title, candidate.title), similarity(title_and_artist, candidate.title))


def select_candidate(
    candidates: list[Candidate],
    title: str,
    title_and_artist: str,
    expected_duration_sec: int | None = None,
) -> Candidate:
    """Pick the best-scoring candidate.

    Candidates are scanned from last to first and only a strictly higher score
    replaces the current best, so ties go to the latest-discovered candidate.
    """
    pool = filter_by_duration(candidates, expected_duration_sec)
    if not pool:
        raise SearchError("SEARCH_NO_MATCH", "could not find any videos that matched")

    best_score = 0.0
    best_index = 0
    for index in range(len(pool) - 1, -1, -1):
        score = score_candidate(pool[index], title, title_and_artist)
        logger.debug("%s | %s : %2.3f", title, pool[index].title, score)
        if score > best_score:
            best_score = score
            best_index = index

    winner = pool[best_index]
    logger.debug("best track for %s: %s (%s)", title_and_artist, winner.title, winner.identifier)
    return winner


def select_identifier(
    candidates: list[Candidate],
    title: str,
    title_and_artist: str,
    expected_duration_sec: int | None = None,
) -> str:
    return select_candidate(candidates, title, title_and_artist, expected_duration_sec).identifier
