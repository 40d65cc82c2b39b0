from __future__ import annotations

import re

_ILLEGAL_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9 _-]")


def text_between(text: str, start: str, end: str) -> str:
    """Return the text after the first ``start`` up to the next ``end``.

    Empty when ``start`` is missing, or when no ``end`` follows it.
    """
    begin = text.find(start)
    if begin == -1:
        return ""
    begin += len(start)
    stop = text.find(end, begin)
    if stop == -1:
        return ""
    return text[begin:stop]


def sanitize_filename_part(part: str) -> str:
    return _ILLEGAL_FILENAME_CHARS.sub("", part.replace("/", "-")).strip()
