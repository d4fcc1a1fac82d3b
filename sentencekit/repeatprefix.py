"""Remove sentence beginnings that reappear later, as when text is redrawn while it builds up."""

from __future__ import annotations

import time

from .extension import SentenceInfo

TIMEOUT_SECONDS = 30.0


def remove_repeated_prefixes(sentence: str) -> str:
    """Repeatedly strip the longest prefix that is found again further on.

    The result is kept only if the stripped pieces average at least three
    characters; otherwise the sentence is returned unchanged.  Gives up after
    thirty seconds.
    """
    deadline = time.monotonic() + TIMEOUT_SECONDS
    n = len(sentence)
    skip = count = 0
    end = n
    while end > skip and time.monotonic() < deadline:
        junk_length = end - skip
        if sentence[skip:end] in sentence[end:]:
            if count and junk_length < min(skip // count, 4):
                break
            skip += junk_length
            count += 1
            end = n
        end -= 1
    if count and skip // count >= 3:
        return sentence[skip:]
    return sentence


def process_sentence(sentence: str, info: SentenceInfo) -> str | None:
    """Extension entry point; console text and untouched sentences give ``None``."""
    if info["text number"] == 0:
        return None
    result = remove_repeated_prefixes(sentence)
    return None if result == sentence else result