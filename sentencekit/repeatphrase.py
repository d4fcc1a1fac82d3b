"""Remove phrases that a game repeats many times within one sentence."""

from __future__ import annotations

import time
from itertools import pairwise

from .extension import SentenceInfo

ERASED = "\uf246"  # private use area, marks characters to drop
MIN_PHRASE_LENGTH = 7
TIMEOUT_SECONDS = 30.0


def suffix_array(text: str) -> list[int]:
    """Start positions of all suffixes of ``text``, largest suffix first."""
    n = len(text)
    order = list(range(n))
    rank = [ord(ch) for ch in text]
    step = 1
    while n > 1:
        def key(i: int, rank: list[int] = rank, step: int = step) -> tuple[int, int]:
            return rank[i], rank[i + step] if i + step < n else -1

        order.sort(key=key)
        new_rank = [0] * n
        for prev, cur in pairwise(order):
            new_rank[cur] = new_rank[prev] + (key(prev) != key(cur))
        rank = new_rank
        if rank[order[-1]] == n - 1:
            break
        step *= 2
    order.reverse()
    return order


def _common_prefix_length(chars: list[str], first: int, second: int) -> int:
    length = 0
    for a, b in zip(chars[first:], chars[second:]):
        if a == ERASED or a != b:
            break
        length += 1
    return length


def remove_repeated_phrases(sentence: str) -> str:
    """Erase long runs made only of a repeated phrase's characters.

    Repeated phrases longer than six characters are found through the suffix
    array.  Any region at least twice as long as the phrase and made up only
    of its characters is erased; if that erases the phrase entirely, it is put
    back at the last place it stood.  Gives up after thirty seconds.
    """
    deadline = time.monotonic() + TIMEOUT_SECONDS
    order = suffix_array(sentence)
    chars = list(sentence)
    for first, second in pairwise(order):
        if time.monotonic() >= deadline:
            break
        length = _common_prefix_length(chars, first, second)
        if length < MIN_PHRASE_LENGTH:
            continue

        phrase = chars[first : first + length]
        members = set(phrase)
        region = 0
        for j, ch in enumerate(chars + [None]):
            if ch is not None and ch in members:
                region += 1
            elif region >= length * 2:
                chars[j - region : j] = [ERASED] * region
                region = 0
            else:
                region = 0

        if "".join(phrase) not in "".join(chars):
            start = max(first, second)
            chars[start : start + length] = phrase
    return "".join(chars).replace(ERASED, "")


def process_sentence(sentence: str, info: SentenceInfo) -> str | None:
    """Extension entry point; console text is left alone."""
    if info["text number"] == 0:
        return None
    return remove_repeated_phrases(sentence)