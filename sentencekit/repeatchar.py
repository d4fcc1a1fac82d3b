"""Collapse characters that a game draws several times over into single characters."""

from __future__ import annotations

from collections import Counter
from itertools import groupby

from .extension import SentenceInfo


def _repeat_factor(run_lengths: list[int]) -> int:
    """The run length that occurs most often; ties go to the longest run."""
    counts = Counter(run_lengths)
    if not counts:
        return 0
    most = max(counts.values())
    return max(length for length, count in counts.items() if count == most)


def remove_repeated_characters(sentence: str) -> str:
    """Undo character repetition such as ``"HHeelllloo"`` becoming ``"Hello"``.

    The repetition factor is the most common length of runs of equal
    characters.  If it is below two the sentence is returned unchanged.
    """
    runs = [(ch, len(list(group))) for ch, group in groupby(sentence)]
    factor = _repeat_factor([length for _, length in runs])
    if factor < 2:
        return sentence

    out = []
    for ch, length in runs:
        remaining = length
        while remaining > 0:
            out.append(ch)
            remaining -= factor if remaining % factor == 0 else 1
    return "".join(out)


def process_sentence(sentence: str, info: SentenceInfo) -> str | None:
    """Extension entry point; console text is left alone."""
    if info["text number"] == 0:
        return None
    result = remove_repeated_characters(sentence)
    return None if result == sentence else result