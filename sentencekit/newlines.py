"""Add a blank line after every sentence."""

from __future__ import annotations

from .extension import SentenceInfo


def process_sentence(sentence: str, info: SentenceInfo) -> str | None:
    """Append a newline to every sentence that is not console output."""
    if info["text number"] == 0:
        return None
    return sentence + "\n"