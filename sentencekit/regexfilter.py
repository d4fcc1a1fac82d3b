"""Keep only the captured part of each sentence, using a per-process saved pattern.

Every match of the pattern is replaced with its first capture group.
"""

from __future__ import annotations

import os
import re
import threading
from collections.abc import Callable
from pathlib import Path

from .blockmarkup import read_blocks
from .extension import SentenceInfo
from .regexreplacer import Replacement

REGEX_SAVE_FILE = "SavedRegexFilters.txt"
DELIMITERS = ("|PROCESS|", "|FILTER|")
REPLACE = "$1"


def load_saved_filter(path: str | os.PathLike, process_name: str) -> str | None:
    """The most recently saved pattern for ``process_name``, if any."""
    matches = [pattern for process, pattern in read_blocks(path, DELIMITERS) if process == process_name]
    return matches[-1] if matches else None


def save_filter(path: str | os.PathLike, process_name: str, pattern: str) -> None:
    """Append a pattern for ``process_name`` to the save file."""
    record = f"\ufeff|PROCESS|{process_name}|FILTER|{pattern}|END|\r\n"
    with open(path, "ab") as file:
        file.write(record.encode("utf-16-le"))


class RegexFilter:
    """Extension applying the current filter pattern to every sentence."""

    def __init__(
        self,
        path: str | os.PathLike = REGEX_SAVE_FILE,
        process_name_lookup: Callable[[int], str | None] | None = None,
    ):
        self.path = Path(path)
        self.process_name_lookup = process_name_lookup
        self._replacement: Replacement | None = None
        self._lock = threading.Lock()

    @property
    def pattern(self) -> str | None:
        """The active pattern, or ``None`` when no filter is set."""
        with self._lock:
            return self._replacement.pattern.pattern if self._replacement else None

    def set_regex(self, pattern: str) -> None:
        """Use ``pattern`` from now on; an empty pattern removes the filter.

        An invalid pattern raises :class:`re.error` and leaves the filter unchanged.
        """
        replacement = Replacement(re.compile(pattern), REPLACE, replace_all=True) if pattern else None
        with self._lock:
            self._replacement = replacement

    def process_sentence(self, sentence: str, info: SentenceInfo) -> str | None:
        """Filter ``sentence``; console text is left alone."""
        if info["text number"] == 0:
            return None
        with self._lock:
            current = self._replacement
        if current is None and self.process_name_lookup is not None:
            process_name = self.process_name_lookup(info["process id"])
            if process_name:
                saved = load_saved_filter(self.path, process_name)
                if saved is not None:
                    try:
                        self.set_regex(saved)
                    except re.error:
                        pass
                    with self._lock:
                        current = self._replacement
        return current.apply(sentence) if current else sentence