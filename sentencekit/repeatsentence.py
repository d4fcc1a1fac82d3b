"""Drop sentences that a text thread has already produced recently."""

from __future__ import annotations

import re
import threading
from collections import defaultdict

from .extension import SentenceInfo

DEFAULT_CACHE_SIZE = 30
_FILENAME_SIZE = re.compile(r"Remove\s*([+-]?\d+)")


def cache_size_from_filename(filename: str, default: int = DEFAULT_CACHE_SIZE) -> int:
    """Read N from an extension file named ``Remove N Repeated Sentences``."""
    name = re.split(r"[\\/]", str(filename))[-1]
    match = _FILENAME_SIZE.match(name)
    return int(match.group(1)) if match else default


class RepeatedSentenceFilter:
    """Remembers the last sentences of each text thread and drops repeats."""

    def __init__(self, cache_size: int = DEFAULT_CACHE_SIZE):
        self.cache_size = cache_size
        self._history: defaultdict[int, list[str]] = defaultdict(list)
        self._lock = threading.Lock()

    def process_sentence(self, sentence: str, info: SentenceInfo) -> str | None:
        """Return ``""`` to drop a repeated sentence, ``None`` to let it through."""
        text_number = info["text number"]
        if text_number == 0:
            return None
        with self._lock:
            history = self._history[text_number]
            duplicate = sentence in history
            if duplicate:
                history.remove(sentence)
            history.append(sentence)
            if len(history) > self.cache_size:
                del history[0]
        return "" if duplicate or not sentence else None