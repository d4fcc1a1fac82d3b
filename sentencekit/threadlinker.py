"""Copy the text of one text thread into other threads."""

from __future__ import annotations

import threading
from collections import defaultdict

from .extension import SentenceInfo

ALL = "All"


class ThreadLinker:
    """Extension forwarding each sentence to the threads linked to its thread.

    A link from ``None`` (or ``"All"``) applies to every thread other than the
    console and the clipboard.
    """

    def __init__(self) -> None:
        self._links: defaultdict[int, set[int]] = defaultdict(set)
        self._universal: set[int] = set()
        self.separate_sentences = False
        self._lock = threading.Lock()

    def _targets(self, source: int | str | None) -> set[int]:
        return self._universal if source is None or source == ALL else self._links[source]

    def link(self, source: int | str | None, target: int) -> bool:
        """Link ``source`` to ``target``; False if the link already existed."""
        with self._lock:
            targets = self._targets(source)
            if target in targets:
                return False
            targets.add(target)
            return True

    def unlink(self, source: int | str | None, target: int) -> bool:
        """Remove a link; False if there was none."""
        with self._lock:
            targets = self._targets(source)
            if target not in targets:
                return False
            targets.discard(target)
            return True

    def process_sentence(self, sentence: str, info: SentenceInfo) -> None:
        """Send ``sentence`` to every linked thread; the sentence itself is unchanged."""
        action = info["add sentence"] if self.separate_sentences else info["add text"]
        text_number = info["text number"]
        with self._lock:
            targets = list(self._links.get(text_number, ()))
            if text_number > 1:
                targets.extend(self._universal)
        for target in targets:
            action(target, sentence)
        return None