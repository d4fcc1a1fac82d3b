"""Replace words and phrases using a user-maintained list of substitutions.

Whitespace is ignored both in the stored originals and in the sentence, and
``^`` in an original matches any single character.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path

from .blockmarkup import iter_blocks
from .extension import SentenceInfo

REPLACE_SAVE_FILE = "SavedReplacements.txt"
DELIMITERS = ("|ORIG|", "|BECOMES|")
WILDCARD = "^"


def _ignored(ch: str) -> bool:
    return ch <= " " or ch.isspace()


class _Node:
    __slots__ = ("children", "value")

    def __init__(self) -> None:
        self.children: dict[str, _Node] = {}
        self.value: str | None = None


class Trie:
    """Prefix tree of originals mapping to their replacements."""

    def __init__(self, script: str = ""):
        self._root = _Node()
        for original, replacement in iter_blocks(script, DELIMITERS):
            node = self._root
            for ch in original:
                if not _ignored(ch):
                    node = node.children.setdefault(ch, _Node())
            if node is not self._root:
                node.value = replacement

    def replace(self, sentence: str) -> str:
        """Replace the longest match at each position, left to right."""
        out = []
        n = len(sentence)
        i = 0
        while i < n:
            replacement, length = sentence[i], 1
            node: _Node | None = self._root
            j = i
            while node is not None and j <= n:
                if node.value is not None:
                    replacement, length = node.value, j - i
                if j < n and not _ignored(sentence[j]):
                    child = node.children.get(sentence[j])
                    node = child if child is not None else node.children.get(WILDCARD)
                j += 1
            out.append(replacement)
            i += length
        return "".join(out)

    def empty(self) -> bool:
        """True when no substitutions are stored."""
        return not self._root.children


class Replacer:
    """Extension applying the substitutions in a file, reloaded when it changes."""

    def __init__(self, path: str | os.PathLike = REPLACE_SAVE_FILE):
        self.path = Path(path)
        self.trie = Trie()
        self._last_write: int | None = None
        self._lock = threading.Lock()
        self.update()

    def update(self) -> None:
        """Reload the substitution file if it was modified since the last load."""
        try:
            mtime = self.path.stat().st_mtime_ns
        except OSError:
            self._last_write = None
            return
        if mtime == self._last_write:
            return
        try:
            text = self.path.read_bytes().decode("utf-16-le", errors="replace")
        except OSError:
            self._last_write = None
            return
        trie = Trie(text)
        with self._lock:
            self._last_write = mtime
            self.trie = trie

    def process_sentence(self, sentence: str, info: SentenceInfo) -> str:
        """Apply the current substitutions to ``sentence``."""
        self.update()
        with self._lock:
            trie = self.trie
        return trie.replace(sentence)