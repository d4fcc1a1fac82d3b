"""Rewrite sentences with a user-maintained list of regular expression replacements.

Replacement strings use ``$1``, ``$&``, ``$``` ``$'`` and ``$$`` as in
ECMAScript.  The modifier ``g`` replaces every match instead of the first and
``i`` ignores case.
"""

from __future__ import annotations

import os
import re
import threading
from dataclasses import dataclass
from pathlib import Path

from .blockmarkup import iter_blocks
from .extension import SentenceInfo

REPLACE_SAVE_FILE = "SavedRegexReplacements.txt"
DELIMITERS = ("|REGEX|", "|BECOMES|", "|MODIFIER|")
_FORMAT_REFERENCE = re.compile(r"\$(\$|&|`|'|\d{1,2})")


def _expand(match: re.Match, template: str) -> str:
    def substitute(found: re.Match) -> str:
        code = found.group(1)
        if code == "$":
            return "$"
        if code == "&":
            return match.group(0)
        if code == "`":
            return match.string[: match.start()]
        if code == "'":
            return match.string[match.end() :]
        suffix = ""
        if len(code) == 2 and int(code) > match.re.groups:
            code, suffix = code[0], code[1]
        number = int(code)
        if number > match.re.groups:
            return suffix
        return (match.group(number) or "") + suffix

    return _FORMAT_REFERENCE.sub(substitute, template)


@dataclass(frozen=True)
class Replacement:
    """One compiled pattern with its replacement text."""

    pattern: re.Pattern
    replacement: str
    replace_all: bool = False

    def apply(self, sentence: str) -> str:
        """Replace the first match, or every match when ``replace_all`` is set."""
        return self.pattern.sub(
            lambda match: _expand(match, self.replacement),
            sentence,
            count=0 if self.replace_all else 1,
        )


def parse_replacements(text: str) -> list[Replacement]:
    """Read replacement blocks from ``text``; invalid patterns are skipped."""
    replacements = []
    for pattern, replacement, modifier in iter_blocks(text, DELIMITERS):
        flags = re.IGNORECASE if "i" in modifier else 0
        try:
            compiled = re.compile(pattern, flags)
        except re.error:
            continue
        replacements.append(Replacement(compiled, replacement, "g" in modifier))
    return replacements


class RegexReplacer:
    """Extension applying the replacements in a file, reloaded when it changes."""

    def __init__(self, path: str | os.PathLike = REPLACE_SAVE_FILE):
        self.path = Path(path)
        self.replacements: list[Replacement] = []
        self._last_write: int | None = None
        self._lock = threading.Lock()
        self.update()

    def update(self) -> None:
        """Reload the replacement file if it was modified since the last load."""
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
        replacements = parse_replacements(text)
        with self._lock:
            self._last_write = mtime
            self.replacements = replacements

    def process_sentence(self, sentence: str, info: SentenceInfo) -> str:
        """Apply every replacement in order."""
        self.update()
        with self._lock:
            replacements = list(self.replacements)
        for replacement in replacements:
            sentence = replacement.apply(sentence)
        return sentence