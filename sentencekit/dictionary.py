"""Pop-up dictionary lookups and the sentence history of the extra text window.

The dictionary file holds two kinds of blocks::

    |TERM|word|TERM|other spelling|DEFINITION|html definition|END|
    |ROOT|1る|INFLECTS TO|(.+)た|NAME| past|END|

An inflection block turns a matching term back into its root: the
``INFLECTS TO`` pattern must match the whole term, and each digit in ``ROOT``
is replaced with the text of that capture group.
"""

from __future__ import annotations

import os
import re
import unicodedata
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .blockmarkup import iter_blocks

DICTIONARY_SAVE_FILE = "SavedDictionary.txt"
TERM_DELIMITERS = ("|TERM|", "|DEFINITION|")
INFLECTION_DELIMITERS = ("|ROOT|", "|INFLECTS TO|", "|NAME|")
TERM_SEPARATOR = "|TERM|"
MAX_TERM_LENGTH = 100
DISPLAY_SEPARATOR = "<<"
TRANSLATION_SEPARATOR = "\u200b \n"
DEFAULT_HISTORY_LIMIT = 1000


@dataclass(frozen=True)
class Inflection:
    """A rule mapping an inflected form back to its root form."""

    root: str
    inflects_to: re.Pattern
    name: str

    def root_of(self, term: str) -> str | None:
        """The root form of ``term``, or ``None`` if the rule does not apply."""
        match = self.inflects_to.fullmatch(term)
        if match is None:
            return None
        parts = []
        for ch in self.root:
            digit = unicodedata.digit(ch, None) if ch.isdigit() else None
            if digit is None:
                parts.append(ch)
                continue
            try:
                parts.append(match.group(digit) or "")
            except IndexError:
                parts.append("")
        return "".join(parts)


@dataclass(frozen=True)
class LookupResult:
    """A definition found for a term, with the inflections undone to reach it."""

    term: str
    definition: str
    inflections_used: tuple[str, ...] = ()


def _html_escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _display(term: str) -> str:
    return _html_escape(term.split(DISPLAY_SEPARATOR)[0])


@dataclass
class Dictionary:
    """Terms with their definitions, plus inflection rules."""

    inflections: list[Inflection] = field(default_factory=list)
    invalid_patterns: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._definitions: list[str] = []
        self._terms: defaultdict[str, list[int]] = defaultdict(list)

    def load(self, text: str) -> None:
        """Replace the contents with the blocks found in ``text``."""
        self._definitions = []
        self._terms = defaultdict(list)
        self.inflections = []
        self.invalid_patterns = []

        for terms, definition in iter_blocks(text, TERM_DELIMITERS):
            definition_id = len(self._definitions)
            self._definitions.append(definition)
            for term in terms.split(TERM_SEPARATOR):
                self._terms[term].append(definition_id)

        for root, inflects_to, name in iter_blocks(text, INFLECTION_DELIMITERS):
            try:
                pattern = re.compile(inflects_to)
            except re.error:
                # an invalid rule never matches
                self.invalid_patterns.append(inflects_to)
                continue
            self.inflections.append(Inflection(root, pattern, name))

    @classmethod
    def from_file(cls, path: str | os.PathLike = DICTIONARY_SAVE_FILE) -> Dictionary:
        """Load the UTF-8 dictionary file at ``path``; a missing file gives an empty dictionary."""
        dictionary = cls()
        try:
            raw = Path(path).read_bytes()
        except OSError:
            return dictionary
        dictionary.load(raw.decode("utf-8", errors="replace"))
        return dictionary

    def __len__(self) -> int:
        return sum(len(ids) for ids in self._terms.values())

    def _lookup(self, term: str, found: set[int], inflections_used: tuple[str, ...]) -> list[LookupResult]:
        results = []
        for definition_id in self._terms.get(term, ()):
            if definition_id not in found:
                found.add(definition_id)
                results.append(LookupResult(term, self._definitions[definition_id], inflections_used))
        for inflection in self.inflections:
            root = inflection.root_of(term)
            if root is not None:
                results.extend(self._lookup(root, found, (inflection.name,) + inflections_used))
        return results

    def lookup(self, term: str) -> list[LookupResult]:
        """Definitions of ``term`` itself and of every root its inflections lead to."""
        return self._lookup(term, set(), ())

    def definitions(self, term: str) -> list[str]:
        """HTML entries for every prefix of ``term``, longest first, each definition once.

        Only the first hundred characters of ``term`` are considered.
        """
        found: set[int] = set()
        entries = []
        prefix = term[:MAX_TERM_LENGTH]
        while prefix:
            for result in self._lookup(prefix, found, ()):
                entries.append((prefix, result))
            prefix = prefix[:-1]
        total = len(entries)
        return [
            f"<h3>{_display(prefix)} ({index}/{total})</h3>"
            f"<small>{_display(result.term)}{''.join(result.inflections_used)}</small>"
            f"{result.definition}"
            for index, (prefix, result) in enumerate(entries, start=1)
        ]


class SentenceHistory:
    """The most recent sentences, with a position that can be scrolled."""

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        self.limit = limit
        self._sentences: list[str] = []
        self._index = 0

    def add(self, sentence: str) -> str:
        """Store ``sentence`` without tabs and make it the current one."""
        sentence = sentence.replace("\t", "")
        self._sentences.append(sentence)
        if len(self._sentences) > self.limit:
            del self._sentences[0]
        self._index = len(self._sentences) - 1
        return sentence

    def scroll(self, delta: int) -> str | None:
        """Move one sentence back for positive ``delta``, forward for negative."""
        if delta > 0 and self._index > 0:
            self._index -= 1
        if delta < 0 and self._index + 1 < len(self._sentences):
            self._index += 1
        return self.current()

    def current(self) -> str | None:
        """The sentence at the current position, or ``None`` if there is none."""
        return self._sentences[self._index] if self._sentences else None

    def __len__(self) -> int:
        return len(self._sentences)

    def __iter__(self) -> Iterable[str]:
        return iter(list(self._sentences))


def arrange_translation(sentence: str, show_original: bool = True, original_after: bool = True) -> str:
    """Arrange a sentence that carries a translation after the translation separator.

    Without the original only the translation is kept; with the original after
    the translation the two parts swap places.
    """
    if TRANSLATION_SEPARATOR not in sentence:
        return sentence
    parts = sentence.split(TRANSLATION_SEPARATOR)
    if not show_original:
        return parts[1]
    if original_after:
        return parts[1] + "\n" + parts[0]
    return sentence