"""The interface between the sentence pipeline and individual extensions.

An extension is a callable ``process(sentence, info)``.  It returns the new
sentence, or ``None`` to leave the sentence as it was.  Raising :class:`Skip`
(for instance through :func:`skip`) drops the sentence altogether.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, NoReturn, Union

Processor = Callable[[str, "SentenceInfo"], Union[str, None]]


class SentenceInfo(Mapping):
    """Read-only named values describing the sentence being processed."""

    def __init__(self, entries: Mapping[str, Any] | Iterable[tuple[str, Any]] = ()):
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        self._values: dict[str, Any] = {}
        for name, value in pairs:
            # the first entry carrying a name wins
            self._values.setdefault(name, value)

    def __getitem__(self, name: str) -> Any:
        try:
            return self._values[name]
        except KeyError:
            raise KeyError(f"no sentence info named {name!r}") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"SentenceInfo({self._values!r})"


class Skip(Exception):
    """Raised by an extension to drop the current sentence."""


def skip() -> NoReturn:
    """Drop the sentence currently being processed."""
    error = Skip("sentence dropped by extension")
    raise error


def on_new_sentence(
    processor: Processor,
    sentence: str,
    info: SentenceInfo | Mapping[str, Any] | Iterable[tuple[str, Any]],
) -> str:
    """Run one extension on ``sentence`` and return the resulting sentence.

    An empty result means the sentence was dropped.
    """
    if not isinstance(info, SentenceInfo):
        info = SentenceInfo(info)
    try:
        result = processor(sentence, info)
    except Skip:
        return ""
    return sentence if result is None else result