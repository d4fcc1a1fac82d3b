"""Reader for the pipe-delimited block files used to store filters, caches and dictionaries.

A block starts with its first delimiter, each field runs up to the next
delimiter, and the last field runs up to ``|END|``.  Text outside blocks is
ignored, so the files can carry free-form notes between entries.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path

END = "|END|"


def iter_blocks(text: str, delimiters: Sequence[str]) -> Iterator[tuple[str, ...]]:
    """Yield one tuple of fields per complete block found in ``text``.

    Each tuple has one field per delimiter.  Iteration stops at the first
    block that is missing a delimiter or its ``|END|`` marker.
    """
    delimiters = tuple(delimiters)
    if not delimiters:
        raise ValueError("at least one delimiter is required")
    terminators = delimiters[1:] + (END,)
    position = 0
    while True:
        start = text.find(delimiters[0], position)
        if start < 0:
            return
        position = start + len(delimiters[0])
        fields = []
        for terminator in terminators:
            end = text.find(terminator, position)
            if end < 0:
                return
            fields.append(text[position:end])
            position = end + len(terminator)
        yield tuple(fields)


def read_blocks(
    path: str | Path, delimiters: Sequence[str], encoding: str = "utf-16-le"
) -> list[tuple[str, ...]]:
    """Read every complete block from the file at ``path``.

    A missing or unreadable file yields no blocks.  A byte-order mark at the
    start of the file lies outside any block and is skipped.
    """
    try:
        raw = Path(path).read_bytes()
    except OSError:
        return []
    return list(iter_blocks(raw.decode(encoding, errors="replace"), delimiters))