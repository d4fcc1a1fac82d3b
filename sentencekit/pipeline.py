"""The ordered list of extensions every sentence passes through."""

from __future__ import annotations

import os
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .extension import Processor, SentenceInfo, on_new_sentence

EXTEN_SAVE_FILE = "SavedExtensions.txt"
DEFAULT_EXTENSIONS = (
    "Remove Repeated Characters>Regex Filter>Copy to Clipboard>Google Translate>Extra Window>Extra Newlines"
)


@dataclass(frozen=True)
class _Extension:
    name: str
    processor: Processor


class ExtensionManager:
    """Holds named extensions and runs sentences through them in order."""

    def __init__(self) -> None:
        self._extensions: list[_Extension] = []
        self._lock = threading.Lock()

    def add(self, name: str, processor: Processor) -> None:
        """Append an extension to the end of the list."""
        with self._lock:
            self._extensions.append(_Extension(name, processor))

    def remove(self, index: int) -> None:
        """Remove the extension at ``index``; raises :class:`IndexError` if there is none."""
        with self._lock:
            if not 0 <= index < len(self._extensions):
                raise IndexError(f"no extension at index {index}")
            del self._extensions[index]

    def reorder(self, names: Iterable[str]) -> None:
        """Rebuild the list in the order of ``names``; raises :class:`KeyError` for unknown names."""
        with self._lock:
            by_name: dict[str, _Extension] = {}
            for extension in self._extensions:
                by_name.setdefault(extension.name, extension)
            try:
                reordered = [by_name[name] for name in names]
            except KeyError as error:
                raise KeyError(f"no extension named {error.args[0]!r}") from None
            self._extensions = reordered

    def names(self) -> list[str]:
        """Names of the extensions, in order."""
        with self._lock:
            return [extension.name for extension in self._extensions]

    def dispatch(self, sentence: str, info: SentenceInfo | Mapping[str, Any]) -> str:
        """Run ``sentence`` through every extension; ``""`` means it was dropped."""
        if not isinstance(info, SentenceInfo):
            info = SentenceInfo(info)
        with self._lock:
            extensions = list(self._extensions)
        for extension in extensions:
            sentence = on_new_sentence(extension.processor, sentence, info)
            if not sentence:
                break
        return sentence

    def clear(self) -> None:
        """Remove every extension."""
        with self._lock:
            self._extensions.clear()

    def save(self, path: str | os.PathLike = EXTEN_SAVE_FILE) -> None:
        """Write the extension names to ``path``, each followed by ``>``."""
        Path(path).write_text("".join(name + ">" for name in self.names()), encoding="utf-8")

    def __len__(self) -> int:
        with self._lock:
            return len(self._extensions)


def load_extension_names(path: str | os.PathLike = EXTEN_SAVE_FILE) -> list[str]:
    """Read saved extension names, creating the file with the defaults if missing."""
    path = Path(path)
    if not path.exists():
        path.write_text(DEFAULT_EXTENSIONS, encoding="utf-8")
    return [name for name in path.read_text(encoding="utf-8").split(">") if name]