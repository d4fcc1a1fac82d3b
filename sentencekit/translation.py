"""Append machine translations to sentences, with caching and rate limiting.

A translator is a callable ``translate(text, param)`` returning a pair
``(cacheable, translation)``.  The translation is appended to the original
sentence after a zero-width space, a space and a newline.
"""

from __future__ import annotations

import heapq
import os
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path

from .blockmarkup import read_blocks
from .extension import SentenceInfo

DELIMITERS = ("|SENTENCE|", "|TRANSLATION|")
SEPARATOR = "\u200b \n"
SENTENCE_TOO_LARGE_TO_TRANS = "Sentence too large to translate"
TRANSLATION_ERROR = "Error while translating"
TOO_MANY_TRANS_REQUESTS = "Too many translation requests: refuse to make more"

DEFAULT_TOKEN_COUNT = 30
DEFAULT_TIMESPAN_MS = 60000
DEFAULT_MAX_SENTENCE_SIZE = 2500


@dataclass
class TranslationParam:
    """Languages to translate between and the key for the translation service."""

    translate_to: str = "English"
    translate_from: str = "?"
    auth_key: str = ""


Translate = Callable[[str, TranslationParam], "tuple[bool, str]"]


class RateLimiter:
    """Allows at most ``token_count`` requests in any ``timespan_ms`` window."""

    def __init__(self, token_count: int = DEFAULT_TOKEN_COUNT, timespan_ms: float = DEFAULT_TIMESPAN_MS):
        self.token_count = token_count
        self.timespan_ms = timespan_ms
        self._tokens: list[float] = []
        self._lock = threading.Lock()

    def request(self, now_ms: float | None = None) -> bool:
        """Take a token if one is free at time ``now_ms`` (milliseconds)."""
        current = time.monotonic() * 1000 if now_ms is None else now_ms
        with self._lock:
            while self._tokens and self._tokens[0] <= current - self.timespan_ms:
                heapq.heappop(self._tokens)
            available = len(self._tokens) < self.token_count
            if available:
                heapq.heappush(self._tokens, current)
            return available


class TranslationCache:
    """Thread-safe map from sentences to their translations, stored as block markup."""

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    def load(self, path: str | os.PathLike) -> None:
        """Replace the contents with the file at ``path``; the first entry for a sentence wins."""
        entries: dict[str, str] = {}
        for sentence, translation in read_blocks(path, DELIMITERS):
            entries.setdefault(sentence, translation)
        with self._lock:
            self._entries = entries

    def save(self, path: str | os.PathLike) -> None:
        """Write every entry to ``path`` as UTF-16 with a byte-order mark."""
        with self._lock:
            items = list(self._entries.items())
        text = "\ufeff" + "".join(
            f"|SENTENCE|{sentence}|TRANSLATION|{translation}|END|\r\n" for sentence, translation in items
        )
        Path(path).write_bytes(text.encode("utf-16-le"))

    def get(self, sentence: str) -> str | None:
        """The cached translation of ``sentence``, if any."""
        with self._lock:
            return self._entries.get(sentence)

    def set(self, sentence: str, translation: str) -> None:
        """Store the translation of ``sentence``."""
        with self._lock:
            self._entries[sentence] = translation

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, sentence: object) -> bool:
        with self._lock:
            return sentence in self._entries


def cache_file_name(provider: str, translate_to: str) -> str:
    """Name of the cache file for one provider and target language."""
    return f"{provider} Cache ({translate_to}).txt"


class TranslationWrapper:
    """Extension that translates sentences through ``translate``."""

    def __init__(self, translate: Translate, param: TranslationParam | None = None):
        self.translate = translate
        self.param = param if param is not None else TranslationParam()
        self.cache = TranslationCache()
        self.rate_limiter = RateLimiter()
        self.translate_selected_only = True
        self.use_rate_limiter = True
        self.rate_limit_selected = False
        self.use_cache = True
        self.use_filter = True
        self.max_sentence_size = DEFAULT_MAX_SENTENCE_SIZE

    def process_sentence(self, sentence: str, info: SentenceInfo) -> str | None:
        """Return the sentence followed by its translation; console text is left alone."""
        if info["text number"] == 0:
            return None

        if self.use_filter:
            sentence = "".join(ch for ch in sentence.strip() if ch >= " " or ch == "\n")
        if not sentence:
            return sentence

        cacheable = False
        translation = ""
        if len(sentence) > self.max_sentence_size:
            translation = SENTENCE_TOO_LARGE_TO_TRANS
        if self.use_cache:
            cached = self.cache.get(sentence)
            if cached is not None:
                translation = cached
        if not translation and (not self.translate_selected_only or info["current select"]):
            if (
                self.rate_limiter.request()
                or not self.use_rate_limiter
                or (not self.rate_limit_selected and info["current select"])
            ):
                cacheable, translation = self.translate(sentence, replace(self.param))
            else:
                translation = TOO_MANY_TRANS_REQUESTS
        if cacheable:
            self.cache.set(sentence, translation)

        if self.use_filter:
            translation = translation.strip()
        translation = translation.replace("\r\n", "\u200b\n")
        if not translation:
            translation = TRANSLATION_ERROR
        return sentence + SEPARATOR + translation