"""Small networking and text helpers: a lenient JSON reader, escaping and HTTP."""

from __future__ import annotations

import http.client
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

MAX_JSON_DEPTH = 25
HTTP_TIMEOUT = 60.0
DEFAULT_USER_AGENT = "Mozilla/5.0"

_WHITESPACE = " \n\r\t"
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_NUMBER_CHARS = frozenset("0123456789-+eE.")
_NUMBER_PREFIX = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_STRING_ESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t"}
_LITERALS = (("null", None), ("true", True), ("false", False))


class JSONParseError(ValueError):
    """Raised when text cannot be read as JSON."""


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.i = 0

    def _fail(self) -> JSONParseError:
        return JSONParseError(f"invalid JSON at position {self.i}")

    def _skip_whitespace(self) -> str | None:
        text = self.text
        while self.i < len(text) and text[self.i] in _WHITESPACE:
            self.i += 1
        return text[self.i] if self.i < len(text) else None

    def _string(self) -> str:
        text = self.text
        out = []
        self.i += 1
        while self.i < len(text):
            ch = text[self.i]
            if ch == '"':
                self.i += 1
                return "".join(out)
            if ch != "\\":
                out.append(ch)
                self.i += 1
                continue
            if self.i + 1 >= len(text):
                self.i = len(text)
                break
            escaped = text[self.i + 1]
            code = text[self.i + 2 : self.i + 6]
            if escaped == "u" and len(code) == 4 and all(c in _HEX_DIGITS for c in code):
                out.append(chr(int(code, 16)))
                self.i += 6
                continue
            out.append(_STRING_ESCAPES.get(escaped, escaped))
            self.i += 2
        return "".join(out)

    def _number(self) -> float:
        text = self.text
        start = self.i
        while self.i < len(text) and text[self.i] in _NUMBER_CHARS:
            self.i += 1
        match = _NUMBER_PREFIX.match(text[start : self.i])
        return float(match.group()) if match else 0.0

    def _array(self, depth: int) -> list:
        items = []
        while True:
            self.i += 1
            ch = self._skip_whitespace()
            if ch is None:
                raise self._fail()
            if ch == "]":
                self.i += 1
                return items
            items.append(self.value(depth + 1))
            ch = self._skip_whitespace()
            if ch is None:
                raise self._fail()
            if ch == "]":
                self.i += 1
                return items
            if ch != ",":
                raise self._fail()

    def _object(self, depth: int) -> dict:
        obj = {}
        while True:
            self.i += 1
            ch = self._skip_whitespace()
            if ch is None:
                raise self._fail()
            if ch == "}":
                self.i += 1
                return obj
            if ch != '"':
                raise self._fail()
            key = self._string()
            if self._skip_whitespace() != ":":
                raise self._fail()
            self.i += 1
            obj[key] = self.value(depth + 1)
            ch = self._skip_whitespace()
            if ch is None:
                raise self._fail()
            if ch == "}":
                self.i += 1
                return obj
            if ch != ",":
                raise self._fail()

    def value(self, depth: int = 0) -> Any:
        if depth > MAX_JSON_DEPTH:
            raise JSONParseError("JSON nested too deeply")
        ch = self._skip_whitespace()
        if ch is None:
            raise self._fail()
        for literal, result in _LITERALS:
            if ch == literal[0]:
                if self.text.startswith(literal, self.i):
                    self.i += len(literal)
                    return result
                raise self._fail()
        if ch == "-" or "0" <= ch <= "9":
            return self._number()
        if ch == '"':
            return self._string()
        if ch == "[":
            return self._array(depth)
        if ch == "{":
            return self._object(depth)
        raise self._fail()


def parse_json(text: str) -> Any:
    """Parse JSON into ``None``, ``bool``, ``float``, ``str``, ``list`` or ``dict``.

    Every number becomes a float.  Text after the first complete value is
    ignored.  Raises :class:`JSONParseError` on malformed input or nesting
    deeper than :data:`MAX_JSON_DEPTH`.
    """
    return _Parser(text).value()


def json_escape(text: str) -> str:
    """Escape text for use inside a JSON string literal; other control characters are dropped."""
    out = []
    for ch in text:
        if ch == "\n":
            out.append("\\n")
        elif ch == "\t":
            out.append("\\t")
        elif ch == "\r":
            out.append("\\r")
        elif ch in '\\"':
            out.append("\\" + ch)
        elif ch >= " " and ch != "\x7f":
            out.append(ch)
    return "".join(out)


_HTML_ENTITIES = {
    "lt": "<",
    "gt": ">",
    "apos": "'",
    "#39": "'",
    "#x27": "'",
    "#X27": "'",
    "quot": '"',
    "amp": "&",
}
_HTML_ENTITY = re.compile("&(" + "|".join(re.escape(name) for name in _HTML_ENTITIES) + ");")


def html_unescape(text: str) -> str:
    """Replace the few HTML entities that translation pages emit, in a single pass."""
    return _HTML_ENTITY.sub(lambda match: _HTML_ENTITIES[match.group(1)], text)


def url_escape(text: str | bytes) -> str:
    """Percent-encode every byte of the UTF-8 form of ``text``."""
    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    return "".join(f"%{byte:02X}" for byte in data)


@dataclass
class HttpResponse:
    """Status, decoded body and headers of a completed HTTP request."""

    status: int
    text: str
    headers: dict[str, str] = field(default_factory=dict)


def http_request(
    server: str,
    action: str,
    path: str,
    body: str | bytes = "",
    headers: Mapping[str, str] | None = None,
    port: int | None = None,
    secure: bool = True,
) -> HttpResponse:
    """Send one HTTP request and return the response decoded as UTF-8.

    Connection failures raise :class:`OSError`.
    """
    connection_class = http.client.HTTPSConnection if secure else http.client.HTTPConnection
    connection = connection_class(server, port, timeout=HTTP_TIMEOUT)
    payload = body.encode("utf-8") if isinstance(body, str) else body
    request_headers = {"User-Agent": DEFAULT_USER_AGENT}
    request_headers.update(headers or {})
    try:
        connection.request(action, path, body=payload or None, headers=request_headers)
        response = connection.getresponse()
        data = response.read()
        return HttpResponse(
            status=response.status,
            text=data.decode("utf-8", errors="replace"),
            headers=dict(response.getheaders()),
        )
    finally:
        connection.close()