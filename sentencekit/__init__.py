"""Composable filters for extracted sentences: repetition removal, replacement, regex filtering, thread linking, translation and dictionary lookups."""

__version__ = "0.1.0"

__all__ = [
    "blockmarkup",
    "devtools",
    "dictionary",
    "extension",
    "network",
    "newlines",
    "pipeline",
    "regexfilter",
    "regexreplacer",
    "repeatchar",
    "repeatphrase",
    "repeatprefix",
    "repeatsentence",
    "replacer",
    "threadlinker",
    "translation",
    "translators",
]