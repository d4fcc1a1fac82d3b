import os

import pytest

from sentencekit.extension import SentenceInfo
from sentencekit.regexreplacer import RegexReplacer, parse_replacements

INFO = SentenceInfo({"text number": 1})


def encode(text):
    return ("\ufeff" + text).encode("utf-16-le")


def single(pattern, replacement, modifier):
    (rule,) = parse_replacements(
        f"|REGEX|{pattern}|BECOMES|{replacement}|MODIFIER|{modifier}|END|"
    )
    return rule


def test_parse_reads_every_block():
    text = (
        "notes\n|REGEX|a|BECOMES|b|MODIFIER|g|END|\n"
        "|REGEX|c|BECOMES|d|MODIFIER||END|"
    )
    rules = parse_replacements(text)
    assert [rule.replacement for rule in rules] == ["b", "d"]
    assert [rule.replace_all for rule in rules] == [True, False]


def test_invalid_pattern_skipped():
    assert parse_replacements("|REGEX|(|BECOMES|x|MODIFIER|g|END|") == []


def test_first_match_only_without_g():
    result = single("a", "b", "").apply("a-a-a")
    assert result.count("b") == 1
    assert result.startswith("b")


def test_all_matches_with_g():
    result = single("a", "b", "g").apply("a-a-a")
    assert "a" not in result
    assert result.count("b") == 3


@pytest.mark.parametrize("modifier", ["gi", "ig"])
def test_ignore_case(modifier):
    assert "A" not in single("a", "b", modifier).apply("AaA")


def test_case_sensitive_by_default():
    assert single("a", "b", "g").apply("AAA") == "AAA"


def test_group_references():
    assert single(r"(\w+) (\w+)", "$2 $1", "").apply("hello world") == "world hello"


def test_whole_match_and_dollar():
    assert single("x", "[$&]", "g").apply("axb") == "a[x]b"
    assert single("x", "$$", "g").apply("x") == "$"


def test_file_replacements(tmp_path):
    path = tmp_path / "SavedRegexReplacements.txt"
    path.write_bytes(encode("|REGEX|cat|BECOMES|dog|MODIFIER|g|END|"))
    replacer = RegexReplacer(path)
    assert replacer.process_sentence("cat and cat", INFO) == "dog and dog"


def test_reload_after_change(tmp_path):
    path = tmp_path / "SavedRegexReplacements.txt"
    path.write_bytes(encode("|REGEX|cat|BECOMES|dog|MODIFIER|g|END|"))
    replacer = RegexReplacer(path)
    assert replacer.process_sentence("cat", INFO) == "dog"
    path.write_bytes(encode("|REGEX|cat|BECOMES|fox|MODIFIER|g|END|"))
    stat = path.stat()
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 5_000_000_000))
    assert replacer.process_sentence("cat", INFO) == "fox"


def test_missing_file_leaves_sentence(tmp_path):
    replacer = RegexReplacer(tmp_path / "missing.txt")
    assert replacer.replacements == []
    assert replacer.process_sentence("cat", INFO) == "cat"