import re

import pytest

from sentencekit.extension import SentenceInfo
from sentencekit.regexfilter import RegexFilter, load_saved_filter, save_filter

INFO = SentenceInfo({"text number": 1, "process id": 4})


def test_save_and_load_latest_filter(tmp_path):
    path = tmp_path / "filters.txt"
    save_filter(path, "C:\\game.exe", "(a)b")
    save_filter(path, "C:\\other.exe", "(x)")
    save_filter(path, "C:\\game.exe", "(c)d")
    assert load_saved_filter(path, "C:\\game.exe") == "(c)d"
    assert load_saved_filter(path, "C:\\other.exe") == "(x)"
    assert load_saved_filter(path, "C:\\missing.exe") is None


def test_saved_file_format(tmp_path):
    path = tmp_path / "filters.txt"
    save_filter(path, "p", "f")
    data = path.read_bytes()
    assert data.startswith(b"\xff\xfe")
    assert data.decode("utf-16-le") == "\ufeff|PROCESS|p|FILTER|f|END|\r\n"


def test_missing_file_has_no_filter(tmp_path):
    assert load_saved_filter(tmp_path / "none.txt", "p") is None


def test_keeps_first_group(tmp_path):
    flt = RegexFilter(tmp_path / "f.txt")
    flt.set_regex("(a)b")
    assert flt.process_sentence("abab", INFO) == "aa"
    assert flt.pattern == "(a)b"


def test_empty_pattern_clears_filter(tmp_path):
    flt = RegexFilter(tmp_path / "f.txt")
    flt.set_regex("(a)b")
    flt.set_regex("")
    assert flt.pattern is None
    assert flt.process_sentence("abab", INFO) == "abab"


def test_invalid_pattern_keeps_previous(tmp_path):
    flt = RegexFilter(tmp_path / "f.txt")
    flt.set_regex("(a)b")
    with pytest.raises(re.error):
        flt.set_regex("(")
    assert flt.pattern == "(a)b"


def test_console_is_ignored(tmp_path):
    flt = RegexFilter(tmp_path / "f.txt")
    flt.set_regex("(a)b")
    assert flt.process_sentence("abab", SentenceInfo({"text number": 0, "process id": 4})) is None


def test_loads_saved_filter_for_process(tmp_path):
    path = tmp_path / "f.txt"
    save_filter(path, "game.exe", "(a)b")
    lookups = []

    def lookup(process_id):
        lookups.append(process_id)
        return "game.exe"

    flt = RegexFilter(path, lookup)
    assert flt.process_sentence("abab", INFO) == "aa"
    assert lookups == [4]
    assert flt.pattern == "(a)b"