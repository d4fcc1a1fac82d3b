import re

import pytest

from sentencekit.dictionary import (
    Dictionary,
    Inflection,
    LookupResult,
    SentenceHistory,
    arrange_translation,
)

TEXT = (
    "\ufeffNotes outside blocks are ignored.\n"
    "|TERM|食べる|TERM|喰べる|DEFINITION|to eat|END|\n"
    "|TERM|食べ|DEFINITION|food|END|\n"
    "|ROOT|1る|INFLECTS TO|(.+)た|NAME| past|END|\n"
)


def make(text=TEXT):
    dictionary = Dictionary()
    dictionary.load(text)
    return dictionary


def test_direct_lookup():
    assert make().lookup("食べる") == [LookupResult("食べる", "to eat", ())]


def test_alternative_spelling_shares_definition():
    assert make().lookup("喰べる")[0].definition == "to eat"


def test_lookup_through_inflection():
    assert make().lookup("食べた") == [LookupResult("食べる", "to eat", (" past",))]


def test_missing_term():
    assert make().lookup("xyz") == []


def test_entry_count():
    assert len(make()) == 3


def test_definitions_html_for_prefixes():
    entries = make().definitions("食べた")
    assert entries == [
        "<h3>食べた (1/2)</h3><small>食べる past</small>to eat",
        "<h3>食べ (2/2)</h3><small>食べ</small>food",
    ]


def test_definition_reported_once():
    dictionary = make("|TERM|ab|TERM|a|DEFINITION|x|END|")
    assert len(dictionary.definitions("ab")) == 1


def test_display_escapes_and_strips_reading():
    dictionary = make("|TERM|a<<b|DEFINITION|d|END|")
    assert dictionary.definitions("a<<b")[0].startswith("<h3>a (1/1)</h3><small>a</small>")


def test_invalid_inflection_pattern_recorded():
    dictionary = make("|ROOT|1|INFLECTS TO|(|NAME|bad|END|")
    assert dictionary.invalid_patterns == ["("]
    assert dictionary.inflections == []


def test_inflection_root_of_missing_group_is_empty():
    inflection = Inflection("2x", re.compile("(a)"), "n")
    assert inflection.root_of("a") == "x"
    assert inflection.root_of("b") is None


def test_from_file_round_trip(tmp_path):
    path = tmp_path / "dict.txt"
    path.write_text(TEXT, encoding="utf-8")
    assert Dictionary.from_file(path).lookup("食べる") == make().lookup("食べる")


def test_from_missing_file_is_empty(tmp_path):
    assert len(Dictionary.from_file(tmp_path / "missing.txt")) == 0


def test_history_add_and_scroll():
    history = SentenceHistory()
    history.add("one")
    history.add("two\t")
    assert history.current() == "two"
    assert history.scroll(1) == "one"
    assert history.scroll(1) == "one"
    assert history.scroll(-1) == "two"
    assert history.scroll(-1) == "two"


def test_history_limit():
    history = SentenceHistory(limit=2)
    for sentence in ("a", "b", "c"):
        history.add(sentence)
    assert list(history) == ["b", "c"]


def test_empty_history():
    assert SentenceHistory().current() is None


@pytest.mark.parametrize(
    "show, after, expected",
    [
        (False, True, "translated"),
        (True, True, "translated\noriginal"),
        (True, False, "original\u200b \ntranslated"),
    ],
)
def test_arrange_translation(show, after, expected):
    assert arrange_translation("original\u200b \ntranslated", show, after) == expected


def test_arrange_without_translation():
    assert arrange_translation("plain", False, True) == "plain"