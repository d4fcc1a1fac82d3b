import pytest

from sentencekit.extension import SentenceInfo
from sentencekit.repeatchar import process_sentence, remove_repeated_characters

NON_CONSOLE = SentenceInfo({"text number": 1})


def run(sentence):
    result = process_sentence(sentence, NON_CONSOLE)
    return sentence if result is None else result


def test_heavily_repeated_characters():
    assert run("aaaaaaaaaaaabbbbbbcccdddaabbbcccddd").find("aaaabbcd") == 0


def test_some_repeated_characters():
    assert run("abcdefaabbccddeeff") == "abcdefabcdef"


@pytest.mark.parametrize("sentence", ["", " ", "This is a normal sentence. はい"])
def test_normal_sentences_unchanged(sentence):
    assert run(sentence) == sentence


def test_console_is_ignored():
    assert process_sentence("aabbcc", SentenceInfo({"text number": 0})) is None


def test_unchanged_sentence_reports_none():
    assert process_sentence("abc", NON_CONSOLE) is None


def test_result_keeps_character_set_and_shrinks():
    sentence = "aaaaaaaaaaaabbbbbbcccdddaabbbcccddd"
    result = remove_repeated_characters(sentence)
    assert set(result) == set(sentence)
    assert len(result) < len(sentence)


def test_missing_info_raises():
    with pytest.raises(KeyError):
        process_sentence("aabb", SentenceInfo({}))