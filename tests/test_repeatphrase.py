import pytest

from sentencekit.extension import SentenceInfo
from sentencekit.repeatphrase import process_sentence, remove_repeated_phrases, suffix_array

NON_CONSOLE = SentenceInfo({"text number": 1})


@pytest.mark.parametrize(
    "sentence",
    [
        "Name: '_abcdefg_abcdefg_abcdefg_abcdefg_abcdefg'",
        "Name: '__a_ab_abc_abcd_abcde_abcdef_abcdefg'",
        "Name: '_abcdefg_abcdef_abcde_abcd_abc_ab_a_'",
    ],
)
def test_repeats_removed(sentence):
    assert process_sentence(sentence, NON_CONSOLE) == "Name: '_abcdefg'"


@pytest.mark.parametrize("sentence", ["", " ", "This is a normal sentence. はい"])
def test_normal_sentences_unchanged(sentence):
    assert process_sentence(sentence, NON_CONSOLE) == sentence


def test_console_is_ignored():
    sentence = "Name: '_abcdefg_abcdefg_abcdefg'"
    assert process_sentence(sentence, SentenceInfo({"text number": 0})) is None


@pytest.mark.parametrize("text", ["banana", "mississippi", "aaaa", "x", "こんにちはこんにちは"])
def test_suffix_array_is_descending_permutation(text):
    order = suffix_array(text)
    assert sorted(order) == list(range(len(text)))
    for a, b in zip(order, order[1:]):
        assert text[a:] > text[b:]


def test_suffix_array_of_empty_text():
    assert suffix_array("") == []


def test_result_never_grows():
    sentence = "Name: '_abcdefg_abcdefg_abcdefg_abcdefg_abcdefg'"
    assert len(remove_repeated_phrases(sentence)) <= len(sentence)