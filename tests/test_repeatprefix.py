import pytest

from sentencekit.extension import SentenceInfo
from sentencekit.repeatprefix import process_sentence, remove_repeated_prefixes

NON_CONSOLE = SentenceInfo({"text number": 1})


def run(sentence):
    result = process_sentence(sentence, NON_CONSOLE)
    return sentence if result is None else result


def test_cyclic_repeats():
    assert run("_abcde_abcdef_abcdefg_abcdefg_abcdefg_abcdefg_abcdefg") == "_abcdefg"


def test_buildup_repeats():
    assert run("__a_ab_abc_abcd_abcde_abcdef_abcdefg") == "_abcdefg"


@pytest.mark.parametrize("sentence", ["", " ", "This is a normal sentence. はい"])
def test_normal_sentences_unchanged(sentence):
    assert run(sentence) == sentence


def test_console_is_ignored():
    assert process_sentence("__a_ab_abc_abcd", SentenceInfo({"text number": 0})) is None


def test_result_is_suffix_of_input():
    sentence = "__a_ab_abc_abcd_abcde_abcdef_abcdefg"
    result = remove_repeated_prefixes(sentence)
    assert sentence.endswith(result)
    assert len(result) < len(sentence)