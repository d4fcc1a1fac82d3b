import pytest

from sentencekit.extension import SentenceInfo, Skip, on_new_sentence, skip


def test_lookup_from_pairs():
    info = SentenceInfo([("current select", 1), ("text number", 5)])
    assert info["text number"] == 5
    assert info["current select"] == 1


def test_first_entry_wins():
    info = SentenceInfo([("process id", 10), ("process id", 20)])
    assert info["process id"] == 10
    assert len(info) == 1


def test_lookup_from_mapping_and_iteration():
    info = SentenceInfo({"text number": 1, "process id": 0})
    assert sorted(info) == ["process id", "text number"]
    assert dict(info) == {"text number": 1, "process id": 0}


def test_missing_name_raises():
    info = SentenceInfo({"text number": 1})
    with pytest.raises(KeyError):
        info["hook address"]
    assert dict(info) == {"text number": 1}
    assert info["text number"] == 1


def test_skip_raises_skip():
    with pytest.raises(Skip):
        skip()


def test_unchanged_sentence_when_processor_returns_none():
    assert on_new_sentence(lambda s, i: None, "hello", {"text number": 1}) == "hello"


def test_processor_result_replaces_sentence():
    result = on_new_sentence(lambda s, i: s + "\n", "hello", {"text number": 1})
    assert result == "hello\n"


def test_processor_receives_sentence_info():
    seen = []

    def processor(sentence, info):
        seen.append(info)
        return str(info["text number"])

    assert on_new_sentence(processor, "x", [("text number", 7)]) == "7"
    assert isinstance(seen[0], SentenceInfo)


def test_skip_empties_sentence():
    def processor(sentence, info):
        skip()

    assert on_new_sentence(processor, "drop me", {}) == ""