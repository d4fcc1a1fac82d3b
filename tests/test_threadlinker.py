from sentencekit.extension import SentenceInfo
from sentencekit.threadlinker import ThreadLinker


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, number, text):
        self.calls.append((number, text))


def make_info(text_number, add_text, add_sentence=None):
    return SentenceInfo(
        {"text number": text_number, "add text": add_text, "add sentence": add_sentence or Recorder()}
    )


def test_link_reports_new_links():
    linker = ThreadLinker()
    assert linker.link(1, 2) is True
    assert linker.link(1, 2) is False


def test_linked_thread_receives_text():
    linker = ThreadLinker()
    linker.link(1, 2)
    recorder = Recorder()
    assert linker.process_sentence("hello", make_info(1, recorder)) is None
    assert recorder.calls == [(2, "hello")]


def test_unlinked_thread_receives_nothing():
    linker = ThreadLinker()
    linker.link(1, 2)
    recorder = Recorder()
    linker.process_sentence("hello", make_info(3, recorder))
    assert recorder.calls == []


def test_universal_links_skip_low_thread_numbers():
    linker = ThreadLinker()
    linker.link(None, 5)
    linker.link("All", 7)
    recorder = Recorder()
    linker.process_sentence("x", make_info(1, recorder))
    assert recorder.calls == []
    linker.process_sentence("y", make_info(3, recorder))
    assert sorted(recorder.calls) == [(5, "y"), (7, "y")]


def test_unlink():
    linker = ThreadLinker()
    linker.link(1, 2)
    assert linker.unlink(1, 2) is True
    assert linker.unlink(1, 2) is False
    recorder = Recorder()
    linker.process_sentence("hello", make_info(1, recorder))
    assert recorder.calls == []


def test_separate_sentences_uses_add_sentence():
    linker = ThreadLinker()
    linker.separate_sentences = True
    linker.link(4, 6)
    text_recorder, sentence_recorder = Recorder(), Recorder()
    linker.process_sentence("s", make_info(4, text_recorder, sentence_recorder))
    assert text_recorder.calls == []
    assert sentence_recorder.calls == [(6, "s")]