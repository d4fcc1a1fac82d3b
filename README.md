# sentencekit

A library of small, composable filters for sentences of extracted text:
text that arrives one line at a time, often with stuttered characters,
repeated phrases or whole sentences sent twice.

Each filter is a callable `process_sentence(sentence, info)` that receives a
sentence and a `SentenceInfo` describing where it came from. It returns the
new sentence, or `None` to leave the sentence as it was. An
`ExtensionManager` runs a chain of filters in order.

## Modules

| Module | Purpose |
| --- | --- |
| `sentencekit.extension` | `SentenceInfo`, `Skip`, `skip()` and `on_new_sentence()`: the contract every filter follows |
| `sentencekit.pipeline` | `ExtensionManager`, an ordered, reorderable chain of filters; `load_extension_names()` |
| `sentencekit.blockmarkup` | `iter_blocks()` and `read_blocks()` for the `|NAME|...|END|` block format used by the saved files |
| `sentencekit.repeatchar` | Collapses stuttered characters (`aaabbbccc` becomes `abc`) |
| `sentencekit.repeatphrase` | Removes phrases repeated inside a sentence, using a suffix array |
| `sentencekit.repeatprefix` | Removes sentence beginnings that reappear further on |
| `sentencekit.repeatsentence` | `RepeatedSentenceFilter`: drops sentences already seen recently on the same thread |
| `sentencekit.newlines` | Adds a newline after each sentence |
| `sentencekit.replacer` | `Trie` and `Replacer`: literal, whitespace-insensitive replacement scripts |
| `sentencekit.regexreplacer` | `Replacement`, `parse_replacements()` and `RegexReplacer`: regex replacements with `i` and `g` modifiers |
| `sentencekit.regexfilter` | `RegexFilter`: a per-process regex that keeps only its first capture group |
| `sentencekit.threadlinker` | `ThreadLinker`: forwards text from one thread to others |
| `sentencekit.translation` | `TranslationWrapper`, `TranslationCache`, `RateLimiter`, `TranslationParam` |
| `sentencekit.devtools` | `DevTools`: drives a Chromium-based browser over its remote debugging protocol |
| `sentencekit.translators` | `DeepLTranslator`, `PapagoTranslator` and `SystranTranslator`, built on `DevTools` |
| `sentencekit.network` | `parse_json()`, `json_escape()`, `html_unescape()`, `url_escape()`, `http_request()` |
| `sentencekit.dictionary` | `Dictionary` with inflection rules, `SentenceHistory`, `arrange_translation()` |

## Sentence info

`SentenceInfo` is a read-only mapping. The names the filters here read are:

- `"text number"`: the thread number; `0` is the console, which most filters leave alone
- `"current select"`: true when the thread is the one being viewed
- `"process id"`: the process the text came from (used by `RegexFilter`)
- `"add text"` / `"add sentence"`: callables `(thread_number, text)` used by `ThreadLinker`

Looking up a name that is not present raises `KeyError`. When the same name
is given twice, the first value wins.

```python
from sentencekit.extension import SentenceInfo

info = SentenceInfo({"text number": 1, "current select": 1, "process id": 42})
info["text number"]      # 1
```

## Writing a filter

Run a filter through `on_new_sentence`, which returns the sentence to pass
on. A filter that calls `skip()` drops the sentence; the result is then `""`.

```python
from sentencekit.extension import SentenceInfo, on_new_sentence, skip

def shout(sentence, info):
    if info["text number"] == 0:
        skip()
    return sentence.upper()

on_new_sentence(shout, "hello", SentenceInfo({"text number": 3}))   # "HELLO"
on_new_sentence(shout, "hello", SentenceInfo({"text number": 0}))   # ""
```

## Chaining filters

```python
from sentencekit.extension import SentenceInfo
from sentencekit.pipeline import ExtensionManager, load_extension_names
from sentencekit import repeatchar, repeatprefix, newlines

manager = ExtensionManager()
manager.add("Remove Repeated Characters", repeatchar.process_sentence)
manager.add("Remove Repeated Phrases", repeatprefix.process_sentence)
manager.add("Extra Newlines", newlines.process_sentence)

info = SentenceInfo({"text number": 1})
manager.dispatch("HHHeeellllllooo", info)    # "Hello\n"

manager.reorder(["Extra Newlines", "Remove Repeated Characters", "Remove Repeated Phrases"])
manager.names()
manager.save("SavedExtensions.txt")          # names, each followed by ">"
load_extension_names("SavedExtensions.txt")
```

Once a filter empties the sentence, the rest of the chain is not run.
`remove(index)` raises `IndexError` for a missing index, and `reorder`
raises `KeyError` for an unknown name. `load_extension_names` writes a
default list of names to the file if it does not exist yet.

## Repetition filters

```python
from sentencekit.repeatprefix import remove_repeated_prefixes
from sentencekit.repeatsentence import RepeatedSentenceFilter, cache_size_from_filename

remove_repeated_prefixes("__a_ab_abc_abcd_abcde_abcdef_abcdefg")   # "_abcdefg"

repeats = RepeatedSentenceFilter(cache_size=30)
cache_size_from_filename("Remove 10 Repeated Sentences.xdll")      # 10
```

`RepeatedSentenceFilter.process_sentence` returns `""` for a sentence its
thread produced among the last `cache_size` sentences, and `None` otherwise.
`remove_repeated_phrases` and `remove_repeated_prefixes` give up after thirty
seconds.

## The block file format

Saved replacements, filters, caches and dictionaries share one plain format:
fields opened by a `|NAME|` delimiter and a record closed by `|END|`.
Anything outside a record is ignored, so the files can carry their own notes.

```text
|ORIG|さよなら|BECOMES|goodbye |END|
Notes here are skipped.
|ORIG|バカ|BECOMES|idiot|END|
```

```python
from sentencekit.blockmarkup import iter_blocks, read_blocks

for original, replacement in iter_blocks(text, ["|ORIG|", "|BECOMES|"]):
    ...

read_blocks("SavedReplacements.txt", ["|ORIG|", "|BECOMES|"])   # UTF-16-LE by default
```

Reading stops at the first incomplete record. A missing file gives no
records.

## Replacement scripts

`Trie` matches the longest original at each position, ignoring whitespace in
both the script and the sentence; `^` in an original matches any one
character.

```python
from sentencekit.replacer import Trie, Replacer

trie = Trie("|ORIG|さよなら|BECOMES|goodbye|END|")
trie.replace("さよなら")   # "goodbye"

replacer = Replacer("SavedReplacements.txt")
```

`RegexReplacer` reads `|REGEX|...|BECOMES|...|MODIFIER|...|END|` records.
The modifier `i` makes the match case-insensitive and `g` replaces every
match rather than the first; `$1`, `$&`, `` $` ``, `$'` and `$$` work in the
replacement text. Invalid patterns are skipped.

Both `Replacer` and `RegexReplacer` read their file as UTF-16-LE and reload it
whenever its modification time changes. They do not create the file.

## Regex filter and thread linker

```python
from sentencekit.regexfilter import RegexFilter, save_filter, load_saved_filter
from sentencekit.threadlinker import ThreadLinker

regex_filter = RegexFilter("SavedRegexFilters.txt", process_name_lookup=lambda pid: "game.exe")
regex_filter.set_regex(r"「(.*)」")       # every match becomes its first group

save_filter("SavedRegexFilters.txt", "game.exe", r"(.*)")
load_saved_filter("SavedRegexFilters.txt", "game.exe")   # most recent pattern

linker = ThreadLinker()
linker.link(2, 5)        # text of thread 2 is also sent to thread 5
linker.link("All", 7)    # every thread above 1 is sent to thread 7
```

`set_regex` raises `re.error` for an invalid pattern; an empty pattern
removes the filter. When no filter is set, `RegexFilter` looks up the saved
pattern for the sentence's process.

## Translation

`TranslationWrapper` wraps any callable `translate(text, param)` returning
`(cacheable, translation)`. It trims the sentence and drops control
characters, refuses sentences longer than `max_sentence_size`, consults a
`TranslationCache`, limits the request rate with a `RateLimiter` (30
requests per 60 seconds by default), and returns the sentence followed by
`"\u200b \n"` and the translation. By default only the selected thread is
translated.

`TranslationCache.save` and `load` use block files; `cache_file_name(provider,
translate_to)` gives the conventional file name. `arrange_translation` in
`sentencekit.dictionary` lays out original and translation for display.

The browser-driven translators need a Chromium-based browser:

```python
from sentencekit.devtools import DevTools
from sentencekit.translators import DeepLTranslator
from sentencekit.translation import TranslationParam, TranslationWrapper

devtools = DevTools(9222)
devtools.start("/path/to/chrome", True)   # True for headless
translator = DeepLTranslator(devtools)
wrapper = TranslationWrapper(translator, TranslationParam(translate_to="English"))
```

`DevTools.close()` disconnects, fails pending requests, stops the browser and
removes its `devtoolscache` directory. Each translator lists its supported
languages in `languages_to`, `languages_from` and `codes`.

## Dictionary

`Dictionary` reads `|TERM|...|DEFINITION|...|END|` records (one definition
may carry several terms, separated by `|TERM|`) and
`|ROOT|...|INFLECTS TO|...|NAME|...|END|` inflection rules. The inflection is
a regular expression that must match the whole term; digits in the root are
replaced by its groups.

```python
from sentencekit.dictionary import Dictionary, SentenceHistory

dictionary = Dictionary.from_file("SavedDictionary.txt")   # UTF-8
dictionary.lookup("食べた")        # follows inflections back to roots
dictionary.definitions("食べた")   # HTML entries for every prefix, longest first

history = SentenceHistory(limit=1000)
history.add("first")
history.scroll(1)                  # positive moves back, negative forward
```

## What the package does not do

It provides the filters and the chain, not an application around them: there
is no command-line program, no windows or dialogs, and nothing that captures
text from other processes. Extensions are Python callables added to an
`ExtensionManager`; nothing is loaded from library files. Clipboard copying
and scripting hooks are not included.

## Testing

The test suite uses pytest, available through the `test` extra.