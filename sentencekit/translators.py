"""Translators that operate web translation sites through a DevTools-driven browser.

Each translator is a callable ``translate(text, param)`` returning
``(cacheable, translation)`` for use with the translation wrapper.
"""

from __future__ import annotations

import abc
import threading
import time
from collections.abc import Mapping
from typing import Any

from .devtools import DevTools
from .network import url_escape
from .translation import TRANSLATION_ERROR, TranslationParam

ERROR_START_CHROME = "failed to start Chrome or to connect to it"


class DevToolsTranslator(abc.ABC):
    """Loads a translation page, then polls it until the translation appears."""

    provider = "DevTools"
    languages_to: tuple[str, ...] = ()
    languages_from: tuple[str, ...] = ()
    codes: Mapping[str, str] = {}
    result_expression = ""
    attempts = 99

    def __init__(self, devtools: Any = None):
        self.devtools = devtools if devtools is not None else DevTools()
        self.poll_interval = 0.1
        self._lock = threading.Lock()

    @abc.abstractmethod
    def page_url(self, text: str, param: TranslationParam) -> str:
        """URL of the page that translates ``text``."""

    def __call__(self, text: str, param: TranslationParam) -> tuple[bool, str]:
        return self.translate(text, param)

    def _evaluate(self, expression: str, by_value: bool = True) -> str | None:
        params: dict[str, Any] = {"expression": expression}
        if by_value:
            params["returnByValue"] = True
        response = self.devtools.send_request("Runtime.evaluate", params)
        if not isinstance(response, dict):
            return None
        result = response.get("result")
        value = result.get("value") if isinstance(result, dict) else None
        return value if isinstance(value, str) else None

    def _prepare(self, param: TranslationParam) -> None:
        """Work to do on the page after it starts loading."""

    def _failure(self) -> tuple[bool, str]:
        return False, TRANSLATION_ERROR

    def translate(self, text: str, param: TranslationParam) -> tuple[bool, str]:
        """Translate ``text``; the flag is True when the translation may be cached."""
        if not self.devtools.connected():
            return False, f"{TRANSLATION_ERROR}: {ERROR_START_CHROME}"
        # the browser handles one translation at a time
        with self._lock:
            self.devtools.send_request("Page.navigate", {"url": self.page_url(text, param)})
            self._prepare(param)
            for _ in range(self.attempts):
                translation = self._evaluate(self.result_expression)
                if translation:
                    return True, translation
                time.sleep(self.poll_interval)
            return self._failure()


class DeepLTranslator(DevToolsTranslator):
    """Translation through the DeepL web translator."""

    provider = "DevTools DeepL Translate"
    languages_to = (
        "Bulgarian", "Chinese (Simplified)", "Czech", "Danish", "Dutch", "English (American)",
        "English (British)", "Estonian", "Finnish", "French", "German", "Greek", "Hungarian",
        "Italian", "Japanese", "Latvian", "Lithuanian", "Polish", "Portuguese",
        "Portuguese (Brazilian)", "Romanian", "Russian", "Slovak", "Slovenian", "Spanish", "Swedish",
    )
    languages_from = (
        "Bulgarian", "Chinese", "Czech", "Danish", "Dutch", "English", "Estonian", "Finnish",
        "French", "German", "Greek", "Hungarian", "Italian", "Japanese", "Latvian", "Lithuanian",
        "Polish", "Portuguese", "Romanian", "Russian", "Slovak", "Slovenian", "Spanish", "Swedish",
    )
    codes = {
        "Bulgarian": "Bulgarian",
        "Chinese": "Chinese",
        "Chinese (Simplified)": "Chinese (simplified)",
        "Czech": "Czech",
        "Danish": "Danish",
        "Dutch": "Dutch",
        "English": "English",
        "English (American)": "English (American)",
        "English (British)": "English (British)",
        "Estonian": "Estonian",
        "Finnish": "Finnish",
        "French": "French",
        "German": "German",
        "Greek": "Greek",
        "Hungarian": "Hungarian",
        "Italian": "Italian",
        "Japanese": "Japanese",
        "Latvian": "Latvian",
        "Lithuanian": "Lithuanian",
        "Polish": "Polish",
        "Portuguese": "Portuguese",
        "Portuguese (Brazilian)": "Portuguese (Brazilian)",
        "Romanian": "Romanian",
        "Russian": "Russian",
        "Slovak": "Slovak",
        "Slovenian": "Slovenian",
        "Spanish": "Spanish",
        "Swedish": "Swedish",
        "?": "Detect language",
    }
    result_expression = "document.querySelector('#target-dummydiv').innerHTML.trim() "
    ready_attempts = 19
    _error_expression = "document.querySelector('div.lmt__system_notification').innerHTML"
    _select_languages = (
        "document.querySelector('.lmt__language_select--source').querySelector('button').click();"
        "document.evaluate(`//*[text()='{source}']`,document.querySelector('.lmt__language_select__menu'),"
        "null,XPathResult.FIRST_ORDERED_NODE_TYPE,null).singleNodeValue.click();"
        "document.querySelector('.lmt__language_select--target').querySelector('button').click();"
        "document.evaluate(`//*[text()='{target}']`,document.querySelector('.lmt__language_select__menu'),"
        "null,XPathResult.FIRST_ORDERED_NODE_TYPE,null).singleNodeValue.click();"
    )

    def page_url(self, text: str, param: TranslationParam) -> str:
        """DeepL page for ``text``; slashes are escaped since they break the page."""
        escaped = text.replace("/", "\\/")
        return f"https://www.deepl.com/en/translator#en/en/{url_escape(escaped)}"

    def _prepare(self, param: TranslationParam) -> None:
        for _ in range(self.ready_attempts):
            if self._evaluate("document.readyState", by_value=False) == "complete":
                break
            time.sleep(self.poll_interval)
        expression = self._select_languages.format(
            source=self.codes[param.translate_from], target=self.codes[param.translate_to]
        )
        self.devtools.send_request("Runtime.evaluate", {"expression": expression})

    def _failure(self) -> tuple[bool, str]:
        message = self._evaluate(self._error_expression)
        if message is not None:
            return False, f"{TRANSLATION_ERROR}: {message}"
        return False, TRANSLATION_ERROR


class PapagoTranslator(DevToolsTranslator):
    """Translation through the Papago web translator."""

    provider = "DevTools Papago Translate"
    languages_to = (
        "Chinese (Simplified)", "Chinese (Traditional)", "English", "French", "German", "Hindi",
        "Indonesian", "Italian", "Japanese", "Korean", "Portuguese", "Russian", "Spanish", "Thai",
        "Vietnamese",
    )
    languages_from = languages_to
    codes = {
        "Chinese (Simplified)": "zh-CN",
        "Chinese (Traditional)": "zt-TW",
        "English": "en",
        "French": "fr",
        "German": "de",
        "Hindi": "hi",
        "Indonesian": "id",
        "Italian": "it",
        "Japanese": "ja",
        "Korean": "ko",
        "Portuguese": "pt",
        "Russian": "ru",
        "Spanish": "es",
        "Thai": "th",
        "Vietnamese": "vi",
        "?": "auto",
    }
    result_expression = "document.querySelector('#txtTarget').textContent.trim() "

    def page_url(self, text: str, param: TranslationParam) -> str:
        """Papago page translating ``text`` between the chosen languages."""
        source = self.codes[param.translate_from]
        target = self.codes[param.translate_to]
        return f"https://papago.naver.com/?sk={source}&tk={target}&st={url_escape(text)}"


class SystranTranslator(DevToolsTranslator):
    """Translation through the Systran web translator."""

    provider = "DevTools Systran Translate"
    languages_to = (
        "Albanian", "Arabic", "Bengali", "Bulgarian", "Burmese", "Catalan", "Chinese (Simplified)",
        "Chinese (Traditional)", "Croatian", "Czech", "Danish", "Dutch", "English", "Estonian",
        "Finnish", "French", "German", "Greek", "Hebrew", "Hindi", "Hungarian", "Indonesian",
        "Italian", "Japanese", "Korean", "Latvian", "Lithuanian", "Malay", "Norwegian", "Pashto",
        "Persian", "Polish", "Portuguese", "Romanian", "Russian", "Serbian", "Slovak", "Slovenian",
        "Somali", "Spanish", "Swedish", "Tagalog", "Tamil", "Thai", "Turkish", "Ukrainian", "Urdu",
        "Vietnamese",
    )
    languages_from = languages_to
    codes = {
        "Albanian": "sq",
        "Arabic": "ar",
        "Bengali": "bn",
        "Bulgarian": "bg",
        "Burmese": "my",
        "Catalan": "ca",
        "Chinese (Simplified)": "zh",
        "Chinese (Traditional)": "zt",
        "Croatian": "hr",
        "Czech": "cs",
        "Danish": "da",
        "Dutch": "nl",
        "English": "en",
        "Estonian": "et",
        "Finnish": "fi",
        "French": "fr",
        "German": "de",
        "Greek": "el",
        "Hebrew": "he",
        "Hindi": "hi",
        "Hungarian": "hu",
        "Indonesian": "id",
        "Italian": "it",
        "Japanese": "ja",
        "Korean": "ko",
        "Latvian": "lv",
        "Lithuanian": "lt",
        "Malay": "ms",
        "Norwegian": "no",
        "Pashto": "ps",
        "Persian": "fa",
        "Polish": "pl",
        "Portuguese": "pt",
        "Romanian": "ro",
        "Russian": "ru",
        "Serbian": "sr",
        "Slovak": "sk",
        "Slovenian": "sl",
        "Somali": "so",
        "Spanish": "es",
        "Swedish": "sv",
        "Tagalog": "tl",
        "Tamil": "ta",
        "Thai": "th",
        "Turkish": "tr",
        "Ukrainian": "uk",
        "Urdu": "ur",
        "Vietnamese": "vi",
        "?": "autodetect",
    }
    result_expression = "document.querySelector('#outputEditor').textContent.trim() "

    def page_url(self, text: str, param: TranslationParam) -> str:
        """Systran page translating ``text`` between the chosen languages."""
        source = self.codes[param.translate_from]
        target = self.codes[param.translate_to]
        return f"https://translate.systran.net/?source={source}&target={target}&input={url_escape(text)}"