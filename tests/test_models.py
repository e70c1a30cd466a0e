# tests/test_models.py
"""Tests for tommyzki.models.types"""

import dataclasses

import pytest

from tommyzki.models.types import (
    DEFAULT_LANGUAGE,
    HistoryEntry,
    JapaneseText,
    LANGUAGES,
    LanguageCode,
    TranslationResult,
    UI_LANGUAGE_ORDER,
)
from tommyzki.services.exceptions import ResponseParseError


HELLO_DICT = {
    "source": {"code": "en", "name": "English"},
    "en": "Hello",
    "id": "Halo",
    "ja": {"kanji": "こんにちは", "romaji": "Konnichiwa"},
}


class TestLanguageCode:
    """Tests for the closed language set"""

    def test_values(self):
        assert [code.value for code in LanguageCode] == ["en", "id", "ja"]

    @pytest.mark.parametrize("raw,expected", [
        ("en", LanguageCode.EN),
        (" JA ", LanguageCode.JA),
        ("'id'", LanguageCode.ID),
        (LanguageCode.ID, LanguageCode.ID),
    ])
    def test_parse_supported(self, raw, expected):
        assert LanguageCode.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["fr", "english", "", None, 1, "en-US"])
    def test_parse_rejects_everything_else(self, raw):
        assert LanguageCode.parse(raw) is None

    def test_default_is_english(self):
        assert DEFAULT_LANGUAGE is LanguageCode.EN

    def test_every_code_has_metadata(self):
        assert set(LANGUAGES) == set(LanguageCode)
        assert set(UI_LANGUAGE_ORDER) == set(LanguageCode)
        assert UI_LANGUAGE_ORDER == (LanguageCode.ID, LanguageCode.EN, LanguageCode.JA)

    def test_only_japanese_has_romanized_messages(self):
        assert LANGUAGES[LanguageCode.JA].loading_message_romaji
        assert LANGUAGES[LanguageCode.EN].loading_message_romaji is None
        assert LANGUAGES[LanguageCode.ID].awaiting_message_romaji is None


class TestTranslationResult:
    """Tests for TranslationResult parsing and rendering"""

    def test_from_dict_and_back(self):
        result = TranslationResult.from_dict(HELLO_DICT)
        assert result.source.code is LanguageCode.EN
        assert result.ja == JapaneseText(kanji="こんにちは", romaji="Konnichiwa")
        assert result.to_dict() == HELLO_DICT

    def test_text_for(self):
        result = TranslationResult.from_dict(HELLO_DICT)
        assert result.text_for(LanguageCode.EN) == "Hello"
        assert result.text_for(LanguageCode.ID) == "Halo"
        assert result.text_for(LanguageCode.JA) == "こんにちは"

    def test_missing_field_rejected(self):
        data = dict(HELLO_DICT)
        del data["id"]
        with pytest.raises(ResponseParseError, match="translation.id"):
            TranslationResult.from_dict(data)

    def test_japanese_must_be_object(self):
        data = dict(HELLO_DICT, ja="こんにちは")
        with pytest.raises(ResponseParseError, match="translation.ja"):
            TranslationResult.from_dict(data)

    def test_missing_romaji_rejected(self):
        data = dict(HELLO_DICT, ja={"kanji": "こんにちは"})
        with pytest.raises(ResponseParseError, match="romaji"):
            TranslationResult.from_dict(data)

    def test_unsupported_source_code_rejected(self):
        data = dict(HELLO_DICT, source={"code": "fr", "name": "French"})
        with pytest.raises(ResponseParseError, match="unsupported source"):
            TranslationResult.from_dict(data)

    def test_non_object_rejected(self):
        with pytest.raises(ResponseParseError):
            TranslationResult.from_dict(["Hello"])

    def test_result_is_immutable(self):
        result = TranslationResult.from_dict(HELLO_DICT)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.en = "Hi"


class TestHistoryEntry:
    """Tests for HistoryEntry"""

    def test_timestamp_generated(self):
        entry = HistoryEntry(result=TranslationResult.from_dict(HELLO_DICT), source_text="Hello")
        assert entry.timestamp

    def test_entry_is_immutable(self):
        entry = HistoryEntry(result=TranslationResult.from_dict(HELLO_DICT), source_text="Hello")
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.source_text = "Bye"

    def test_japanese_blank(self):
        assert JapaneseText(kanji=" ", romaji="").is_blank is True
        assert JapaneseText(kanji="猫", romaji="").is_blank is False
