# tommyzki/models/types.py
"""
Core data types for Tommyzki Translator.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from tommyzki.services.exceptions import ResponseParseError


class LanguageCode(Enum):
    """Supported languages (closed set)"""
    EN = "en"
    ID = "id"
    JA = "ja"

    @classmethod
    def parse(cls, value: Any) -> Optional["LanguageCode"]:
        """Return the matching member, or None for anything outside the set."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        normalized = value.strip().strip('"\'').lower()
        for member in cls:
            if member.value == normalized:
                return member
        return None


@dataclass(frozen=True)
class LanguageInfo:
    """
    Display metadata for one language card.
    Secondary lines are romanized hints, shown for Japanese only.
    """
    code: LanguageCode
    name: str
    placeholder: str
    loading_message: str
    awaiting_message: str
    empty_history_message: str
    loading_message_romaji: Optional[str] = None
    awaiting_message_romaji: Optional[str] = None
    empty_history_message_romaji: Optional[str] = None


LANGUAGES: dict[LanguageCode, LanguageInfo] = {
    LanguageCode.ID: LanguageInfo(
        code=LanguageCode.ID,
        name="Bahasa Indonesia",
        placeholder="Ketik Bahasa Indonesia di sini...",
        loading_message="Memuat pratinjau...",
        awaiting_message="Menunggu input...",
        empty_history_message="Terjemahan yang disimpan akan muncul di sini.",
    ),
    LanguageCode.EN: LanguageInfo(
        code=LanguageCode.EN,
        name="English",
        placeholder="Type English here...",
        loading_message="Loading preview...",
        awaiting_message="Awaiting input...",
        empty_history_message="Saved translations will appear here.",
    ),
    LanguageCode.JA: LanguageInfo(
        code=LanguageCode.JA,
        name="Japanese",
        placeholder="日本語で入力してください...",
        loading_message="プレビューを読み込み中...",
        awaiting_message="入力を待っています...",
        empty_history_message="保存された翻訳はここに表示されます。",
        loading_message_romaji="Purebyū o yomikomi-chū...",
        awaiting_message_romaji="Nyūryoku o matte imasu...",
        empty_history_message_romaji="Hozon sareta hon'yaku wa koko ni hyōji sa remasu.",
    ),
}

# Order of cards displayed on the UI
UI_LANGUAGE_ORDER: tuple[LanguageCode, ...] = (LanguageCode.ID, LanguageCode.EN, LanguageCode.JA)

# Primary language: used whenever detection cannot produce a supported code
DEFAULT_LANGUAGE = LanguageCode.EN


def _require_str(data: dict, key: str, context: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ResponseParseError(f"{context}.{key} must be a string, got {type(value).__name__}")
    return value


def _require_dict(data: dict, key: str, context: str) -> dict:
    value = data.get(key)
    if not isinstance(value, dict):
        raise ResponseParseError(f"{context}.{key} must be an object, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class SourceLanguage:
    """Identified source language of a translation"""
    code: LanguageCode
    name: str


@dataclass(frozen=True)
class JapaneseText:
    """Japanese rendering: primary script plus romanized reading"""
    kanji: str
    romaji: str

    @property
    def is_blank(self) -> bool:
        return not self.kanji.strip() and not self.romaji.strip()


@dataclass(frozen=True)
class TranslationResult:
    """
    Translation of one input into every supported language.
    Always fully populated; partial model output is rejected by from_dict().
    """
    source: SourceLanguage
    en: str
    id: str
    ja: JapaneseText

    def text_for(self, code: LanguageCode) -> str:
        """Primary rendering for a language (kanji for Japanese)"""
        if code == LanguageCode.EN:
            return self.en
        if code == LanguageCode.ID:
            return self.id
        return self.ja.kanji

    def to_dict(self) -> dict:
        return {
            "source": {"code": self.source.code.value, "name": self.source.name},
            "en": self.en,
            "id": self.id,
            "ja": {"kanji": self.ja.kanji, "romaji": self.ja.romaji},
        }

    @classmethod
    def from_dict(cls, data: Any) -> "TranslationResult":
        """Build a result from the wire shape, validating every field.

        Raises:
            ResponseParseError: If a field is missing, mistyped, or the
                source code is outside the supported set.
        """
        if not isinstance(data, dict):
            raise ResponseParseError(f"translation must be an object, got {type(data).__name__}")

        source_data = _require_dict(data, "source", "translation")
        raw_code = _require_str(source_data, "code", "translation.source")
        code = LanguageCode.parse(raw_code)
        if code is None:
            raise ResponseParseError(f"unsupported source language code: {raw_code!r}")
        source_name = _require_str(source_data, "name", "translation.source")

        ja_data = _require_dict(data, "ja", "translation")
        return cls(
            source=SourceLanguage(code=code, name=source_name),
            en=_require_str(data, "en", "translation"),
            id=_require_str(data, "id", "translation"),
            ja=JapaneseText(
                kanji=_require_str(ja_data, "kanji", "translation.ja"),
                romaji=_require_str(ja_data, "romaji", "translation.ja"),
            ),
        )


@dataclass(frozen=True)
class HistoryEntry:
    """
    A committed translation. Never mutated after creation.
    """
    result: TranslationResult
    source_text: str = ""
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
