# tommyzki/models/__init__.py
"""
Data models for Tommyzki Translator.
"""

from .types import (
    LanguageCode,
    LanguageInfo,
    LANGUAGES,
    UI_LANGUAGE_ORDER,
    DEFAULT_LANGUAGE,
    SourceLanguage,
    JapaneseText,
    TranslationResult,
    HistoryEntry,
)

__all__ = [
    'LanguageCode',
    'LanguageInfo',
    'LANGUAGES',
    'UI_LANGUAGE_ORDER',
    'DEFAULT_LANGUAGE',
    'SourceLanguage',
    'JapaneseText',
    'TranslationResult',
    'HistoryEntry',
]
