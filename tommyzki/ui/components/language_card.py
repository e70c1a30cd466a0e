# tommyzki/ui/components/language_card.py
"""
One card per language: committed history on top, live preview below.
Japanese is shown as kanji with a romaji line underneath.

The card holds no logic beyond choosing which lines to show; the
line-selection helpers are plain functions so they can be tested without
a browser.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from nicegui import ui

from tommyzki.models.types import HistoryEntry, JapaneseText, LanguageCode, LanguageInfo, TranslationResult

logger = logging.getLogger(__name__)

# Full-width space keeps an empty line from collapsing
BLANK = '　'

# Delay before scrolling, so the refreshed elements are mounted first
SCROLL_DELAY_SECONDS = 0.05

PreviewValue = Union[str, JapaneseText, None]


@dataclass(frozen=True)
class CardLine:
    """A single rendered line"""
    text: str
    lang: str
    muted: bool = False
    secondary: bool = False   # Smaller romanized line
    emphasis: bool = False


def preview_value(result: Optional[TranslationResult], code: LanguageCode) -> PreviewValue:
    """Value a card previews: JapaneseText for Japanese, str otherwise."""
    if result is None:
        return None
    if code == LanguageCode.JA:
        return result.ja
    return result.text_for(code)


def _is_empty(value: PreviewValue) -> bool:
    if value is None:
        return True
    if isinstance(value, JapaneseText):
        return value.is_blank
    return not value


def _message_lines(code: LanguageCode, message: str, romaji: Optional[str]) -> list[CardLine]:
    lines = [CardLine(text=message, lang=code.value, muted=True)]
    if romaji:
        lines.append(CardLine(text=romaji, lang='ja-Latn', muted=True, secondary=True))
    return lines


def preview_lines(
    info: LanguageInfo,
    value: PreviewValue,
    is_loading: bool,
    is_detected_source: bool,
) -> list[CardLine]:
    """Lines for the live preview footer."""
    code = info.code
    empty = _is_empty(value)

    if is_loading and empty:
        return _message_lines(code, info.loading_message, info.loading_message_romaji)

    if empty and not is_detected_source:
        return _message_lines(code, info.awaiting_message, info.awaiting_message_romaji)

    if isinstance(value, JapaneseText):
        return [
            CardLine(text=value.kanji or BLANK, lang='ja'),
            CardLine(text=value.romaji or BLANK, lang='ja-Latn', muted=True, secondary=True),
        ]

    return [CardLine(text=value or BLANK, lang=code.value)]


def history_lines(entry: HistoryEntry, code: LanguageCode) -> list[CardLine]:
    """Lines for one history entry in a language's card."""
    result = entry.result
    if code == LanguageCode.JA:
        return [
            CardLine(text=result.ja.kanji or ' ', lang='ja', emphasis=True),
            CardLine(text=result.ja.romaji or ' ', lang='ja-Latn', muted=True, secondary=True),
        ]
    return [CardLine(text=result.text_for(code) or ' ', lang=code.value)]


def empty_history_lines(info: LanguageInfo) -> list[CardLine]:
    return _message_lines(info.code, info.empty_history_message, info.empty_history_message_romaji)


def _render_lines(lines: Sequence[CardLine]) -> None:
    for line in lines:
        classes = 'card-line'
        if line.muted:
            classes += ' text-muted'
        if line.secondary:
            classes += ' text-xs'
        if line.emphasis:
            classes += ' font-semibold'
        ui.label(line.text).classes(classes).props(f'lang="{line.lang}"')


def create_language_card(
    info: LanguageInfo,
    preview: Optional[TranslationResult],
    history: Sequence[HistoryEntry],
    is_loading: bool,
    is_detected_source: bool,
) -> ui.card:
    """Create the card for one language.

    Args:
        info: Language metadata
        preview: Current live preview (None when empty)
        history: Committed entries, oldest first
        is_loading: A model call is in flight
        is_detected_source: This language is the detected source

    Returns:
        The created card element
    """
    card_classes = 'language-card w-full'
    if is_detected_source:
        card_classes += ' detected-source'

    with ui.card().classes(card_classes).props(f'aria-label="{info.name}"') as card:
        with ui.row().classes('card-header w-full items-center justify-between'):
            ui.label(info.name).classes('card-title')
            if is_detected_source:
                with ui.badge().props('outline').classes('source-badge'):
                    ui.icon('auto_awesome').classes('text-xs')
                    ui.label('Source')

        history_area = ui.scroll_area().classes('history-area w-full')
        with history_area:
            if not history:
                _render_lines(empty_history_lines(info))
            for entry in history:
                with ui.element('div').classes('history-entry'):
                    _render_lines(history_lines(entry, info.code))

        preview_area = ui.scroll_area().classes('preview-area w-full')
        with preview_area:
            _render_lines(preview_lines(info, preview_value(preview, info.code), is_loading, is_detected_source))

    # Keep the newest history entry and the end of the preview in view
    def scroll_to_latest() -> None:
        history_area.scroll_to(percent=1.0)
        preview_area.scroll_to(percent=1.0)

    ui.timer(SCROLL_DELAY_SECONDS, scroll_to_latest, once=True)
    return card
