# tommyzki/ui/state.py
"""
Application state management for Tommyzki Translator.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from tommyzki.models.types import HistoryEntry, LanguageCode, TranslationResult

# Module logger
logger = logging.getLogger(__name__)


class PreviewPhase(Enum):
    """Live preview states"""
    IDLE = "idle"                    # No input
    DETECTING = "detecting"          # Detection call in flight
    TRANSLATING = "translating"      # Translation call in flight
    PREVIEW_READY = "preview_ready"  # Preview matches current input
    ERROR = "error"                  # Last call failed, last good preview kept
    COMMITTING = "committing"        # Commit translation in flight


# Phases during which a model call is outstanding
IN_FLIGHT_PHASES = frozenset({PreviewPhase.DETECTING, PreviewPhase.TRANSLATING, PreviewPhase.COMMITTING})


@dataclass(frozen=True)
class Notice:
    """Transient, dismissible message for the user"""
    title: str
    message: str
    level: str = "negative"          # "info", "warning", "negative"


@dataclass(frozen=True)
class PreviewView:
    """Read-only projection of AppState for rendering"""
    input_text: str
    detected_language: Optional[LanguageCode]
    preview: Optional[TranslationResult]
    history: tuple[HistoryEntry, ...]
    phase: PreviewPhase

    @property
    def is_loading(self) -> bool:
        return self.phase in IN_FLIGHT_PHASES

    @property
    def can_commit(self) -> bool:
        return bool(self.input_text.strip()) and not self.is_loading

    def is_detected_source(self, code: LanguageCode) -> bool:
        return self.detected_language == code


@dataclass
class AppState:
    """
    Application state.
    Single source of truth for one browser session; only PreviewController
    mutates it. History lives in memory for the session, oldest first.
    """
    input_text: str = ""
    detected_language: Optional[LanguageCode] = None
    detected_text: Optional[str] = None  # Input `detected_language` was detected for
    preview: Optional[TranslationResult] = None
    preview_text: Optional[str] = None   # Input that produced `preview`
    phase: PreviewPhase = PreviewPhase.IDLE
    generation: int = 0                  # Token of the latest issued round-trip

    history: list[HistoryEntry] = field(default_factory=list)

    def next_generation(self) -> int:
        """Issue a new round-trip token, invalidating all earlier ones"""
        self.generation += 1
        return self.generation

    def is_current(self, token: int) -> bool:
        return token == self.generation

    def reset_preview(self) -> None:
        """Clear preview and detection, back to IDLE"""
        self.detected_language = None
        self.detected_text = None
        self.preview = None
        self.preview_text = None
        self.phase = PreviewPhase.IDLE

    def reset_input(self) -> None:
        """Clear input together with the preview"""
        self.input_text = ""
        self.reset_preview()

    def preview_matches_input(self) -> bool:
        """True if the preview was produced for exactly the current input"""
        return self.preview is not None and self.preview_text == self.input_text

    def is_translating(self) -> bool:
        return self.phase in IN_FLIGHT_PHASES

    def add_to_history(self, entry: HistoryEntry) -> None:
        """Append entry to history (oldest first)"""
        self.history.append(entry)

    def clear_history(self) -> None:
        self.history = []

    def snapshot(self) -> PreviewView:
        return PreviewView(
            input_text=self.input_text,
            detected_language=self.detected_language,
            preview=self.preview,
            history=tuple(self.history),
            phase=self.phase,
        )
