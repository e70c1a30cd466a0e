# tommyzki/ui/controller.py
"""
Live preview and commit orchestration for one input box.

Flow: set_input() -> (quiet period) -> refresh_preview():
detect language -> translate with the detected language as hint -> merge.

Every round-trip carries a generation token. A response is applied only if
its token is still the latest one issued and the input it was produced for
is still the current input; anything else is dropped on arrival.
"""

import logging
from typing import Callable, Optional

from tommyzki.models.types import DEFAULT_LANGUAGE, LANGUAGES, HistoryEntry, LanguageCode, TranslationResult
from tommyzki.services.debounce import debounce
from tommyzki.services.exceptions import TranslatorError
from tommyzki.services.translation_service import TranslationService
from tommyzki.ui.state import AppState, Notice, PreviewPhase, PreviewView

logger = logging.getLogger(__name__)

DEFAULT_QUIET_PERIOD = 1.0


class PreviewController:
    """
    Owns AppState for one session and applies the preview/commit transitions.

    Args:
        service: Detection and translation collaborators
        state: State to drive (a fresh AppState by default)
        quiet_period: Debounce interval in seconds
        on_change: Called with the new PreviewView after every state change
        on_notice: Called with a Notice for every user-visible failure
    """

    def __init__(
        self,
        service: TranslationService,
        state: Optional[AppState] = None,
        quiet_period: float = DEFAULT_QUIET_PERIOD,
        on_change: Optional[Callable[[PreviewView], None]] = None,
        on_notice: Optional[Callable[[Notice], None]] = None,
    ):
        self.service = service
        self.state = state if state is not None else AppState()
        self._on_change = on_change
        self._on_notice = on_notice
        # One debounced wrapper per controller (= per input box)
        self._debounced_refresh = debounce(self.refresh_preview, quiet_period)

    @property
    def view(self) -> PreviewView:
        return self.state.snapshot()

    @property
    def refresh_pending(self) -> bool:
        return self._debounced_refresh.pending

    # =========================================================================
    # Notifications
    # =========================================================================

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self.state.snapshot())

    def _notify(self, title: str, message: str, level: str = "negative") -> None:
        if self._on_notice is not None:
            self._on_notice(Notice(title=title, message=message, level=level))

    def _is_fresh(self, token: int, text: str) -> bool:
        return self.state.is_current(token) and self.state.input_text == text

    # =========================================================================
    # Input
    # =========================================================================

    def set_input(self, text: Optional[str]) -> None:
        """Record the user's input and schedule a preview round-trip.

        Empty or whitespace-only input clears the preview immediately and
        invalidates any round-trip still in flight; no model call is made.
        """
        text = text or ""
        self.state.input_text = text

        if not text.strip():
            self._debounced_refresh.cancel()
            self.state.next_generation()
            self.state.reset_preview()
            self._changed()
            return

        self._debounced_refresh(text)
        self._changed()

    async def _detect(self, text: str) -> tuple[LanguageCode, bool]:
        """Detect the language, falling back to DEFAULT_LANGUAGE on failure.

        Returns:
            (language, failed). Callers notify about a failure only once
            they know the round-trip is still current.
        """
        try:
            return await self.service.detect_language(text), False
        except TranslatorError as e:
            logger.warning("Language detection failed, using '%s': %s", DEFAULT_LANGUAGE.value, e)
        except Exception as e:
            logger.exception("Unexpected language detection error: %s", e)
        return DEFAULT_LANGUAGE, True

    def _notify_detection_failed(self) -> None:
        self._notify(
            "Detection Failed",
            f"Could not detect the language. Translating as {LANGUAGES[DEFAULT_LANGUAGE].name}.",
            level="warning",
        )

    async def refresh_preview(self, text: str) -> None:
        """One detection + translation round-trip for text (the debounced body)."""
        if not text.strip():
            return

        token = self.state.next_generation()
        self.state.phase = PreviewPhase.DETECTING
        self._changed()

        detected, failed = await self._detect(text)
        if not self._is_fresh(token, text):
            logger.debug("Discarding stale detection (generation %d)", token)
            return
        if failed:
            self._notify_detection_failed()

        self.state.detected_language = detected
        self.state.detected_text = text
        self.state.phase = PreviewPhase.TRANSLATING
        self._changed()

        try:
            result = await self.service.translate(text, source_language=detected)
        except Exception as e:
            if not self._is_fresh(token, text):
                logger.debug("Ignoring failure of stale translation (generation %d): %s", token, e)
                return
            if isinstance(e, TranslatorError):
                logger.warning("Preview translation failed: %s", e)
            else:
                logger.exception("Unexpected preview translation error: %s", e)
            self.state.phase = PreviewPhase.ERROR
            self._notify(
                "Preview Failed",
                "Could not fetch live preview. Please continue typing or try committing.",
            )
            self._changed()
            return

        if not self._is_fresh(token, text):
            logger.debug("Discarding stale translation (generation %d)", token)
            return

        self.state.preview = result
        self.state.preview_text = text
        self.state.phase = PreviewPhase.PREVIEW_READY
        self._changed()

    # =========================================================================
    # Commit / history
    # =========================================================================

    async def commit(self) -> Optional[HistoryEntry]:
        """Freeze the current translation into history and clear the input.

        Reuses the preview when it was produced for the current input;
        otherwise runs one more translation first.

        Returns:
            The new history entry, or None if nothing was committed
        """
        text = self.state.input_text
        if not text.strip():
            self._notify("Nothing to Commit", "Type some text before committing.", level="warning")
            return None
        if self.state.is_translating():
            self._notify("Translation in Progress", "Please wait for the current translation to finish.", level="info")
            return None

        self._debounced_refresh.cancel()

        if self.state.preview_matches_input():
            result = self.state.preview
        else:
            result = await self._translate_for_commit(text)
            if result is None:
                return None

        entry = HistoryEntry(result=result, source_text=text)
        self.state.add_to_history(entry)
        logger.info("Committed translation #%d (source: %s)", len(self.state.history), result.source.code.value)

        if self.state.input_text == text:
            self.state.next_generation()
            self.state.reset_input()
        self._changed()
        return entry

    async def _translate_for_commit(self, text: str) -> Optional[TranslationResult]:
        token = self.state.next_generation()
        self.state.phase = PreviewPhase.COMMITTING
        self._changed()

        # A detection made for an earlier text is no hint for this one
        if self.state.detected_language is not None and self.state.detected_text == text:
            source = self.state.detected_language
        else:
            source, failed = await self._detect(text)
            if failed:
                self._notify_detection_failed()

        try:
            result = await self.service.translate(text, source_language=source)
        except Exception as e:
            if isinstance(e, TranslatorError):
                logger.warning("Commit translation failed: %s", e)
            else:
                logger.exception("Unexpected commit translation error: %s", e)
            if self.state.is_current(token):
                self.state.phase = PreviewPhase.ERROR
                self._changed()
            self._notify("Translation Failed", "Could not commit the translation. Please try again.")
            return None

        if self.state.is_current(token):
            # Input may have been edited meanwhile; the newer text gets its own round-trip
            self.state.phase = PreviewPhase.IDLE
        return result

    def clear_history(self) -> None:
        self.state.clear_history()
        self._changed()

    def close(self) -> None:
        """Detach from the page: cancel the pending round-trip and drop late results."""
        self._debounced_refresh.cancel()
        self.state.next_generation()
        self._on_change = None
        self._on_notice = None
