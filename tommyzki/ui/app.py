# tommyzki/ui/app.py
"""
Tommyzki Translator - single input box, three language cards.
The source language is detected by the model; every card shows its
language's live preview and the committed history.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from tommyzki import __app_name__
from tommyzki.config.settings import AppSettings, get_default_settings_path
from tommyzki.models.types import DEFAULT_LANGUAGE, LANGUAGES, UI_LANGUAGE_ORDER
from tommyzki.services.translation_service import TranslationService
from tommyzki.ui.controller import PreviewController
from tommyzki.ui.state import Notice, PreviewPhase, PreviewView

# Module logger
logger = logging.getLogger(__name__)

# Minimum supported NiceGUI version (major, minor, patch)
MIN_NICEGUI_VERSION = (3, 0, 0)

# NiceGUI imports - deferred to run_app() so that importing this module stays cheap
nicegui = None
ui = None
nicegui_app = None
nicegui_Client = None


def _ensure_nicegui_version() -> None:
    """Validate that the installed NiceGUI version meets the minimum requirement.

    Must be called after NiceGUI is imported (inside run_app()).
    """
    version_str = getattr(nicegui, '__version__', '')
    try:
        version_parts = tuple(int(part) for part in version_str.split('.')[:3])
    except ValueError:
        logger.warning(
            "Unable to parse NiceGUI version '%s'; proceeding without check", version_str
        )
        return

    if version_parts < MIN_NICEGUI_VERSION:
        raise RuntimeError(
            f"NiceGUI>={'.'.join(str(p) for p in MIN_NICEGUI_VERSION)} is required; "
            f"found {version_str}. Please upgrade NiceGUI to 3.x or newer."
        )


def _render_key(view: PreviewView) -> tuple:
    """Fields the cards depend on; typing alone does not re-render them."""
    return (view.preview, len(view.history), view.phase, view.detected_language)


class TommyzkiApp:
    """
    Shared application object. Settings and the translation service are
    created lazily and shared by every page; each page visit gets its own
    PreviewController.
    """

    def __init__(self, settings_path: Optional[Path] = None):
        self._settings_path = settings_path or get_default_settings_path()
        self._settings: Optional[AppSettings] = None
        self._translation_service: Optional[TranslationService] = None

    @property
    def settings(self) -> AppSettings:
        """Lazy-load settings on first access."""
        if self._settings is None:
            self._settings = AppSettings.load(self._settings_path)
            logger.info(
                "Settings loaded (model=%s, base_url=%s)",
                self._settings.llm_model,
                self._settings.llm_base_url,
            )
        return self._settings

    @property
    def translation_service(self) -> TranslationService:
        if self._translation_service is None:
            self._translation_service = TranslationService(self.settings)
        return self._translation_service

    def create_controller(self, on_change=None, on_notice=None) -> PreviewController:
        return PreviewController(
            self.translation_service,
            quiet_period=self.settings.debounce_seconds,
            on_change=on_change,
            on_notice=on_notice,
        )

    # =========================================================================
    # Page
    # =========================================================================

    def create_ui(self, client) -> PreviewController:
        """Build the page for one client and return its controller."""
        from tommyzki.ui.styles import COMPLETE_CSS
        from tommyzki.ui.components.language_card import create_language_card

        ui.add_head_html('<meta name="viewport" content="width=device-width, initial-scale=1.0">')
        ui.add_head_html(f'<style>{COMPLETE_CSS}</style>')

        last_render_key: list[tuple] = []
        textarea = None
        commit_button = None

        def on_change(view: PreviewView) -> None:
            with client:
                key = _render_key(view)
                if not last_render_key or last_render_key[0] != key:
                    last_render_key[:] = [key]
                    loading_indicator.refresh()
                    cards.refresh()
                if textarea is not None:
                    if textarea.value != view.input_text:
                        textarea.value = view.input_text
                    textarea.set_enabled(view.phase != PreviewPhase.COMMITTING)
                if commit_button is not None:
                    commit_button.set_enabled(view.can_commit)

        def on_notice(notice: Notice) -> None:
            with client:
                ui.notify(f'{notice.title}: {notice.message}', type=notice.level, position='bottom-right')

        controller = self.create_controller(on_change=on_change, on_notice=on_notice)

        @ui.refreshable
        def loading_indicator():
            if controller.view.is_loading:
                with ui.row().classes('loading-indicator items-center gap-2').props('role="status" aria-live="polite"'):
                    ui.spinner(size='md').classes('text-primary')
                    ui.label('Translating...')

        @ui.refreshable
        def cards():
            view = controller.view
            with ui.element('div').classes('cards-grid'):
                for code in UI_LANGUAGE_ORDER:
                    create_language_card(
                        LANGUAGES[code],
                        view.preview,
                        view.history,
                        view.is_loading,
                        view.is_detected_source(code),
                    )

        async def handle_commit():
            try:
                await controller.commit()
            except Exception as e:
                logger.exception("Commit error: %s", e)
                ui.notify(f'Error: {e}', type='negative')

        with ui.column().classes('w-full items-center p-4 md:p-8 gap-6'):
            with ui.column().classes('app-header items-center gap-1'):
                with ui.row().classes('items-center gap-3'):
                    ui.icon('translate', size='2.5rem').classes('text-primary')
                    ui.label(__app_name__).classes('app-title')
                ui.label('Translate, see history, and enjoy the retro vibe!').classes('app-subtitle')

            loading_indicator()

            with ui.column().classes('input-panel gap-2'):
                textarea = ui.textarea(
                    placeholder=LANGUAGES[DEFAULT_LANGUAGE].placeholder,
                    on_change=lambda e: controller.set_input(e.value),
                ).classes('w-full').props('borderless autogrow aria-label="Text to translate"')

                # Ctrl/Cmd+Enter commits without inserting a newline
                async def handle_keydown(_e):
                    if controller.view.can_commit:
                        await handle_commit()

                textarea.on(
                    'keydown',
                    handle_keydown,
                    js_handler='''(e) => {
                        if ((e.ctrlKey || e.metaKey) && e.key === "Enter") {
                            e.preventDefault();
                            emit(e);
                        }
                    }''',
                )

                with ui.row().classes('w-full justify-end gap-2'):
                    ui.button('Clear history', icon='delete_sweep', on_click=controller.clear_history).props('flat no-caps')
                    commit_button = ui.button('Commit', icon='check', on_click=handle_commit).props('no-caps')
                    commit_button.set_enabled(False)

            cards()

            with ui.element('footer').classes('app-footer'):
                ui.label(f'© {__app_name__}. Inspired by classic handheld games.')

        return controller

    async def shutdown(self) -> None:
        if self._translation_service is not None:
            await self._translation_service.aclose()
            self._translation_service = None


def run_app(
    host: Optional[str] = None,
    port: Optional[int] = None,
    settings_path: Optional[Path] = None,
    show: bool = True,
):
    """Run the application.

    Args:
        host: Host to bind to (settings value when None)
        port: Port to bind to (settings value when None)
        settings_path: Base settings path (config/settings.json by default)
        show: Open the browser on startup
    """
    global nicegui, ui, nicegui_app, nicegui_Client
    import nicegui as _nicegui
    from nicegui import ui as _ui
    from nicegui import app as _nicegui_app, Client as _nicegui_Client
    nicegui = _nicegui
    ui = _ui
    nicegui_app = _nicegui_app
    nicegui_Client = _nicegui_Client

    _ensure_nicegui_version()

    tommyzki_app = TommyzkiApp(settings_path)
    settings = tommyzki_app.settings
    if not settings.llm_api_key:
        logger.warning("No API key configured; set TOMMYZKI_API_KEY if the model endpoint requires one")

    from tommyzki.api.routes import create_translate_router
    nicegui_app.include_router(create_translate_router(lambda: tommyzki_app.translation_service))

    nicegui_app.on_shutdown(tommyzki_app.shutdown)

    @ui.page('/')
    async def main_page(client: nicegui_Client):
        controller = tommyzki_app.create_ui(client)

        def _close_controller() -> None:
            controller.close()
            logger.debug("Client disconnected; preview controller closed")

        client.on_disconnect(_close_controller)

    ui.run(
        host=host or settings.host,
        port=port or settings.port,
        title=__app_name__,
        favicon='🌐',
        dark=False,
        reload=False,
        show=show,
        uvicorn_logging_level='warning',
    )
