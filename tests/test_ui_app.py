# tests/test_ui_app.py
"""Tests for TommyzkiApp wiring that does not need a running NiceGUI server"""

import json
from unittest.mock import AsyncMock

import pytest

from tommyzki.config.settings import invalidate_settings_cache
from tommyzki.models.types import LanguageCode
from tommyzki.services.translation_service import TranslationService
from tommyzki.ui import app as ui_app
from tommyzki.ui.app import TommyzkiApp, _ensure_nicegui_version, _render_key
from tommyzki.ui.state import AppState, PreviewPhase


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    monkeypatch.delenv("TOMMYZKI_API_KEY", raising=False)
    (tmp_path / "settings.template.json").write_text(
        json.dumps({"llm_model": "template-model", "debounce_seconds": 0.3}),
        encoding="utf-8",
    )
    path = tmp_path / "settings.json"
    yield path
    invalidate_settings_cache(path)


def test_settings_loaded_lazily(settings_path):
    app = TommyzkiApp(settings_path)
    assert app._settings is None

    assert app.settings.llm_model == "template-model"
    assert app.settings is app.settings


def test_translation_service_shared(settings_path):
    app = TommyzkiApp(settings_path)

    service = app.translation_service

    assert isinstance(service, TranslationService)
    assert app.translation_service is service


def test_controller_uses_configured_quiet_period(settings_path):
    app = TommyzkiApp(settings_path)

    controller = app.create_controller()

    assert controller.service is app.translation_service
    assert controller._debounced_refresh.wait == 0.3


@pytest.mark.asyncio
async def test_shutdown_closes_service(settings_path):
    app = TommyzkiApp(settings_path)
    service = app.translation_service
    service.aclose = AsyncMock()

    await app.shutdown()

    service.aclose.assert_awaited_once()
    assert app._translation_service is None


def test_render_key_ignores_typing(hello_result):
    state = AppState(input_text="Hel", preview=hello_result, phase=PreviewPhase.PREVIEW_READY)
    before = _render_key(state.snapshot())

    state.input_text = "Hello"
    assert _render_key(state.snapshot()) == before

    state.detected_language = LanguageCode.EN
    assert _render_key(state.snapshot()) != before


def test_nicegui_version_guard(monkeypatch):
    class _Old:
        __version__ = "2.9.0"

    class _Current:
        __version__ = "3.1.0"

    monkeypatch.setattr(ui_app, "nicegui", _Current)
    _ensure_nicegui_version()

    monkeypatch.setattr(ui_app, "nicegui", _Old)
    with pytest.raises(RuntimeError, match="NiceGUI>=3.0.0"):
        _ensure_nicegui_version()
