from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest


# Ensure the project root is importable when running `pytest` via its entrypoint
# (e.g., after `pip install -e .[test]`), where `sys.path[0]` may not be the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from tommyzki.config.settings import AppSettings  # noqa: E402
from tommyzki.models.types import (  # noqa: E402
    JapaneseText,
    LANGUAGES,
    LanguageCode,
    SourceLanguage,
    TranslationResult,
)
from tommyzki.services.llm_client import LLMRequestResult  # noqa: E402
from tommyzki.services.translation_service import TranslationService  # noqa: E402


def make_result(
    en: str,
    id: str,
    kanji: str,
    romaji: str,
    source: LanguageCode = LanguageCode.EN,
) -> TranslationResult:
    return TranslationResult(
        source=SourceLanguage(code=source, name=LANGUAGES[source].name),
        en=en,
        id=id,
        ja=JapaneseText(kanji=kanji, romaji=romaji),
    )


@pytest.fixture
def hello_result() -> TranslationResult:
    return make_result("Hello", "Halo", "こんにちは", "Konnichiwa")


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(llm_base_url="http://llm.test/v1", llm_model="test-model", llm_api_key="secret")


@pytest.fixture
def mock_llm_client():
    """LLMClient stand-in whose complete() answers with `.content`"""
    client = Mock()
    client.complete = AsyncMock(return_value=LLMRequestResult(content="{}", model_id="test-model"))
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def llm_service(settings, mock_llm_client) -> TranslationService:
    """Real TranslationService over a mocked model client"""
    return TranslationService(settings, client=mock_llm_client)


@pytest.fixture
def mock_service(hello_result):
    """Collaborator double: detects English, translates to hello_result"""
    service = Mock(spec=TranslationService)
    service.detect_language = AsyncMock(return_value=LanguageCode.EN)
    service.translate = AsyncMock(return_value=hello_result)
    return service
