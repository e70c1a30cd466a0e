# tests/test_api.py
"""Tests for the /api/translate endpoint"""

import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tommyzki.api.routes import TRANSLATE_PATH, create_translate_router
from tommyzki.models.types import LanguageCode
from tommyzki.services.exceptions import LLMRequestError
from tommyzki.services.llm_client import LLMRequestResult

HELLO = {
    "source": {"code": "en", "name": "English"},
    "en": "Hello",
    "id": "Halo",
    "ja": {"kanji": "こんにちは", "romaji": "Konnichiwa"},
}


@pytest.fixture
def api_client(llm_service, mock_llm_client):
    mock_llm_client.complete = AsyncMock(
        return_value=LLMRequestResult(content=json.dumps(HELLO, ensure_ascii=False), model_id=None)
    )
    app = FastAPI()
    app.include_router(create_translate_router(lambda: llm_service))
    with TestClient(app) as client:
        yield client


class TestTranslateEndpoint:

    def test_translate_success(self, api_client, mock_llm_client):
        response = api_client.post(TRANSLATE_PATH, json={"text": "Hello", "sourceLanguage": "en"})

        assert response.status_code == 200
        assert response.json() == HELLO
        prompt = mock_llm_client.complete.await_args.args[0]
        assert "from English to" in prompt

    def test_source_language_passed_as_hint(self, api_client, llm_service):
        llm_service.translate = AsyncMock(wraps=llm_service.translate)

        api_client.post(TRANSLATE_PATH, json={"text": "Halo", "sourceLanguage": "id"})

        llm_service.translate.assert_awaited_once_with("Halo", source_language=LanguageCode.ID)

    def test_empty_text(self, api_client, mock_llm_client):
        response = api_client.post(TRANSLATE_PATH, json={"text": "", "sourceLanguage": "en"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid input"
        assert body["details"] == {"text": ["Text cannot be empty."]}
        mock_llm_client.complete.assert_not_awaited()

    def test_whitespace_text(self, api_client, mock_llm_client):
        response = api_client.post(TRANSLATE_PATH, json={"text": "   ", "sourceLanguage": "en"})

        assert response.status_code == 400
        assert response.json()["details"] == {"text": ["Text cannot be empty."]}
        mock_llm_client.complete.assert_not_awaited()

    def test_invalid_source_language(self, api_client):
        response = api_client.post(TRANSLATE_PATH, json={"text": "Bonjour", "sourceLanguage": "fr"})

        assert response.status_code == 400
        assert response.json()["details"] == {
            "sourceLanguage": ["Invalid source language. Must be 'en', 'id', or 'ja'."],
        }

    def test_missing_fields(self, api_client):
        response = api_client.post(TRANSLATE_PATH, json={})

        assert response.status_code == 400
        assert response.json()["details"] == {"text": ["Required"], "sourceLanguage": ["Required"]}

    def test_malformed_body(self, api_client):
        response = api_client.post(
            TRANSLATE_PATH,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["details"] == {"_root": ["Request body must be valid JSON."]}

    def test_model_failure_is_500(self, api_client, mock_llm_client):
        mock_llm_client.complete = AsyncMock(side_effect=LLMRequestError("HTTP 503", status_code=503))

        response = api_client.post(TRANSLATE_PATH, json={"text": "Hello", "sourceLanguage": "en"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to translate text"
        assert "HTTP 503" in body["details"]

    def test_unparseable_model_output_is_500(self, api_client, mock_llm_client):
        mock_llm_client.complete = AsyncMock(
            return_value=LLMRequestResult(content="I cannot do that", model_id=None)
        )

        response = api_client.post(TRANSLATE_PATH, json={"text": "Hello", "sourceLanguage": "en"})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to translate text"

    def test_get_describes_usage(self, api_client):
        response = api_client.get(TRANSLATE_PATH)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Tommyzki Translator API"
        assert "sourceLanguage: 'en'|'id'|'ja'" in body["usage"]
