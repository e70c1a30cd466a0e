# tommyzki/api/routes.py
"""
JSON endpoint for translation without the UI.

POST /api/translate  {text, sourceLanguage} -> TranslationResult JSON
GET  /api/translate  -> usage description

Errors:
- 400 {"error": "Invalid input", "details": {field: [messages]}}
- 500 {"error": "Failed to translate text", "details": message}
"""

import json
import logging
from typing import Callable, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from starlette.requests import Request as StarletteRequest

from tommyzki import __app_name__
from tommyzki.models.types import LanguageCode
from tommyzki.services.exceptions import ValidationError
from tommyzki.services.translation_service import TranslationService

logger = logging.getLogger(__name__)

TRANSLATE_PATH = '/api/translate'

# Messages per field, shown instead of pydantic's defaults
FIELD_MESSAGES = {
    'text': 'Text cannot be empty.',
    'sourceLanguage': "Invalid source language. Must be 'en', 'id', or 'ja'.",
}


class TranslateRequest(BaseModel):
    text: str = Field(min_length=1)
    sourceLanguage: Literal['en', 'id', 'ja']


def _invalid_input(details: dict[str, list[str]]) -> JSONResponse:
    return JSONResponse({"error": "Invalid input", "details": details}, status_code=400)


def flatten_validation_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by top-level field."""
    details: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = err.get('loc') or ()
        field = str(loc[0]) if loc else '_root'
        if err.get('type') == 'missing':
            message = 'Required'
        else:
            message = FIELD_MESSAGES.get(field, err.get('msg', 'Invalid value'))
        details.setdefault(field, []).append(message)
    return details


def create_translate_router(get_service: Callable[[], TranslationService]) -> APIRouter:
    """Create the /api/translate router.

    Args:
        get_service: Returns the shared TranslationService (called per request)
    """
    router = APIRouter()

    @router.post(TRANSLATE_PATH)
    async def translate(request: StarletteRequest):
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _invalid_input({"_root": ["Request body must be valid JSON."]})

        try:
            payload = TranslateRequest.model_validate(body)
        except PydanticValidationError as e:
            return _invalid_input(flatten_validation_errors(e))

        service = get_service()
        try:
            result = await service.translate(
                payload.text,
                source_language=LanguageCode(payload.sourceLanguage),
            )
        except ValidationError as e:
            return _invalid_input({e.field or "_root": [FIELD_MESSAGES.get(e.field or "", str(e))]})
        except Exception as e:
            logger.exception("API translation error: %s", e)
            return JSONResponse(
                {"error": "Failed to translate text", "details": str(e) or "An unexpected error occurred during translation."},
                status_code=500,
            )

        return JSONResponse(result.to_dict(), status_code=200)

    @router.get(TRANSLATE_PATH)
    async def describe():
        return {
            "message": f"{__app_name__} API",
            "usage": "POST to this endpoint with { text: string, sourceLanguage: 'en'|'id'|'ja' } to get translations.",
        }

    return router
