# tommyzki/services/translation_service.py
"""
Language detection and trilingual translation over the language model.

Both calls are validation boundaries: model output is checked against the
closed LanguageCode set and the strict TranslationResult shape before it is
handed to the UI.
"""

import logging
from pathlib import Path
from typing import Optional

from tommyzki.config.settings import AppSettings
from tommyzki.models.types import DEFAULT_LANGUAGE, LanguageCode, TranslationResult
from tommyzki.services.exceptions import (
    LanguageDetectionError,
    LLMRequestError,
    ResponseParseError,
    TranslationError,
    ValidationError,
)
from tommyzki.services.llm_client import LLMClient, loads_json_loose
from tommyzki.services.prompt_builder import PromptBuilder

logger = logging.getLogger(__name__)


def _require_text(text: str) -> str:
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Text cannot be empty.", field="text")
    return text


def parse_detected_language(raw_content: str) -> Optional[LanguageCode]:
    """Extract a language code from the detection answer.

    Accepts {"language": "en"} or a bare code. Returns None when the answer
    names no supported language.
    """
    obj = loads_json_loose(raw_content)
    if isinstance(obj, dict):
        return LanguageCode.parse(obj.get("language"))
    return LanguageCode.parse(raw_content)


def parse_translation_result(raw_content: str) -> TranslationResult:
    """Parse the translation answer into a fully populated result.

    Raises:
        ResponseParseError: If the answer is not JSON or does not match the shape.
    """
    obj = loads_json_loose(raw_content)
    if obj is None:
        raise ResponseParseError("Model output is not valid JSON")
    return TranslationResult.from_dict(obj)


class TranslationService:
    """
    Detection and translation collaborators.

    Example:
        service = TranslationService(settings)
        code = await service.detect_language("Hello")
        result = await service.translate("Hello", source_language=code)
    """

    def __init__(
        self,
        settings: AppSettings,
        client: Optional[LLMClient] = None,
        prompts_dir: Optional[Path] = None,
    ):
        self.settings = settings
        self.client = client or LLMClient(settings)
        self.prompt_builder = PromptBuilder(prompts_dir)

    async def detect_language(self, text: str) -> LanguageCode:
        """Detect the source language of text.

        Unsupported answers fall back to DEFAULT_LANGUAGE with a warning.

        Raises:
            ValidationError: If text is empty.
            LanguageDetectionError: If the model call fails.
        """
        _require_text(text)
        prompt = self.prompt_builder.build_detect(text)
        try:
            result = await self.client.complete(prompt)
        except LLMRequestError as e:
            raise LanguageDetectionError(f"Language detection failed: {e}") from e

        detected = parse_detected_language(result.content)
        if detected is None:
            logger.warning(
                "Detected language %r is not in supported list [%s]. Defaulting to '%s'.",
                result.content.strip()[:40],
                ", ".join(code.value for code in LanguageCode),
                DEFAULT_LANGUAGE.value,
            )
            return DEFAULT_LANGUAGE
        logger.debug("Detected language: %s", detected.value)
        return detected

    async def translate(
        self,
        text: str,
        source_language: Optional[LanguageCode] = None,
    ) -> TranslationResult:
        """Translate text into every supported language.

        Args:
            text: Text to translate
            source_language: Source hint passed to the model; None lets it infer

        Raises:
            ValidationError: If text is empty.
            ResponseParseError: If the model output cannot be parsed.
            TranslationError: If the model call fails.
        """
        _require_text(text)
        prompt = self.prompt_builder.build_translate(text, source_language)
        try:
            result = await self.client.complete(prompt)
        except LLMRequestError as e:
            raise TranslationError(f"Translation failed: {e}") from e

        translation = parse_translation_result(result.content)
        if source_language is not None and translation.source.code != source_language:
            logger.info(
                "Model identified source '%s' but hint was '%s'",
                translation.source.code.value,
                source_language.value,
            )
        return translation

    async def aclose(self) -> None:
        await self.client.aclose()
