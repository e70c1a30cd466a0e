# tommyzki/services/prompt_builder.py
"""
Builds the model prompts for Tommyzki Translator.

Prompt file structure (all optional, defaults below are used otherwise):
- detect_language.txt: Language detection prompt
- translate.txt: Trilingual translation prompt

Placeholders:
- {input_text}: The user's text
- {supported_languages}: "en (English), id (Bahasa Indonesia), ja (Japanese)"
- {source_language}: Source language hint (translation only)
"""

from pathlib import Path
from typing import Optional

from tommyzki.models.types import LANGUAGES, LanguageCode


DEFAULT_DETECT_TEMPLATE = """Determine the language of the following text.
Respond ONLY with a JSON object of the form {"language": "<code>"} where <code> is the ISO 639-1 code
of one of these languages: {supported_languages}.
If the language is not one of these, respond with the most likely of them.

Text: {input_text}
"""

DEFAULT_TRANSLATE_TEMPLATE = """You are a translation expert. Translate the given text from {source_language} to English, Bahasa Indonesia, and Japanese.

Text to translate: {input_text}

Respond ONLY with a JSON object of exactly this shape:
{
  "source": {"code": "<ISO 639-1 code of the source language, one of: {supported_languages}>", "name": "<full name of the source language>"},
  "en": "<English translation>",
  "id": "<Bahasa Indonesia translation>",
  "ja": {"kanji": "<Japanese translation in Japanese script>", "romaji": "<the same Japanese translation in romaji>"}
}
If the text is already in one of the languages, repeat it unchanged in that language's field.
"""

# Used when the caller has no source hint
UNKNOWN_SOURCE_LABEL = "its original language (detect it)"


class PromptBuilder:
    """
    Builds detection and translation prompts.
    Templates are read once from prompts_dir when given.
    """

    def __init__(self, prompts_dir: Optional[Path] = None):
        self.prompts_dir = prompts_dir
        self._detect_template = DEFAULT_DETECT_TEMPLATE
        self._translate_template = DEFAULT_TRANSLATE_TEMPLATE
        self._load_templates()

    def _load_templates(self) -> None:
        """Load prompt templates from files or use defaults"""
        if not self.prompts_dir:
            return
        detect_file = self.prompts_dir / "detect_language.txt"
        if detect_file.exists():
            self._detect_template = detect_file.read_text(encoding='utf-8')
        translate_file = self.prompts_dir / "translate.txt"
        if translate_file.exists():
            self._translate_template = translate_file.read_text(encoding='utf-8')

    @staticmethod
    def supported_languages_label() -> str:
        return ", ".join(f"{code.value} ({LANGUAGES[code].name})" for code in LanguageCode)

    def _apply_placeholders(self, template: str, input_text: str, source_language: str = "") -> str:
        # input_text goes last so user text containing placeholders is left untouched
        prompt = template.replace("{supported_languages}", self.supported_languages_label())
        prompt = prompt.replace("{source_language}", source_language)
        prompt = prompt.replace("{input_text}", input_text)
        return prompt

    def build_detect(self, input_text: str) -> str:
        return self._apply_placeholders(self._detect_template, input_text)

    def build_translate(self, input_text: str, source_language: Optional[LanguageCode] = None) -> str:
        """Build the translation prompt.

        Args:
            input_text: Text to translate
            source_language: Known source language, or None to let the model infer it
        """
        if source_language is None:
            label = UNKNOWN_SOURCE_LABEL
        else:
            label = LANGUAGES[source_language].name
        return self._apply_placeholders(self._translate_template, input_text, label)
