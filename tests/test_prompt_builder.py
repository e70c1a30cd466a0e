from tommyzki.models.types import LanguageCode
from tommyzki.services.prompt_builder import (
    DEFAULT_TRANSLATE_TEMPLATE,
    PromptBuilder,
    UNKNOWN_SOURCE_LABEL,
)


def test_supported_languages_label() -> None:
    assert PromptBuilder.supported_languages_label() == "en (English), id (Bahasa Indonesia), ja (Japanese)"


def test_detect_prompt_contains_text_and_languages() -> None:
    prompt = PromptBuilder().build_detect("Apa kabar?")

    assert "Text: Apa kabar?" in prompt
    assert "{supported_languages}" not in prompt
    assert '{"language": "<code>"}' in prompt


def test_translate_prompt_uses_source_name() -> None:
    prompt = PromptBuilder().build_translate("こんにちは", LanguageCode.JA)

    assert "from Japanese to English, Bahasa Indonesia, and Japanese" in prompt
    assert "Text to translate: こんにちは" in prompt
    assert '"romaji"' in prompt


def test_translate_prompt_without_source() -> None:
    prompt = PromptBuilder().build_translate("Hello")

    assert f"from {UNKNOWN_SOURCE_LABEL} to" in prompt


def test_placeholders_in_user_text_left_untouched() -> None:
    prompt = PromptBuilder().build_translate("say {source_language} and {supported_languages}", LanguageCode.EN)

    assert "say {source_language} and {supported_languages}" in prompt


def test_templates_loaded_from_directory(tmp_path) -> None:
    (tmp_path / "detect_language.txt").write_text("DETECT [{input_text}]", encoding="utf-8")

    builder = PromptBuilder(tmp_path)

    assert builder.build_detect("Hi") == "DETECT [Hi]"
    # Missing files keep the built-in template
    assert builder.build_translate("Hi", LanguageCode.EN) == (
        DEFAULT_TRANSLATE_TEMPLATE
        .replace("{supported_languages}", PromptBuilder.supported_languages_label())
        .replace("{source_language}", "English")
        .replace("{input_text}", "Hi")
    )
