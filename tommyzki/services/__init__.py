# tommyzki/services/__init__.py
"""
Service layer for Tommyzki Translator.

Service imports are lazy-loaded so that importing the exceptions module
does not pull in httpx.
Use explicit imports like:
    from tommyzki.services.translation_service import TranslationService
"""

# Lazy-loaded services via __getattr__
_LAZY_IMPORTS = {
    'TranslationService': 'translation_service',
    'LLMClient': 'llm_client',
    'PromptBuilder': 'prompt_builder',
    'debounce': 'debounce',
    'Debounced': 'debounce',
}

# Submodules that can be accessed via __getattr__ (for patching support)
_SUBMODULES = {'translation_service', 'llm_client', 'prompt_builder', 'debounce', 'exceptions'}


def __getattr__(name: str):
    """Lazy-load service modules on first access."""
    import importlib
    if name in _SUBMODULES:
        return importlib.import_module(f'.{name}', __package__)
    if name in _LAZY_IMPORTS:
        module_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(f'.{module_name}', __package__)
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'TranslationService',
    'LLMClient',
    'PromptBuilder',
    'debounce',
    'Debounced',
]
