# tommyzki/ui/components/__init__.py
"""
UI components for Tommyzki Translator.

Component imports are lazy-loaded because they import nicegui.
Use explicit imports like:
    from tommyzki.ui.components.language_card import create_language_card
"""

# Lazy-loaded components via __getattr__
_LAZY_IMPORTS = {
    "create_language_card": "language_card",
}


def __getattr__(name: str):
    """Lazy-load component modules on first access."""
    if name in _LAZY_IMPORTS:
        module_name = _LAZY_IMPORTS[name]
        import importlib

        module = importlib.import_module(f".{module_name}", __package__)
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "create_language_card",
]
