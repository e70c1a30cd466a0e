# tommyzki/ui/__init__.py
"""
UI for Tommyzki Translator.

NiceGUI-dependent modules are lazy-loaded.
Use explicit imports like:
    from tommyzki.ui.app import run_app
"""

# Fast imports - state classes (no heavy dependencies)
from .state import AppState, PreviewPhase, PreviewView, Notice

# Lazy-loaded UI components via __getattr__
_LAZY_IMPORTS = {
    'TommyzkiApp': 'app',
    'run_app': 'app',
    'PreviewController': 'controller',
}

# Submodules that can be accessed via __getattr__ (for patching support)
_SUBMODULES = {'app', 'styles', 'state', 'controller', 'components'}


def __getattr__(name: str):
    """Lazy-load UI modules on first access."""
    import importlib
    if name in _SUBMODULES:
        return importlib.import_module(f'.{name}', __package__)
    if name in _LAZY_IMPORTS:
        module_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(f'.{module_name}', __package__)
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'TommyzkiApp',
    'run_app',
    'PreviewController',
    'AppState',
    'PreviewPhase',
    'PreviewView',
    'Notice',
]
