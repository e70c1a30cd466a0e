# tommyzki/api/__init__.py
"""
HTTP API for Tommyzki Translator.
"""

from .routes import TRANSLATE_PATH, create_translate_router

__all__ = ['TRANSLATE_PATH', 'create_translate_router']
