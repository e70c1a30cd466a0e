# tommyzki/services/exceptions.py
"""
Shared exception types for the translation collaborators.

Validation errors are raised before any model call. Collaborator errors
wrap transport and parsing failures so the preview controller can catch
them at one boundary.
"""

from typing import Optional


class TranslatorError(Exception):
    """Base class for all Tommyzki errors."""

    pass


class ValidationError(TranslatorError):
    """Raised when input is rejected before calling the model."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class LLMRequestError(TranslatorError):
    """Raised when the chat-completions endpoint cannot be reached or answers badly."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CollaboratorError(TranslatorError):
    """Raised when a detection or translation call fails."""

    pass


class LanguageDetectionError(CollaboratorError):
    pass


class TranslationError(CollaboratorError):
    pass


class ResponseParseError(TranslationError):
    """Raised when model output does not match the expected result shape."""

    pass
