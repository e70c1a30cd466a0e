# tommyzki/ui/styles.py
"""
Styles for Tommyzki Translator.

CSS is loaded from an external file for better editor support.
"""

from pathlib import Path

_CSS_FILE = Path(__file__).parent / "styles.css"


def _load_css() -> str:
    """Load CSS from external file."""
    if _CSS_FILE.exists():
        return _CSS_FILE.read_text(encoding="utf-8")
    return ""


# Cache the loaded CSS at module import time
COMPLETE_CSS = _load_css()
