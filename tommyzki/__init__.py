# tommyzki/__init__.py
"""
Tommyzki Translator - Live trilingual translation UI

English / Bahasa Indonesia / Japanese translation using NiceGUI and an
OpenAI-compatible language model endpoint.
"""

from pathlib import Path


def _get_version() -> str:
    """
    Read the version from pyproject.toml.

    Falls back to the hard-coded version when the file is missing
    (e.g. when installed as a wheel).

    Returns:
        str: Version string (e.g. "0.1.0")
    """
    try:
        import tomllib  # Python 3.11+ standard library

        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                data = tomllib.load(f)
            return data.get("project", {}).get("version", "0.0.0")
    except (ImportError, OSError, ValueError):
        pass

    return "0.1.0"


__version__ = _get_version()
__app_name__ = "Tommyzki Translator"
