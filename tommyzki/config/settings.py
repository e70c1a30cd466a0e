# tommyzki/config/settings.py
"""
Application settings management for Tommyzki Translator.

Settings file layout:
- settings.template.json: developer defaults (overwritten on update)
- user_settings.json: local overrides, limited to USER_SETTINGS_KEYS
- On load the template is read first and user settings are layered on top

Cache:
- _settings_cache: AppSettings instances keyed by path
- load() returns the cached instance while both files keep their mtime
- invalidate_settings_cache() clears it explicitly

Environment overrides (applied after the files):
- TOMMYZKI_API_KEY, TOMMYZKI_BASE_URL, TOMMYZKI_MODEL
"""

import json
import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Module logger
logger = logging.getLogger(__name__)

# Settings cache: path -> (mtime_template, mtime_user, AppSettings)
_settings_cache: dict[str, tuple[float, float, "AppSettings"]] = {}
_settings_cache_lock = threading.Lock()

# Keys user_settings.json may override
USER_SETTINGS_KEYS = {
    "llm_base_url",
    "llm_model",
    "llm_temperature",
    "debounce_seconds",
}

# Environment variable -> field name
ENV_OVERRIDES = {
    "TOMMYZKI_API_KEY": "llm_api_key",
    "TOMMYZKI_BASE_URL": "llm_base_url",
    "TOMMYZKI_MODEL": "llm_model",
}


@dataclass
class AppSettings:
    """Application settings"""

    # Language model endpoint (OpenAI-compatible chat completions)
    llm_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai"
    llm_model: str = "gemini-2.0-flash"
    llm_api_key: Optional[str] = None
    llm_temperature: float = 0.2
    llm_json_mode: bool = True          # Send response_format={"type": "json_object"}

    # Advanced
    request_timeout: int = 60           # Seconds per model call

    # Live preview
    debounce_seconds: float = 1.0       # Quiet period before a preview round-trip

    # Server
    host: str = "127.0.0.1"
    port: int = 8765

    @classmethod
    def load(cls, path: Path, use_cache: bool = True) -> "AppSettings":
        """Load settings from template and user settings files.

        Args:
            path: Base settings path (config/settings.json). Only its
                  directory is used to find the template and user files.
            use_cache: Return the cached instance when files are unchanged
        """
        config_dir = path.parent
        template_path = config_dir / "settings.template.json"
        user_settings_path = config_dir / "user_settings.json"

        cache_key = str(path.resolve())

        template_mtime = template_path.stat().st_mtime if template_path.exists() else 0.0
        user_mtime = user_settings_path.stat().st_mtime if user_settings_path.exists() else 0.0

        if use_cache:
            with _settings_cache_lock:
                if cache_key in _settings_cache:
                    cached_template_mtime, cached_user_mtime, cached_settings = _settings_cache[cache_key]
                    if cached_template_mtime == template_mtime and cached_user_mtime == user_mtime:
                        logger.debug("Using cached settings for: %s", path)
                        return cached_settings

        data = {}

        # 1. Template (developer defaults)
        if template_path.exists():
            try:
                with open(template_path, 'r', encoding='utf-8-sig') as f:
                    data = json.load(f)
                    logger.debug("Loaded template settings from: %s", template_path)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.warning("Failed to load template settings: %s", e)

        # 2. User overrides
        if user_settings_path.exists():
            try:
                with open(user_settings_path, 'r', encoding='utf-8-sig') as f:
                    user_data = json.load(f)
                    for key in USER_SETTINGS_KEYS:
                        if key in user_data:
                            data[key] = user_data[key]
                    logger.debug("Loaded user settings from: %s", user_settings_path)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.warning("Failed to load user settings: %s", e)

        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}

        settings = cls(**filtered_data)
        settings._apply_env_overrides()
        settings._validate()

        with _settings_cache_lock:
            _settings_cache[cache_key] = (template_mtime, user_mtime, settings)

        return settings

    def _apply_env_overrides(self) -> None:
        for env_name, field_name in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                setattr(self, field_name, value)
                logger.debug("Setting %s overridden by %s", field_name, env_name)

    def _validate(self) -> None:
        """Validate and normalize setting values.

        Invalid values are reset to defaults with warnings.
        """
        if not self.llm_base_url:
            logger.warning("llm_base_url is empty, resetting to default")
            self.llm_base_url = AppSettings.llm_base_url
        self.llm_base_url = self.llm_base_url.rstrip("/")

        if self.llm_temperature < 0.0 or self.llm_temperature > 2.0:
            logger.warning("llm_temperature out of range (%.2f), resetting to 0.2", self.llm_temperature)
            self.llm_temperature = 0.2

        if self.request_timeout < 5:
            logger.warning("request_timeout too small (%d), resetting to 60", self.request_timeout)
            self.request_timeout = 60
        elif self.request_timeout > 600:
            logger.warning("request_timeout too large (%d), resetting to 60", self.request_timeout)
            self.request_timeout = 60

        if self.debounce_seconds < 0.1 or self.debounce_seconds > 10.0:
            logger.warning("debounce_seconds out of range (%.2f), resetting to 1.0", self.debounce_seconds)
            self.debounce_seconds = 1.0

        if not 0 < self.port < 65536:
            logger.warning("port out of range (%d), resetting to 8765", self.port)
            self.port = 8765


def get_default_settings_path() -> Path:
    """Get default settings file path"""
    return Path(__file__).parent.parent.parent / "config" / "settings.json"


def invalidate_settings_cache(path: Optional[Path] = None) -> None:
    """Invalidate settings cache.

    Args:
        path: Clear only this path's entry. None clears everything.
    """
    with _settings_cache_lock:
        if path is None:
            _settings_cache.clear()
            logger.debug("Cleared all settings cache")
        else:
            cache_key = str(path.resolve())
            if cache_key in _settings_cache:
                del _settings_cache[cache_key]
                logger.debug("Cleared settings cache for: %s", path)
