"""Settings persistence for user defaults.

This module stores the defaults the command line tool falls back to when
no option overrides them. Settings are kept in an OS-appropriate location
and survive between runs.
"""

from __future__ import annotations

import codecs
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import RendererConstants

logger = logging.getLogger(__name__)

LINE_BREAK_TAGS = 'line_break_tags'
INPUT_ENCODING = 'input_encoding'

DEFAULTS: Dict[str, Any] = {
    LINE_BREAK_TAGS: RendererConstants.DEFAULT_LINE_BREAK_TAGS,
    INPUT_ENCODING: RendererConstants.DEFAULT_INPUT_ENCODING,
}


class SettingsPersistence:
    """Manages persistent storage of user defaults.

    Settings are stored as a JSON object in the user's config directory.
    """

    def __init__(self):
        """Initialize settings persistence."""
        self._config_dir = Path(platformdirs.user_config_dir(RendererConstants.CONFIG_APP_NAME))
        self._settings_file = self._config_dir / RendererConstants.SETTINGS_FILENAME
        self._settings_cache: Optional[Dict[str, Any]] = None

    def _ensure_config_dir(self) -> None:
        """Ensure the config directory exists."""
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except (OSError, PermissionError) as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _load_raw(self) -> Dict[str, Any]:
        """Load the settings file from disk.

        Returns:
            The stored mapping, or an empty dict if the file doesn't exist
            or can't be read.
        """
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if not isinstance(data, dict):
                logger.warning("Settings file has invalid format (not a dict), ignoring")
                self._settings_cache = {}
                return self._settings_cache

            self._settings_cache = data
            return self._settings_cache

        except (json.JSONDecodeError, OSError, PermissionError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._settings_cache = {}
            return self._settings_cache

    def load_settings(self) -> Dict[str, Any]:
        """Load settings merged over the built-in defaults.

        Stored values that fail validation are dropped with a warning and
        the default is used instead.
        """
        settings = dict(DEFAULTS)
        for key, value in self._load_raw().items():
            if self.validate_setting(key, value):
                settings[key] = value
            else:
                logger.warning(f"Ignoring invalid value for setting {key!r}: {value!r}")
        return settings

    def save_settings(self, settings: Dict[str, Any]) -> bool:
        """Save settings to disk atomically.

        Args:
            settings: Settings to store. Existing keys not mentioned are kept.

        Returns:
            True if save was successful, False otherwise.
        """
        for key, value in settings.items():
            if not self.validate_setting(key, value):
                logger.warning(f"Refusing to save invalid value for setting {key!r}: {value!r}")
                return False

        merged = dict(self._load_raw())
        merged.update(settings)

        self._ensure_config_dir()
        temp_file = self._settings_file.with_suffix('.tmp')

        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(merged, f, indent=2)

            temp_file.replace(self._settings_file)

            self._settings_cache = merged
            return True

        except (OSError, PermissionError) as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def validate_setting(self, key: str, value: Any) -> bool:
        """Validate a setting value.

        Args:
            key: Setting key name.
            value: Setting value to validate.

        Returns:
            True if setting is valid, False otherwise.
        """
        if key == LINE_BREAK_TAGS:
            return isinstance(value, bool)

        if key == INPUT_ENCODING:
            if not isinstance(value, str):
                return False
            try:
                info = codecs.lookup(value)
            except LookupError:
                return False
            # Bytes-to-bytes codecs (base64, rot13, zlib) cannot decode text
            return getattr(info, "_is_text_encoding", True)

        # Unknown settings are considered valid (forward compatibility)
        return True

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None


# Global instance
_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance.

    Returns:
        The singleton SettingsPersistence instance.
    """
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
