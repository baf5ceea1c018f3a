"""
User preferences stored with QSettings.

Every key has a default in DEFAULT_CONFIG. Values read back from QSettings
may come back as strings, so they are converted to the default's type and
replaced by the default when that fails.
"""

import logging
from typing import Any

from PySide6.QtCore import QSettings

from .config import DEFAULT_CONFIG, LOG_LEVELS, setup_qsettings
from .errors import ConfigError, ErrorCode

logger = logging.getLogger(__name__)

_TRUE_STRINGS = ("true", "1", "yes", "on")


def _coerce(value: Any, expected_type: type) -> Any:
    """
    Convert a stored value to ``expected_type``.

    Raises:
        ValueError, TypeError: If the value cannot be converted
    """
    if expected_type is bool:
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)
    if expected_type in (int, float, str):
        return expected_type(value)
    if isinstance(value, expected_type):
        return value
    raise TypeError(f"expected {expected_type.__name__}, got {type(value).__name__}")


class ConfigManager:
    """Typed access to the application's QSettings store."""

    def __init__(self) -> None:
        setup_qsettings()
        self._settings = QSettings()
        self._defaults = DEFAULT_CONFIG.copy()

    def get(self, key: str, default: Any | None = None) -> Any:
        """
        Read ``key``, converted to the type of its default.

        Args:
            key: Settings key
            default: Used instead of the DEFAULT_CONFIG entry when given

        Returns:
            The stored value, or the default when the key is missing or
            its stored value cannot be converted
        """
        fallback = self._defaults.get(key) if default is None else default
        stored = self._settings.value(key, fallback)
        if fallback is None:
            return stored

        try:
            return _coerce(stored, type(fallback))
        except (ValueError, TypeError) as e:
            logger.warning(f"Ignoring stored value for '{key}' ({e}); using {fallback!r}")
            return fallback

    def set(self, key: str, value: Any) -> None:
        self._settings.setValue(key, value)
        self._settings.sync()

    def load_all(self) -> dict[str, Any]:
        """Every known key with its effective value."""
        return {key: self.get(key) for key in self._defaults}

    def export_config(self) -> dict[str, Any]:
        return self.load_all()

    def import_config(self, config: dict[str, Any]) -> None:
        """
        Store the known keys of ``config``.

        Unknown keys and values of the wrong type are skipped with a
        warning; the rest are still imported.

        Raises:
            ConfigError: If ``log_level`` is not one of LOG_LEVELS. Nothing
                is stored in that case.
        """
        level = config.get("log_level")
        if level is not None and str(level).upper() not in LOG_LEVELS:
            raise ConfigError(
                code=ErrorCode.CONFIG_INVALID,
                user_message=f"Unsupported log level: {level}",
                technical_message=f"log_level must be one of {', '.join(LOG_LEVELS)}",
                context={"log_level": level},
            )

        for key, value in config.items():
            if key not in self._defaults:
                logger.warning(f"Skipping unknown setting '{key}'")
                continue
            try:
                converted = _coerce(value, type(self._defaults[key]))
            except (ValueError, TypeError) as e:
                logger.warning(f"Skipping setting '{key}': {e}")
                continue
            self.set(key, converted)

    def reset_to_defaults(self) -> None:
        self._settings.clear()
        self._settings.sync()
        logger.info("Settings reset to defaults")
