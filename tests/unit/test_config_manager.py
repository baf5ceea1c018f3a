"""
Tests for the ConfigManager class.
"""

from unittest.mock import Mock, patch

import pytest

from core.config import DEFAULT_CONFIG
from core.config_manager import ConfigManager, _coerce
from core.errors import ConfigError, ErrorCode


class TestConfigManager:
    """Test cases for ConfigManager."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        # Mock QSettings so nothing is written to the real settings store
        self.settings_patcher = patch("core.config_manager.QSettings")
        self.mock_qsettings_class = self.settings_patcher.start()
        self.mock_qsettings = Mock()
        self.mock_qsettings_class.return_value = self.mock_qsettings

        # Mock setup_qsettings
        self.setup_patcher = patch("core.config_manager.setup_qsettings")
        self.mock_setup = self.setup_patcher.start()

    def teardown_method(self) -> None:
        """Clean up test fixtures."""
        self.settings_patcher.stop()
        self.setup_patcher.stop()

    def test_init(self) -> None:
        """Test ConfigManager initialization."""
        config_manager = ConfigManager()

        self.mock_setup.assert_called_once()
        self.mock_qsettings_class.assert_called_once()
        assert config_manager._defaults == DEFAULT_CONFIG

    def test_get_with_default(self) -> None:
        """Test getting a missing key falls back to DEFAULT_CONFIG."""
        config_manager = ConfigManager()

        # QSettings returns the fallback it was given for missing keys
        self.mock_qsettings.value.side_effect = lambda key, fallback: fallback

        assert config_manager.get("date_format") == "MM-dd-yyyy"
        self.mock_qsettings.value.assert_called_with("date_format", "MM-dd-yyyy")

    def test_get_with_stored_value(self) -> None:
        """Test getting a stored value."""
        config_manager = ConfigManager()
        self.mock_qsettings.value.return_value = "dd/MM/yyyy"

        assert config_manager.get("date_format") == "dd/MM/yyyy"

    def test_get_int_coercion(self) -> None:
        """Test QSettings strings are coerced to the default's type."""
        config_manager = ConfigManager()
        self.mock_qsettings.value.return_value = "2500"

        assert config_manager.get("snackbar_timeout_ms") == 2500

    def test_get_invalid_value_falls_back(self) -> None:
        """Test that a value that cannot be coerced falls back to the default."""
        config_manager = ConfigManager()
        self.mock_qsettings.value.return_value = "not-a-number"

        assert config_manager.get("revalidate_delay_ms") == DEFAULT_CONFIG["revalidate_delay_ms"]

    def test_get_with_explicit_default(self) -> None:
        """Test that an explicit default overrides DEFAULT_CONFIG."""
        config_manager = ConfigManager()
        self.mock_qsettings.value.side_effect = lambda key, fallback: fallback

        assert config_manager.get("unknown/key", 7) == 7

    def test_get_unknown_key_without_default(self) -> None:
        config_manager = ConfigManager()
        self.mock_qsettings.value.return_value = None

        assert config_manager.get("unknown/key") is None

    def test_set(self) -> None:
        """Test setting a value writes and syncs."""
        config_manager = ConfigManager()
        config_manager.set("log_level", "DEBUG")

        self.mock_qsettings.setValue.assert_called_once_with("log_level", "DEBUG")
        self.mock_qsettings.sync.assert_called_once()

    def test_load_all(self) -> None:
        """Test loading every key merged with defaults."""
        config_manager = ConfigManager()
        self.mock_qsettings.value.side_effect = lambda key, fallback: "DEBUG" if key == "log_level" else fallback

        config = config_manager.load_all()

        assert set(config) == set(DEFAULT_CONFIG)
        assert config["log_level"] == "DEBUG"
        assert config["snackbar_timeout_ms"] == 4000

    def test_export_config(self) -> None:
        config_manager = ConfigManager()
        self.mock_qsettings.value.side_effect = lambda key, fallback: fallback

        assert config_manager.export_config() == DEFAULT_CONFIG

    def test_reset_to_defaults(self) -> None:
        """Test resetting clears stored settings."""
        config_manager = ConfigManager()
        config_manager.reset_to_defaults()

        self.mock_qsettings.clear.assert_called_once()
        self.mock_qsettings.sync.assert_called_once()

    def test_import_config(self) -> None:
        """Test importing known keys with coercion."""
        config_manager = ConfigManager()
        config_manager.import_config({"snackbar_timeout_ms": "3000", "log_level": "warning"})

        self.mock_qsettings.setValue.assert_any_call("snackbar_timeout_ms", 3000)
        self.mock_qsettings.setValue.assert_any_call("log_level", "warning")

    def test_import_config_skips_unknown_and_bad_values(self) -> None:
        """Test unknown keys and bad values are skipped."""
        config_manager = ConfigManager()
        config_manager.import_config({"theme": "dark", "revalidate_delay_ms": "soon"})

        self.mock_qsettings.setValue.assert_not_called()

    def test_import_config_rejects_bad_log_level(self) -> None:
        """Test an unsupported log level raises ConfigError."""
        config_manager = ConfigManager()

        with pytest.raises(ConfigError) as exc_info:
            config_manager.import_config({"log_level": "LOUD"})

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID
        self.mock_qsettings.setValue.assert_not_called()


class TestCoerce:
    """Test value coercion for QSettings values."""

    @pytest.mark.parametrize(("value", "expected"), [("true", True), ("1", True), ("off", False), (0, False)])
    def test_bool(self, value, expected):
        assert _coerce(value, bool) is expected

    def test_numbers_and_strings(self):
        assert _coerce("5", int) == 5
        assert _coerce("0.5", float) == 0.5
        assert _coerce(42, str) == "42"

    def test_other_types_must_match(self):
        assert _coerce([1], list) == [1]
        with pytest.raises(TypeError):
            _coerce("x", list)
