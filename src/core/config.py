"""
Configuration schema and defaults for the form validation demo.

Only UI preferences live here. Submitted form data is never stored.
"""

from typing import Any

from PySide6.QtCore import QCoreApplication

# Application identifiers for QSettings
APP_ORGANIZATION = "FormValidationDemo"
APP_NAME = "Signup"

APP_TITLE = "Form Validation Demo"

# Default configuration with all supported keys and JSON-serializable types
DEFAULT_CONFIG: dict[str, Any] = {
    # Display
    "date_format": "MM-dd-yyyy",
    "snackbar_timeout_ms": 4000,
    # Validation
    "revalidate_delay_ms": 200,
    # Debug settings
    "log_level": "INFO",  # Options: "DEBUG", "INFO", "WARNING", "ERROR"
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def setup_qsettings() -> None:
    """
    Configure QSettings with application identifiers.

    This should be called early in application startup to ensure
    QSettings uses the correct organization and application names.
    """
    QCoreApplication.setOrganizationName(APP_ORGANIZATION)
    QCoreApplication.setApplicationName(APP_NAME)
