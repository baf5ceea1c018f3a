"""
Shared styling utilities for the form validation demo.

This module contains the color palette and stylesheet builders used by the
signup and home pages. Colors meet WCAG AA contrast on white backgrounds.
"""

from typing import Any, Protocol


class StyleableWidget(Protocol):
    """Protocol for widgets that can be styled."""

    def setStyleSheet(self, styleSheet: str) -> None: ...
    def style(self) -> Any: ...


class AccessiblePalette:
    """
    Centralized color palette with WCAG AA accessibility compliance.

    All color combinations meet minimum contrast ratio of 4.5:1 for normal text.
    """

    # UI element colors
    BORDER_DEFAULT = "#adb5bd"  # Input outline
    BORDER_FOCUS = "#0d6efd"  # Blue focus indicator
    BORDER_ERROR = "#dc3545"  # Error state border

    BACKGROUND_DEFAULT = "#ffffff"
    BACKGROUND_SECONDARY = "#f8f9fa"
    BACKGROUND_DISABLED = "#e9ecef"

    TEXT_PRIMARY = "#212529"
    TEXT_SECONDARY = "#6c757d"
    TEXT_DISABLED = "#adb5bd"
    TEXT_ERROR = "#b02a37"  # Inline error messages

    # Button colors
    BUTTON_PRIMARY_BG = "#0d6efd"
    BUTTON_PRIMARY_TEXT = "#ffffff"
    BUTTON_PRIMARY_HOVER = "#0b5ed7"
    BUTTON_PRIMARY_PRESSED = "#0a58ca"

    # Snackbar
    SNACKBAR_BG = "#323232"
    SNACKBAR_TEXT = "#ffffff"
    SNACKBAR_ERROR_BG = "#842029"


# Outline radius shared by inputs and buttons
CORNER_RADIUS = 12


class StyleSheets:
    """Collection of reusable stylesheet definitions using the accessible palette."""

    @staticmethod
    def get_input_style(has_error: bool = False) -> str:
        """Rounded outline input, red when the field has an error."""
        border = AccessiblePalette.BORDER_ERROR if has_error else AccessiblePalette.BORDER_DEFAULT
        return f"""
            QLineEdit {{
                border: 1px solid {border};
                border-radius: {CORNER_RADIUS}px;
                padding: 10px 12px;
                background-color: {AccessiblePalette.BACKGROUND_DEFAULT};
                color: {AccessiblePalette.TEXT_PRIMARY};
            }}

            QLineEdit:focus {{
                border: 2px solid {AccessiblePalette.BORDER_ERROR if has_error else AccessiblePalette.BORDER_FOCUS};
            }}
        """

    @staticmethod
    def get_error_label_style() -> str:
        return f"QLabel {{ color: {AccessiblePalette.TEXT_ERROR}; font-size: 12px; padding-left: 12px; }}"

    @staticmethod
    def get_helper_label_style() -> str:
        return f"QLabel {{ color: {AccessiblePalette.TEXT_SECONDARY}; font-size: 12px; padding-left: 12px; }}"

    @staticmethod
    def get_button_style() -> str:
        """Primary (elevated) button stylesheet."""
        return f"""
            QPushButton {{
                background-color: {AccessiblePalette.BUTTON_PRIMARY_BG};
                color: {AccessiblePalette.BUTTON_PRIMARY_TEXT};
                border: none;
                border-radius: {CORNER_RADIUS}px;
                padding: 10px 24px;
                font-weight: bold;
                min-height: 20px;
            }}

            QPushButton:hover {{
                background-color: {AccessiblePalette.BUTTON_PRIMARY_HOVER};
            }}

            QPushButton:pressed {{
                background-color: {AccessiblePalette.BUTTON_PRIMARY_PRESSED};
            }}

            QPushButton:disabled {{
                background-color: {AccessiblePalette.BACKGROUND_DISABLED};
                color: {AccessiblePalette.TEXT_DISABLED};
            }}
        """

    @staticmethod
    def get_snackbar_style(status: str = "info") -> str:
        background = AccessiblePalette.SNACKBAR_ERROR_BG if status == "error" else AccessiblePalette.SNACKBAR_BG
        return f"""
            QLabel#snackbar {{
                background-color: {background};
                color: {AccessiblePalette.SNACKBAR_TEXT};
                border-radius: 4px;
                padding: 14px 16px;
                font-size: 14px;
            }}
        """


def apply_validation_style(widget: StyleableWidget, is_valid: bool) -> None:
    """
    Apply validation-based styling to an input widget.

    Args:
        widget: The input widget to style
        is_valid: Whether the input is valid
    """
    widget.setStyleSheet(StyleSheets.get_input_style(has_error=not is_valid))

    # Force style refresh
    widget.style().unpolish(widget)
    widget.style().polish(widget)


def get_form_layout_config() -> dict[str, Any]:
    """
    Get common configuration for the signup form layout.

    Returns:
        Dictionary with layout configuration parameters
    """
    return {
        "margins": (16, 16, 16, 16),
        "field_spacing": 16,
        "button_spacing": 20,
    }
