"""
Tests for the shared styling helpers.
"""

from unittest.mock import Mock

from gui.utils.styling import AccessiblePalette, StyleSheets, apply_validation_style, get_form_layout_config


class TestStyleSheets:
    """Test stylesheet builders."""

    def test_input_style_border(self):
        assert AccessiblePalette.BORDER_DEFAULT in StyleSheets.get_input_style()
        assert AccessiblePalette.BORDER_ERROR in StyleSheets.get_input_style(has_error=True)

    def test_error_label_color(self):
        assert AccessiblePalette.TEXT_ERROR in StyleSheets.get_error_label_style()

    def test_snackbar_status_colors(self):
        assert AccessiblePalette.SNACKBAR_ERROR_BG in StyleSheets.get_snackbar_style("error")
        assert AccessiblePalette.SNACKBAR_BG in StyleSheets.get_snackbar_style("success")
        assert "QLabel#snackbar" in StyleSheets.get_snackbar_style()


class TestHelpers:
    """Test styling helper functions."""

    def test_apply_validation_style(self):
        widget = Mock()

        apply_validation_style(widget, is_valid=False)

        widget.setStyleSheet.assert_called_once_with(StyleSheets.get_input_style(has_error=True))
        widget.style.return_value.unpolish.assert_called_once_with(widget)
        widget.style.return_value.polish.assert_called_once_with(widget)

    def test_form_layout_config(self):
        config = get_form_layout_config()
        assert config["margins"] == (16, 16, 16, 16)
        assert config["button_spacing"] > config["field_spacing"]
