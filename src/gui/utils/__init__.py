"""
GUI-specific utilities for the form validation demo.

This module contains styling helpers shared by the pages and widgets.
"""

from .styling import (
    AccessiblePalette,
    StyleSheets,
    apply_validation_style,
    get_form_layout_config,
)

__all__ = [
    "AccessiblePalette",
    "StyleSheets",
    "apply_validation_style",
    "get_form_layout_config",
]
