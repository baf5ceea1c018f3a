"""
Form validation layer for the signup page.

Binds input widgets to the core Form, evaluates it on submit, and reports
field failures to the error handling system.
"""

from .form_validator import FormValidator
from .validators import create_validation_error

__all__ = [
    "FormValidator",
    "create_validation_error",
]
