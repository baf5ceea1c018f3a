"""
Submit-time form validation for the signup page.

This module binds FormFieldWidgets to a core Form, evaluates the form when
the user submits, and renders the first failing message of every field.
After the first submit, editing a field re-validates just that field
(debounced) so errors clear as the user fixes them.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QTimer, Signal

from core.error_handler import get_error_handler
from core.errors import ErrorCode, ValidationError
from core.form import Form, FormResult
from core.rules import error_code_of, first_failure
from gui.widgets.form_field import FormFieldWidget

from .validators import create_validation_error

RULE_FAILURE_MESSAGE = "Validation error occurred"


class FieldBinding:
    """Validation state of a single bound widget."""

    def __init__(self, widget: FormFieldWidget):
        self.widget = widget
        self.last_error_message: str | None = None
        self.timer = QTimer()
        self.timer.setSingleShot(True)

    @property
    def is_valid(self) -> bool:
        return self.last_error_message is None


class FormValidator(QObject):
    """
    Binds input widgets to a Form and validates them on demand.

    The Form is the single source of truth for values at evaluation time:
    widget values are copied into it before every check.
    """

    fieldValidityChanged = Signal(str, bool, str)  # key, valid, message
    overallValidityChanged = Signal(bool)  # overall_valid

    def __init__(self, form: Form, parent: QObject | None = None, revalidate_delay: int = 200):
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self._form = form
        self._fields: dict[str, FieldBinding] = {}
        self._revalidate_delay = revalidate_delay  # milliseconds
        self._submitted = False
        self._error_handler = get_error_handler()

    @property
    def form(self) -> Form:
        return self._form

    @property
    def submitted(self) -> bool:
        """True once validate_all() has run since the last reset."""
        return self._submitted

    def register_field(self, widget: FormFieldWidget) -> None:
        """
        Bind a field widget to the form field with the same name.

        Raises:
            KeyError: If the form has no field called ``widget.name``
        """
        key = widget.name
        if key not in self._form:
            raise KeyError(f"Form has no field '{key}'")

        binding = FieldBinding(widget)
        binding.timer.timeout.connect(lambda: self._validate_field(key))
        self._fields[key] = binding

        widget.edited.connect(self._schedule_validation)

    def _schedule_validation(self, key: str) -> None:
        """Re-validate an edited field, but only after the first submit."""
        if key not in self._fields or not self._submitted:
            return
        self._fields[key].timer.start(self._revalidate_delay)

    def collect(self) -> Form:
        """Copy current widget values into the form and return it."""
        for key, binding in self._fields.items():
            self._form.set_value(key, binding.widget.value())
        return self._form

    def _run_rules(self, key: str) -> tuple[str | None, ErrorCode | None]:
        """
        Evaluate one field; a rule that raises counts as a failure.

        Returns:
            The first failing message and the error code of the rule that
            produced it, or (None, None) when the field passes
        """
        field = self._form[key]
        try:
            failure = first_failure(field.rules, field.value)
        except Exception as e:
            self._logger.error(f"Rule for field '{key}' raised: {e}")
            self._error_handler.handle(
                ValidationError(
                    code=ErrorCode.RULE_FAILURE,
                    user_message=RULE_FAILURE_MESSAGE,
                    field=key,
                    technical_message=f"{type(e).__name__}: {e}",
                )
            )
            return RULE_FAILURE_MESSAGE, ErrorCode.RULE_FAILURE

        if failure is None:
            return None, None
        rule, message = failure
        return message, error_code_of(rule)

    def _apply_result(self, key: str, message: str | None, code: ErrorCode | None = None) -> None:
        binding = self._fields.get(key)
        if binding is None:
            return

        binding.widget.set_error(message)
        if message == binding.last_error_message:
            return
        binding.last_error_message = message

        self.fieldValidityChanged.emit(key, message is None, message or "")

        if message is not None and code is not ErrorCode.RULE_FAILURE:
            self._error_handler.handle(
                create_validation_error(key, message, self._form.value(key), code or ErrorCode.INVALID_INPUT)
            )

    def _validate_field(self, key: str) -> None:
        if key not in self._fields:
            return
        self._fields[key].timer.stop()
        self._form.set_value(key, self._fields[key].widget.value())
        self._apply_result(key, *self._run_rules(key))
        self.overallValidityChanged.emit(self.is_valid())

    def validate_all(self) -> FormResult:
        """
        Validate every field of the form immediately.

        Fields of the form without a bound widget are evaluated with the
        value already stored in the form.

        Returns:
            FormResult with the first failing message per field
        """
        self._submitted = True
        self.collect()

        errors: dict[str, str | None] = {}
        for key in self._form.names:
            if key in self._fields:
                self._fields[key].timer.stop()
            message, code = self._run_rules(key)
            errors[key] = message
            self._apply_result(key, message, code)

        result = FormResult(errors=errors)
        if not result.is_valid:
            self._logger.info(f"Form rejected, failing fields: {', '.join(result.failed_fields)}")
        self.overallValidityChanged.emit(result.is_valid)
        return result

    def validate_now(self, key: str) -> bool:
        """
        Validate a specific field immediately.

        Returns:
            True if valid (or not bound), False otherwise
        """
        if key in self._fields:
            self._validate_field(key)
            return self._fields[key].is_valid
        return True

    def is_valid(self) -> bool:
        return all(binding.is_valid for binding in self._fields.values())

    def is_field_valid(self, key: str) -> bool:
        if key in self._fields:
            return self._fields[key].is_valid
        return True

    def get_field_error(self, key: str) -> str:
        """Error message for a field, or empty string if it is valid."""
        if key in self._fields:
            return self._fields[key].last_error_message or ""
        return ""

    def reset(self) -> None:
        """Clear widgets, form values and error state for a fresh session."""
        self._submitted = False
        for binding in self._fields.values():
            binding.timer.stop()
            binding.widget.clear()
            binding.last_error_message = None
        self._form.reset()

    def cleanup(self) -> None:
        """Stop timers and drop bindings."""
        for binding in self._fields.values():
            binding.timer.stop()
            binding.timer.deleteLater()
        self._fields.clear()
