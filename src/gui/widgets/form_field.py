"""
Labeled form field row: label, input, helper text and inline error text.
"""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QLabel, QLineEdit, QVBoxLayout, QWidget

from gui.utils.styling import StyleSheets, apply_validation_style
from gui.widgets.date_picker import DatePicker


class FormFieldWidget(QWidget):
    """
    One input row of the signup form.

    Wraps either a QLineEdit or a DatePicker. The helper text is hidden
    while an error message is shown, mirroring how outlined text fields
    swap helper and error text.
    """

    edited = Signal(str)  # field name

    def __init__(
        self,
        name: str,
        label: str,
        input_widget: QLineEdit | DatePicker,
        helper_text: str | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.name = name
        self.input_widget = input_widget
        self._error_message: str | None = None

        self.setObjectName(f"{name}Field")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        self.label = QLabel(label, self)
        self.label.setBuddy(self._focus_target())
        layout.addWidget(self.label)

        layout.addWidget(input_widget)

        self.helper_label = QLabel(helper_text or "", self)
        self.helper_label.setWordWrap(True)
        self.helper_label.setStyleSheet(StyleSheets.get_helper_label_style())
        self.helper_label.setVisible(bool(helper_text))
        layout.addWidget(self.helper_label)

        self.error_label = QLabel("", self)
        self.error_label.setObjectName(f"{name}Error")
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet(StyleSheets.get_error_label_style())
        self.error_label.setAccessibleName(f"{label} error")
        self.error_label.setVisible(False)
        layout.addWidget(self.error_label)

        self._focus_target().setAccessibleName(label)
        self._focus_target().setStyleSheet(StyleSheets.get_input_style())

        if isinstance(input_widget, DatePicker):
            input_widget.dateChanged.connect(lambda _value: self.edited.emit(self.name))
        else:
            input_widget.textChanged.connect(lambda _text: self.edited.emit(self.name))

    def _focus_target(self) -> QLineEdit:
        if isinstance(self.input_widget, DatePicker):
            return self.input_widget.line_edit
        return self.input_widget

    def value(self) -> Any:
        """Current value: text for line edits, date or None for the picker."""
        if isinstance(self.input_widget, DatePicker):
            return self.input_widget.date()
        return self.input_widget.text()

    def set_value(self, value: Any) -> None:
        if isinstance(self.input_widget, DatePicker):
            self.input_widget.set_date(value)
        else:
            self.input_widget.setText("" if value is None else str(value))

    def clear(self) -> None:
        self.input_widget.clear()
        self.set_error(None)

    def set_error(self, message: str | None) -> None:
        """Show ``message`` below the input, or clear the error when None."""
        self._error_message = message
        has_error = message is not None

        self.error_label.setText(message or "")
        self.error_label.setVisible(has_error)
        self.helper_label.setVisible(not has_error and bool(self.helper_label.text()))

        target = self._focus_target()
        target.setProperty("hasError", has_error)
        target.setToolTip(f"Error: {message}" if has_error else "")
        apply_validation_style(target, not has_error)

    def error_text(self) -> str | None:
        return self._error_message

    def has_error(self) -> bool:
        return self._error_message is not None
