"""
Signup page: the form with name, address, email, date of birth and password.
"""

from __future__ import annotations

import logging
from typing import Any

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QLineEdit, QPushButton, QScrollArea, QVBoxLayout, QWidget

from core.form import FormResult
from core.signup_form import DATE_FORMAT, DOB, PASSWORD, build_signup_form
from gui.utils.styling import StyleSheets, get_form_layout_config
from gui.validation.form_validator import FormValidator
from gui.widgets.date_picker import DatePicker
from gui.widgets.form_field import FormFieldWidget
from gui.widgets.notification_manager import NotificationManager

logger = logging.getLogger(__name__)

PROCESSING_MESSAGE = "Processing Data"


class SignupPage(QWidget):
    """
    Scrollable signup form with a submit button.

    Emits ``signupSucceeded`` with the submitted values when every field
    passes, or ``signupFailed`` with the failing field messages otherwise.
    """

    signupSucceeded = Signal(object)  # field name -> value
    signupFailed = Signal(object)  # field name -> first failing message

    def __init__(
        self,
        parent: QWidget | None = None,
        notification_manager: NotificationManager | None = None,
        date_format: str = DATE_FORMAT,
        revalidate_delay: int = 200,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("signupPage")
        self._notification_manager = notification_manager
        self._date_format = date_format

        self.form = build_signup_form()
        self.validator = FormValidator(self.form, self, revalidate_delay=revalidate_delay)
        self.fields: dict[str, FormFieldWidget] = {}
        self.submit_button: QPushButton | None = None

        self._setup_ui()

    def _setup_ui(self) -> None:
        config = get_form_layout_config()

        outer_layout = QVBoxLayout(self)
        outer_layout.setContentsMargins(0, 0, 0, 0)

        scroll_area = QScrollArea(self)
        scroll_area.setWidgetResizable(True)
        scroll_area.setFrameShape(QScrollArea.Shape.NoFrame)
        outer_layout.addWidget(scroll_area)

        content = QWidget()
        layout = QVBoxLayout(content)
        layout.setContentsMargins(*config["margins"])
        layout.setSpacing(config["field_spacing"])
        layout.setAlignment(Qt.AlignmentFlag.AlignTop)

        for field in self.form:
            if field.name == DOB:
                input_widget: QLineEdit | DatePicker = DatePicker(display_format=self._date_format)
            else:
                input_widget = QLineEdit()
                input_widget.setObjectName(f"{field.name}Input")
                if field.name == PASSWORD:
                    input_widget.setEchoMode(QLineEdit.EchoMode.Password)

            row = FormFieldWidget(field.name, field.display_label, input_widget, field.helper_text)
            layout.addWidget(row)
            self.fields[field.name] = row
            self.validator.register_field(row)

        layout.addSpacing(config["button_spacing"] - config["field_spacing"])

        self.submit_button = QPushButton("Signup")
        self.submit_button.setObjectName("signupButton")
        self.submit_button.setAccessibleName("Submit signup form")
        self.submit_button.setStyleSheet(StyleSheets.get_button_style())
        self.submit_button.setDefault(True)
        self.submit_button.clicked.connect(self.submit)
        layout.addWidget(self.submit_button)

        scroll_area.setWidget(content)

    def submit(self) -> FormResult:
        """
        Validate the form and either accept or reject the signup.

        Returns:
            The evaluation result
        """
        result = self.validator.validate_all()

        if result.is_valid:
            values = self.form.values()
            logger.info(f"Signup accepted with fields: {', '.join(values)}")
            if self._notification_manager:
                self._notification_manager.notify(PROCESSING_MESSAGE, "success")
            self.signupSucceeded.emit(values)
        else:
            self.signupFailed.emit(result.messages)

        return result

    def reset(self) -> None:
        """Clear every input and message."""
        self.validator.reset()

    def field_error(self, name: str) -> str | None:
        return self.fields[name].error_text()

    def set_values(self, values: dict[str, Any]) -> None:
        """Fill inputs programmatically."""
        for name, value in values.items():
            self.fields[name].set_value(value)
