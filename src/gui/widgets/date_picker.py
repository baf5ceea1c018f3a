"""
Date picker widget for optional date fields.

Unlike QDateEdit, the picker starts empty: its value stays None until the
user picks a date from the calendar popup.
"""

from __future__ import annotations

import logging
from datetime import date

from PySide6.QtCore import QDate, Signal
from PySide6.QtWidgets import (
    QCalendarWidget,
    QDialog,
    QDialogButtonBox,
    QHBoxLayout,
    QLineEdit,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from core.signup_form import DATE_FORMAT

logger = logging.getLogger(__name__)

FIRST_DATE = date(1900, 1, 1)
LAST_DATE = date(2100, 12, 31)


def to_qdate(value: date) -> QDate:
    return QDate(value.year, value.month, value.day)


def format_date(value: date | None, fmt: str = DATE_FORMAT) -> str:
    """Format a date with a Qt date format string; None formats as ''."""
    if value is None:
        return ""
    return to_qdate(value).toString(fmt)


class CalendarDialog(QDialog):
    """Modal calendar with OK/Cancel buttons."""

    def __init__(self, initial: date | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Select date")

        layout = QVBoxLayout(self)

        self.calendar = QCalendarWidget(self)
        self.calendar.setGridVisible(True)
        self.calendar.setMinimumDate(to_qdate(FIRST_DATE))
        self.calendar.setMaximumDate(to_qdate(LAST_DATE))
        self.calendar.setSelectedDate(to_qdate(initial or date.today()))
        layout.addWidget(self.calendar)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        self.calendar.activated.connect(self.accept)
        layout.addWidget(buttons)

    def selected_date(self) -> date:
        return self.calendar.selectedDate().toPython()


class DatePicker(QWidget):
    """
    Read-only date display with a calendar button and a clear button.

    The displayed text uses ``display_format`` (a Qt date format string).
    """

    dateChanged = Signal(object)  # datetime.date | None

    def __init__(self, parent: QWidget | None = None, display_format: str = DATE_FORMAT) -> None:
        super().__init__(parent)
        self._date: date | None = None
        self._display_format = display_format

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        self.line_edit = QLineEdit(self)
        self.line_edit.setReadOnly(True)
        self.line_edit.setPlaceholderText(display_format)
        self.line_edit.setAccessibleName("Selected date")
        layout.addWidget(self.line_edit, 1)

        self.calendar_button = QToolButton(self)
        self.calendar_button.setText("📅")
        self.calendar_button.setToolTip("Pick a date")
        self.calendar_button.setAccessibleName("Open calendar")
        self.calendar_button.clicked.connect(self.open_calendar)
        layout.addWidget(self.calendar_button)

        self.clear_button = QToolButton(self)
        self.clear_button.setText("✕")
        self.clear_button.setToolTip("Clear date")
        self.clear_button.setAccessibleName("Clear date")
        self.clear_button.clicked.connect(self.clear)
        layout.addWidget(self.clear_button)

        self._update_display()

    def date(self) -> date | None:
        return self._date

    def text(self) -> str:
        return self.line_edit.text()

    def set_date(self, value: date | None) -> None:
        """
        Set the selected date and emit ``dateChanged`` if it changed.

        Raises:
            TypeError: If ``value`` is neither a date nor None
        """
        if value is not None and not isinstance(value, date):
            raise TypeError(f"DatePicker expects a date or None, got {type(value).__name__}")
        if value == self._date:
            return
        self._date = value
        self._update_display()
        self.dateChanged.emit(value)

    def clear(self) -> None:
        self.set_date(None)

    def open_calendar(self) -> None:
        """Show the calendar popup and apply the picked date."""
        dialog = self._create_calendar_dialog()
        if dialog.exec() == QDialog.DialogCode.Accepted:
            picked = dialog.selected_date()
            logger.debug(f"Date picked: {picked.isoformat()}")
            self.set_date(picked)

    def _create_calendar_dialog(self) -> CalendarDialog:
        return CalendarDialog(self._date, self)

    def _update_display(self) -> None:
        self.line_edit.setText(format_date(self._date, self._display_format))
        self.clear_button.setEnabled(self._date is not None)
