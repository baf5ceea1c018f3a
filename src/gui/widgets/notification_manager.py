"""
Notification management for the form validation demo.

Shows short-lived snackbar messages anchored to the bottom edge of the
window, the way mobile apps confirm an action.
"""

import logging
import sys
from time import monotonic
from typing import Any

from PySide6.QtCore import QEvent, QObject, Qt, QTimer
from PySide6.QtWidgets import QLabel, QWidget

from core.config import DEFAULT_CONFIG
from gui.utils.styling import StyleSheets

SNACKBAR_MARGIN = 16


class Snackbar(QLabel):
    """Overlay label that hides itself after a timeout."""

    def __init__(self, parent: QWidget) -> None:
        super().__init__(parent)
        self.setObjectName("snackbar")
        self.setWordWrap(True)
        self.setAlignment(Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignLeft)
        self.setAccessibleName("Notification")
        self.hide()

        self._hide_timer = QTimer(self)
        self._hide_timer.setSingleShot(True)
        self._hide_timer.timeout.connect(self.hide)

        parent.installEventFilter(self)

    def show_message(self, message: str, status: str, timeout_ms: int) -> None:
        self.setText(message)
        self.setStyleSheet(StyleSheets.get_snackbar_style(status))
        self.reposition()
        self.show()
        self.raise_()
        self._hide_timer.start(timeout_ms)

    def reposition(self) -> None:
        """Stretch across the bottom of the parent, above its edge margin."""
        parent = self.parentWidget()
        if parent is None:
            return
        width = max(parent.width() - 2 * SNACKBAR_MARGIN, 0)
        self.setFixedWidth(width)
        self.adjustSize()
        self.move(SNACKBAR_MARGIN, parent.height() - self.height() - SNACKBAR_MARGIN)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is self.parentWidget() and event.type() == QEvent.Type.Resize and self.isVisible():
            self.reposition()
        return super().eventFilter(watched, event)


class NotificationManager(QObject):
    """
    Manages snackbar notifications for the application.

    Identical notifications shown within the debounce window are dropped.
    In test mode notifications are logged instead of displayed.
    """

    def __init__(self, parent: QWidget | None = None, timeout_ms: int | None = None) -> None:
        """
        Initialize the notification manager.

        Args:
            parent: Widget the snackbar is anchored to (typically the main window)
            timeout_ms: How long a snackbar stays visible
        """
        super().__init__(parent)
        self._parent_widget = parent
        self._logger = logging.getLogger(__name__)
        self._timeout_ms = timeout_ms if timeout_ms is not None else DEFAULT_CONFIG["snackbar_timeout_ms"]

        self._snackbar: Snackbar | None = None

        # Notification debouncing
        self._notification_cache: dict[tuple[Any, ...], float] = {}
        self._debounce_ttl = 3.0  # 3 seconds

        self._test_mode = self._detect_test_mode()

    def _detect_test_mode(self) -> bool:
        """Detect if we're running in test mode."""
        return "pytest" in sys.modules or hasattr(sys, "_called_from_test")

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    def notify(self, message: str, status: str = "info") -> bool:
        """
        Show a snackbar message.

        Args:
            message: Text to display
            status: 'info', 'success' or 'error'

        Returns:
            True if the notification was shown (or logged in test mode),
            False if it was debounced or there is nowhere to show it
        """
        debounce_key = (status, message)
        if self._should_debounce(debounce_key):
            self._logger.debug(f"Debouncing notification: {message}")
            return False
        self._notification_cache[debounce_key] = monotonic()

        if self._test_mode:
            self._logger.info(f"TEST NOTIFICATION [{status}] {message}")
            return True

        if not self._parent_widget:
            self._logger.warning("No parent widget for snackbar")
            return False

        if self._snackbar is None:
            self._snackbar = Snackbar(self._parent_widget)
        self._snackbar.show_message(message, status, self._timeout_ms)
        return True

    def _should_debounce(self, key: tuple[Any, ...]) -> bool:
        """Check if notification should be debounced."""
        if key not in self._notification_cache:
            return False

        age = monotonic() - self._notification_cache[key]
        if age > self._debounce_ttl:
            del self._notification_cache[key]
            return False

        return True

    def dismiss(self) -> None:
        if self._snackbar is not None:
            self._snackbar.hide()

    def cleanup(self) -> None:
        """Clean up resources."""
        self.dismiss()
        self._notification_cache.clear()
