"""
Main window for the form validation demo.

This module contains the MainWindow class, which hosts the signup and home
pages in a stack and switches between them by route name.
"""

import logging

from PySide6.QtCore import QByteArray, QSettings, Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QLabel, QMainWindow, QStackedWidget, QVBoxLayout, QWidget

from core.config import APP_TITLE
from core.config_manager import ConfigManager
from gui.pages.home_page import HomePage
from gui.pages.signup_page import SignupPage
from gui.widgets.notification_manager import NotificationManager

logger = logging.getLogger(__name__)

SIGNUP_ROUTE = "/"
HOME_ROUTE = "/home"

# Route -> app bar title
ROUTE_TITLES = {
    SIGNUP_ROUTE: "Signup Page",
    HOME_ROUTE: "Home Page",
}


class MainWindow(QMainWindow):
    """
    Main application window.

    Shows an app bar with the current page title above a stack holding the
    signup page (route "/") and the home page (route "/home").
    """

    def __init__(self, config_manager: ConfigManager | None = None) -> None:
        super().__init__()

        self.config_manager = config_manager or ConfigManager()

        self.setWindowTitle(APP_TITLE)
        self.resize(480, 720)

        self.notification_manager = NotificationManager(self, timeout_ms=self.config_manager.get("snackbar_timeout_ms"))

        self._setup_ui()
        self._connect_signals()
        self._load_ui_settings()

        self._current_route = SIGNUP_ROUTE
        self.navigate(SIGNUP_ROUTE)

    def _setup_ui(self) -> None:
        central_widget = QWidget()
        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.app_bar = QLabel()
        self.app_bar.setObjectName("appBar")
        self.app_bar.setAccessibleName("Page title")
        self.app_bar.setAlignment(Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignLeft)
        self.app_bar.setStyleSheet("QLabel#appBar { font-size: 20px; font-weight: bold; padding: 16px; }")
        layout.addWidget(self.app_bar)

        self.stack = QStackedWidget()
        self.signup_page = SignupPage(
            notification_manager=self.notification_manager,
            date_format=self.config_manager.get("date_format"),
            revalidate_delay=self.config_manager.get("revalidate_delay_ms"),
        )
        self.home_page = HomePage()
        self._pages = {
            SIGNUP_ROUTE: self.signup_page,
            HOME_ROUTE: self.home_page,
        }
        for page in self._pages.values():
            self.stack.addWidget(page)
        layout.addWidget(self.stack)

        self.setCentralWidget(central_widget)

    def _connect_signals(self) -> None:
        self.signup_page.signupSucceeded.connect(self._on_signup_succeeded)
        self.home_page.returnRequested.connect(self._on_return_requested)

    @property
    def current_route(self) -> str:
        return self._current_route

    def navigate(self, route: str) -> None:
        """
        Show the page registered for ``route``.

        Raises:
            KeyError: If no page is registered for ``route``
        """
        if route not in self._pages:
            raise KeyError(f"Unknown route: '{route}'")

        self.stack.setCurrentWidget(self._pages[route])
        self.app_bar.setText(ROUTE_TITLES[route])
        self._current_route = route
        logger.debug(f"Navigated to {route}")

    def _on_signup_succeeded(self, _values: dict) -> None:
        self.navigate(HOME_ROUTE)

    def _on_return_requested(self) -> None:
        self.signup_page.reset()
        self.navigate(SIGNUP_ROUTE)

    def _load_ui_settings(self) -> None:
        """Restore window geometry from QSettings."""
        settings = QSettings()
        geometry = settings.value("ui/geometry")
        if isinstance(geometry, (QByteArray, bytes, bytearray)) and len(geometry):
            self.restoreGeometry(geometry)

    def save_ui_settings(self) -> None:
        settings = QSettings()
        settings.setValue("ui/geometry", self.saveGeometry())

    def closeEvent(self, event: QCloseEvent) -> None:
        """Handle window close event."""
        self.save_ui_settings()
        self.signup_page.validator.cleanup()
        self.notification_manager.cleanup()
        event.accept()
