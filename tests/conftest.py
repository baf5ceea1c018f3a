"""
Shared pytest configuration.

Runs Qt offscreen and points QStandardPaths at throwaway test locations so
QSettings and the error log never touch the user's real profile.
"""

import os

# Set offscreen platform to prevent display errors on headless systems
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtCore import QSettings, QStandardPaths
from PySide6.QtWidgets import QApplication

from core.config import setup_qsettings

QStandardPaths.setTestModeEnabled(True)


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Create QApplication for all tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    setup_qsettings()
    yield app


@pytest.fixture(autouse=True)
def clean_window_geometry(qapp):
    """Keep saved window geometry from leaking between tests."""
    QSettings().remove("ui/geometry")
    yield
    QSettings().remove("ui/geometry")
