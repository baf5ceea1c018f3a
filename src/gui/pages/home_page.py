"""
Confirmation page shown after a successful signup.
"""

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from gui.utils.styling import StyleSheets

COMPLETE_MESSAGE = "Signup complete! Thank you!"


class HomePage(QWidget):
    """Centered thank-you message with a button back to the signup form."""

    returnRequested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("homePage")

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.setSpacing(20)

        self.message_label = QLabel(COMPLETE_MESSAGE)
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.message_label.setAccessibleName("Signup status")
        layout.addWidget(self.message_label)

        self.return_button = QPushButton("Return to Signup")
        self.return_button.setObjectName("returnButton")
        self.return_button.setStyleSheet(StyleSheets.get_button_style())
        self.return_button.clicked.connect(self.returnRequested)
        layout.addWidget(self.return_button, alignment=Qt.AlignmentFlag.AlignCenter)
