"""Page shown for navigation entries this panel does not host"""

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel


class PlaceholderPage(QWidget):
    def __init__(self, label: str, parent=None):
        super().__init__(parent)
        self.setObjectName("page")
        layout = QVBoxLayout(self)
        title = QLabel(f"<h2>{label}</h2>")
        note = QLabel("This section is managed in the main WaterX web app.")
        note.setObjectName("cardDescription")
        layout.addWidget(title, alignment=Qt.AlignHCenter)
        layout.addWidget(note, alignment=Qt.AlignHCenter)
        layout.addStretch()
