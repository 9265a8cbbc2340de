"""
Glass toast notification
Auto-dismissing frosted panel anchored to the top-right of its parent window
"""

from PySide6.QtCore import Qt, QTimer, QPropertyAnimation, QEasingCurve
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout, QGraphicsDropShadowEffect, QGraphicsOpacityEffect

TOAST_COLORS = {
    "info": "rgba(59, 130, 246, 0.92)",
    "success": "rgba(34, 197, 94, 0.92)",
    "warning": "rgba(234, 179, 8, 0.92)",
    "error": "rgba(239, 68, 68, 0.92)",
}

TOAST_ICONS = {
    "info": "ℹ️",
    "success": "✓",
    "warning": "⚠️",
    "error": "✗"
}


class GlassToast(QFrame):
    """
    Toast notification with glass effect
    Auto-dismissing with a fade animation
    """

    def __init__(self, message, toast_type="info", parent=None, duration=3000):
        super().__init__(parent)
        self.setWindowFlags(Qt.Tool | Qt.FramelessWindowHint | Qt.WindowStaysOnTopHint)
        self.setAttribute(Qt.WA_TranslucentBackground)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setStyleSheet(f"""
            QFrame {{
                background: {TOAST_COLORS.get(toast_type, TOAST_COLORS['info'])};
                border: 1px solid rgba(255, 255, 255, 0.25);
                border-radius: 12px;
            }}
        """)

        shadow = QGraphicsDropShadowEffect(self)
        shadow.setBlurRadius(20)
        shadow.setOffset(0, 4)
        shadow.setColor(QColor(0, 0, 0, 80))
        self.setGraphicsEffect(shadow)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(15, 12, 15, 12)

        message_label = QLabel(f"{TOAST_ICONS.get(toast_type, 'ℹ️')}  {message}")
        message_label.setWordWrap(True)
        message_label.setStyleSheet("""
            QLabel {
                color: white;
                font-weight: 600;
                font-size: 13px;
                background: transparent;
                border: none;
            }
        """)
        layout.addWidget(message_label)

        self.setMinimumWidth(250)
        self.setMaximumWidth(420)
        self.adjustSize()
        self._place()
        self.show()

        QTimer.singleShot(duration, self._fade_out)

    def _place(self):
        host = self.parentWidget().window() if self.parentWidget() else None
        if host is None:
            return
        geo = host.geometry()
        self.move(geo.right() - self.width() - 24, geo.top() + 24)

    def _fade_out(self):
        # Opacity effect replaces the shadow while fading
        effect = QGraphicsOpacityEffect(self)
        self.setGraphicsEffect(effect)
        self._fade = QPropertyAnimation(effect, b"opacity", self)
        self._fade.setDuration(250)
        self._fade.setStartValue(1.0)
        self._fade.setEndValue(0.0)
        self._fade.setEasingCurve(QEasingCurve.OutCubic)
        self._fade.finished.connect(self.deleteLater)
        self._fade.start()
