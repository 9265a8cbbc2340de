"""
Modern UI Helper Functions
Toast notification queue and the bridge from notify(level, message) signals
"""

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QObject, QTimer, Slot
from waterx_admin.config import TOAST_SUCCESS_MS, TOAST_ERROR_MS, TOAST_WARNING_MS
from waterx_admin.ui.widgets.glass_toast import GlassToast
from collections import deque

# Toast queue system - prevents overlapping toasts
_toast_queue: deque = deque()
_current_toast = None
_toast_timer = None
_TOAST_GAP = 300  # ms gap between toasts


def _process_toast_queue():
    """Process the next toast in queue"""
    global _current_toast, _toast_timer

    if _toast_queue:
        message, toast_type, parent, duration = _toast_queue.popleft()
        _current_toast = GlassToast(message, toast_type=toast_type, parent=parent, duration=duration)

        # Schedule next toast after this one finishes
        if _toast_timer is None:
            _toast_timer = QTimer()
            _toast_timer.setSingleShot(True)
            _toast_timer.timeout.connect(_process_toast_queue)
        _toast_timer.start(duration + _TOAST_GAP)
    else:
        _current_toast = None


def _queue_toast(message: str, toast_type: str, parent: QWidget, duration: int):
    """Add toast to queue and process if not busy"""
    _toast_queue.append((message, toast_type, parent, duration))

    # If no toast is currently showing, start processing
    if _current_toast is None:
        _process_toast_queue()


def show_success_toast(parent: QWidget, message: str, duration: int = TOAST_SUCCESS_MS):
    """
    Show a success toast notification (green checkmark)

    Args:
        parent: Parent widget
        message: Success message to display
        duration: How long to show (milliseconds)
    """
    _queue_toast(message, "success", parent, duration)


def show_error_toast(parent: QWidget, message: str, duration: int = TOAST_ERROR_MS):
    """
    Show an error toast notification (red X)

    Args:
        parent: Parent widget
        message: Error message to display
        duration: How long to show (milliseconds)
    """
    _queue_toast(message, "error", parent, duration)


def show_warning_toast(parent: QWidget, message: str, duration: int = TOAST_WARNING_MS):
    """Show a warning toast notification (yellow warning)"""
    _queue_toast(message, "warning", parent, duration)


def show_info_toast(parent: QWidget, message: str, duration: int = TOAST_SUCCESS_MS):
    """Show an info toast notification (blue i)"""
    _queue_toast(message, "info", parent, duration)


_TOASTS_BY_LEVEL = {
    "success": show_success_toast,
    "error": show_error_toast,
    "warning": show_warning_toast,
    "info": show_info_toast,
}


class _ToastBridge(QObject):
    """Lives on the UI thread so notifications from workers arrive queued"""

    def __init__(self, parent: QWidget):
        super().__init__(parent)
        self.host = parent

    @Slot(str, str)
    def show(self, level: str, message: str):
        _TOASTS_BY_LEVEL.get(level, show_info_toast)(self.host, message)


def connect_notifications(source, parent: QWidget):
    """Render every notify(level, message) emitted by a store or controller as a toast"""
    bridge = _ToastBridge(parent)
    source.notify.connect(bridge.show)
    return bridge
