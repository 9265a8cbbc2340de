"""
Background worker for blocking backend calls
Keeps HTTP round-trips off the UI thread
"""

import logging

from PySide6.QtCore import QThread, Signal


class TaskWorker(QThread):
    """Runs one callable in a background thread and reports its outcome"""
    succeeded = Signal(object)  # return value
    failed = Signal(str)  # error message

    def __init__(self, fn, *args, parent=None, **kwargs):
        super().__init__(parent)
        self.fn = fn
        self.args = args
        self.kwargs = kwargs

    def run(self):
        try:
            result = self.fn(*self.args, **self.kwargs)
        except Exception as e:
            logging.error(f"Background task {getattr(self.fn, '__name__', 'task')} failed: {e}")
            self.failed.emit(str(e))
            return
        self.succeeded.emit(result)
