"""
Logo label
Downloads an image URL in the background and shows it scaled to a fixed height
"""

import logging

import httpx
from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QLabel

from waterx_admin.utils.workers import TaskWorker


def fetch_image(url: str, timeout: float = 10.0):
    """Download an image; returns (url, bytes) so late results can be discarded"""
    response = httpx.get(url, timeout=timeout, follow_redirects=True)
    response.raise_for_status()
    return url, response.content


class LogoLabel(QLabel):
    def __init__(self, height: int, parent=None):
        super().__init__(parent)
        self._height = height
        self._url = None
        self._worker = None
        self.setAlignment(Qt.AlignCenter)
        self.hide()

    def set_url(self, url):
        self._url = url
        if not url:
            self.clear()
            self.hide()
            return
        worker = TaskWorker(fetch_image, url, parent=self)
        worker.succeeded.connect(self._on_loaded)
        worker.failed.connect(self._on_failed)
        worker.finished.connect(worker.deleteLater)
        self._worker = worker
        worker.start()

    def _on_failed(self, message):
        logging.warning(f"Logo {self._url} not loaded: {message}")

    def _on_loaded(self, result):
        requested, data = result
        # A newer URL may have been set while this one downloaded
        if requested != self._url:
            return
        pixmap = QPixmap()
        if not pixmap.loadFromData(data):
            logging.warning(f"Logo {requested} is not a readable image")
            self.hide()
            return
        self.setPixmap(pixmap.scaledToHeight(self._height, Qt.SmoothTransformation))
        self.show()
