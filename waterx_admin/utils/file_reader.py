"""
Local file reading for restore uploads
Returns a result/error union instead of raising
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QThread, Signal

READ_FAILED_MESSAGE = "Failed to read the backup file."


@dataclass(frozen=True)
class ReadResult:
    path: str
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


def read_text(path) -> ReadResult:
    """Read the whole file as UTF-8 text (a leading BOM is dropped, undecodable bytes become U+FFFD)"""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        logging.error(f"Failed to read {p}: {e}")
        return ReadResult(path=str(p), error=READ_FAILED_MESSAGE)
    return ReadResult(path=str(p), text=text)


class FileReadWorker(QThread):
    """Background thread for a single-shot file read"""
    finished_reading = Signal(object)  # ReadResult

    def __init__(self, path, parent=None):
        super().__init__(parent)
        self.path = path

    def run(self):
        self.finished_reading.emit(read_text(self.path))
