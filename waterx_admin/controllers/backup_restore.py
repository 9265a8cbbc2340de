"""
Backup & Restore Controller
Exports the full dataset to a dated JSON file and restores from an uploaded one
"""

import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from waterx_admin.api import ApiError
from waterx_admin.config import BACKUP_ENDPOINT, RESTORE_ENDPOINT, RELOAD_DELAY_MS, backup_filename
from waterx_admin.models import RestoreState, NOTIFY_SUCCESS, NOTIFY_ERROR, NOTIFY_WARNING
from waterx_admin.utils.file_reader import ReadResult, READ_FAILED_MESSAGE, read_text
from waterx_admin.validators import BackupValidator, BackupFormatError

RESTING_STATES = (RestoreState.IDLE, RestoreState.FILE_SELECTED)
UNKNOWN_RESTORE_ERROR = "An unknown error occurred during restore."


class BackupRestoreController(QObject):
    """
    Drives one backup/restore session

    Export:  idle -> exporting -> idle
    Restore: idle -> file_selected -> confirm_pending -> restoring
             -> reloading on success, idle on any failure

    Restore is gated twice (file pick, then explicit confirmation) and only
    checks that the required top-level keys exist; the server decides whether
    the records themselves are acceptable.
    """

    state_changed = Signal(object)  # RestoreState
    confirm_requested = Signal(str)  # selected file name
    reload_requested = Signal()
    notify = Signal(str, str)  # level, message
    _reload_pending = Signal(int)

    def __init__(self, api, schedule=None, clock=None, parent=None):
        """
        Args:
            api: ApiClient used for /api/backup and /api/restore
            schedule: Optional callable(delay_ms, callback); defaults to a Qt
                single-shot timer on the controller's thread
            clock: Optional callable returning the current aware datetime
        """
        super().__init__(parent)
        self.api = api
        self.schedule = schedule
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self._state = RestoreState.IDLE
        self._selected_file: Optional[Path] = None
        self._lock = threading.RLock()
        self._reload_pending.connect(self._start_reload_timer)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def state(self) -> RestoreState:
        return self._state

    @property
    def selected_file(self) -> Optional[Path]:
        return self._selected_file

    @property
    def is_exporting(self) -> bool:
        return self._state is RestoreState.EXPORTING

    @property
    def is_restoring(self) -> bool:
        return self._state in (RestoreState.RESTORING, RestoreState.RELOADING)

    def _set_state(self, state: RestoreState):
        if state is self._state:
            return
        logging.debug(f"Backup/restore state: {self._state.value} -> {state.value}")
        self._state = state
        self.state_changed.emit(state)

    def _enter(self, allowed, state: RestoreState) -> Optional[RestoreState]:
        """Atomically move to ``state`` when the current one is allowed; returns the previous state"""
        with self._lock:
            previous = self._state
            if previous not in allowed:
                return None
            self._set_state(state)
        return previous

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def export_backup(self, directory) -> Optional[Path]:
        """
        Fetch the full backup and write it into ``directory``

        Returns:
            Path of the written file, or None when the export failed
        """
        resting = self._enter(RESTING_STATES, RestoreState.EXPORTING)
        if resting is None:
            logging.warning(f"Export ignored while {self._state.value}")
            return None

        try:
            data = self.api.api(BACKUP_ENDPOINT)
            content = json.dumps(data, indent=2, ensure_ascii=False)
            target = Path(directory) / backup_filename(self.clock().date())
            _write_atomic(target, content)
        except ApiError as e:
            self._export_failed(e.message)
            return None
        except (TypeError, ValueError, OSError) as e:
            self._export_failed(str(e))
            return None
        except Exception as e:
            logging.exception("Unexpected error during export")
            self._export_failed(str(e))
            return None
        finally:
            self._set_state(resting)

        logging.info(f"Backup exported: {target}")
        self.notify.emit(NOTIFY_SUCCESS, "Backup exported successfully!")
        return target

    def _export_failed(self, message: str):
        message = message or "Failed to export backup."
        logging.error(f"Backup export failed: {message}")
        self.notify.emit(NOTIFY_ERROR, message)

    # ------------------------------------------------------------------
    # Restore
    # ------------------------------------------------------------------
    def select_file(self, path):
        """Remember the chosen file; its content is not read until confirmation"""
        if not path:
            return
        with self._lock:
            if self._state not in RESTING_STATES:
                logging.warning(f"File selection ignored while {self._state.value}")
                return
            self._selected_file = Path(path)
            logging.info(f"Backup file selected: {self._selected_file.name}")
            self._set_state(RestoreState.FILE_SELECTED)

    def request_restore(self) -> bool:
        """Ask for confirmation; without a selected file only a warning is emitted"""
        if self._selected_file is None:
            self.notify.emit(NOTIFY_WARNING, "Please select a backup file to restore.")
            return False
        if self._enter((RestoreState.FILE_SELECTED,), RestoreState.CONFIRM_PENDING) is None:
            return False
        self.confirm_requested.emit(self._selected_file.name)
        return True

    def cancel_restore(self):
        self._enter((RestoreState.CONFIRM_PENDING,), RestoreState.FILE_SELECTED)

    def begin_restore(self) -> Optional[Path]:
        """Enter the restoring state and hand back the file to read"""
        if self._selected_file is None:
            return None
        if self._enter((RestoreState.CONFIRM_PENDING,), RestoreState.RESTORING) is None:
            return None
        return self._selected_file

    def finish_restore(self, result: ReadResult) -> bool:
        """Parse, validate and submit the file content read by begin_restore's caller"""
        if self._state is not RestoreState.RESTORING:
            return False

        if not result.ok:
            return self._restore_failed(result.error or READ_FAILED_MESSAGE)

        try:
            return self._submit(result)
        except Exception:
            logging.exception("Unexpected error during restore")
            return self._restore_failed(UNKNOWN_RESTORE_ERROR)

    def _submit(self, result: ReadResult) -> bool:
        try:
            payload = json.loads(result.text)
        except ValueError as e:
            logging.error(f"Backup file is not valid JSON: {e}")
            return self._restore_failed("Failed to parse backup file.")

        try:
            BackupValidator.validate_backup(payload)
        except BackupFormatError as e:
            return self._restore_failed(str(e))

        try:
            self.api.api(RESTORE_ENDPOINT, method="POST", json=payload)
        except ApiError as e:
            return self._restore_failed(e.message or UNKNOWN_RESTORE_ERROR)

        logging.info(f"System restored from {Path(result.path).name}")
        self.notify.emit(NOTIFY_SUCCESS, "System restored successfully! The application will now reload.")
        self._set_state(RestoreState.RELOADING)
        if self.schedule is not None:
            self.schedule(RELOAD_DELAY_MS, self._reload)
        else:
            self._reload_pending.emit(RELOAD_DELAY_MS)
        return True

    def confirm_restore(self) -> bool:
        """Blocking confirm: read, validate and submit in one call"""
        path = self.begin_restore()
        if path is None:
            return False
        return self.finish_restore(read_text(path))

    def _restore_failed(self, message: str) -> bool:
        logging.error(f"Restore failed: {message}")
        self.notify.emit(NOTIFY_ERROR, message)
        self._selected_file = None
        self._set_state(RestoreState.IDLE)
        return False

    def task_failed(self, message: str):
        """A background task died outside the controller's own handling; get back to a resting state"""
        with self._lock:
            state = self._state
            if state is RestoreState.EXPORTING:
                self._export_failed(message)
                self._set_state(
                    RestoreState.FILE_SELECTED if self._selected_file is not None else RestoreState.IDLE
                )
            elif state in (RestoreState.CONFIRM_PENDING, RestoreState.RESTORING):
                self._restore_failed(message or UNKNOWN_RESTORE_ERROR)
            else:
                logging.error(f"Background task failed: {message}")
                self.notify.emit(NOTIFY_ERROR, message or UNKNOWN_RESTORE_ERROR)

    def _start_reload_timer(self, delay_ms: int):
        QTimer.singleShot(delay_ms, self._reload)

    def _reload(self):
        logging.info("Reloading application after restore")
        self.reload_requested.emit()


def _write_atomic(target: Path, content: str):
    """Write via a sibling temp file so a failed export leaves nothing behind"""
    fd, tmp = tempfile.mkstemp(prefix=".waterx-export-", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp, target)
    except OSError:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise
