"""
Authenticated session
Identity of the signed-in administrator, remembered across restarts
"""

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from waterx_admin.models import AuthUser
from waterx_admin.settings_manager import SessionRecord


class AuthSession(QObject):
    changed = Signal(object)  # AuthUser or None

    def __init__(self, local_settings=None, parent=None):
        super().__init__(parent)
        self.local_settings = local_settings
        self._user: Optional[AuthUser] = None
        if local_settings is not None:
            record = local_settings.get_session()
            if record:
                self._user = AuthUser(id=record.user_id, name=record.name, role=record.role)

    @property
    def user(self) -> Optional[AuthUser]:
        return self._user

    def login(self, user_id, name: str, role: str):
        self._user = AuthUser(id=str(user_id), name=name, role=role)
        logging.info(f"Session identity set: {name} ({role})")
        self._persist(SessionRecord(user_id=self._user.id, name=name, role=role))
        self.changed.emit(self._user)

    def logout(self):
        if self._user:
            logging.info(f"User {self._user.name} logged out")
        self._user = None
        self._persist(None)
        self.changed.emit(None)

    def _persist(self, record):
        if self.local_settings is None:
            return
        self.local_settings.update_session(record)
        try:
            self.local_settings.save()
        except OSError as e:
            logging.warning(f"Could not save session to {self.local_settings.ini_path}: {e}")
