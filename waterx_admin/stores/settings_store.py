"""
Settings Store
Holds the branding logo URL and keeps it in step with the backend
"""

import logging
import threading

from PySide6.QtCore import QObject, Signal

from waterx_admin.api import ApiError
from waterx_admin.config import LOGO_SETTING_KEY, setting_path
from waterx_admin.models import Setting, SettingsState, NOTIFY_SUCCESS, NOTIFY_ERROR


class SettingsStore(QObject):
    """
    Client-side proxy of the server's settings table

    Features:
    - fetch_logo_url(): silent fallback to "no logo" on any failure
    - update_logo_url(): stores the server-confirmed value and notifies
    - is_loading is reset on every exit path

    Concurrent calls are not de-duplicated; whichever completes last wins.
    """

    state_changed = Signal(object)  # SettingsState
    logo_url_changed = Signal(object)  # str or None
    notify = Signal(str, str)  # level, message

    def __init__(self, api, parent=None):
        super().__init__(parent)
        self.api = api
        self._state = SettingsState()
        self._lock = threading.Lock()

    @property
    def state(self) -> SettingsState:
        return self._state

    @property
    def logo_url(self):
        return self._state.logo_url

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def error(self):
        return self._state.error

    def _set(self, **changes):
        with self._lock:
            previous = self._state
            self._state = previous.evolve(**changes)
            current = self._state
        self.state_changed.emit(current)
        if current.logo_url != previous.logo_url:
            self.logo_url_changed.emit(current.logo_url)

    def fetch_logo_url(self):
        self._set(is_loading=True, error=None)
        try:
            payload = self.api.api(setting_path(LOGO_SETTING_KEY))
            setting = Setting.from_payload(LOGO_SETTING_KEY, payload)
        except ApiError as e:
            # No logo configured is the expected outcome here; stay quiet
            logging.debug(f"Logo URL not available: {e}")
            self._set(logo_url=None, is_loading=False)
            return
        self._set(logo_url=setting.value or None, is_loading=False)

    def update_logo_url(self, url: str):
        self._set(is_loading=True)
        try:
            payload = self.api.api(setting_path(LOGO_SETTING_KEY), method="PUT", json={"value": url})
            setting = Setting.from_payload(LOGO_SETTING_KEY, payload)
        except ApiError as e:
            message = e.message or "Failed to update logo"
            logging.error(f"Logo update failed: {message}")
            self._set(is_loading=False, error=message)
            self.notify.emit(NOTIFY_ERROR, message)
            return False
        logging.info(f"Logo URL updated to {setting.value!r}")
        self._set(logo_url=setting.value, is_loading=False)
        self.notify.emit(NOTIFY_SUCCESS, "Logo updated successfully!")
        return True

    def abort_loading(self, message: str):
        """Clear a loading flag left behind by a call that died mid-flight"""
        if self._state.is_loading:
            self._set(is_loading=False, error=message)
